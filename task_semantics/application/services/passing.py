"""
Routines that receive parameters in each passing mode.

Each routine only touches its parameter, so the caller can compare its own
variables before and after the call.
"""

from typing import Any

from task_semantics.domain.interfaces.views import PriorityView
from task_semantics.domain.models.entities import Task, TaskPriority
from task_semantics.domain.models.references import Ref, ReadOnlyRef

MODIFIED_NUMBER = 100
MODIFIED_TITLE = "Modified!"


def modify_value(number: int) -> None:
    # rebinding the local name never reaches the caller
    number = MODIFIED_NUMBER


def modify_priority(priority: TaskPriority) -> None:
    priority = priority.with_level(priority.level + 1)


def modify_reference(task: Task) -> None:
    """Set the task title; the caller holds the same task and sees it."""
    task.title = MODIFIED_TITLE


def modify_value_by_ref(number: Ref[int]) -> None:
    """Store into the caller's storage."""
    number.value = MODIFIED_NUMBER


def modify_priority_by_ref(priority: Ref[TaskPriority]) -> None:
    """Rebind the caller's priority to a lowered copy. The old priority is untouched."""
    priority.value = priority.value.with_level(priority.value.level + 1)


def replace_task_by_ref(task: Ref[Task], replacement: Task) -> None:
    task.value = replacement


def read_only_value_reference(priority: PriorityView) -> int:
    """Read the level through a borrowed view."""
    return priority.level


def try_mutate_read_only(view: ReadOnlyRef[Any], field: str, value: Any) -> None:
    """Attempt an assignment through a read-only view.

    Always raises ``ImmutabilityViolation``.
    """
    setattr(view, field, value)
