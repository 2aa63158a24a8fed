"""
Sample task collection used by the iteration demonstrations.
"""

from typing import List

from task_semantics.domain.models.entities import Task, TaskPriority, TaskStatus


def sample_tasks() -> List[Task]:
    """Return a fresh, ordered list of five tasks (ids 1..5)."""
    return [
        Task(id=1, title="Code Review", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.from_level(2)),
        Task(id=2, title="Write Tests", status=TaskStatus.PENDING, priority=TaskPriority.from_level(1)),
        Task(id=3, title="Deploy", status=TaskStatus.COMPLETED, priority=TaskPriority.from_level(3)),
        Task(id=4, title="Bug Fix", status=TaskStatus.IN_PROGRESS, priority=TaskPriority.from_level(1)),
        Task(id=5, title="Documentation", status=TaskStatus.PENDING, priority=TaskPriority.from_level(2)),
    ]
