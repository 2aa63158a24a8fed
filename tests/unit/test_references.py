"""
Unit tests for reference holders, read-only views and boxing.
"""

import copy

import pytest

from task_semantics.domain.exceptions import ImmutabilityViolation, UnboxingError, ValidationError
from task_semantics.domain.models.entities import Task, TaskPriority, TaskStatus
from task_semantics.domain.models.references import (
    Box, Ref, ReadOnlyRef, box, by_value, readonly, unbox
)


class TestRef:
    """Test mutable reference cells."""

    def test_store_is_visible_to_holder(self):
        cell = Ref(50)
        alias = cell
        alias.value = 100

        assert cell.value == 100

    def test_repr(self):
        assert repr(Ref(3)) == "Ref(3)"


class TestReadOnlyRef:
    """Test borrowed read-only views."""

    def test_reads_pass_through_without_copy(self, sample_task):
        view = readonly(sample_task)

        assert view.id == 1
        assert view.title == "Original"
        assert view.priority is sample_task.priority

    def test_view_observes_later_mutations(self, sample_task):
        view = readonly(sample_task)
        sample_task.title = "Updated by owner"

        assert view.title == "Updated by owner"

    def test_assignment_is_rejected(self, sample_task):
        view = readonly(sample_task)

        with pytest.raises(ImmutabilityViolation, match="read-only reference to Task") as exc_info:
            view.title = "Hacked"

        assert exc_info.value.field == "title"
        assert sample_task.title == "Original"

    def test_deletion_is_rejected(self, sample_task):
        with pytest.raises(ImmutabilityViolation):
            del readonly(sample_task).title

    def test_priority_view_rejects_assignment(self, high_priority):
        view = readonly(high_priority)

        assert view.level == 1
        with pytest.raises(ImmutabilityViolation):
            view.level = 10

    def test_nested_priority_stays_immutable(self, sample_task):
        with pytest.raises(ImmutabilityViolation):
            readonly(sample_task).priority.level = 9

    def test_nested_handles_are_wrapped(self):
        cell = Ref(Task(id=3, title="Inner"))
        view = readonly(cell)

        assert isinstance(view.value, ReadOnlyRef)
        with pytest.raises(ImmutabilityViolation):
            view.value.title = "Changed"
        assert cell.value.title == "Inner"

    def test_readonly_of_view_is_same_view(self, sample_task):
        view = readonly(sample_task)
        assert readonly(view) is view

    def test_equality_follows_target(self, high_priority):
        assert readonly(high_priority) == TaskPriority(1, "High")
        assert readonly(high_priority) == readonly(high_priority.copy())

    def test_copying_a_view_returns_the_same_view(self, high_priority):
        view = readonly(high_priority)

        assert copy.copy(view) is view
        assert copy.deepcopy(view) is view

    def test_deepcopy_of_container_keeps_views(self):
        task = Task(id=1, title="Shared")
        views = [readonly(task)]

        copied = copy.deepcopy(views)

        assert copied is not views
        assert copied[0] is views[0]
        assert copied[0].title == "Shared"

    def test_target_storage_is_not_exposed(self, sample_task):
        view = readonly(sample_task)

        with pytest.raises(AttributeError):
            view.__dict__
        with pytest.raises(TypeError):
            vars(view)

        assert sample_task.title == "Original"


class TestByValue:
    """Test what a callee receives when passed by value."""

    def test_priority_is_copied(self, high_priority):
        received = by_value(high_priority)

        assert received == high_priority
        assert received is not high_priority

    def test_task_handle_is_shared(self, sample_task):
        received = by_value(sample_task)
        received.status = TaskStatus.COMPLETED

        assert received is sample_task
        assert sample_task.status == TaskStatus.COMPLETED

    def test_primitives_are_returned_unchanged(self):
        assert by_value(42) == 42


class TestBoxing:
    """Test boxing and unboxing."""

    def test_box_and_unbox(self):
        boxed = box(42)

        assert isinstance(boxed, Box)
        assert boxed.boxed_type is int
        assert unbox(boxed, int) == 42

    def test_boxes_are_distinct_references(self):
        first, second = box(42), box(42)
        assert first is not second

        alias = first
        alias.value = 7
        assert first.value == 7
        assert second.value == 42

    def test_unbox_wrong_type(self):
        with pytest.raises(UnboxingError, match="Cannot unbox int as str") as exc_info:
            unbox(box(42), str)

        assert exc_info.value.expected is str
        assert exc_info.value.actual is int

    def test_unbox_bool_as_int_rejected(self):
        with pytest.raises(UnboxingError):
            unbox(box(True), int)

    def test_unbox_requires_box(self):
        with pytest.raises(UnboxingError, match="Expected a Box"):
            unbox(42, int)

    def test_priority_can_be_boxed(self, high_priority):
        assert unbox(box(high_priority), TaskPriority) is high_priority

    def test_priority_subclass_unboxes_as_priority(self):
        class UrgentPriority(TaskPriority):
            pass

        urgent = UrgentPriority(1, "High")

        assert unbox(box(urgent), TaskPriority) is urgent

    def test_reference_types_cannot_be_boxed(self, sample_task):
        with pytest.raises(ValidationError, match="Only value types can be boxed"):
            box(sample_task)
