"""
Reference holders: mutable references, read-only views and boxes.

Python passes every argument as an object reference. The helpers here make
the three passing modes explicit:

* ``by_value(x)`` hands a callee an independent copy of a value object. For a
  ``Task`` it hands over the same handle, so the callee can still mutate the
  caller's task.
* ``Ref(x)`` is caller-owned storage a callee may rebind.
* ``readonly(x)`` is a borrowed view; assignments through it raise
  ``ImmutabilityViolation`` and type checkers see a read-only protocol.
"""

from typing import Any, Dict, Generic, TypeVar, overload
import copy

from task_semantics.domain.exceptions import ImmutabilityViolation, UnboxingError, ValidationError
from task_semantics.domain.interfaces.base import ValueObject
from task_semantics.domain.interfaces.views import PriorityView, TaskView
from task_semantics.domain.models.entities import Task, TaskPriority

T = TypeVar('T')

BOXABLE_TYPES = (int, float, bool, complex, str, TaskPriority)


class Ref(Generic[T]):
    """Mutable reference to caller-owned storage."""

    __slots__ = ('value',)

    def __init__(self, value: T):
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"


class ReadOnlyRef(Generic[T]):
    """Borrowed, non-owning view that rejects every mutation."""

    __slots__ = ('_target',)

    def __init__(self, target: T):
        if isinstance(target, ReadOnlyRef):
            target = object.__getattribute__(target, '_target')
        object.__setattr__(self, '_target', target)

    def __getattr__(self, name: str) -> Any:
        # dunders are never forwarded: __dict__ is the target's writable storage
        if name == '_target' or (name.startswith('__') and name.endswith('__')):
            raise AttributeError(name)

        value = getattr(object.__getattribute__(self, '_target'), name)
        # nested handles stay behind the view
        if isinstance(value, (Task, Ref)):
            return ReadOnlyRef(value)
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        raise ImmutabilityViolation(
            f"Cannot assign '{name}' through a read-only reference to {type(self._target).__name__}",
            target=type(self._target).__name__,
            field=name
        )

    def __delattr__(self, name: str) -> None:
        raise ImmutabilityViolation(
            f"Cannot delete '{name}' through a read-only reference to {type(self._target).__name__}",
            target=type(self._target).__name__,
            field=name
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ReadOnlyRef):
            other = other._target
        return self._target == other

    def __hash__(self) -> int:
        return hash(self._target)

    def __copy__(self) -> 'ReadOnlyRef[T]':
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> 'ReadOnlyRef[T]':
        # a borrowed view owns nothing to duplicate
        return self

    def __repr__(self) -> str:
        return f"ReadOnlyRef({self._target!r})"


class Box(Ref[Any]):
    """Heap holder for a boxed value. Every holder of a box shares it."""

    __slots__ = ()

    @property
    def boxed_type(self) -> type:
        return type(self.value)


@overload
def readonly(target: Task) -> TaskView: ...
@overload
def readonly(target: TaskPriority) -> PriorityView: ...
@overload
def readonly(target: T) -> ReadOnlyRef[T]: ...


def readonly(target):
    """Borrow a read-only view of ``target`` without copying it."""
    if isinstance(target, ReadOnlyRef):
        return target
    return ReadOnlyRef(target)


def by_value(value: T) -> T:
    """Return what a callee receives when ``value`` is passed by value.

    Value objects are copied. Anything else, tasks included, is the caller's
    own object.
    """
    if isinstance(value, ValueObject):
        return copy.copy(value)
    return value


def box(value: Any) -> Box:
    """Wrap a value type into a new heap reference."""
    if not isinstance(value, BOXABLE_TYPES):
        raise ValidationError(
            f"Only value types can be boxed, got {type(value).__name__}",
            field='value',
            value=value
        )
    return Box(value)


def unbox(boxed: Any, expected_type: type) -> Any:
    """Type-checked cast of a boxed value back to ``expected_type``."""
    if not isinstance(boxed, Box):
        raise UnboxingError(
            f"Expected a Box, got {type(boxed).__name__}",
            expected=expected_type,
            actual=type(boxed)
        )

    value = boxed.value
    # bool is an int subclass but never unboxes as one
    if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
        raise UnboxingError(
            f"Cannot unbox {boxed.boxed_type.__name__} as {expected_type.__name__}",
            expected=expected_type,
            actual=boxed.boxed_type
        )

    return value
