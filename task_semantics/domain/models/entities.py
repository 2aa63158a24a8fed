"""
Domain entities for the task model.

``TaskPriority`` is a value object: it is sealed after construction and
"changing" it means building a new one. ``Task`` is an entity: every variable
that holds a task holds the same instance, and mutations are seen by all of
them.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Optional, Dict, Any, Union, Mapping
import copy
import uuid

from task_semantics.domain.exceptions import ImmutabilityViolation, ValidationError
from task_semantics.domain.interfaces.base import ValueObject


PRIORITY_NAMES = {
    1: "High",
    2: "Medium",
    3: "Low",
}


class TaskStatus(Enum):
    """Task progress status. Any status may follow any other."""
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @classmethod
    def from_string(cls, value: str) -> 'TaskStatus':
        """Create TaskStatus from its value or member name, ignoring case."""
        if isinstance(value, str):
            normalized = value.replace('_', '').replace(' ', '').lower()
            for status in cls:
                if normalized in (status.value.lower(), status.name.replace('_', '').lower()):
                    return status
        raise ValidationError(
            f"Invalid task status: {value}. Valid options: {[s.value for s in cls]}",
            field='status',
            value=value
        )


@dataclass(unsafe_hash=True)
class TaskPriority(ValueObject):
    """Priority of a task (1 = highest)."""

    level: int
    name: str

    def __post_init__(self):
        self._seal()

    @classmethod
    def from_level(cls, level: int) -> 'TaskPriority':
        """Create a priority with the canonical name for ``level``."""
        return cls(level, PRIORITY_NAMES.get(level, f"Level {level}"))

    def copy(self) -> 'TaskPriority':
        return TaskPriority(self.level, self.name)

    def with_level(self, level: int) -> 'TaskPriority':
        return replace(self, level=level)

    def with_name(self, name: str) -> 'TaskPriority':
        return replace(self, name=name)

    def to_dict(self) -> Dict[str, Any]:
        return {'level': self.level, 'name': self.name}


@dataclass(eq=False)
class Task:
    """A task entity, compared and hashed by identity."""

    id: Union[int, uuid.UUID] = field(default_factory=uuid.uuid4)
    title: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: Optional[TaskPriority] = None
    created_at: Optional[datetime] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == 'id' and 'id' in self.__dict__:
            raise ImmutabilityViolation(
                "Task id is assigned once at construction",
                target=type(self).__name__,
                field='id',
                context={'task_id': str(self.__dict__['id'])}
            )
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name == 'id':
            raise ImmutabilityViolation(
                "Task id cannot be deleted",
                target=type(self).__name__,
                field='id'
            )
        super().__delattr__(name)

    def clone(self) -> 'Task':
        """Return an independent copy with the same id."""
        return copy.copy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to dictionary for serialization."""
        return {
            'id': str(self.id) if isinstance(self.id, uuid.UUID) else self.id,
            'title': self.title,
            'status': self.status.value,
            'priority': self.priority.to_dict() if self.priority else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Create task from dictionary."""
        task_id = data['id']
        if isinstance(task_id, str):
            task_id = uuid.UUID(task_id)

        priority = data.get('priority')
        created_at = data.get('created_at')

        return cls(
            id=task_id,
            title=data.get('title'),
            status=TaskStatus.from_string(data.get('status', TaskStatus.PENDING.value)),
            priority=TaskPriority(priority['level'], priority['name']) if priority else None,
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )


@dataclass
class DemonstrationResult(ValueObject):
    """Outcome of one demonstration run.

    Sealed like every value object, but unhashable: observations are a
    read-only mapping, which has no hash.
    """

    __hash__ = None  # type: ignore[assignment]

    name: str
    passed: bool
    observations: Mapping[str, Any] = field(default_factory=dict)
    error_message: Optional[str] = None

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise ValidationError("Demonstration name must be a non-empty string", field='name', value=self.name)

        if not self.passed and not self.error_message:
            raise ValidationError("Failed demonstrations must have error_message", field='error_message')

        self.observations = MappingProxyType(dict(self.observations))
        self._seal()

    def get_summary(self) -> str:
        """Get a one-line summary of the result."""
        if self.passed:
            return f"[{self.name}] passed ({len(self.observations)} observations)"
        return f"[{self.name}] failed: {self.error_message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'passed': self.passed,
            'observations': dict(self.observations),
            'error_message': self.error_message,
        }
