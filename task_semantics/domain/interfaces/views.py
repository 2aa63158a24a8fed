"""
Read-only view protocols.

Static type checkers reject assignments through these protocols since every
member is a read-only property. The run-time counterpart is ``ReadOnlyRef``.
"""

from datetime import datetime
from typing import Optional, Protocol, Union
import uuid

from task_semantics.domain.models.entities import TaskStatus


class PriorityView(Protocol):
    """Read-only view of a task priority."""

    @property
    def level(self) -> int: ...

    @property
    def name(self) -> str: ...


class TaskView(Protocol):
    """Read-only view of a task."""

    @property
    def id(self) -> Union[int, uuid.UUID]: ...

    @property
    def title(self) -> Optional[str]: ...

    @property
    def status(self) -> TaskStatus: ...

    @property
    def priority(self) -> Optional[PriorityView]: ...

    @property
    def created_at(self) -> Optional[datetime]: ...
