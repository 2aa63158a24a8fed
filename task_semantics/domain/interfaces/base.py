"""
Base interfaces and abstract classes for the domain layer.
"""

from abc import ABC
from typing import Any, Dict, Protocol

from task_semantics.domain.exceptions import ImmutabilityViolation


class ILogger(Protocol):
    """Logger interface for dependency injection."""

    def debug(self, message: str, **kwargs: Any) -> None: ...
    def info(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def critical(self, message: str, **kwargs: Any) -> None: ...


class IConfigurationManager(Protocol):
    """Configuration management interface."""

    def get(self, key: str, default: Any = None) -> Any: ...
    def set(self, key: str, value: Any) -> None: ...
    def validate(self) -> bool: ...
    def reload(self) -> bool: ...
    def get_all(self) -> Dict[str, Any]: ...


class IErrorHandler(Protocol):
    """Error handling interface."""

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> str: ...
    def log_error(self, error: Exception, context: Dict[str, Any]) -> None: ...
    def create_user_message(self, error: Exception) -> str: ...


class ValueObject(ABC):
    """Base class for value objects.

    Subclasses call ``_seal()`` once construction is finished; from then on
    every attribute assignment or deletion raises ``ImmutabilityViolation``.
    """

    def _seal(self) -> None:
        object.__setattr__(self, '_sealed', True)

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, '_sealed', False):
            raise ImmutabilityViolation(
                f"Cannot assign '{name}' on immutable {type(self).__name__}",
                target=type(self).__name__,
                field=name
            )
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if getattr(self, '_sealed', False):
            raise ImmutabilityViolation(
                f"Cannot delete '{name}' on immutable {type(self).__name__}",
                target=type(self).__name__,
                field=name
            )
        super().__delattr__(name)

    def _public_items(self) -> Dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if not k.startswith('_')}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self._public_items() == other._public_items()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._public_items().items())))
