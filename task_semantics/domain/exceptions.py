"""
Domain exceptions and error hierarchy.
"""

from typing import Optional, Dict, Any


class TaskSemanticsError(Exception):
    """Base exception for task semantics errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (Context: {context_str})"
        return self.message


class ConfigurationError(TaskSemanticsError):
    """Configuration related errors."""
    pass


class ImmutabilityViolation(TaskSemanticsError, AttributeError):
    """Raised at the site of a mutation on an immutable value or read-only view."""

    def __init__(self, message: str, target: Optional[str] = None,
                 field: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.target = target
        self.field = field


class ValidationError(TaskSemanticsError):
    """Data validation errors."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Any] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.field = field
        self.value = value


class CollectionModifiedError(TaskSemanticsError):
    """Collection structure changed while it was being iterated."""

    def __init__(self, message: str, expected_length: Optional[int] = None,
                 actual_length: Optional[int] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.expected_length = expected_length
        self.actual_length = actual_length


class UnboxingError(TaskSemanticsError):
    """Boxed value does not match the requested type."""

    def __init__(self, message: str, expected: Optional[type] = None,
                 actual: Optional[type] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.expected = expected
        self.actual = actual
