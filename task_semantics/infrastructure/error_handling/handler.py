"""
Error handler with structured logging and per-type fallback handlers.
"""

import traceback
from typing import Dict, Any, Callable
from datetime import datetime

from task_semantics.domain.interfaces.base import ILogger
from task_semantics.domain.exceptions import (
    TaskSemanticsError, ConfigurationError, ImmutabilityViolation,
    ValidationError, CollectionModifiedError, UnboxingError
)


FallbackHandler = Callable[[Exception, Dict[str, Any]], None]


class ErrorHandler:
    """Logs errors with context and turns them into readable messages."""

    def __init__(self, logger: ILogger):
        self.logger = logger
        self._fallback_handlers: Dict[type, FallbackHandler] = {}
        self._setup_default_handlers()

    def _setup_default_handlers(self) -> None:
        self._fallback_handlers.update({
            ImmutabilityViolation: self._handle_immutability_violation,
            CollectionModifiedError: self._handle_collection_modified,
            ConfigurationError: self._handle_configuration_error,
        })

    def handle_error(self, error: Exception, context: Dict[str, Any]) -> str:
        """Handle error with logging and return user-friendly message."""
        self.log_error(error, context)
        user_message = self.create_user_message(error)
        self._execute_fallback(error, context)
        return user_message

    def log_error(self, error: Exception, context: Dict[str, Any]) -> None:
        """Log error with structured context."""
        error_context = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'timestamp': datetime.now().isoformat(),
            **context
        }

        if error.__traceback__ is not None:
            error_context['traceback'] = ''.join(traceback.format_exception(type(error), error, error.__traceback__))

        if isinstance(error, TaskSemanticsError):
            error_context.update(error.context)

            if isinstance(error, ImmutabilityViolation):
                error_context.update({
                    'target': error.target,
                    'field': error.field
                })
            elif isinstance(error, ValidationError):
                error_context.update({
                    'field': error.field,
                    'value': str(error.value) if error.value is not None else None
                })
            elif isinstance(error, CollectionModifiedError):
                error_context.update({
                    'expected_length': error.expected_length,
                    'actual_length': error.actual_length
                })
            elif isinstance(error, UnboxingError):
                error_context.update({
                    'expected': getattr(error.expected, '__name__', None),
                    'actual': getattr(error.actual, '__name__', None)
                })

        if isinstance(error, (ImmutabilityViolation, ValidationError, UnboxingError)):
            self.logger.warning("Rejected operation", **error_context)
        elif isinstance(error, (ConfigurationError, CollectionModifiedError)):
            self.logger.error("Operation failed", **error_context)
        else:
            self.logger.error("Unexpected error occurred", **error_context)

    def create_user_message(self, error: Exception) -> str:
        """Create user-friendly error message."""
        if isinstance(error, ImmutabilityViolation):
            return f"Immutability violation: {error.message}"

        elif isinstance(error, ValidationError):
            return f"Invalid input: {error.message}"

        elif isinstance(error, UnboxingError):
            return f"Invalid cast: {error.message}"

        elif isinstance(error, CollectionModifiedError):
            return f"Collection modified during iteration: {error.message}"

        elif isinstance(error, ConfigurationError):
            return f"Configuration error: {error.message}\nCheck the configuration file."

        elif isinstance(error, TaskSemanticsError):
            return f"Error: {error.message}"

        return f"Unexpected error: {error}"

    def _execute_fallback(self, error: Exception, context: Dict[str, Any]) -> None:
        for exc_type, handler in self._fallback_handlers.items():
            if isinstance(error, exc_type):
                try:
                    handler(error, context)
                except Exception as fallback_error:
                    self.logger.error(
                        "Fallback handler failed",
                        error_type=type(fallback_error).__name__,
                        error_message=str(fallback_error),
                        original_error=str(error)
                    )
                break

    def _handle_immutability_violation(self, error: ImmutabilityViolation, context: Dict[str, Any]) -> None:
        self.logger.info(f"Mutation of '{error.field}' on {error.target} was blocked; original value kept")

    def _handle_collection_modified(self, error: CollectionModifiedError, context: Dict[str, Any]) -> None:
        self.logger.info(f"Traversal abandoned after collection size changed to {error.actual_length}")

    def _handle_configuration_error(self, error: ConfigurationError, context: Dict[str, Any]) -> None:
        self.logger.info("Falling back to default configuration values")

    def add_fallback_handler(self, error_type: type, handler: FallbackHandler) -> None:
        """Add custom fallback handler for specific error type."""
        self._fallback_handlers[error_type] = handler

    def remove_fallback_handler(self, error_type: type) -> None:
        """Remove fallback handler for specific error type."""
        self._fallback_handlers.pop(error_type, None)
