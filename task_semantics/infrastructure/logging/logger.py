"""
Structured logging for demonstrations.

Every record is one JSON line. Domain objects passed as context are rendered
as snapshots: anything with ``to_dict()`` (tasks, priorities, results) through
that method, enum members through their value, read-only views through the
object they borrow.
"""

import logging
import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from pathlib import Path
import uuid

from task_semantics.domain.interfaces.base import ILogger
from task_semantics.domain.models.references import ReadOnlyRef, Ref


LOGGER_NAMESPACE = "task_semantics"


def to_log_value(value: Any) -> Any:
    """Convert a context value into something ``json`` can encode."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, ReadOnlyRef):
        return {'read_only': to_log_value(object.__getattribute__(value, '_target'))}

    if isinstance(value, Ref):
        return {type(value).__name__.lower(): to_log_value(value.value)}

    if hasattr(value, 'to_dict') and not isinstance(value, type):
        return to_log_value(value.to_dict())

    if isinstance(value, datetime):
        return value.isoformat()

    if isinstance(value, uuid.UUID):
        return str(value)

    if isinstance(value, dict) or hasattr(value, 'items'):
        return {str(k): to_log_value(v) for k, v in value.items()}

    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_log_value(v) for v in value]

    return repr(value)


class StructuredLogger:
    """Logger that emits one JSON object per record under a fixed component."""

    def __init__(self, name: str, level: str = "INFO", log_file: Optional[str] = None,
                 component: Optional[str] = None):
        self.component = component or name.rsplit('.', 1)[-1]
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))

        # handlers are owned here; records never reach parent loggers
        self.logger.handlers.clear()
        self.logger.propagate = False

        self._add_handler(logging.StreamHandler())
        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            self._add_handler(logging.FileHandler(log_file, encoding='utf-8'))

    def _add_handler(self, handler: logging.Handler) -> None:
        handler.setFormatter(StructuredFormatter())
        self.logger.addHandler(handler)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        if not self.logger.isEnabledFor(level):
            return

        component = context.pop('component', self.component)
        self.logger.log(level, message, extra={
            'context': context,
            'timestamp': datetime.now().isoformat(),
            'component': component,
        })


class StructuredFormatter(logging.Formatter):
    """Formats a record and its domain context as a JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            'timestamp': getattr(record, 'timestamp', datetime.now().isoformat()),
            'level': record.levelname,
            'component': getattr(record, 'component', 'unknown'),
            'message': record.getMessage(),
            'logger': record.name,
        }

        context = getattr(record, 'context', None)
        if context:
            log_data['context'] = to_log_value(context)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class LoggerFactory:
    """Creates loggers in the ``task_semantics`` namespace."""

    @staticmethod
    def create_logger(name: str, level: str = "INFO", log_file: Optional[str] = None) -> ILogger:
        return StructuredLogger(name, level, log_file)

    @staticmethod
    def create_component_logger(component_name: str, base_config: Dict[str, Any]) -> ILogger:
        """Create a logger for one component, writing to ``<log_dir>/<component>.log`` when configured."""
        log_dir = base_config.get('log_dir')
        log_file = str(Path(log_dir) / f"{component_name}.log") if log_dir else None

        return StructuredLogger(
            f"{LOGGER_NAMESPACE}.{component_name}",
            base_config.get('log_level', 'INFO'),
            log_file,
            component=component_name,
        )
