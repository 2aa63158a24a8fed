"""
Configuration models and validation schemas.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple
import os

from task_semantics.domain.interfaces.base import ValueObject


DEMONSTRATION_NAMES: Tuple[str, ...] = (
    "value_types",
    "reference_types",
    "boxing",
    "passing_behavior",
    "read_only_reference",
    "iteration",
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(unsafe_hash=True)
class DemoConfiguration(ValueObject):
    """Configuration for the demonstration harness."""

    # Logging configuration
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    # Demonstrations, run in this order
    enabled_demonstrations: Tuple[str, ...] = field(default_factory=lambda: DEMONSTRATION_NAMES)

    # Indexed iteration settings
    iteration_step: int = 1
    iteration_reverse: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.enabled_demonstrations = tuple(self.enabled_demonstrations)
        self._validate_logging()
        self._validate_demonstrations()
        self._validate_iteration()
        self._seal()

    def _validate_logging(self) -> None:
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(LOG_LEVELS)}")

        if self.log_dir is not None and not isinstance(self.log_dir, str):
            raise ValueError("log_dir must be a string if provided")

    def _validate_demonstrations(self) -> None:
        unknown = [name for name in self.enabled_demonstrations if name not in DEMONSTRATION_NAMES]
        if unknown:
            raise ValueError(f"Unknown demonstrations: {unknown}. Valid options: {list(DEMONSTRATION_NAMES)}")

    def _validate_iteration(self) -> None:
        if not isinstance(self.iteration_step, int) or isinstance(self.iteration_step, bool):
            raise ValueError("iteration_step must be an integer")

        if self.iteration_step <= 0:
            raise ValueError("iteration_step must be positive")

        if not isinstance(self.iteration_reverse, bool):
            raise ValueError("iteration_reverse must be a boolean")

    @property
    def signed_step(self) -> int:
        return -self.iteration_step if self.iteration_reverse else self.iteration_step

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'DemoConfiguration':
        """Create configuration from dictionary with environment variable support."""
        config_dict = dict(config_dict)

        env_overrides = {
            'log_level': os.getenv('TASK_SEMANTICS_LOG_LEVEL'),
            'log_dir': os.getenv('TASK_SEMANTICS_LOG_DIR'),
        }

        for key, env_value in env_overrides.items():
            if env_value is not None:
                config_dict[key] = env_value

        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'log_level': self.log_level,
            'log_dir': self.log_dir,
            'enabled_demonstrations': list(self.enabled_demonstrations),
            'iteration_step': self.iteration_step,
            'iteration_reverse': self.iteration_reverse,
        }
