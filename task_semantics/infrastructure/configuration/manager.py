"""
Configuration manager backed by a JSON file, with optional hot reload.
"""

import json
from pathlib import Path
from typing import Dict, Any, Optional, Callable, List
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler
import threading
import time

from task_semantics.domain.exceptions import ConfigurationError
from task_semantics.domain.interfaces.base import ILogger
from task_semantics.domain.models.configuration import DemoConfiguration


class ConfigurationFileHandler(FileSystemEventHandler):
    """Reloads the configuration when its file changes on disk."""

    def __init__(self, config_manager: 'ConfigurationManager', debounce_seconds: float = 1.0):
        self.config_manager = config_manager
        self.last_modified = 0.0
        self.debounce_seconds = debounce_seconds

    def on_modified(self, event):
        if event.is_directory:
            return

        if Path(event.src_path) != self.config_manager.config_file_path:
            return

        current_time = time.time()
        if current_time - self.last_modified < self.debounce_seconds:
            return

        self.last_modified = current_time
        self.config_manager.reload()


class ConfigurationManager:
    """Configuration manager with validation and hot-reload capabilities."""

    def __init__(self, config_file_path: str, logger: ILogger):
        self.config_file_path = Path(config_file_path).resolve()
        self.logger = logger
        self._config_data: Dict[str, Any] = {}
        self._demo_config: Optional[DemoConfiguration] = None
        self._observers: List[Observer] = []
        self._change_callbacks: List[Callable[[Dict[str, Any]], None]] = []
        self._lock = threading.RLock()

        self._load_configuration()

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key."""
        with self._lock:
            return self._config_data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value. Invalid values are rejected and not stored."""
        with self._lock:
            candidate = {**self._config_data, key: value}
            self._demo_config = self._build_config(candidate)
            self._config_data = candidate

    def get_all(self) -> Dict[str, Any]:
        """Get all configuration data."""
        with self._lock:
            return self._config_data.copy()

    def validate(self) -> bool:
        """Validate current configuration."""
        try:
            with self._lock:
                DemoConfiguration.from_dict(self._config_data)
            return True
        except (TypeError, ValueError) as e:
            self.logger.error(f"Configuration validation failed: {e}", component="configuration")
            return False

    def reload(self) -> bool:
        """Reload configuration from file."""
        try:
            with self._lock:
                with open(self.config_file_path, 'r', encoding='utf-8') as f:
                    new_config = json.load(f)

                self._demo_config = self._build_config(new_config)
                self._config_data = new_config

            self.logger.info(f"Configuration reloaded from {self.config_file_path}", component="configuration")

        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON in configuration file: {e}", component="configuration")
            return False
        except (OSError, ConfigurationError) as e:
            self.logger.error(f"Failed to reload configuration: {e}", component="configuration")
            return False

        for callback in self._change_callbacks:
            try:
                callback(self.get_all())
            except Exception as e:
                self.logger.error(f"Configuration change callback failed: {e}", component="configuration")

        return True

    def get_demo_config(self) -> DemoConfiguration:
        """Get typed demonstration configuration object."""
        with self._lock:
            if self._demo_config is None:
                self._demo_config = self._build_config(self._config_data)
            return self._demo_config

    def start_hot_reload(self) -> None:
        """Start watching configuration file for changes."""
        if not self.config_file_path.exists():
            self.logger.warning(f"Configuration file {self.config_file_path} does not exist", component="configuration")
            return

        observer = Observer()
        observer.schedule(
            ConfigurationFileHandler(self),
            str(self.config_file_path.parent),
            recursive=False
        )
        observer.start()
        self._observers.append(observer)

        self.logger.info(f"Started hot-reload for configuration file: {self.config_file_path}", component="configuration")

    def stop_hot_reload(self) -> None:
        """Stop watching configuration file for changes."""
        if not self._observers:
            return

        for observer in self._observers:
            observer.stop()
            observer.join()
        self._observers.clear()
        self.logger.info("Stopped configuration hot-reload", component="configuration")

    def add_change_callback(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        """Add callback to be called when configuration changes."""
        self._change_callbacks.append(callback)

    def _load_configuration(self) -> None:
        if self.config_file_path.exists():
            if not self.reload():
                raise ConfigurationError(
                    "Configuration file could not be loaded",
                    context={'path': str(self.config_file_path)}
                )
        else:
            self.logger.info(
                f"Configuration file {self.config_file_path} not found, using defaults",
                component="configuration"
            )
            self._config_data = DemoConfiguration().to_dict()
            self._demo_config = self._build_config(self._config_data)
            self._save_configuration()

    def _build_config(self, config_data: Dict[str, Any]) -> DemoConfiguration:
        try:
            return DemoConfiguration.from_dict(config_data)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Failed to build configuration: {e}", component="configuration")
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def _save_configuration(self) -> None:
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_file_path, 'w', encoding='utf-8') as f:
                json.dump(self._config_data, f, indent=4)

            self.logger.info(f"Configuration saved to {self.config_file_path}", component="configuration")

        except OSError as e:
            self.logger.error(f"Failed to save configuration: {e}", component="configuration")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop_hot_reload()
