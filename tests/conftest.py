"""
Pytest configuration and shared fixtures.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock

from task_semantics.domain.interfaces.base import ILogger, IErrorHandler
from task_semantics.domain.models.configuration import DemoConfiguration
from task_semantics.domain.models.entities import Task, TaskPriority, TaskStatus
from task_semantics.domain.models.samples import sample_tasks


@pytest.fixture(autouse=True)
def clear_env_overrides(monkeypatch):
    """Keep configuration tests independent of the caller's environment."""
    monkeypatch.delenv('TASK_SEMANTICS_LOG_LEVEL', raising=False)
    monkeypatch.delenv('TASK_SEMANTICS_LOG_DIR', raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing."""
    logger = Mock(spec=ILogger)
    logger.debug = Mock()
    logger.info = Mock()
    logger.warning = Mock()
    logger.error = Mock()
    logger.critical = Mock()
    return logger


@pytest.fixture
def mock_error_handler():
    """Create a mock error handler for testing."""
    error_handler = Mock(spec=IErrorHandler)
    error_handler.handle_error = Mock(return_value="Error handled")
    error_handler.log_error = Mock()
    error_handler.create_user_message = Mock(return_value="User friendly error")
    return error_handler


@pytest.fixture
def sample_demo_config():
    """Create a sample demonstration configuration for testing."""
    return DemoConfiguration(log_level="DEBUG", iteration_step=1)


@pytest.fixture
def sample_config_dict():
    """Create a sample configuration dictionary for testing."""
    return {
        'log_level': "WARNING",
        'enabled_demonstrations': ["value_types", "iteration"],
        'iteration_step': 2,
        'iteration_reverse': True,
    }


@pytest.fixture
def high_priority():
    return TaskPriority(1, "High")


@pytest.fixture
def sample_task(high_priority):
    return Task(id=1, title="Original", status=TaskStatus.PENDING, priority=high_priority)


@pytest.fixture
def tasks():
    return sample_tasks()
