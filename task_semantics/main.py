"""
Command line entry point for the value/reference semantics demonstrations.
"""

import argparse
import sys
from typing import List, Optional

from task_semantics.application.services.demonstrations import DemonstrationRunner
from task_semantics.domain.exceptions import ConfigurationError
from task_semantics.domain.models.configuration import DEMONSTRATION_NAMES, LOG_LEVELS
from task_semantics.domain.models.entities import DemonstrationResult
from task_semantics.infrastructure.configuration.manager import ConfigurationManager
from task_semantics.infrastructure.error_handling.handler import ErrorHandler
from task_semantics.infrastructure.logging.logger import LoggerFactory

DEFAULT_CONFIG_FILE = "task_semantics.json"


class DemonstrationApp:
    """Wires logger, configuration, error handler and runner together."""

    def __init__(self, config_file: str, log_level: Optional[str] = None):
        self.config_file = config_file
        self.log_level = log_level
        self._initialize_components()

    def _initialize_components(self) -> None:
        self.logger = LoggerFactory.create_logger("task_semantics", self.log_level or "INFO")
        self.config_manager = ConfigurationManager(self.config_file, self.logger)
        self.config = self.config_manager.get_demo_config()

        # reconfigure from the file unless the command line chose a level
        self.logger = LoggerFactory.create_component_logger("demonstrations", {
            'log_level': self.log_level or self.config.log_level,
            'log_dir': self.config.log_dir,
        })

        self.error_handler = ErrorHandler(self.logger)
        self.runner = DemonstrationRunner(self.config, self.logger, self.error_handler)

    def run(self, names: Optional[List[str]] = None) -> List[DemonstrationResult]:
        return self.runner.run_all(names)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-semantics",
        description="Demonstrate value vs reference semantics on a task model."
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_FILE,
        help=f"Path to the JSON configuration file (default: {DEFAULT_CONFIG_FILE})"
    )
    parser.add_argument(
        "--only", action="append", choices=DEMONSTRATION_NAMES, metavar="NAME",
        help="Run only this demonstration (repeatable)"
    )
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, type=str.upper,
        help="Override the configured log level"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        app = DemonstrationApp(args.config, args.log_level)
        results = app.run(args.only)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    for result in results:
        print(result.get_summary())

    return 0 if all(result.passed for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
