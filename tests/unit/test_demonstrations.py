"""
Unit tests for the demonstration runner and command line entry point.
"""

import json
import pytest
from unittest.mock import Mock

from task_semantics.application.services.demonstrations import DemonstrationRunner
from task_semantics.domain.exceptions import ConfigurationError, ImmutabilityViolation
from task_semantics.domain.models.configuration import DemoConfiguration, DEMONSTRATION_NAMES
from task_semantics.infrastructure.error_handling.handler import ErrorHandler
from task_semantics.main import build_parser, main


@pytest.fixture
def runner(sample_demo_config, mock_logger):
    return DemonstrationRunner(sample_demo_config, mock_logger, ErrorHandler(mock_logger))


class TestDemonstrationRunner:
    """Test each demonstration's observations."""

    def test_available_matches_configuration_names(self, runner):
        assert tuple(runner.available) == DEMONSTRATION_NAMES

    def test_value_types(self, runner):
        result = runner.run("value_types")

        assert result.passed
        assert result.observations['original_int'] == 1
        assert result.observations['copied_int'] == 5
        assert result.observations['priority1_level'] == 1
        assert result.observations['priority2_level'] == 2

    def test_reference_types(self, runner):
        result = runner.run("reference_types")

        assert result.passed
        assert result.observations['task1_title'] == "Implement authorization"
        assert result.observations['task2_title'] == "Implement authorization"
        assert result.observations['clone_title'] == "Independent copy"

    def test_boxing(self, runner, mock_logger):
        result = runner.run("boxing")

        assert result.passed
        assert result.observations['unboxed_value'] == 42
        assert result.observations['boxed_type'] == "int"
        assert result.observations['wrong_type_rejected'] is True
        mock_logger.warning.assert_called()

    def test_passing_behavior(self, runner):
        result = runner.run("passing_behavior")

        assert result.passed
        assert result.observations == {
            'after_modify_value': 50,
            'after_modify_priority': 1,
            'after_modify_reference': "Modified!",
            'after_modify_value_by_ref': 100,
            'after_modify_priority_by_ref': 2,
            'after_replace_task_by_ref': "Replacement",
        }

    def test_read_only_reference(self, runner):
        result = runner.run("read_only_reference")

        assert result.passed
        assert result.observations['priority_level'] == 3
        assert result.observations['mutation_rejected'] is True
        assert result.observations['task_title'] == "Original"

    def test_iteration_forward(self, runner, mock_logger):
        result = runner.run("iteration")

        assert result.passed
        assert result.observations['indexed'] == [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5)]
        assert result.observations['sequential'] == [1, 2, 3, 4, 5]
        mock_logger.debug.assert_any_call("Index 0: Code Review", component="iteration")
        mock_logger.debug.assert_any_call("Code Review - InProgress", component="iteration")

    def test_iteration_reverse_with_step(self, mock_logger):
        config = DemoConfiguration(iteration_step=2, iteration_reverse=True)
        runner = DemonstrationRunner(config, mock_logger, ErrorHandler(mock_logger))

        result = runner.run("iteration")

        assert result.passed
        assert result.observations['indexed'] == [(4, 5), (2, 3), (0, 1)]

    def test_unknown_demonstration(self, runner):
        with pytest.raises(ConfigurationError, match="Unknown demonstration"):
            runner.run("teleport")

    def test_domain_error_becomes_failed_result(self, runner, mock_logger, mock_error_handler):
        runner.error_handler = mock_error_handler
        error = ImmutabilityViolation("blocked")
        runner._demonstrations["value_types"] = Mock(side_effect=error)

        result = runner.run("value_types")

        assert not result.passed
        assert result.error_message == "Error handled"
        mock_error_handler.handle_error.assert_called_once()
        mock_logger.error.assert_called()

    def test_other_errors_propagate(self, runner):
        runner._demonstrations["value_types"] = Mock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            runner.run("value_types")

    def test_run_all_uses_enabled_order(self, mock_logger):
        config = DemoConfiguration(enabled_demonstrations=["iteration", "boxing"])
        runner = DemonstrationRunner(config, mock_logger, ErrorHandler(mock_logger))

        results = runner.run_all()

        assert [r.name for r in results] == ["iteration", "boxing"]
        assert all(r.passed for r in results)

    def test_run_all_every_demonstration_passes(self, runner):
        results = runner.run_all()

        assert [r.name for r in results] == list(DEMONSTRATION_NAMES)
        assert all(r.passed for r in results)

    def test_run_all_rejects_unknown_names(self, runner):
        with pytest.raises(ConfigurationError):
            runner.run_all(["value_types", "teleport"])


class TestMain:
    """Test the command line entry point."""

    def test_parser_accepts_repeated_only(self):
        args = build_parser().parse_args(["--only", "boxing", "--only", "iteration", "--log-level", "debug"])

        assert args.only == ["boxing", "iteration"]
        assert args.log_level == "DEBUG"

    def test_parser_rejects_unknown_demonstration(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--only", "teleport"])

    def test_main_runs_selected_demonstrations(self, temp_dir, capsys):
        config_file = temp_dir / "task_semantics.json"

        exit_code = main(["--config", str(config_file), "--only", "passing_behavior", "--log-level", "ERROR"])

        assert exit_code == 0
        assert config_file.exists()
        assert "[passing_behavior] passed" in capsys.readouterr().out

    def test_main_runs_configured_demonstrations(self, temp_dir, capsys):
        config_file = temp_dir / "task_semantics.json"
        config_file.write_text(json.dumps({
            'log_level': "ERROR",
            'enabled_demonstrations': ["value_types", "reference_types"]
        }), encoding='utf-8')

        exit_code = main(["--config", str(config_file)])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert "[value_types] passed" in out
        assert "[reference_types] passed" in out
        assert "[iteration]" not in out

    def test_main_reports_invalid_configuration(self, temp_dir, capsys):
        config_file = temp_dir / "task_semantics.json"
        config_file.write_text(json.dumps({'iteration_step': 0}), encoding='utf-8')

        assert main(["--config", str(config_file)]) == 2
        assert "Configuration error" in capsys.readouterr().err
