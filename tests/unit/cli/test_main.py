"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
from unittest.mock import MagicMock, Mock, patch

import pytest
from typer.testing import CliRunner

from src.cli.main import (
    GETTING_STARTED_MESSAGE,
    _configure_logging,
    _normalize_optional_values,
    app,
    main,
)
from src.cli.models import ExitCode

runner = CliRunner()

SERVICE_ID = (
    "/subscriptions/sub-123/resourceGroups/portal-rg"
    "/providers/Microsoft.ApiManagement/service/contoso-apim"
)


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity, level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(verbosity)

            mock_app_logger.setLevel.assert_called_with(level)

    def test_only_src_logger_is_configured(self):
        with patch('logging.getLogger') as mock_get_logger:
            _configure_logging(0)

            mock_get_logger.assert_any_call("src")

    def test_logdir_adds_timestamped_file(self, tmp_path):
        app_logger = logging.getLogger("src")
        handlers_before = list(app_logger.handlers)
        try:
            _configure_logging(1, str(tmp_path / "logs"))

            log_files = list((tmp_path / "logs").iterdir())
            assert len(log_files) == 1
            assert log_files[0].name.startswith("devportal-migrate_")
            assert log_files[0].suffix == ".log"
        finally:
            for handler in app_logger.handlers[len(handlers_before):]:
                handler.close()
                app_logger.removeHandler(handler)


class TestNormalizeOptionalValues:
    """Test cases for _normalize_optional_values."""

    @pytest.mark.parametrize("argv, expected", [
        ([SERVICE_ID, "--import"], [SERVICE_ID, "--import="]),
        ([SERVICE_ID, "--import", "--path", "d"], [SERVICE_ID, "--import=", "--path", "d"]),
        (["--publish", SERVICE_ID], ["--publish=", SERVICE_ID]),
        ([SERVICE_ID, "--import", "v2"], [SERVICE_ID, "--import", "v2"]),
        ([SERVICE_ID, "--import=v2"], [SERVICE_ID, "--import=v2"]),
        ([SERVICE_ID, "--export"], [SERVICE_ID, "--export"]),
        (["--import", "--publish"], ["--import=", "--publish="]),
    ])
    def test_normalization(self, argv, expected):
        assert _normalize_optional_values(argv) == expected

    @patch('src.cli.main.app')
    def test_main_passes_normalized_argv(self, mock_app):
        with patch('sys.argv', ["devportal-migrate", SERVICE_ID, "--import"]):
            main()

        mock_app.assert_called_once_with(args=[SERVICE_ID, "--import="])


class TestMainCommand:
    """Test cases for the main command."""

    def test_no_arguments_shows_getting_started(self):
        result = runner.invoke(app, [])

        assert result.exit_code == ExitCode.SUCCESS
        assert GETTING_STARTED_MESSAGE in result.output

    def test_resource_id_without_operations_shows_getting_started(self):
        result = runner.invoke(app, [SERVICE_ID])

        assert result.exit_code == ExitCode.SUCCESS
        assert "--export" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "devportal-migrate version 0.1.0" in result.output

    def test_operation_without_resource_id_fails(self):
        result = runner.invoke(app, ["--export"])

        assert result.exit_code == ExitCode.GENERAL_ERROR

    @patch('src.cli.main._configure_logging')
    @patch('src.cli.main.MigrateCommand')
    def test_export_builds_request(self, mock_command_class, mock_logging):
        mock_command_class.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, [SERVICE_ID, "--export", "--path", "./portal"])

        assert result.exit_code == ExitCode.SUCCESS
        request = mock_command_class.return_value.run.call_args[0][0]
        assert request.resource_id == SERVICE_ID
        assert request.path == "./portal"
        assert request.export is True
        assert request.do_import is False
        assert request.do_publish is False

    @patch('src.cli.main._configure_logging')
    @patch('src.cli.main.MigrateCommand')
    def test_bare_import_does_not_publish(self, mock_command_class, mock_logging):
        mock_command_class.return_value.run.return_value = ExitCode.SUCCESS

        result = runner.invoke(app, [SERVICE_ID, "--import="])

        assert result.exit_code == ExitCode.SUCCESS
        request = mock_command_class.return_value.run.call_args[0][0]
        assert request.do_import is True
        assert request.do_publish is False

    @patch('src.cli.main._configure_logging')
    @patch('src.cli.main.MigrateCommand')
    def test_named_import_publishes(self, mock_command_class, mock_logging):
        mock_command_class.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, [SERVICE_ID, "--import", "v2"])

        request = mock_command_class.return_value.run.call_args[0][0]
        assert request.do_import is True
        assert request.do_publish is True
        assert request.revision_name == "v2"

    @patch('src.cli.main._configure_logging')
    @patch('src.cli.main.MigrateCommand')
    def test_options_forwarded(self, mock_command_class, mock_logging):
        mock_command_class.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, [
            SERVICE_ID, "--publish=", "--max-workers", "4", "-v", "2",
            "--logdir", "logs", "--no-color",
        ])

        assert mock_command_class.call_args[1]["max_workers"] == 4
        assert mock_command_class.call_args[1]["endpoint"] is None
        mock_logging.assert_called_once_with(2, "logs")
        output_handler = mock_command_class.call_args[1]["output_handler"]
        assert output_handler.verbosity == 2

    @patch('src.cli.main._configure_logging')
    @patch('src.cli.main.MigrateCommand')
    def test_exit_code_propagates(self, mock_command_class, mock_logging):
        mock_command_class.return_value.run.return_value = ExitCode.NETWORK_ERROR

        result = runner.invoke(app, [SERVICE_ID, "--delete"])

        assert result.exit_code == ExitCode.NETWORK_ERROR

    def test_invalid_max_workers_rejected(self):
        result = runner.invoke(app, [SERVICE_ID, "--export", "--max-workers", "0"])

        assert result.exit_code != 0

    @patch('src.cli.main._configure_logging')
    @patch('src.cli.main.MigrateCommand')
    def test_endpoint_forwarded(self, mock_command_class, mock_logging):
        mock_command_class.return_value.run.return_value = ExitCode.SUCCESS

        runner.invoke(app, [SERVICE_ID, "--export", "--endpoint", "management.chinacloudapi.cn"])

        assert mock_command_class.call_args[1]["endpoint"] == "management.chinacloudapi.cn"
