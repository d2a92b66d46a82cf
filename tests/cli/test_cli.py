"""Tests for the CLI module."""

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from wg_keepalive import __version__
from wg_keepalive.cli import main
from wg_keepalive.cli.utils import PLAIN_FORMAT, TIMESTAMP_FORMAT, setup_logging
from wg_keepalive.config.logging import LoggingSettings
from wg_keepalive.errors import ParseError, QueryError

pytestmark = pytest.mark.unit


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def mock_monitor():
    with patch("wg_keepalive.cli.StallMonitor") as monitor_cls:
        yield monitor_cls


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("wg_keepalive.cli.setup_logging") as mock_setup:
        yield mock_setup


class TestSetupLogging:
    @patch("wg_keepalive.cli.utils.logging.basicConfig")
    def test_defaults(self, mock_basic: MagicMock) -> None:
        setup_logging()
        kwargs = mock_basic.call_args.kwargs
        assert kwargs["level"] == logging.INFO
        assert kwargs["format"] == TIMESTAMP_FORMAT
        assert kwargs["force"] is True

    @patch("wg_keepalive.cli.utils.logging.basicConfig")
    def test_plain_format_and_level(self, mock_basic: MagicMock) -> None:
        setup_logging(LoggingSettings(level="debug", timestamps=False))
        kwargs = mock_basic.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert kwargs["format"] == PLAIN_FORMAT


class TestMain:
    def test_runs_monitor_with_loaded_config(
        self, cli_runner: CliRunner, mock_monitor: MagicMock, tmp_path: Path
    ) -> None:
        (tmp_path / "wg0.yaml").write_text("interval: 20\ntimeout: 200\n")
        result = cli_runner.invoke(main, ["wg0", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output

        config = mock_monitor.call_args.args[0]
        assert config.interface == "wg0"
        assert config.interval == 20
        assert config.timeout == 200
        instance = mock_monitor.return_value
        instance.install_signal_handlers.assert_called_once()
        instance.run.assert_called_once()

    def test_cli_overrides(
        self, cli_runner: CliRunner, mock_monitor: MagicMock, tmp_path: Path
    ) -> None:
        (tmp_path / "wg0.yaml").write_text("interval: 20\ntimeout: 200\n")
        result = cli_runner.invoke(
            main, ["wg0", "-d", str(tmp_path), "--interval", "5", "--timeout", "50"]
        )
        assert result.exit_code == 0, result.output
        config = mock_monitor.call_args.args[0]
        assert (config.interval, config.timeout) == (5, 50)

    def test_config_dir_from_env(
        self, cli_runner: CliRunner, mock_monitor: MagicMock, tmp_path: Path, monkeypatch
    ) -> None:
        (tmp_path / "wg3.yaml").write_text("timeout: 900\n")
        monkeypatch.setenv("WG_KEEPALIVE_CONFIG_DIR", str(tmp_path))
        result = cli_runner.invoke(main, ["wg3"])
        assert result.exit_code == 0, result.output
        assert mock_monitor.call_args.args[0].timeout == 900

    def test_logging_options(
        self,
        cli_runner: CliRunner,
        mock_monitor: MagicMock,
        no_logging_setup: MagicMock,
        tmp_path: Path,
    ) -> None:
        result = cli_runner.invoke(
            main, ["wg0", "-d", str(tmp_path), "--loglevel", "DEBUG", "--no-log-timestamp"]
        )
        assert result.exit_code == 0, result.output
        no_logging_setup.assert_called_once_with(LoggingSettings(level="debug", timestamps=False))

    def test_missing_interface_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(main, [])
        assert result.exit_code == 2

    def test_bad_loglevel_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(main, ["wg0", "--loglevel", "chatty"])
        assert result.exit_code == 2

    def test_zero_interval_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(main, ["wg0", "--interval", "0"])
        assert result.exit_code == 2

    def test_invalid_config_exits_1(
        self, cli_runner: CliRunner, mock_monitor: MagicMock, tmp_path: Path
    ) -> None:
        (tmp_path / "wg0.yaml").write_text("timeout: -1\n")
        result = cli_runner.invoke(main, ["wg0", "-d", str(tmp_path)])
        assert result.exit_code == 1
        mock_monitor.assert_not_called()

    @pytest.mark.parametrize(
        "error", [QueryError("exited with status 1", interface="wg0"), ParseError("too short")]
    )
    def test_monitor_error_exits_1(
        self, cli_runner: CliRunner, mock_monitor: MagicMock, tmp_path: Path, error, caplog
    ) -> None:
        mock_monitor.return_value.run.side_effect = error
        with caplog.at_level(logging.ERROR, logger="wg_keepalive.cli"):
            result = cli_runner.invoke(main, ["wg0", "-d", str(tmp_path)])
        assert result.exit_code == 1
        assert f"Error: {error}" in caplog.text

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
