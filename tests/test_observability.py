"""
Tests for logging setup — console level, transcript routing, log file.
"""

import logging
from pathlib import Path

from click.testing import CliRunner

from vcredist.adapters.winget.command import WINGET_OUTPUT_LOGGER
from vcredist.core.observability.log_sink import LogSink
from vcredist.core.observability.logging_config import (
    resolve_console_level,
    setup_logging,
)
from vcredist.main import cli

X64 = "Microsoft.VCRedist.2015+.x64"

diag = logging.getLogger("vcredist.tests.diag")


# ── Level Precedence ────────────────────────────────────────────────


class TestResolveConsoleLevel:
    def test_default(self):
        assert resolve_console_level() == "WARNING"

    def test_env_level(self):
        assert resolve_console_level(env_level="INFO") == "INFO"

    def test_quiet_beats_env(self):
        assert resolve_console_level(quiet=True, env_level="DEBUG") == "ERROR"

    def test_verbose_beats_quiet(self):
        assert resolve_console_level(verbose=True, quiet=True) == "INFO"

    def test_debug_beats_everything(self):
        assert resolve_console_level(debug=True, verbose=True, quiet=True) == "DEBUG"


# ── Console Handler ─────────────────────────────────────────────────


class TestConsole:
    def test_transcript_kept_off_console(self, capsys):
        setup_logging(level="INFO")
        LogSink().append("=== Install ===")
        diag.info("diagnostic line")
        err = capsys.readouterr().err
        assert "diagnostic line" in err
        assert "=== Install ===" not in err

    def test_level_applies(self, capsys):
        setup_logging(level="WARNING")
        diag.info("quiet please")
        diag.warning("heads up")
        err = capsys.readouterr().err
        assert "quiet please" not in err
        assert "WARNING: heads up" in err

    def test_winget_output_only_with_debug(self, capsys):
        setup_logging(level="INFO")
        logging.getLogger(WINGET_OUTPUT_LOGGER).debug("raw winget line")
        assert "raw winget line" not in capsys.readouterr().err

        setup_logging(level="DEBUG")
        logging.getLogger(WINGET_OUTPUT_LOGGER).debug("raw winget line")
        assert "raw winget line" in capsys.readouterr().err

    def test_invalid_level_falls_back_to_warning(self):
        setup_logging(level="LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_replaces_previous_handlers(self):
        setup_logging(level="INFO")
        setup_logging(level="INFO")
        names = [h.get_name() for h in logging.getLogger().handlers]
        assert names.count("vcredist.console") == 1


# ── Log File ────────────────────────────────────────────────────────


class TestLogFile:
    def test_records_transcript_at_info_by_default(self, tmp_path: Path):
        log_file = tmp_path / "vcr.log"
        setup_logging(level="ERROR", log_file=str(log_file))

        assert logging.getLogger().level == logging.INFO
        LogSink().append("Installed: VC++ 2015–2022 x64")
        diag.debug("too chatty")
        logging.getLogger(WINGET_OUTPUT_LOGGER).debug("raw winget line")

        text = log_file.read_text(encoding="utf-8")
        assert "vcredist.transcript — Installed: VC++ 2015–2022 x64" in text
        assert "too chatty" not in text
        assert "raw winget line" not in text

    def test_debug_file_level_keeps_winget_output(self, tmp_path: Path, capsys):
        log_file = tmp_path / "vcr.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")

        logging.getLogger(WINGET_OUTPUT_LOGGER).debug("raw winget line")

        assert "raw winget line" in log_file.read_text(encoding="utf-8")
        assert "raw winget line" not in capsys.readouterr().err

    def test_file_level_above_console(self, tmp_path: Path):
        log_file = tmp_path / "vcr.log"
        setup_logging(level="DEBUG", log_file=str(log_file), log_file_level="ERROR")

        assert logging.getLogger().level == logging.DEBUG
        diag.warning("console only")
        assert "console only" not in log_file.read_text(encoding="utf-8")


# ── CLI Wiring ──────────────────────────────────────────────────────


class TestCLILogging:
    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("VCR_LOG_LEVEL", "INFO")
        result = CliRunner().invoke(cli, ["catalog"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.INFO

    def test_quiet_overrides_env(self, monkeypatch):
        monkeypatch.setenv("VCR_LOG_LEVEL", "DEBUG")
        result = CliRunner().invoke(cli, ["--quiet", "catalog"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.ERROR

    def test_log_file_gets_phase_transcript(self, monkeypatch, tmp_path: Path):
        log_file = tmp_path / "session.log"
        monkeypatch.setenv("VCR_LOG_FILE", str(log_file))
        monkeypatch.setenv("VCR_LOG_LEVEL", "INFO")
        result = CliRunner().invoke(cli, ["install", "--mock", "--only", X64])
        assert result.exit_code == 0

        text = log_file.read_text(encoding="utf-8")
        assert "=== Install ===" in text
        assert "Install finished." in text
        # Printed once on stdout, not echoed again through the console handler
        assert result.output.count("=== Install ===") == 1
