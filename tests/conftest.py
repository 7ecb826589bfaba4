"""
Shared test fixtures and configuration.
"""

import logging
import sys
from pathlib import Path

import pytest

from vcredist.adapters.mock import MockRunner
from vcredist.adapters.winget.command import WINGET_OUTPUT_LOGGER
from vcredist.core.engine.phases import PhaseContext
from vcredist.core.observability.logging_config import CONSOLE_HANDLER, FILE_HANDLER
from vcredist.core.observability.log_sink import LogSink


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def sink() -> LogSink:
    """A log sink with no delivery point."""
    return LogSink()


@pytest.fixture
def mock_runner() -> MockRunner:
    """A mock runner that prints nothing unless told otherwise."""
    return MockRunner()


@pytest.fixture
def phase_ctx(mock_runner: MockRunner, sink: LogSink) -> PhaseContext:
    """Phase context wired to the mock runner and sink."""
    return PhaseContext(runner=mock_runner, sink=sink)


@pytest.fixture
def python_exe() -> str:
    """An executable that exists everywhere the tests run."""
    return sys.executable


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    """Keep user settings and env overrides out of every test."""
    monkeypatch.delenv("VCR_WINGET", raising=False)
    monkeypatch.delenv("VCR_LOG_FILE", raising=False)
    monkeypatch.delenv("VCR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("VCR_LOG_FILE_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo whatever setup_logging did to the root logger during a test."""
    root = logging.getLogger()
    level = root.level
    output_level = logging.getLogger(WINGET_OUTPUT_LOGGER).level
    yield
    for handler in root.handlers[:]:
        if handler.get_name() in (CONSOLE_HANDLER, FILE_HANDLER):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.getLogger(WINGET_OUTPUT_LOGGER).setLevel(output_level)
