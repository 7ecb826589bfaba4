"""
Logging configuration — diagnostics on stderr, transcript in the log file.

vcredist produces two kinds of log records:

- Diagnostics (``vcredist.*`` module loggers): what the tool did and why.
  Shown on stderr at the chosen level.
- The progress transcript (``vcredist.transcript``): every line the log
  sink shows the operator.  The CLI already prints these on stdout, so
  they are kept off the console and only go to the log file, which then
  doubles as a record of the session.

Raw winget output (``vcredist.winget.output``) is DEBUG and therefore only
reaches the console with ``--debug``.

Console level precedence:
    --debug  >  --verbose  >  --quiet  >  VCR_LOG_LEVEL  >  WARNING

The log file (VCR_LOG_FILE) records at VCR_LOG_FILE_LEVEL, default INFO,
so the transcript is always in it.
"""

from __future__ import annotations

import logging
import sys

from vcredist.adapters.winget.command import WINGET_OUTPUT_LOGGER
from vcredist.core.observability.log_sink import TRANSCRIPT_LOGGER

# ── Format strings ──────────────────────────────────────────────

_FMT_MINIMAL = "%(levelname)s: %(message)s"

_FMT_VERBOSE = "%(asctime)s [%(name)s] %(message)s"
_DATEFMT_VERBOSE = "%H:%M:%S"

_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# Transcript lines read best without the file:line noise
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

DEFAULT_FILE_LEVEL = "INFO"

CONSOLE_HANDLER = "vcredist.console"
FILE_HANDLER = "vcredist.file"


class _DropLoggers(logging.Filter):
    """Reject records from the named loggers (and their children)."""

    def __init__(self, *names: str) -> None:
        super().__init__()
        self._names = names

    def filter(self, record: logging.LogRecord) -> bool:
        return not any(
            record.name == n or record.name.startswith(n + ".") for n in self._names
        )


def resolve_console_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env_level: str | None = None,
) -> str:
    """Pick the console level from CLI flags and the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return env_level or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file that also gets the transcript.
        log_file_level: Level for the log file (default INFO).
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _FMT_VERBOSE, _DATEFMT_VERBOSE
    else:
        fmt, datefmt = _FMT_MINIMAL, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    console.addFilter(_DropLoggers(TRANSCRIPT_LOGGER))
    console.set_name(CONSOLE_HANDLER)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level or DEFAULT_FILE_LEVEL)
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        fh.set_name(FILE_HANDLER)
        root.addHandler(fh)

    root.setLevel(effective_level)

    # winget chatter stays out of INFO-level files and consoles
    logging.getLogger(WINGET_OUTPUT_LOGGER).setLevel(
        logging.DEBUG if effective_level <= logging.DEBUG else logging.INFO
    )

    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
