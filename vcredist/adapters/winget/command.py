"""
winget runner — launch winget and capture what it prints.

winget writes progress to both streams and redraws spinners and progress
bars in place, so both pipes are drained concurrently by two reader
threads (a full pipe would otherwise stall the child) and glyph-only
lines are dropped before anything is kept.

Only the most recent lines are retained; verdicts are made from the tail
of the output, which is where winget prints its result.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading
from collections import deque
from collections.abc import Sequence
from typing import IO

from vcredist.adapters.base import CommandRunner, LaunchError
from vcredist.core.models.result import CommandResult
from vcredist.core.observability.log_sink import LogSink
from vcredist.core.services.classifier import is_spinner_line

logger = logging.getLogger(__name__)

# Raw accepted winget lines, at DEBUG; shown only with --debug
WINGET_OUTPUT_LOGGER = "vcredist.winget.output"
output_logger = logging.getLogger(WINGET_OUTPUT_LOGGER)

DEFAULT_MAX_LINES = 200

# No console window for the child on Windows; 0 elsewhere
_CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0)


class OutputBuffer:
    """Thread-safe FIFO of the most recent output lines."""

    def __init__(self, max_lines: int = DEFAULT_MAX_LINES) -> None:
        self._lock = threading.Lock()
        self._lines: deque[str] = deque(maxlen=max_lines)

    def add(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def snapshot(self) -> CommandResult:
        with self._lock:
            return CommandResult(lines=tuple(self._lines))


class WingetRunner(CommandRunner):
    """Run winget as a subprocess and capture its recent output.

    Args:
        sink: Log sink for launch failures and streamed output.
        executable: winget executable name or path.
        max_lines: How many trailing output lines to keep per call.
    """

    def __init__(
        self,
        sink: LogSink,
        executable: str = "winget",
        max_lines: int = DEFAULT_MAX_LINES,
    ) -> None:
        self._sink = sink
        self._executable = executable
        self._max_lines = max_lines

    @property
    def name(self) -> str:
        return "winget"

    @property
    def executable(self) -> str:
        return self._executable

    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def run(self, arguments: Sequence[str], stream_to_log: bool = False) -> CommandResult:
        cmd = [self._executable, *arguments]
        logger.debug("Executing: %s", cmd)

        try:
            proc = self._launch(cmd)
        except LaunchError as e:
            logger.warning("%s", e)
            self._sink.append(f"⚠ {e}")
            return CommandResult()

        buffer = OutputBuffer(self._max_lines)
        readers = [
            threading.Thread(
                target=self._drain,
                args=(stream, buffer, stream_to_log),
                name=f"winget-{label}",
                daemon=True,
            )
            for label, stream in (("stdout", proc.stdout), ("stderr", proc.stderr))
        ]
        for reader in readers:
            reader.start()

        returncode = proc.wait()
        for reader in readers:
            reader.join()

        result = buffer.snapshot()
        logger.debug(
            "%s exited with %s (%d lines kept)", cmd[:2], returncode, len(result.lines),
        )
        return result

    # ── Internals ───────────────────────────────────────────────

    def _launch(self, cmd: list[str]) -> subprocess.Popen[str]:
        try:
            return subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                creationflags=_CREATE_NO_WINDOW,
            )
        except OSError as e:
            raise LaunchError(self._executable, e.strerror or str(e)) from e

    def _drain(self, stream: IO[str] | None, buffer: OutputBuffer, stream_to_log: bool) -> None:
        if stream is None:
            return
        with stream:
            for raw in stream:
                if is_spinner_line(raw):
                    continue
                line = raw.strip()
                buffer.add(line)
                output_logger.debug("%s", line)
                if stream_to_log:
                    self._sink.append(line)
