"""
Log sink — the operator-facing progress log.

This is not diagnostic logging (that goes through ``logging``); it is the
human-readable stream of phase banners and per-package status lines that
a presentation layer shows.  One sink is created per session and passed
to every component that reports progress.

Thread safety model
───────────────────
- ``_lock`` guards ``_text`` and the delivery callback.  Both runner
  reader threads and the phase worker append through ``append()``.
- Delivery happens under the lock, so the presentation layer sees lines
  in the same order they entered the buffer and never concurrently.
  A presentation layer with its own UI thread marshals inside its
  ``deliver`` callback.
- When an append pushes the buffer past ``max_chars`` only the most
  recent ``max_chars // 2`` characters are kept.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Every appended line is mirrored here at INFO; logging_config keeps it
# off the console (the CLI already prints the lines) and in the log file
TRANSCRIPT_LOGGER = "vcredist.transcript"
transcript = logging.getLogger(TRANSCRIPT_LOGGER)

DEFAULT_MAX_CHARS = 150_000

Deliver = Callable[[str], None]


class LogSink:
    """Append-only, size-bounded text log with a single delivery point.

    Parameters
    ----------
    max_chars : int
        Character capacity of the buffer.
    deliver : callable | None
        Called with each appended line (no trailing newline).
    """

    def __init__(
        self,
        *,
        max_chars: int = DEFAULT_MAX_CHARS,
        deliver: Deliver | None = None,
    ) -> None:
        if max_chars < 2:
            raise ValueError("max_chars must be at least 2")
        self._lock = threading.Lock()
        self._text = ""
        self._max_chars = max_chars
        self._deliver = deliver

    # ── Properties ──────────────────────────────────────────────

    @property
    def max_chars(self) -> int:
        return self._max_chars

    @property
    def text(self) -> str:
        """Current buffer contents."""
        with self._lock:
            return self._text

    def __len__(self) -> int:
        with self._lock:
            return len(self._text)

    def lines(self) -> list[str]:
        """Buffer contents split into lines."""
        return self.text.splitlines()

    # ── Appending ───────────────────────────────────────────────

    def append(self, line: str) -> None:
        """Append one line and hand it to the delivery point."""
        with self._lock:
            self._text += line + "\n"
            if len(self._text) > self._max_chars:
                keep = self._max_chars // 2
                self._text = self._text[-keep:]
            if self._deliver is not None:
                try:
                    self._deliver(line)
                except Exception as e:
                    logger.warning("Log delivery failed: %s", e)
        transcript.info("%s", line)

    __call__ = append

    def clear(self) -> None:
        with self._lock:
            self._text = ""
