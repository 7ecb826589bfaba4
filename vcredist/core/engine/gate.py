"""
Phase gate — at most one phase at a time.

Two phases running together would interleave winget calls and could
stack elevation prompts, so a phase must hold the gate for its whole
run.  The gate never waits: a second caller is refused immediately.

Thread safety model
───────────────────
- ``_lock`` guards ``_running``, the name of the phase holding the gate.
  Every read and write of it goes through the lock.
- The lock is only held for the check-and-set, never for the phase
  itself, so ``running``/``busy`` can be asked while a phase runs.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class PhaseInProgressError(RuntimeError):
    """Raised when a phase is requested while another is still running."""

    def __init__(self, requested: str, running: str | None) -> None:
        self.requested = requested
        self.running = running
        super().__init__(
            f"Cannot start '{requested}': phase '{running or '?'}' is still running"
        )


class PhaseGate:
    """Non-blocking mutual exclusion between phases."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._running: str | None = None

    @property
    def running(self) -> str | None:
        """Name of the phase holding the gate, if any."""
        with self._lock:
            return self._running

    @property
    def busy(self) -> bool:
        return self.running is not None

    @contextmanager
    def hold(self, phase: str) -> Iterator[None]:
        """Hold the gate for the duration of the block.

        Raises:
            PhaseInProgressError: If another phase holds the gate.
        """
        with self._lock:
            if self._running is not None:
                raise PhaseInProgressError(phase, self._running)
            self._running = phase
        logger.debug("Phase gate acquired by '%s'", phase)
        try:
            yield
        finally:
            with self._lock:
                self._running = None
            logger.debug("Phase gate released by '%s'", phase)
