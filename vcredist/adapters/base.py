"""
Runner base — the contract between phase orchestrators and winget.

Orchestrators only talk to winget through this interface, never
through ``subprocess`` directly, so tests can swap in the mock runner.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from vcredist.core.models.result import CommandResult


class LaunchError(Exception):
    """The package-manager executable could not be started."""

    def __init__(self, executable: str, reason: str = "") -> None:
        self.executable = executable
        self.reason = reason
        message = f"Could not start '{executable}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class CommandRunner(ABC):
    """Abstract base class for package-manager runners.

    ``run`` NEVER raises for a failed or unstartable command: a launch
    failure is reported to the log sink and yields an empty result.

    To create a new runner:
        1. Subclass CommandRunner
        2. Implement name, is_available, run
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The runner identifier (e.g., 'winget', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying executable can be found.

        Should be fast and never raise.
        """

    @abstractmethod
    def run(self, arguments: Sequence[str], stream_to_log: bool = False) -> CommandResult:
        """Run the package manager with ``arguments`` and wait for it.

        Args:
            arguments: Subcommand and flags, e.g. ``["list", "--id", "X"]``.
            stream_to_log: Forward each accepted output line to the log
                sink as it arrives.

        Returns:
            The most recent captured lines.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
