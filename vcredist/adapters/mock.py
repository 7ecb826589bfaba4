"""
Mock runner — scripted stand-in for winget.

Used by tests and by the CLI's ``--mock`` mode to drive the phase
orchestrators without touching a real package manager.  Responses are
keyed by an argument prefix; the longest matching prefix wins.
"""

from __future__ import annotations

from collections.abc import Sequence

from vcredist.adapters.base import CommandRunner
from vcredist.core.models.result import CommandResult
from vcredist.core.observability.log_sink import LogSink


class MockRunner(CommandRunner):
    """Universal mock runner.

    By default every call returns ``default_output``.  Custom responses
    are registered per argument prefix, e.g. ``("list", "--id", "X")``
    or just ``("upgrade",)``.  A response may be a list of outputs,
    consumed one per matching call (the last one repeats).

    With a ``sink``, canned lines are forwarded to it when a call asks
    for ``stream_to_log``, as the winget runner does with live output.
    """

    def __init__(
        self,
        runner_name: str = "mock",
        available: bool = True,
        default_output: str = "",
        sink: LogSink | None = None,
    ):
        self._sink = sink
        self._name = runner_name
        self._available = available
        self._default_output = default_output
        self._responses: dict[tuple[str, ...], list[str]] = {}
        self._call_log: list[tuple[str, ...]] = []

    @classmethod
    def simulated(cls, sink: LogSink | None = None) -> MockRunner:
        """A runner where nothing is installed and every operation succeeds."""
        mock = cls(runner_name="simulated", sink=sink)
        mock.set_response(("list",), "No installed package found matching input criteria.")
        mock.set_response(("install",), "Successfully installed")
        mock.set_response(("uninstall",), "Successfully uninstalled")
        mock.set_response(("upgrade",), "No available upgrade found.")
        return mock

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[tuple[str, ...]]:
        """Argument tuples of every call this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_response(self, prefix: Sequence[str], *outputs: str) -> None:
        """Set the output(s) for calls whose arguments start with ``prefix``."""
        if not outputs:
            raise ValueError("At least one output is required")
        self._responses[tuple(prefix)] = list(outputs)

    def run(self, arguments: Sequence[str], stream_to_log: bool = False) -> CommandResult:
        args = tuple(arguments)
        self._call_log.append(args)

        match: tuple[str, ...] | None = None
        for prefix in self._responses:
            if args[: len(prefix)] == prefix and (match is None or len(prefix) > len(match)):
                match = prefix

        if match is None:
            result = CommandResult.from_text(self._default_output)
        else:
            outputs = self._responses[match]
            output = outputs.pop(0) if len(outputs) > 1 else outputs[0]
            result = CommandResult.from_text(output)

        if stream_to_log and self._sink is not None:
            for line in result.lines:
                self._sink.append(line)
        return result

    def calls_for(self, identifier: str) -> list[tuple[str, ...]]:
        """Calls that targeted the given package id."""
        return [c for c in self._call_log if identifier in c]

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
