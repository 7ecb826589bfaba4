"""
Run-phase use case — one phase from settings to report.

Wires settings, log sink, runner and maintainer together and turns
configuration, catalog or overlap problems into an error on the result,
so the CLI only has to render.

Every phase started through this module holds the same process-wide
phase gate, whichever front end started it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from vcredist.adapters.base import CommandRunner
from vcredist.adapters.mock import MockRunner
from vcredist.adapters.winget.command import WingetRunner
from vcredist.core.config.loader import ConfigError, Settings, load_settings
from vcredist.core.data.catalog import CatalogError, select_packages
from vcredist.core.engine.gate import PhaseGate, PhaseInProgressError
from vcredist.core.engine.phases import Maintainer
from vcredist.core.models.result import PhaseReport
from vcredist.core.observability.log_sink import Deliver, LogSink

logger = logging.getLogger(__name__)

# One gate per process: phases never overlap, even across callers
_PHASE_GATE = PhaseGate()


def phase_gate() -> PhaseGate:
    """The gate shared by every phase started through ``run_phase``."""
    return _PHASE_GATE


@dataclass
class PhaseRunResult:
    """Result of running a phase."""

    phase: str = ""
    report: PhaseReport | None = None
    runner_name: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.failed == 0

    def to_dict(self) -> dict:
        if self.error:
            return {"phase": self.phase, "error": self.error}
        result: dict = {"phase": self.phase, "runner": self.runner_name}
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def build_runner(settings: Settings, sink: LogSink, mock_mode: bool = False) -> CommandRunner:
    """The runner a session should use."""
    if mock_mode:
        return MockRunner.simulated(sink=sink)
    return WingetRunner(
        sink,
        executable=settings.winget,
        max_lines=settings.output_max_lines,
    )


def run_phase(
    phase: str,
    config_path: Path | None = None,
    only: Sequence[str] | None = None,
    stream_output: bool | None = None,
    mock_mode: bool = False,
    deliver: Deliver | None = None,
    settings: Settings | None = None,
    runner: CommandRunner | None = None,
    gate: PhaseGate | None = None,
) -> PhaseRunResult:
    """Run one phase over the catalog (or the ``only`` subset).

    Args:
        phase: ``clean``, ``install`` or ``update``.
        config_path: Optional explicit path to vcredist.yml.
        only: Optional package ids to restrict the run to.
        stream_output: Echo raw winget output to the log; None = settings.
        mock_mode: Use the simulated runner instead of winget.
        deliver: Delivery point for log lines (e.g. the console).
        settings: Pre-loaded settings (skips loading).
        runner: Pre-built runner (skips ``build_runner``).
        gate: Phase gate to hold (default: the process-wide gate).

    Returns:
        PhaseRunResult with the phase report, or an error.
    """
    result = PhaseRunResult(phase=phase)

    try:
        if settings is None:
            settings = load_settings(config_path)
        packages = select_packages(only)
    except (ConfigError, CatalogError) as e:
        result.error = str(e)
        return result

    sink = LogSink(max_chars=settings.log_max_chars, deliver=deliver)
    if runner is None:
        runner = build_runner(settings, sink, mock_mode=mock_mode)
    result.runner_name = runner.name

    maintainer = Maintainer(
        runner,
        sink,
        stream_output=settings.stream_output if stream_output is None else stream_output,
        summary_max_lines=settings.summary_max_lines,
        gate=gate or _PHASE_GATE,
    )

    try:
        result.report = maintainer.run(phase, packages)
    except PhaseInProgressError as e:
        logger.warning("%s", e)
        result.error = str(e)
    except ValueError as e:
        result.error = str(e)

    return result
