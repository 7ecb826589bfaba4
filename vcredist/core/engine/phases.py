"""
Phase orchestrators — Clean, Install and Update over the catalog.

Each phase walks its packages one at a time, asks the runner to call
winget, classifies the output and decides the next step.  Per package
the flow is a short decision chain:

    Clean:   installed? → uninstall (user scope) → uninstall (force) → failed
    Install: installed? → install (user scope) → needs admin? → install → failed
    Update:  upgrade available? → needs admin? → upgrade → failed

A package's failure never stops the batch: anything that goes wrong is
written to the log sink, recorded in the report, and the next package
starts.  Elevation prompts are never triggered; a package that would
need one is skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from vcredist.adapters.base import CommandRunner
from vcredist.core.data.catalog import list_packages
from vcredist.core.engine.gate import PhaseGate
from vcredist.core.models.package import PackageEntry
from vcredist.core.models.result import CommandResult, PackageOutcome, PhaseReport
from vcredist.core.observability.log_sink import LogSink
from vcredist.core.services import classifier

logger = logging.getLogger(__name__)

PHASES = ("clean", "install", "update")

# ── winget flag sets ────────────────────────────────────────────

_QUIET = ("--silent", "--disable-interactivity")
_SOURCE_AGREEMENT = ("--accept-source-agreements",)
_AGREEMENTS = ("--accept-package-agreements", "--accept-source-agreements")
_USER_SCOPE = ("--scope", "user")


def list_args(identifier: str) -> list[str]:
    return ["list", "--id", identifier]


def uninstall_args(identifier: str, *, force: bool = False) -> list[str]:
    scope = ("--force",) if force else _USER_SCOPE
    return ["uninstall", "--id", identifier, *_QUIET, *_SOURCE_AGREEMENT, "--all-versions", *scope]


def install_args(identifier: str, *, user_scope: bool = True) -> list[str]:
    scope = _USER_SCOPE if user_scope else ()
    return ["install", "--id", identifier, *_QUIET, *_AGREEMENTS, *scope]


def upgrade_check_args(identifier: str) -> list[str]:
    return ["upgrade", "--id", identifier, *_AGREEMENTS, *_USER_SCOPE]


def upgrade_args(identifier: str) -> list[str]:
    return ["upgrade", "--id", identifier, *_QUIET, *_AGREEMENTS]


# ── Phase plumbing ──────────────────────────────────────────────


@dataclass
class PhaseContext:
    """What a per-package step needs."""

    runner: CommandRunner
    sink: LogSink
    stream_output: bool = False
    summary_max_lines: int = classifier.SUMMARY_MAX_LINES

    def call(self, args: list[str]) -> CommandResult:
        return self.runner.run(args, stream_to_log=self.stream_output)

    def summary(self, result: CommandResult) -> str:
        return classifier.summarize(result.text, self.summary_max_lines)


Step = Callable[[PhaseContext, PackageEntry], PackageOutcome]


def _outcome(entry: PackageEntry, status: str, detail: str = "") -> PackageOutcome:
    return PackageOutcome(
        identifier=entry.identifier,
        display_name=entry.display_name,
        status=status,
        detail=detail,
    )


def _run_phase(
    phase: str,
    banner: str,
    finished: str,
    step: Step,
    ctx: PhaseContext,
    packages: Sequence[PackageEntry] | None,
) -> PhaseReport:
    report = PhaseReport(phase=phase)
    ctx.sink.append(f"=== {banner} ===")

    for entry in packages if packages is not None else list_packages():
        try:
            outcome = step(ctx, entry)
        except Exception as e:
            logger.exception("%s failed for %s", phase, entry.identifier)
            ctx.sink.append(f"  ⚠ Error: {e}")
            outcome = _outcome(entry, "failed", str(e))
        report.outcomes.append(outcome)
        logger.info("%s %s → %s", phase, entry.identifier, outcome.status)

    ctx.sink.append(finished)
    return report


# ── Clean ───────────────────────────────────────────────────────


def _clean_one(ctx: PhaseContext, entry: PackageEntry) -> PackageOutcome:
    ctx.sink.append(f"Checking: {entry.display_name}")

    listed = ctx.call(list_args(entry.identifier))
    if classifier.is_not_installed(listed.text):
        ctx.sink.append(f"  ✓ Not found: {entry.display_name}")
        return _outcome(entry, "not_found")

    ctx.sink.append(f"Uninstalling: {entry.display_name}")

    result = ctx.call(uninstall_args(entry.identifier))
    if classifier.is_success(result.text, "uninstalled"):
        ctx.sink.append("  ✓ Removed (user scope)")
        return _outcome(entry, "done", "user scope")

    result = ctx.call(uninstall_args(entry.identifier, force=True))
    if classifier.is_success(result.text, "uninstalled"):
        ctx.sink.append("  ✓ Removed (force)")
        return _outcome(entry, "done", "force")

    brief = ctx.summary(result)
    ctx.sink.append(f"  ⚠ Could not uninstall: {brief}")
    return _outcome(entry, "failed", brief)


def clean_packages(
    ctx: PhaseContext,
    packages: Sequence[PackageEntry] | None = None,
) -> PhaseReport:
    """Remove every installed redistributable in ``packages``."""
    return _run_phase("clean", "Clean", "Clean finished.", _clean_one, ctx, packages)


# ── Install ─────────────────────────────────────────────────────


def _install_one(ctx: PhaseContext, entry: PackageEntry) -> PackageOutcome:
    ctx.sink.append(f"Installing: {entry.display_name}")

    listed = ctx.call(list_args(entry.identifier))
    if not classifier.is_not_installed(listed.text):
        ctx.sink.append("  ✓ Already installed")
        return _outcome(entry, "already_installed")

    result = ctx.call(install_args(entry.identifier))
    if classifier.is_success(result.text, "installed"):
        ctx.sink.append("  ✓ Done (user scope)")
        return _outcome(entry, "done", "user scope")

    if classifier.requires_elevation(result.text):
        ctx.sink.append("  ⚠ Administrator rights required, skipped (avoiding the UAC prompt)")
        return _outcome(entry, "skipped", "requires elevation")

    result = ctx.call(install_args(entry.identifier, user_scope=False))
    if classifier.is_success(result.text, "installed"):
        ctx.sink.append("  ✓ Done")
        return _outcome(entry, "done")

    brief = ctx.summary(result)
    ctx.sink.append(f"  ⚠ Install not confirmed: {brief}")
    return _outcome(entry, "failed", brief)


def install_packages(
    ctx: PhaseContext,
    packages: Sequence[PackageEntry] | None = None,
) -> PhaseReport:
    """Install every missing redistributable in ``packages``."""
    return _run_phase("install", "Install", "Install finished.", _install_one, ctx, packages)


# ── Update ──────────────────────────────────────────────────────


def _update_one(ctx: PhaseContext, entry: PackageEntry) -> PackageOutcome:
    ctx.sink.append(f"Checking for updates: {entry.display_name}")

    checked = ctx.call(upgrade_check_args(entry.identifier))
    if classifier.is_no_upgrade_available(checked.text):
        ctx.sink.append("  ✓ No updates")
        return _outcome(entry, "no_updates")

    if classifier.requires_elevation(checked.text):
        ctx.sink.append("  ⚠ Administrator rights required to update, skipped")
        return _outcome(entry, "skipped", "requires elevation")

    ctx.sink.append("  → Upgrading...")
    result = ctx.call(upgrade_args(entry.identifier))
    if classifier.is_success(result.text, "upgraded"):
        ctx.sink.append("  ✓ Updated")
        return _outcome(entry, "done")

    brief = ctx.summary(result)
    ctx.sink.append(f"  ⚠ Update not confirmed: {brief}")
    return _outcome(entry, "failed", brief)


def update_packages(
    ctx: PhaseContext,
    packages: Sequence[PackageEntry] | None = None,
) -> PhaseReport:
    """Upgrade every redistributable in ``packages`` that has an update."""
    return _run_phase("update", "Update", "Update finished.", _update_one, ctx, packages)


_PHASE_FUNCS = {
    "clean": clean_packages,
    "install": install_packages,
    "update": update_packages,
}


# ── Session entry point ─────────────────────────────────────────


class Maintainer:
    """Runs phases for one session, one at a time.

    Owns the phase gate; every phase started through the same
    Maintainer is mutually exclusive with the others.
    """

    def __init__(
        self,
        runner: CommandRunner,
        sink: LogSink,
        *,
        stream_output: bool = False,
        summary_max_lines: int = classifier.SUMMARY_MAX_LINES,
        gate: PhaseGate | None = None,
    ) -> None:
        self._ctx = PhaseContext(
            runner=runner,
            sink=sink,
            stream_output=stream_output,
            summary_max_lines=summary_max_lines,
        )
        self._gate = gate or PhaseGate()

    @property
    def gate(self) -> PhaseGate:
        return self._gate

    def run(
        self,
        phase: str,
        packages: Sequence[PackageEntry] | None = None,
    ) -> PhaseReport:
        """Run a phase by name.

        Raises:
            ValueError: For an unknown phase name.
            PhaseInProgressError: If another phase is running.
        """
        func = _PHASE_FUNCS.get(phase)
        if func is None:
            raise ValueError(f"Unknown phase: {phase!r} (expected one of {', '.join(PHASES)})")
        with self._gate.hold(phase):
            return func(self._ctx, packages)

    def clean(self, packages: Sequence[PackageEntry] | None = None) -> PhaseReport:
        return self.run("clean", packages)

    def install(self, packages: Sequence[PackageEntry] | None = None) -> PhaseReport:
        return self.run("install", packages)

    def update(self, packages: Sequence[PackageEntry] | None = None) -> PhaseReport:
        return self.run("update", packages)
