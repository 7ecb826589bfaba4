"""
Result models — what a winget call produced and what a phase did.

CommandResult is the runner's output contract: the runner never raises
to its caller, it hands back whatever lines it captured (possibly none).
PackageOutcome and PhaseReport record the per-package verdicts of a
phase, the way receipts record adapter executions.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

OutcomeStatus = Literal[
    "done",
    "not_found",
    "already_installed",
    "no_updates",
    "skipped",
    "failed",
]

# Statuses that mean "nothing left to do for this package"
_SUCCESS_STATUSES = frozenset({"done", "not_found", "already_installed", "no_updates"})


class CommandResult(BaseModel):
    """Captured output of one winget invocation.

    Holds the most recent trimmed, non-spinner lines in arrival order.
    """

    model_config = ConfigDict(frozen=True)

    lines: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """The captured lines joined by newlines."""
        return "\n".join(self.lines)

    @property
    def empty(self) -> bool:
        return not self.lines

    @classmethod
    def from_text(cls, text: str) -> CommandResult:
        """Build a result from raw text, one line per line of input."""
        return cls(lines=tuple(line.strip() for line in text.splitlines()))


class PackageOutcome(BaseModel):
    """Verdict for a single catalog entry within a phase."""

    identifier: str
    display_name: str
    status: OutcomeStatus
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status in _SUCCESS_STATUSES

    @property
    def failed(self) -> bool:
        return self.status == "failed"


class PhaseReport(BaseModel):
    """Result of running one phase over the catalog."""

    phase: str
    outcomes: list[PackageOutcome] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "skipped")

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "skipped": self.skipped,
            "failed": self.failed,
            "outcomes": [o.model_dump(mode="json") for o in self.outcomes],
        }
