"""
Domain models — Pydantic types for vcredist.

All models are re-exported here for convenient access:

    from vcredist.core.models import PackageEntry, CommandResult, PhaseReport
"""

from vcredist.core.models.package import PackageEntry
from vcredist.core.models.result import (
    CommandResult,
    OutcomeStatus,
    PackageOutcome,
    PhaseReport,
)

__all__ = [
    "CommandResult",
    "OutcomeStatus",
    "PackageEntry",
    "PackageOutcome",
    "PhaseReport",
]
