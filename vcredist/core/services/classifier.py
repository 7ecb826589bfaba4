"""
Output classifier — read winget's text output and decide what happened.

winget's exit codes are not trusted; every decision comes from phrases
in the captured output.  Matching is a case-insensitive substring search
against the phrase tables below, which are tied to the English output of
the winget versions this tool was written against.

Empty or whitespace-only output carries no signal.  It is mapped
conservatively: "not installed" and "no upgrade", never success.
"""

from __future__ import annotations

# ── Phrase tables ───────────────────────────────────────────────

NOT_INSTALLED_PHRASES: tuple[str, ...] = (
    "No installed package found matching input criteria",
    "No installed package found",
)

NO_UPGRADE_PHRASES: tuple[str, ...] = (
    "No available upgrade found",
    "No newer package versions are available from the configured sources",
    "No packages found matching input criteria",
    "No installed package found",
)

# Also covers "will request to run as administrator"
ELEVATION_PHRASES: tuple[str, ...] = (
    "request to run as administrator",
)

SUCCESS_PHRASES: dict[str, tuple[str, ...]] = {
    "installed": ("Successfully installed",),
    "uninstalled": ("Successfully uninstalled",),
    "upgraded": (
        "Successfully installed",
        "Successfully upgraded",
        "Successfully updated",
    ),
}
SUCCESS_PHRASES["updated"] = SUCCESS_PHRASES["upgraded"]

# Progress-bar and spinner glyphs winget redraws in place
SPINNER_CHARS = frozenset("-\\/|█▒░")

SUMMARY_MAX_LINES = 6


def _contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(p.lower() in lowered for p in phrases)


def _is_blank(text: str | None) -> bool:
    return not text or not text.strip()


# ── Classification ──────────────────────────────────────────────


def is_not_installed(text: str) -> bool:
    """Whether ``winget list`` output says the package is absent."""
    if _is_blank(text):
        return True
    return _contains_any(text, NOT_INSTALLED_PHRASES)


def is_no_upgrade_available(text: str) -> bool:
    """Whether an upgrade check found nothing to do."""
    if _is_blank(text):
        return True
    return _contains_any(text, NO_UPGRADE_PHRASES)


def requires_elevation(text: str) -> bool:
    """Whether the installer announced it will prompt for administrator rights."""
    if _is_blank(text):
        return False
    return _contains_any(text, ELEVATION_PHRASES)


def is_success(text: str, verb: str) -> bool:
    """Whether output confirms the operation named by ``verb``.

    Args:
        text: Captured winget output.
        verb: One of ``installed``, ``uninstalled``, ``upgraded``, ``updated``.

    Raises:
        ValueError: For an unknown verb.
    """
    phrases = SUCCESS_PHRASES.get(verb.lower())
    if phrases is None:
        raise ValueError(f"Unknown verb: {verb!r}")
    if _is_blank(text):
        return False
    return _contains_any(text, phrases)


# ── Summaries ───────────────────────────────────────────────────


def is_spinner_line(line: str) -> bool:
    """Whether a line holds nothing but whitespace and spinner glyphs.

    Blank lines count as spinner lines.
    """
    return all(c.isspace() or c in SPINNER_CHARS for c in line)


def summarize(text: str, max_lines: int = SUMMARY_MAX_LINES) -> str:
    """First ``max_lines`` informative lines of ``text``, newline-joined."""
    if _is_blank(text):
        return ""
    lines = [
        line.strip()
        for line in text.splitlines()
        if not is_spinner_line(line)
    ]
    return "\n".join(lines[:max_lines])
