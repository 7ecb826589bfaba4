"""
Redistributable catalog — the fixed set of packages every phase walks.

Identifiers must match the winget source verbatim.  Order is the
processing order: ascending release year, x86 before x64.
"""

from __future__ import annotations

from collections.abc import Iterable

from vcredist.core.models.package import PackageEntry


class CatalogError(Exception):
    """Raised when a requested package is not part of the catalog."""


_CATALOG: tuple[PackageEntry, ...] = tuple(
    PackageEntry(identifier=identifier, display_name=name)
    for identifier, name in (
        ("Microsoft.VCRedist.2005.x86", "VC++ 2005 x86"),
        ("Microsoft.VCRedist.2005.x64", "VC++ 2005 x64"),
        ("Microsoft.VCRedist.2008.x86", "VC++ 2008 x86"),
        ("Microsoft.VCRedist.2008.x64", "VC++ 2008 x64"),
        ("Microsoft.VCRedist.2010.x86", "VC++ 2010 x86"),
        ("Microsoft.VCRedist.2010.x64", "VC++ 2010 x64"),
        ("Microsoft.VCRedist.2012.x86", "VC++ 2012 x86"),
        ("Microsoft.VCRedist.2012.x64", "VC++ 2012 x64"),
        ("Microsoft.VCRedist.2013.x86", "VC++ 2013 x86"),
        ("Microsoft.VCRedist.2013.x64", "VC++ 2013 x64"),
        ("Microsoft.VCRedist.2015+.x86", "VC++ 2015–2022 x86"),
        ("Microsoft.VCRedist.2015+.x64", "VC++ 2015–2022 x64"),
    )
)


def list_packages() -> tuple[PackageEntry, ...]:
    """Return every catalog entry in processing order."""
    return _CATALOG


def find_package(identifier: str) -> PackageEntry | None:
    """Look up an entry by winget id (case-insensitive)."""
    wanted = identifier.lower()
    for entry in _CATALOG:
        if entry.identifier.lower() == wanted:
            return entry
    return None


def select_packages(identifiers: Iterable[str] | None = None) -> tuple[PackageEntry, ...]:
    """Narrow the catalog to the given ids, keeping catalog order.

    ``None`` or an empty iterable selects everything.

    Raises:
        CatalogError: If any id is not in the catalog.
    """
    wanted = list(identifiers or ())
    if not wanted:
        return _CATALOG

    unknown = [i for i in wanted if find_package(i) is None]
    if unknown:
        raise CatalogError(f"Unknown package id(s): {', '.join(unknown)}")

    lowered = {i.lower() for i in wanted}
    return tuple(e for e in _CATALOG if e.identifier.lower() in lowered)
