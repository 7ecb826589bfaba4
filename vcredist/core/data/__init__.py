"""
Static data for vcredist.

Usage::

    from vcredist.core.data import list_packages

    for entry in list_packages():
        print(entry.identifier, entry.display_name)
"""

from vcredist.core.data.catalog import (
    CatalogError,
    find_package,
    list_packages,
    select_packages,
)

__all__ = [
    "CatalogError",
    "find_package",
    "list_packages",
    "select_packages",
]
