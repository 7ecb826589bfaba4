"""
Package model — one row of the redistributable catalog.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PackageEntry(BaseModel):
    """A redistributable package as winget knows it.

    ``identifier`` is the opaque winget package id passed to ``--id``;
    ``display_name`` is what the operator sees in the log.
    """

    model_config = ConfigDict(frozen=True)

    identifier: str
    display_name: str

    def __str__(self) -> str:
        return self.display_name
