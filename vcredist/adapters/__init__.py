"""Runners — bindings to the external package manager.

Public re-exports for convenient access.
"""

from vcredist.adapters.base import CommandRunner, LaunchError
from vcredist.adapters.mock import MockRunner
from vcredist.adapters.winget.command import OutputBuffer, WingetRunner

__all__ = [
    "CommandRunner",
    "LaunchError",
    "MockRunner",
    "OutputBuffer",
    "WingetRunner",
]
