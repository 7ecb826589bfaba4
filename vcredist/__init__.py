"""vcredist — keep Visual C++ Redistributables in shape through winget."""

__version__ = "0.1.0"
