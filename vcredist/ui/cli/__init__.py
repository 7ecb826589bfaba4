"""CLI command groups registered by ``vcredist.main``."""
