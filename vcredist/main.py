"""
vcredist — CLI entrypoint.

Usage:
    python -m vcredist.main --help
    python -m vcredist.main catalog
    python -m vcredist.main install --only Microsoft.VCRedist.2015+.x64
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from vcredist import __version__
from vcredist.core.observability.logging_config import (
    resolve_console_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="vcredist")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to vcredist.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """vcredist — clean, install and update Visual C++ Redistributables via winget."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_console_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("VCR_LOG_LEVEL"),
        ),
        log_file=os.environ.get("VCR_LOG_FILE"),
        log_file_level=os.environ.get("VCR_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def catalog(as_json: bool) -> None:
    """List the redistributables every phase works on."""
    from vcredist.core.data.catalog import list_packages

    entries = list_packages()

    if as_json:
        click.echo(json.dumps([e.model_dump(mode="json") for e in entries], indent=2))
        return

    click.secho(f"\n📦 Redistributables: {len(entries)}", fg="cyan", bold=True)
    for entry in entries:
        click.echo(f"   {entry.display_name:<22} {entry.identifier}")
    click.echo()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Check that winget can be found."""
    from vcredist.adapters.winget.command import WingetRunner
    from vcredist.core.config.loader import ConfigError, load_settings
    from vcredist.core.observability.log_sink import LogSink

    try:
        settings = load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    runner = WingetRunner(LogSink(), executable=settings.winget)
    available = runner.is_available()

    if as_json:
        click.echo(json.dumps({"winget": settings.winget, "available": available}, indent=2))
        sys.exit(0 if available else 1)

    if available:
        click.secho(f"✅ {settings.winget} found", fg="green")
    else:
        click.secho(f"❌ {settings.winget} not found on PATH", fg="red")
        sys.exit(1)


# ── Register phase commands from vcredist/ui/cli/ ─────────────────

from vcredist.ui.cli.phases import clean, install, update

cli.add_command(clean)
cli.add_command(install)
cli.add_command(update)


if __name__ == "__main__":
    cli()
