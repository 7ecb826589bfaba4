"""
CLI commands for the maintenance phases — clean, install, update.

Thin wrappers over ``vcredist.core.use_cases.run_phase``.  The progress
log is printed live as the phase runs; ``--json`` prints only the final
report.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable

import click

_STATUS_STYLE = {
    "done": ("✓", "green"),
    "not_found": ("✓", "green"),
    "already_installed": ("✓", "green"),
    "no_updates": ("✓", "green"),
    "skipped": ("⊘", "yellow"),
    "failed": ("✗", "red"),
}


def _phase_options(func: Callable) -> Callable:
    """Options shared by every phase command."""
    func = click.option(
        "--json-output", "--json", "as_json", is_flag=True, help="Output the report as JSON.",
    )(func)
    func = click.option(
        "--mock", is_flag=True, help="Use a simulated winget (no real execution).",
    )(func)
    func = click.option(
        "--stream/--no-stream", default=None, help="Echo raw winget output into the log.",
    )(func)
    func = click.option(
        "--only", "-o", "only", multiple=True, metavar="ID",
        help="Restrict to a package id (repeatable).",
    )(func)
    return func


def _run(
    ctx: click.Context,
    phase: str,
    only: tuple[str, ...],
    stream: bool | None,
    mock: bool,
    as_json: bool,
) -> None:
    from vcredist.core.use_cases.run_phase import run_phase

    result = run_phase(
        phase,
        config_path=ctx.obj.get("config_path"),
        only=list(only) or None,
        stream_output=stream,
        mock_mode=mock,
        deliver=None if as_json else click.echo,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None

    if ctx.obj.get("verbose"):
        click.echo()
        for outcome in report.outcomes:
            icon, color = _STATUS_STYLE.get(outcome.status, ("?", "white"))
            click.secho(f"   {icon} {outcome.display_name:<22}", fg=color, nl=False)
            click.echo(f" {outcome.status}")

    click.echo()
    status_color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(
        report.status, "white"
    )
    click.secho(
        f"   Result: {report.succeeded}/{report.total} ok, "
        f"{report.skipped} skipped, {report.failed} failed",
        fg=status_color,
        bold=True,
    )
    if report.failed > 0:
        sys.exit(1)


@click.command()
@_phase_options
@click.pass_context
def clean(ctx: click.Context, only: tuple[str, ...], stream: bool | None, mock: bool, as_json: bool) -> None:
    """Uninstall every installed redistributable.

    Examples:

        vcredist clean

        vcredist clean --only Microsoft.VCRedist.2005.x86
    """
    _run(ctx, "clean", only, stream, mock, as_json)


@click.command()
@_phase_options
@click.pass_context
def install(ctx: click.Context, only: tuple[str, ...], stream: bool | None, mock: bool, as_json: bool) -> None:
    """Install every missing redistributable (never prompts for admin)."""
    _run(ctx, "install", only, stream, mock, as_json)


@click.command()
@_phase_options
@click.pass_context
def update(ctx: click.Context, only: tuple[str, ...], stream: bool | None, mock: bool, as_json: bool) -> None:
    """Upgrade redistributables that have a newer version."""
    _run(ctx, "update", only, stream, mock, as_json)
