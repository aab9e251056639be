"""
ghidra-setup — CLI entrypoint.

Usage:
    ghidra-setup                    # same as `ghidra-setup install`
    ghidra-setup install --dry-run
    python -m ghidra_setup --help
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from ghidra_setup import __version__
from ghidra_setup.core.models.report import StepResult
from ghidra_setup.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    level_from_flags,
    setup_logging,
)

_STATUS_STYLE = {
    "ok": ("✅", "green"),
    "skipped": ("✓ ", "green"),
    "planned": ("→ ", "cyan"),
    "failed": ("❌", "red"),
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="ghidra-setup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to ghidra-setup.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Install Ghidra and a compatible JDK on macOS using Homebrew."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=level_from_flags(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )

    if ctx.invoked_subcommand is None:
        ctx.invoke(install)


def _echo_step(result: StepResult, quiet: bool) -> None:
    if result.failed:
        if result.optional:
            click.secho(f"⚠️  {result.message}", fg="yellow")
        else:
            click.secho(f"❌ {result.message}", fg="red", bold=True)
        return
    if quiet:
        return
    icon, color = _STATUS_STYLE[result.status]
    click.secho(f"{icon} {result.message}", fg=color)


@cli.command()
@click.option("--dry-run", is_flag=True, help="Only probe; report which steps would run.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(ctx: click.Context, dry_run: bool, as_json: bool) -> None:
    """Install Homebrew, the JDK and Ghidra (skipping what is already there)."""
    from ghidra_setup.core.use_cases.install import run_install

    quiet = ctx.obj.get("quiet", False)
    if not as_json and not quiet:
        title = "Ghidra setup (dry run)" if dry_run else "Ghidra setup"
        click.secho(f"\n🔧 {title}", fg="cyan", bold=True)

    result = run_install(
        config_path=ctx.obj.get("config_path"),
        dry_run=dry_run,
        on_result=None if as_json else lambda r: _echo_step(r, quiet),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(result.exit_code)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    report = result.report
    assert report is not None  # guaranteed after error check above

    if not report.succeeded:
        click.echo()
        sys.exit(1)

    if quiet:
        return

    click.echo()
    if dry_run:
        planned = [r.step for r in report.results if r.status == "planned"]
        if planned:
            click.secho(f"   Would run: {', '.join(planned)}", fg="cyan")
        else:
            click.secho("   Nothing to do; everything is already installed.", fg="green")
        click.echo()
        return

    jdk = next((r for r in report.results if r.step == "jdk"), None)
    if jdk is not None and jdk.details.get("profile_lines_added"):
        click.secho(
            f"   Run 'source {jdk.details['profile']}' or open a new terminal "
            "to pick up the Java settings.",
            fg="yellow",
        )
    click.secho("✅ Ghidra setup complete.", fg="green", bold=True)
    click.echo()


if __name__ == "__main__":
    cli()
