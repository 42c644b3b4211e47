"""
Kernel Development Context — CLI entrypoint.

Scaffolds the kernel development context project in the current
directory.

Usage:
    kdcontext
    kdcontext --verbose
    python -m kdcontext.main --help
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click

from kdcontext import __version__
from kdcontext.core.observability.logging_config import (
    ENV_LOG_FILE,
    ENV_LOG_FILE_LEVEL,
    ENV_LOG_LEVEL,
    setup_logging,
)

NEXT_STEPS = (
    "Start populating common/ with fundamental kernel dev practices",
    "Add subsystem-specific guides as needed",
    "Create useful templates in templates/",
    "Add practical examples throughout",
)

_EVENT_COLORS = {"done": "green", "skipped": "yellow"}


@click.command()
@click.version_option(version=__version__, prog_name="kdcontext")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(verbose: bool, quiet: bool, debug: bool) -> None:
    """Kernel Development Context — scaffold the project in the current directory."""
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get(ENV_LOG_FILE),
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL),
    )

    from kdcontext.core.config.loader import LayoutError
    from kdcontext.core.use_cases.scaffold import ScaffoldError, project_tree, run

    def report(event: str, message: str) -> None:
        if quiet:
            return
        color = _EVENT_COLORS.get(event)
        if color:
            click.secho(message, fg=color)
        else:
            click.echo(message)

    root = Path.cwd()

    if not quiet:
        click.secho("🚀 Initializing Kernel Development Context Project...", fg="cyan", bold=True)

    try:
        run(root, reporter=report)
    except LayoutError as e:
        click.secho(f"❌ Invalid layout: {e}", fg="red")
        sys.exit(1)
    except ScaffoldError as e:
        click.secho(f"❌ {e.step} failed: {e.message}", fg="red")
        sys.exit(1)

    click.echo()
    click.secho("✅ Kernel Development Context Project initialized successfully!", fg="green", bold=True)

    if quiet:
        return

    click.echo()
    click.secho("📋 Next steps:", bold=True)
    for i, step in enumerate(NEXT_STEPS, 1):
        click.echo(f"   {i}. {step}")

    click.echo()
    click.secho("🎯 Project structure:", bold=True)
    click.echo(".")
    for entry in project_tree(root):
        click.echo(f"./{entry}")

    click.echo()
    click.secho("🚀 Ready to start documenting kernel development context!", fg="cyan")


if __name__ == "__main__":
    cli()
