"""Output formatting for scmlrun operations."""

import shlex
from pathlib import Path

import typer

from scmlrun.exceptions import ConfigValidationError
from scmlrun.exceptions import ConfigVersionError
from scmlrun.exceptions import ScmlrunError
from scmlrun.exceptions import ToolBuildError
from scmlrun.models import LaunchPlan
from scmlrun.models import ToolCommand


def print_launch_plan(plan: LaunchPlan, dry_run: bool = False) -> None:
    """Print launch plan to stdout.

    Args:
        plan: LaunchPlan to print
        dry_run: If True, use "Would" language instead of present tense
    """
    root_display = _display_path(plan.search_root)

    if plan.files:
        typer.secho(
            f"Files matching *{plan.suffix} in {root_display}:",
            fg=typer.colors.BRIGHT_BLACK,
        )
        for path in plan.files:
            typer.secho(f"  {_display_path(path)}", fg=typer.colors.BRIGHT_BLACK)
    else:
        typer.secho(
            f"No files matching *{plan.suffix} in {root_display}",
            fg=typer.colors.BRIGHT_BLACK,
        )

    if plan.passthrough:
        typer.secho("Passthrough arguments:", fg=typer.colors.BRIGHT_BLACK)
        typer.secho(f"  {shlex.join(plan.passthrough)}", fg=typer.colors.BRIGHT_BLACK)

    typer.secho("Command:", fg=typer.colors.BRIGHT_BLACK)
    typer.secho(f"  {shlex.join(plan.command)}", fg=typer.colors.BRIGHT_BLACK)

    num_files = len(plan.files)
    num_args = len(plan.passthrough)
    summary = (
        f"{num_files} file{'s' if num_files != 1 else ''}, "
        f"{num_args} argument{'s' if num_args != 1 else ''}"
    )
    action = "Would launch" if dry_run else "Launching"
    typer.secho(f"✓ {action} sctrace ({summary})", fg=typer.colors.GREEN, bold=True)


def print_build_result(tool: ToolCommand) -> None:
    """Print a confirmation that the tool was built."""
    typer.secho(
        f"✓ Built {_display_path(tool.manifest_path)}",
        fg=typer.colors.GREEN,
        bold=True,
    )


def print_error(error: Exception) -> None:
    """Print a launcher error to stderr.

    Args:
        error: ScmlrunError or OSError raised before the tool ran
    """
    if isinstance(error, (ConfigValidationError, ConfigVersionError)):
        message = f"Config error: {error}"
    elif isinstance(error, ToolBuildError):
        message = f"Could not build sctrace: {error}"
    elif isinstance(error, ScmlrunError):
        message = str(error)
    elif isinstance(error, PermissionError):
        message = f"Permission denied: {error}"
    else:
        message = f"Filesystem error: {error}"
    typer.secho(f"✗ {message}", fg=typer.colors.RED, bold=True, err=True)


def _display_path(path: Path) -> str:
    """Format path for display, using ~ for home directory.

    Args:
        path: Path to format

    Returns:
        String representation with ~ substitution if applicable
    """
    try:
        home = Path.home()
        rel_path = path.relative_to(home)
        return f"~/{rel_path}"
    except ValueError:
        return str(path)
