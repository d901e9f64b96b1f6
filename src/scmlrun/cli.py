"""Command-line interface for scmlrun."""

import json
import sys
from collections.abc import Sequence
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from scmlrun import __version__
from scmlrun.config import Config
from scmlrun.config import config_path
from scmlrun.config import load_config
from scmlrun.exceptions import ScmlrunError
from scmlrun.files import discover_files
from scmlrun.models import DiscoveryOrder
from scmlrun.operations import compute_launch_plan
from scmlrun.operations import execute_launch_plan
from scmlrun.operations import normalize_search_root
from scmlrun.operations import prepare_tool
from scmlrun.output import print_build_result
from scmlrun.output import print_error
from scmlrun.output import print_launch_plan

app = typer.Typer(help="Run sctrace over every SCML file in a source tree")

RootOption = Annotated[
    Path | None, typer.Option("--root", help="Directory to search for input files")
]
SuffixOption = Annotated[
    str | None, typer.Option("--suffix", help="File name suffix to match")
]
ManifestOption = Annotated[
    Path | None, typer.Option("--manifest", help="Cargo.toml of the sctrace tool")
]
CargoOption = Annotated[
    str | None, typer.Option("--cargo", help="Cargo executable to use")
]
OrderOption = Annotated[
    DiscoveryOrder | None,
    typer.Option("--order", help="Order in which files are passed to sctrace"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"scmlrun {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
) -> None:
    """Run sctrace over every SCML file in a source tree."""
    pass


def _effective_config(**overrides) -> Config:
    """Load config and apply command-line overrides that were given."""
    config = load_config()
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes)


def _launch(config: Config, passthrough: Sequence[str]) -> int:
    """Discover, compose, prepare the tool, then run it.

    Returns:
        The tool's exit status
    """
    plan = compute_launch_plan(config, passthrough)
    plan.tool = prepare_tool(plan.tool, build=config.build)
    return execute_launch_plan(plan)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True}
)
def run(
    ctx: typer.Context,
    root: RootOption = None,
    suffix: SuffixOption = None,
    manifest: ManifestOption = None,
    cargo: CargoOption = None,
    order: OrderOption = None,
    no_build: Annotated[
        bool, typer.Option("--no-build", help="Skip the explicit build step")
    ] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-n", help="Show what would be done")
    ] = False,
) -> None:
    """Run sctrace on all discovered files. Arguments after -- go to sctrace."""
    try:
        config = _effective_config(
            search_root=root,
            suffix=suffix,
            manifest_path=manifest,
            cargo=cargo,
            order=order,
            build=False if no_build else None,
        )
        if dry_run:
            plan = compute_launch_plan(config, ctx.args)
            print_launch_plan(plan, dry_run=True)
            return
        returncode = _launch(config, ctx.args)
    except (ScmlrunError, OSError) as e:
        print_error(e)
        raise typer.Exit(1) from None

    raise typer.Exit(returncode)


@app.command()
def files(
    root: RootOption = None,
    suffix: SuffixOption = None,
    order: OrderOption = None,
) -> None:
    """List the files that would be passed to sctrace."""
    try:
        config = _effective_config(search_root=root, suffix=suffix, order=order)
        search_root = normalize_search_root(config.search_root)
        for path in discover_files(search_root, config.suffix, config.order):
            typer.echo(str(path))
    except (ScmlrunError, OSError) as e:
        print_error(e)
        raise typer.Exit(1) from None


@app.command()
def build(
    manifest: ManifestOption = None,
    cargo: CargoOption = None,
) -> None:
    """Build sctrace without running it."""
    try:
        config = _effective_config(manifest_path=manifest, cargo=cargo)
        tool = prepare_tool(config.tool, build=True)
    except (ScmlrunError, OSError) as e:
        print_error(e)
        raise typer.Exit(1) from None

    print_build_result(tool)


@app.command("config")
def show_config(
    write: Annotated[
        bool, typer.Option("--write", help="Save the effective config to disk")
    ] = False,
) -> None:
    """Print the effective configuration as JSON."""
    try:
        config = load_config()
        typer.echo(json.dumps(config.to_dict(), indent=2))
        if write:
            path = config_path()
            config.save(path)
            typer.secho(f"✓ Wrote {path}", fg=typer.colors.GREEN, bold=True, err=True)
    except (ScmlrunError, OSError) as e:
        print_error(e)
        raise typer.Exit(1) from None


def launch(argv: Sequence[str] | None = None) -> int:
    """Run sctrace with argv passed through verbatim.

    Nothing in argv is interpreted, so flags such as --help and -- reach the
    tool unchanged. Settings come from the config file and environment.

    Args:
        argv: Arguments for the tool. If None, uses sys.argv[1:].

    Returns:
        The tool's exit status, or 1 if the launcher failed before running it
    """
    if argv is None:
        argv = sys.argv[1:]

    try:
        return _launch(load_config(), argv)
    except (ScmlrunError, OSError) as e:
        print_error(e)
        return 1


def launch_main() -> None:
    """Entry point for the sctrace passthrough launcher."""
    sys.exit(launch())


def main() -> None:
    """Main entry point for the scmlrun CLI."""
    app()


if __name__ == "__main__":
    main()
