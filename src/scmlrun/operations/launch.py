"""Compose and execute a launch of the external tool."""

from collections.abc import Sequence

from scmlrun.config import Config
from scmlrun.exceptions import ToolNotFoundError
from scmlrun.files.discover import discover_files
from scmlrun.models import LaunchPlan
from scmlrun.operations.paths import normalize_search_root
from scmlrun.operations.process import run_in_foreground


def compute_launch_plan(config: Config, passthrough: Sequence[str]) -> LaunchPlan:
    """Plan a launch.

    Args:
        config: Effective configuration (search root, suffix, tool)
        passthrough: Caller arguments, appended verbatim after the files

    Returns:
        LaunchPlan whose arguments are the discovered files followed by
        passthrough

    Raises:
        SearchRootError: If the search root is missing or not a directory
        OSError: If part of the tree cannot be read
    """
    search_root = normalize_search_root(config.search_root)
    files = discover_files(search_root, config.suffix, config.order)

    return LaunchPlan(
        tool=config.tool,
        search_root=search_root,
        suffix=config.suffix,
        files=files,
        passthrough=list(passthrough),
    )


def execute_launch_plan(plan: LaunchPlan) -> int:
    """Run the tool with the planned arguments and wait for it to exit.

    Standard streams are inherited from the caller.

    Args:
        plan: LaunchPlan to execute

    Returns:
        The tool's exit status. A child killed by signal N reports 128 + N.

    Raises:
        ToolNotFoundError: If the cargo executable cannot be started
    """
    try:
        returncode = run_in_foreground(plan.command)
    except FileNotFoundError as e:
        raise ToolNotFoundError(f"Cargo executable not found: {plan.tool.cargo}") from e

    if returncode < 0:
        return 128 - returncode
    return returncode
