"""Precondition checks and on-demand build of the external tool."""

import shutil
from dataclasses import replace

from scmlrun.exceptions import ToolBuildError
from scmlrun.exceptions import ToolNotFoundError
from scmlrun.models import ToolCommand
from scmlrun.operations.paths import normalize_manifest_path
from scmlrun.operations.process import run_in_foreground


def check_toolchain(tool: ToolCommand) -> ToolCommand:
    """Check that the tool can be built and run.

    Args:
        tool: ToolCommand to check

    Returns:
        Copy of tool with an absolute manifest path

    Raises:
        ManifestNotFoundError: If the Cargo manifest does not exist
        ToolNotFoundError: If the cargo executable cannot be found
    """
    manifest_path = normalize_manifest_path(tool.manifest_path)

    if shutil.which(tool.cargo) is None:
        raise ToolNotFoundError(f"Cargo executable not found: {tool.cargo}")

    return replace(tool, manifest_path=manifest_path)


def build_tool(tool: ToolCommand) -> None:
    """Build the tool, streaming compiler output to the caller's terminal.

    Raises:
        ToolNotFoundError: If the cargo executable cannot be started
        ToolBuildError: If the build exits nonzero
    """
    try:
        returncode = run_in_foreground(tool.build_argv())
    except FileNotFoundError as e:
        raise ToolNotFoundError(f"Cargo executable not found: {tool.cargo}") from e

    if returncode != 0:
        raise ToolBuildError(returncode)


def prepare_tool(tool: ToolCommand, build: bool = True) -> ToolCommand:
    """Check the toolchain and build the tool when requested.

    Returns:
        Checked ToolCommand, ready to run
    """
    tool = check_toolchain(tool)
    if build:
        build_tool(tool)
    return tool
