"""High-level operations for scmlrun."""

from scmlrun.operations.launch import compute_launch_plan
from scmlrun.operations.launch import execute_launch_plan
from scmlrun.operations.paths import normalize_manifest_path
from scmlrun.operations.paths import normalize_search_root
from scmlrun.operations.toolchain import build_tool
from scmlrun.operations.toolchain import check_toolchain
from scmlrun.operations.toolchain import prepare_tool

__all__ = [
    "build_tool",
    "check_toolchain",
    "compute_launch_plan",
    "execute_launch_plan",
    "normalize_manifest_path",
    "normalize_search_root",
    "prepare_tool",
]
