"""Data models for scmlrun."""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DiscoveryOrder(str, Enum):
    """Order in which discovered files are passed to the tool."""

    SORTED = "sorted"
    TRAVERSAL = "traversal"


@dataclass
class ToolCommand:
    """How to build and run the external tool through cargo."""

    cargo: str  # Executable name (looked up on PATH) or path
    manifest_path: Path  # Cargo.toml of the tool
    quiet: bool = True

    def _cargo_argv(self, subcommand: str) -> list[str]:
        argv = [self.cargo, subcommand]
        if self.quiet:
            argv.append("-q")
        argv += ["--manifest-path", str(self.manifest_path)]
        return argv

    def build_argv(self) -> list[str]:
        """Command line that builds the tool without running it."""
        return self._cargo_argv("build")

    def run_argv(self, arguments: Sequence[str]) -> list[str]:
        """Command line that runs the tool with the given arguments.

        Args:
            arguments: Arguments for the tool itself, placed after ``--``

        Returns:
            Full argv starting with the cargo executable
        """
        return [*self._cargo_argv("run"), "--", *arguments]


@dataclass
class LaunchPlan:
    """Plan for what a launch would do."""

    tool: ToolCommand
    search_root: Path
    suffix: str
    files: list[Path]  # Discovered files, in discovery order
    passthrough: list[str]  # Caller arguments, verbatim

    @property
    def arguments(self) -> list[str]:
        """Arguments handed to the tool: discovered files, then passthrough."""
        return [str(f) for f in self.files] + self.passthrough

    @property
    def command(self) -> list[str]:
        return self.tool.run_argv(self.arguments)
