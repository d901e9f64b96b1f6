"""Path normalization and validation utilities."""

from pathlib import Path

from scmlrun.exceptions import ManifestNotFoundError
from scmlrun.exceptions import SearchRootError


def normalize_search_root(search_root: Path) -> Path:
    """Normalize and validate search root path.

    The path is made absolute but symlinks are kept, so discovered files
    are reported under the root as configured.

    Args:
        search_root: Directory to scan for input files

    Returns:
        Absolute path to search root

    Raises:
        SearchRootError: If search_root does not exist or is not a directory
    """
    search_root = search_root.expanduser().absolute()

    if not search_root.exists():
        raise SearchRootError(f"Search root does not exist: {search_root}")
    if not search_root.is_dir():
        raise SearchRootError(f"Search root is not a directory: {search_root}")

    return search_root


def normalize_manifest_path(manifest_path: Path) -> Path:
    """Normalize and validate the tool's Cargo manifest path.

    Raises:
        ManifestNotFoundError: If manifest_path is not an existing file
    """
    manifest_path = manifest_path.expanduser().resolve()

    if not manifest_path.is_file():
        raise ManifestNotFoundError(f"Cargo manifest not found: {manifest_path}")

    return manifest_path
