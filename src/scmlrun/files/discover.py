"""File discovery operations."""

from pathlib import Path

from scmlrun.models import DiscoveryOrder


def _raise(error: OSError) -> None:
    raise error


def discover_files(
    search_root: Path, suffix: str, order: DiscoveryOrder = DiscoveryOrder.SORTED
) -> list[Path]:
    """Discover all regular files under search_root whose name ends with suffix.

    Symlinks are skipped and symlinked directories are not traversed, so only
    files physically inside the tree are returned.

    Args:
        search_root: Directory to scan recursively
        suffix: File name ending to match (e.g. ".scml")
        order: SORTED for deterministic output, TRAVERSAL to keep walk order

    Returns:
        Paths to matching files, each prefixed with search_root

    Raises:
        OSError: If any directory in the tree cannot be read
    """
    files = []
    for dirpath, dirnames, filenames in search_root.walk(on_error=_raise):
        for filename in filenames:
            if not filename.endswith(suffix):
                continue
            full_path = dirpath / filename
            # walk() lists symlinks among filenames; find -type f would not
            if full_path.is_symlink() or not full_path.is_file():
                continue
            files.append(full_path)

    if order == DiscoveryOrder.SORTED:
        return sorted(files)
    return files
