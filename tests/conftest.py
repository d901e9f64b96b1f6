"""Shared fixtures for scmlrun tests."""

import os
from dataclasses import dataclass
from pathlib import Path

import pytest

FAKE_CARGO_SCRIPT = """\
#!/bin/sh
here="$(dirname "$0")"
echo "$*" >> "$here/calls.log"
case "$1" in
    build)
        exit "${FAKE_CARGO_BUILD_EXIT:-0}"
        ;;
    run)
        : > "$here/run_args.txt"
        while [ "$#" -gt 0 ] && [ "$1" != "--" ]; do
            shift
        done
        if [ "$#" -gt 0 ]; then
            shift
        fi
        for arg in "$@"; do
            printf '%s\\n' "$arg" >> "$here/run_args.txt"
        done
        if [ -n "$FAKE_CARGO_TRAP_INT" ]; then
            trap 'echo done > "$here/interrupted"; exit 3' INT
            touch "$here/ready"
            while :; do
                sleep 0.1
            done
        fi
        exit "${FAKE_CARGO_EXIT:-0}"
        ;;
esac
exit 64
"""


@dataclass
class FakeCargo:
    """A stand-in cargo executable that records how it was called."""

    path: Path
    manifest_path: Path

    def calls(self) -> list[str]:
        """Each invocation's argv (without argv[0]), space-joined."""
        log = self.path.parent / "calls.log"
        if not log.exists():
            return []
        return log.read_text().splitlines()

    def run_args(self) -> list[str] | None:
        """Arguments the tool received after --, or None if it never ran."""
        args_file = self.path.parent / "run_args.txt"
        if not args_file.exists():
            return None
        return args_file.read_text().splitlines()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point scmlrun at a private config file and clear overrides."""
    for name in list(os.environ):
        if name.startswith("SCMLRUN_") or name.startswith("FAKE_CARGO_"):
            monkeypatch.delenv(name)
    config_file = tmp_path / "config" / "config.json"
    monkeypatch.setenv("SCMLRUN_CONFIG", str(config_file))
    return config_file


@pytest.fixture
def fake_cargo(tmp_path):
    """Install a fake cargo executable and an empty tool manifest."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    cargo = bin_dir / "cargo"
    cargo.write_text(FAKE_CARGO_SCRIPT)
    cargo.chmod(0o755)

    manifest_path = tmp_path / "sctrace" / "Cargo.toml"
    manifest_path.parent.mkdir()
    manifest_path.write_text('[package]\nname = "sctrace"\n')

    return FakeCargo(path=cargo, manifest_path=manifest_path)


@pytest.fixture
def search_root(tmp_path):
    """An empty source tree to search."""
    root = tmp_path / "tree"
    root.mkdir()
    return root


@pytest.fixture
def launcher_env(monkeypatch, fake_cargo, search_root):
    """Configure scmlrun through the environment to use the fixtures."""
    monkeypatch.setenv("SCMLRUN_SEARCH_ROOT", str(search_root))
    monkeypatch.setenv("SCMLRUN_CARGO", str(fake_cargo.path))
    monkeypatch.setenv("SCMLRUN_MANIFEST", str(fake_cargo.manifest_path))
    return fake_cargo
