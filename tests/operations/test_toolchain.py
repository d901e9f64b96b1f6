"""Tests for toolchain checks and builds."""

from unittest.mock import patch

import pytest

from scmlrun.exceptions import ManifestNotFoundError
from scmlrun.exceptions import ToolBuildError
from scmlrun.exceptions import ToolNotFoundError
from scmlrun.models import ToolCommand
from scmlrun.operations import build_tool
from scmlrun.operations import check_toolchain
from scmlrun.operations import prepare_tool


def _tool(fake_cargo) -> ToolCommand:
    return ToolCommand(cargo=str(fake_cargo.path), manifest_path=fake_cargo.manifest_path)


class TestCheckToolchain:
    """Tests for check_toolchain()."""

    def test_valid_toolchain(self, fake_cargo):
        """Test that a present manifest and cargo pass the check."""
        tool = check_toolchain(_tool(fake_cargo))

        assert tool.manifest_path == fake_cargo.manifest_path.resolve()
        assert tool.manifest_path.is_absolute()

    def test_missing_manifest(self, fake_cargo, tmp_path):
        """Test that a missing manifest is reported."""
        tool = ToolCommand(
            cargo=str(fake_cargo.path), manifest_path=tmp_path / "missing" / "Cargo.toml"
        )

        with pytest.raises(ManifestNotFoundError, match="Cargo.toml"):
            check_toolchain(tool)

    def test_missing_cargo(self, fake_cargo, tmp_path):
        """Test that a cargo executable that does not exist is reported."""
        tool = ToolCommand(
            cargo=str(tmp_path / "bin" / "nothing"),
            manifest_path=fake_cargo.manifest_path,
        )

        with pytest.raises(ToolNotFoundError):
            check_toolchain(tool)

    def test_looks_up_cargo_on_path(self, monkeypatch, fake_cargo):
        """Test that a bare executable name is resolved through PATH."""
        monkeypatch.setenv("PATH", str(fake_cargo.path.parent))
        tool = ToolCommand(cargo="cargo", manifest_path=fake_cargo.manifest_path)

        assert check_toolchain(tool).cargo == "cargo"


class TestBuildTool:
    """Tests for build_tool()."""

    def test_successful_build(self, fake_cargo):
        """Test that a build runs cargo build with the manifest."""
        build_tool(_tool(fake_cargo))

        assert fake_cargo.calls() == [
            f"build -q --manifest-path {fake_cargo.manifest_path}"
        ]
        assert fake_cargo.run_args() is None

    def test_verbose_build(self, fake_cargo):
        """Test that quiet=False drops -q."""
        tool = ToolCommand(
            cargo=str(fake_cargo.path),
            manifest_path=fake_cargo.manifest_path,
            quiet=False,
        )

        build_tool(tool)

        assert fake_cargo.calls() == [f"build --manifest-path {fake_cargo.manifest_path}"]

    def test_failed_build(self, monkeypatch, fake_cargo):
        """Test that a failed build raises with its exit status."""
        monkeypatch.setenv("FAKE_CARGO_BUILD_EXIT", "101")

        with pytest.raises(ToolBuildError) as exc_info:
            build_tool(_tool(fake_cargo))

        assert exc_info.value.returncode == 101

    def test_cargo_vanished(self, fake_cargo):
        """Test that an executable that cannot be started is reported."""
        tool = _tool(fake_cargo)
        fake_cargo.path.unlink()

        with pytest.raises(ToolNotFoundError):
            build_tool(tool)


class TestPrepareTool:
    """Tests for prepare_tool()."""

    def test_checks_then_builds(self, fake_cargo):
        """Test that prepare_tool checks and builds by default."""
        tool = prepare_tool(_tool(fake_cargo))

        assert tool.manifest_path.is_absolute()
        assert len(fake_cargo.calls()) == 1
        assert fake_cargo.calls()[0].startswith("build")

    def test_skip_build(self, fake_cargo):
        """Test that build=False only checks."""
        prepare_tool(_tool(fake_cargo), build=False)

        assert fake_cargo.calls() == []

    def test_check_failure_skips_build(self, tmp_path, fake_cargo):
        """Test that nothing is built when the precondition check fails."""
        tool = ToolCommand(
            cargo=str(fake_cargo.path), manifest_path=tmp_path / "Cargo.toml"
        )

        with patch("scmlrun.operations.toolchain.build_tool") as mock_build:
            with pytest.raises(ManifestNotFoundError):
                prepare_tool(tool)

        mock_build.assert_not_called()
