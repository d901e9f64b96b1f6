"""Configuration for where to look for files and how to run the tool."""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from pathlib import Path
from typing import Self

from platformdirs import user_config_path

from scmlrun.exceptions import ConfigValidationError
from scmlrun.exceptions import ConfigVersionError
from scmlrun.models import DiscoveryOrder
from scmlrun.models import ToolCommand

CONFIG_VERSION = 1

DEFAULT_SEARCH_ROOT = Path("/root/asterinas")
DEFAULT_SUFFIX = ".scml"
MANIFEST_RELATIVE_PATH = Path("tools") / "sctrace" / "Cargo.toml"

CONFIG_PATH_ENV = "SCMLRUN_CONFIG"
ENV_PREFIX = "SCMLRUN_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """Effective scmlrun settings."""

    version: int = CONFIG_VERSION
    search_root: Path = DEFAULT_SEARCH_ROOT
    suffix: str = DEFAULT_SUFFIX
    manifest_path: Path | None = None  # None -> <search_root>/tools/sctrace/Cargo.toml
    cargo: str = "cargo"
    quiet: bool = True
    order: DiscoveryOrder = DiscoveryOrder.SORTED
    build: bool = True

    def __post_init__(self) -> None:
        if not self.suffix:
            raise ConfigValidationError("Suffix must not be empty")
        if not self.cargo:
            raise ConfigValidationError("Cargo executable must not be empty")

    @classmethod
    def default_path(cls) -> Path:
        """Get default config location using platformdirs."""
        return user_config_path("scmlrun") / "config.json"

    @property
    def effective_manifest_path(self) -> Path:
        if self.manifest_path is None:
            return self.search_root / MANIFEST_RELATIVE_PATH
        return self.manifest_path

    @property
    def tool(self) -> ToolCommand:
        """ToolCommand described by this config."""
        return ToolCommand(
            cargo=self.cargo,
            manifest_path=self.effective_manifest_path,
            quiet=self.quiet,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        return {
            "version": self.version,
            "search_root": str(self.search_root),
            "suffix": self.suffix,
            "manifest_path": (
                str(self.manifest_path) if self.manifest_path is not None else None
            ),
            "cargo": self.cargo,
            "quiet": self.quiet,
            "order": self.order.value,
            "build": self.build,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """Create from dict loaded from JSON."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Config must be a JSON object")
        if "version" not in data:
            raise ConfigValidationError("Config missing 'version' key")

        version = data["version"]
        if not isinstance(version, int) or isinstance(version, bool):
            raise ConfigValidationError(f"Config version must be an integer: {version!r}")
        if version > CONFIG_VERSION:
            raise ConfigVersionError(
                f"Config version {version} is newer than supported version {CONFIG_VERSION}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(f"Unknown config keys: {', '.join(unknown)}")

        kwargs: dict = {"version": version}
        for key in ("search_root", "manifest_path"):
            if key in data and data[key] is not None:
                kwargs[key] = Path(_expect(data, key, str))
        for key in ("suffix", "cargo"):
            if key in data:
                kwargs[key] = _expect(data, key, str)
        for key in ("quiet", "build"):
            if key in data:
                kwargs[key] = _expect(data, key, bool)
        if "order" in data:
            kwargs["order"] = _parse_order(_expect(data, "order", str))

        return cls(**kwargs)

    @classmethod
    def load(cls, path: Path | None = None) -> Self:
        """Load config from JSON file. Returns defaults if it doesn't exist.

        Args:
            path: Path to config file. If None, uses default location.
        """
        if path is None:
            path = cls.default_path()

        if not path.exists():
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON in config {path}: {e}")
        except UnicodeDecodeError as e:
            raise ConfigValidationError(f"Invalid config {path}: {e}")
        return cls.from_dict(data)

    def save(self, path: Path | None = None) -> None:
        """Save config to JSON file atomically.

        Args:
            path: Path to save config. If None, uses default location.
        """
        if path is None:
            path = self.default_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = path.with_suffix(".tmp")
        temp_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        temp_path.replace(path)

    def with_env(self, environ: Mapping[str, str]) -> Self:
        """Return a copy with SCMLRUN_* environment overrides applied.

        Empty values are ignored.
        """
        changes: dict = {}

        def lookup(name: str) -> str | None:
            return environ.get(ENV_PREFIX + name) or None

        if (value := lookup("SEARCH_ROOT")) is not None:
            changes["search_root"] = Path(value)
        if (value := lookup("SUFFIX")) is not None:
            changes["suffix"] = value
        if (value := lookup("MANIFEST")) is not None:
            changes["manifest_path"] = Path(value)
        if (value := lookup("CARGO")) is not None:
            changes["cargo"] = value
        if (value := lookup("ORDER")) is not None:
            changes["order"] = _parse_order(value)
        if (value := lookup("BUILD")) is not None:
            changes["build"] = parse_bool(value, name=ENV_PREFIX + "BUILD")
        if (value := lookup("QUIET")) is not None:
            changes["quiet"] = parse_bool(value, name=ENV_PREFIX + "QUIET")

        return replace(self, **changes)


def config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Config file location, honoring SCMLRUN_CONFIG."""
    if environ is None:
        environ = os.environ
    if value := environ.get(CONFIG_PATH_ENV):
        return Path(value).expanduser()
    return Config.default_path()


def load_config(environ: Mapping[str, str] | None = None) -> Config:
    """Load the config file and apply environment overrides.

    Args:
        environ: Environment to read. If None, uses os.environ.

    Raises:
        ConfigValidationError: If the file or an override is invalid
        ConfigVersionError: If the file's version is unsupported
    """
    if environ is None:
        environ = os.environ
    return Config.load(config_path(environ)).with_env(environ)


def parse_bool(value: str, name: str) -> bool:
    """Parse a boolean setting such as "yes" or "0"."""
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigValidationError(f"Invalid boolean for {name}: {value!r}")


def _parse_order(value: str) -> DiscoveryOrder:
    try:
        return DiscoveryOrder(value)
    except ValueError:
        choices = ", ".join(o.value for o in DiscoveryOrder)
        raise ConfigValidationError(
            f"Invalid discovery order {value!r} (expected one of: {choices})"
        ) from None


def _expect(data: dict, key: str, kind: type):
    value = data[key]
    if not isinstance(value, kind):
        raise ConfigValidationError(
            f"Config key '{key}' must be {kind.__name__}, got {type(value).__name__}"
        )
    return value
