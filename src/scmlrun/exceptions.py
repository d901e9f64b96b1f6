"""Custom exceptions for scmlrun."""


class ScmlrunError(Exception):
    """Base exception for scmlrun."""


class SearchRootError(ScmlrunError):
    """Search root is missing or not a directory."""


class ToolNotFoundError(ScmlrunError):
    """Cargo executable could not be located."""


class ManifestNotFoundError(ScmlrunError):
    """Cargo manifest for the external tool does not exist."""


class ToolBuildError(ScmlrunError):
    """Building the external tool failed."""

    def __init__(self, returncode: int):
        self.returncode = returncode
        super().__init__(f"Build failed with exit status {returncode}")


class ConfigValidationError(ScmlrunError):
    """Config file or environment override is invalid or malformed."""


class ConfigVersionError(ScmlrunError):
    """Config version is unsupported."""
