"""Errors raised while assembling the plugin layout."""

from __future__ import annotations

from typing import Sequence


class AssemblyError(RuntimeError):
    """Base class for failures that abort an assembly run."""


class ConfigurationError(AssemblyError):
    """Raised when declared inputs or expected files cannot be found."""


class InvalidCoordinatesError(ConfigurationError):
    """Raised when an artifact notation cannot be parsed."""


class ArtifactNotFoundError(ConfigurationError):
    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__("Could not resolve artifacts: " + ", ".join(self.missing))


class PluginNotFoundError(ConfigurationError):
    """Raised when a required plugin jar is absent from the plugins directory."""


class BundleNotFoundError(ConfigurationError):
    """Raised when a plugin jar does not embed the expected bundle."""


class AmbiguousRenameError(ConfigurationError):
    def __init__(self, pattern: str, candidates: Sequence[str]) -> None:
        self.pattern = pattern
        self.candidates = list(candidates)
        super().__init__(
            f"Several files match rename pattern {pattern!r}: {', '.join(self.candidates)}"
        )


class UnsafeArchiveEntryError(AssemblyError):
    """Raised when an archive entry would be written outside its target directory."""
