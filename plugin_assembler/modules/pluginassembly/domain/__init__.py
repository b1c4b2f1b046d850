from .artifact import ArtifactCoordinates, ResolvedArchive
from .errors import (
    AmbiguousRenameError,
    ArtifactNotFoundError,
    AssemblyError,
    BundleNotFoundError,
    ConfigurationError,
    InvalidCoordinatesError,
    PluginNotFoundError,
    UnsafeArchiveEntryError,
)
from .models import (
    DEFAULT_RENAME_RULES,
    AnalyzerInventory,
    AssemblyReport,
    DeclaredDependencies,
    NamingPatternRule,
    StagedTree,
)

__all__ = [
    "ArtifactCoordinates",
    "ResolvedArchive",
    "AmbiguousRenameError",
    "ArtifactNotFoundError",
    "AssemblyError",
    "BundleNotFoundError",
    "ConfigurationError",
    "InvalidCoordinatesError",
    "PluginNotFoundError",
    "UnsafeArchiveEntryError",
    "DEFAULT_RENAME_RULES",
    "AnalyzerInventory",
    "AssemblyReport",
    "DeclaredDependencies",
    "NamingPatternRule",
    "StagedTree",
]
