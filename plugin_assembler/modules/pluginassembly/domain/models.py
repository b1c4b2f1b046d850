"""Dataclasses describing the staged plugin layout and run outcome."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Optional, Pattern, Set, Tuple

from .artifact import ArtifactCoordinates
from .constants import ESLINT_BRIDGE_DIR, OMNISHARP_DIR, PLUGINS_DIR, SLOOP_DIR


@dataclass(frozen=True)
class NamingPatternRule:
    """Maps any file name fully matching ``pattern`` to ``canonical_name``."""

    pattern: str
    canonical_name: str

    @property
    def regex(self) -> Pattern[str]:
        return re.compile(self.pattern)

    def matches(self, filename: str) -> bool:
        return self.regex.fullmatch(filename) is not None


DEFAULT_RENAME_RULES: Tuple[NamingPatternRule, ...] = (
    NamingPatternRule(r"sonar-csharp-enterprise-plugin-.*\.jar", "sonar-csharp-enterprise-plugin.jar"),
    NamingPatternRule(r"sonar-csharp-plugin-.*\.jar", "sonar-csharp-plugin.jar"),
)


@dataclass(frozen=True)
class StagedTree:
    """Staging root plus the stages already applied to it."""

    root: Path
    completed: Tuple[str, ...] = ()

    @property
    def plugins_dir(self) -> Path:
        return self.root / PLUGINS_DIR

    @property
    def eslint_bridge_dir(self) -> Path:
        return self.plugins_dir / ESLINT_BRIDGE_DIR

    @property
    def omnisharp_dir(self) -> Path:
        return self.root / OMNISHARP_DIR

    @property
    def sloop_dir(self) -> Path:
        return self.root / SLOOP_DIR

    def with_stage(self, name: str) -> "StagedTree":
        return replace(self, completed=self.completed + (name,))


@dataclass
class DeclaredDependencies:
    """Coordinates the assembler is asked to stage."""

    plugins: List[ArtifactCoordinates] = field(default_factory=list)
    omnisharp: List[ArtifactCoordinates] = field(default_factory=list)
    sloop: Optional[ArtifactCoordinates] = None

    def all(self) -> List[ArtifactCoordinates]:
        items = list(self.plugins) + list(self.omnisharp)
        if self.sloop:
            items.append(self.sloop)
        return items


@dataclass
class AnalyzerInventory:
    plugin_files: List[str] = field(default_factory=list)
    analyzers: List[str] = field(default_factory=list)
    languages: Set[str] = field(default_factory=set)


@dataclass
class AssemblyReport:
    success: bool = False
    message: str = ""
    staging_root: Optional[str] = None
    output_dir: Optional[str] = None
    copied_plugins: List[str] = field(default_factory=list)
    pruned_plugins: List[str] = field(default_factory=list)
    renamed: Dict[str, str] = field(default_factory=dict)
    omnisharp_classifiers: List[str] = field(default_factory=list)
    eslint_bridge_files: int = 0
    sloop_files: int = 0
    collected_files: int = 0
    completed_stages: List[str] = field(default_factory=list)
    skipped_stages: List[str] = field(default_factory=list)
    inventory: Optional[AnalyzerInventory] = None

    def mark_success(self, message: str = "OK") -> None:
        self.message = message
        self.success = True
