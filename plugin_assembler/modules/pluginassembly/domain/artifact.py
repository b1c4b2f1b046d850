"""Domain objects for artifact coordinates and resolved archives."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import InvalidCoordinatesError

_NOTATION = re.compile(
    r"^(?P<group>[^:@\s]+):(?P<artifact>[^:@\s]+):(?P<version>[^:@\s]+)"
    r"(?::(?P<classifier>[^:@\s]+))?(?:@(?P<extension>[^:@\s]+))?$"
)


@dataclass(frozen=True)
class ArtifactCoordinates:
    """Represents a Maven artifact coordinate."""

    groupid: str
    artifactid: str
    version: str
    classifier: Optional[str] = None
    extension: str = "jar"

    @classmethod
    def parse(cls, notation: str) -> "ArtifactCoordinates":
        """Parse ``group:artifact:version[:classifier][@extension]``."""
        match = _NOTATION.match(notation.strip())
        if not match:
            raise InvalidCoordinatesError(f"Invalid artifact notation: {notation!r}")
        return cls(
            groupid=match.group("group"),
            artifactid=match.group("artifact"),
            version=match.group("version"),
            classifier=match.group("classifier"),
            extension=match.group("extension") or "jar",
        )

    @property
    def filename(self) -> str:
        suffix = f"-{self.classifier}" if self.classifier else ""
        return f"{self.artifactid}-{self.version}{suffix}.{self.extension}"

    @property
    def path_segments(self) -> List[str]:
        group_path = self.groupid.replace(".", "/")
        return [group_path, self.artifactid, self.version, self.filename]

    @property
    def notation(self) -> str:
        text = f"{self.groupid}:{self.artifactid}:{self.version}"
        if self.classifier:
            text += f":{self.classifier}"
        if self.extension != "jar":
            text += f"@{self.extension}"
        return text

    def __str__(self) -> str:
        return self.notation


@dataclass(frozen=True)
class ResolvedArchive:
    """A local archive file backing one coordinate."""

    coordinates: ArtifactCoordinates
    path: Path

    @property
    def classifier(self) -> Optional[str]:
        return self.coordinates.classifier

    @property
    def name(self) -> str:
        return self.path.name
