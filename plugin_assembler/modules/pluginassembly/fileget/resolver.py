"""Resolve declared coordinates to archives in the local dependency cache."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

import httpx

from plugin_assembler.modules.pluginassembly.domain import (
    ArtifactCoordinates,
    ArtifactNotFoundError,
    ResolvedArchive,
)

from .repository_downloader import RepositoryDownloader

log = logging.getLogger(__name__)


class ArtifactResolver:
    """Locates each coordinate in a Maven-layout cache, downloading when allowed.

    Resolution is all-or-nothing: every coordinate that cannot be located is
    collected and reported in a single :class:`ArtifactNotFoundError`.
    """

    def __init__(self, cache_dir: Path, downloader: Optional[RepositoryDownloader] = None) -> None:
        self.cache_dir = Path(cache_dir)
        self.downloader = downloader

    def cache_path(self, coords: ArtifactCoordinates) -> Path:
        return self.cache_dir.joinpath(*coords.path_segments)

    def resolve(self, coordinates: Iterable[ArtifactCoordinates]) -> List[ResolvedArchive]:
        resolved: List[ResolvedArchive] = []
        missing: List[str] = []
        for coords in coordinates:
            path = self._locate(coords)
            if path is None:
                missing.append(coords.notation)
                continue
            resolved.append(ResolvedArchive(coordinates=coords, path=path))
        if missing:
            raise ArtifactNotFoundError(missing)
        log.info("Resolved %d artifacts from %s", len(resolved), self.cache_dir)
        return resolved

    def _locate(self, coords: ArtifactCoordinates) -> Optional[Path]:
        target = self.cache_path(coords)
        if target.is_file():
            log.debug("Reusing cached artifact %s -> %s", coords, target)
            return target
        if self.downloader is None:
            log.error("Artifact %s not in cache %s and downloads are disabled", coords, self.cache_dir)
            return None
        try:
            return self.downloader.download(coords, target)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                log.error("Artifact %s not found at %s", coords, exc.request.url)
                return None
            raise
