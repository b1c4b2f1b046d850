"""HTTP client to fetch artifacts from a Maven-layout repository."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import httpx

from plugin_assembler.modules.pluginassembly.domain import ArtifactCoordinates
from plugin_assembler.settings import Settings

_PROGRESS_STEP_BYTES = 5 * 1024 * 1024


class RepositoryDownloader:
    """Download artifacts from the configured repository to the local filesystem."""

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        self.base_url = settings.artifact_repository_url.rstrip("/")
        self.log = logging.getLogger(self.__class__.__name__)
        auth = None
        if settings.has_private_credentials:
            auth = (settings.artifactory_private_username, settings.artifactory_private_password)
        self._auth = auth
        self._client = client or httpx.Client(
            timeout=settings.download_timeout, verify=True, follow_redirects=True
        )

    def artifact_url(self, coords: ArtifactCoordinates) -> str:
        return f"{self.base_url}/" + "/".join(coords.path_segments)

    def download(self, coords: ArtifactCoordinates, dest_path: Path) -> Path:
        """Stream ``coords`` into ``dest_path``; HTTP errors propagate."""
        url = self.artifact_url(coords)
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        partial = dest_path.with_name(dest_path.name + ".part")
        self.log.info("Downloading artifact %s url=%s", coords, url)
        start_time = time.time()
        downloaded = 0
        try:
            with self._client.stream("GET", url, auth=self._auth) as response:
                response.raise_for_status()
                total = int(response.headers.get("content-length") or 0)
                next_bytes_logged = _PROGRESS_STEP_BYTES
                with open(partial, "wb") as fh:
                    for chunk in response.iter_bytes(65536):
                        if not chunk:
                            continue
                        fh.write(chunk)
                        downloaded += len(chunk)
                        if downloaded >= next_bytes_logged:
                            self.log.info(
                                "Download progress %s %d/%s bytes",
                                coords,
                                downloaded,
                                total or "?",
                            )
                            next_bytes_logged += _PROGRESS_STEP_BYTES
            partial.replace(dest_path)
        finally:
            if partial.exists():
                partial.unlink()
        elapsed = max(time.time() - start_time, 1e-3)
        self.log.info(
            "Downloaded artifact %s -> %s (%d bytes, %.2f MB/s, %.2fs)",
            coords,
            dest_path,
            downloaded,
            (downloaded / 1024 / 1024) / elapsed,
            elapsed,
        )
        return dest_path

    def close(self) -> None:
        self._client.close()
