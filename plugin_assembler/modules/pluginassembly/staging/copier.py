"""Flat copy of resolved plugin archives into the plugins directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Iterable, List

from plugin_assembler.modules.pluginassembly.domain import ResolvedArchive

log = logging.getLogger(__name__)


def copy_flat(archives: Iterable[ResolvedArchive], destination: Path) -> List[Path]:
    """Copy every archive into ``destination`` without nesting, overwriting by name."""
    destination.mkdir(parents=True, exist_ok=True)
    copied: List[Path] = []
    for archive in archives:
        target = destination / archive.path.name
        shutil.copyfile(archive.path, target)
        log.debug("Copied %s -> %s", archive.path, target)
        copied.append(target)
    log.info("Copied %d plugin archives into %s", len(copied), destination)
    return copied


def prune_stale_plugins(destination: Path, keep: Iterable[str]) -> List[Path]:
    """Delete ``*.jar`` files in ``destination`` whose names are not in ``keep``."""
    keep_names = set(keep)
    removed: List[Path] = []
    if not destination.is_dir():
        return removed
    for jar in sorted(destination.glob("*.jar")):
        if jar.name in keep_names or not jar.is_file():
            continue
        jar.unlink()
        log.info("Removed stale plugin file: %s", jar)
        removed.append(jar)
    return removed
