"""Filesystem helpers shared by the staging stages."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Callable, List, Optional

from plugin_assembler.modules.pluginassembly.domain import UnsafeArchiveEntryError

log = logging.getLogger(__name__)

PathPredicate = Callable[[Path], bool]


def find_all(directory: Path, predicate: PathPredicate) -> List[Path]:
    """Immediate children of ``directory`` matching ``predicate``, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted((child for child in directory.iterdir() if predicate(child)), key=lambda p: p.name)


def find_first(directory: Path, predicate: PathPredicate) -> Optional[Path]:
    matches = find_all(directory, predicate)
    if len(matches) > 1:
        log.warning(
            "Found %d candidates in %s, using %s: %s",
            len(matches),
            directory,
            matches[0].name,
            ", ".join(p.name for p in matches),
        )
    return matches[0] if matches else None


def name_predicate(prefix: str = "", suffix: str = "") -> PathPredicate:
    def _matches(path: Path) -> bool:
        return path.is_file() and path.name.startswith(prefix) and path.name.endswith(suffix)

    return _matches


def safe_target(root: Path, member_name: str) -> Path:
    """Resolve an archive member name under ``root``, rejecting traversal."""
    normalized = member_name.replace("\\", "/")
    relative = PurePosixPath(normalized)
    if relative.is_absolute():
        raise UnsafeArchiveEntryError(f"Unsafe absolute path detected in archive: {member_name}")
    parts = [part for part in relative.parts if part not in {"", "."}]
    if ".." in parts:
        raise UnsafeArchiveEntryError(f"Unsafe path detected in archive: {member_name}")
    target = root.joinpath(*parts)
    root_resolved = root.resolve()
    resolved = target.resolve()
    if resolved != root_resolved and root_resolved not in resolved.parents:
        raise UnsafeArchiveEntryError(f"Archive entry escapes {root}: {member_name}")
    return target


def count_files(directory: Path) -> int:
    if not directory.is_dir():
        return 0
    return sum(1 for item in directory.rglob("*") if item.is_file())
