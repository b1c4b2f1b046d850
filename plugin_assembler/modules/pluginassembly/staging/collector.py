"""Copy the staged tree into the packaged resources directory."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path, PurePosixPath
from typing import Iterable, List

from plugin_assembler.modules.pluginassembly.domain.constants import COLLECTED_DIRS

log = logging.getLogger(__name__)


def strip_leading_segment(relative: PurePosixPath, segment: str) -> PurePosixPath:
    if relative.parts and relative.parts[0] == segment:
        return PurePosixPath(*relative.parts[1:])
    return relative


def collect_resources(
    build_dir: Path,
    root_name: str,
    output_dir: Path,
    include: Iterable[str] = COLLECTED_DIRS,
) -> List[PurePosixPath]:
    """Copy ``build_dir/root_name/<include>/**`` to ``output_dir`` without ``root_name``."""
    collected: List[PurePosixPath] = []
    staging_root = build_dir / root_name
    for top in include:
        source_dir = staging_root / top
        if not source_dir.is_dir():
            log.debug("Nothing to collect under %s", source_dir)
            continue
        for item in sorted(source_dir.rglob("*")):
            if not item.is_file():
                continue
            relative = PurePosixPath(item.relative_to(build_dir).as_posix())
            stripped = strip_leading_segment(relative, root_name)
            target = output_dir.joinpath(*stripped.parts)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, target)
            collected.append(stripped)
    log.info("Collected %d resource files into %s", len(collected), output_dir)
    return collected
