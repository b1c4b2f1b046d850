"""Expansion of a gzip tarball embedded inside a plugin jar."""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path, PurePosixPath
from typing import List, Optional
from zipfile import ZipFile, ZipInfo

from plugin_assembler.modules.pluginassembly.domain import BundleNotFoundError, PluginNotFoundError
from plugin_assembler.modules.pluginassembly.domain.constants import (
    ESLINT_BRIDGE_DIR,
    ESLINT_BUNDLE_PATTERN,
    JAVASCRIPT_PLUGIN_PREFIX,
    JAVASCRIPT_PLUGIN_SUFFIX,
)

from .expander import extract_tar_gz
from .fs import find_first, name_predicate

log = logging.getLogger(__name__)


def find_bundle_entry(zf: ZipFile, pattern: str) -> Optional[ZipInfo]:
    regex = re.compile(pattern)
    matches = [info for info in zf.infolist() if not info.is_dir() and regex.fullmatch(info.filename)]
    if len(matches) > 1:
        log.warning(
            "Found %d bundle entries matching %s, using %s",
            len(matches),
            pattern,
            matches[0].filename,
        )
    return matches[0] if matches else None


def unpack_embedded_bundle(
    plugins_dir: Path,
    *,
    jar_prefix: str = JAVASCRIPT_PLUGIN_PREFIX,
    jar_suffix: str = JAVASCRIPT_PLUGIN_SUFFIX,
    entry_pattern: str = ESLINT_BUNDLE_PATTERN,
    output_name: str = ESLINT_BRIDGE_DIR,
) -> List[Path]:
    """Extract the tarball embedded in a plugin jar into ``plugins_dir/output_name``.

    The intermediate ``.tgz`` copy is removed once expanded, including when
    the expansion fails.
    """
    jar_path = find_first(plugins_dir, name_predicate(jar_prefix, jar_suffix))
    if jar_path is None:
        raise PluginNotFoundError(f"{jar_prefix}*{jar_suffix} JAR not found in {plugins_dir}")

    with ZipFile(jar_path) as zf:
        entry = find_bundle_entry(zf, entry_pattern)
        if entry is None:
            raise BundleNotFoundError(f"Bundle matching {entry_pattern} not found in JAR {jar_path}")

        output_dir = plugins_dir / output_name
        output_dir.mkdir(exist_ok=True)
        tarball = output_dir / PurePosixPath(entry.filename).name
        with zf.open(entry) as source, open(tarball, "wb") as output:
            shutil.copyfileobj(source, output)

    try:
        extracted = extract_tar_gz(tarball, output_dir)
    finally:
        tarball.unlink()
    log.info("Unpacked %s from %s into %s (%d files)", tarball.name, jar_path.name, output_dir, len(extracted))
    return extracted
