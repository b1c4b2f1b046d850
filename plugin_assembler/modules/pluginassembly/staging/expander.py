"""Archive extraction for zip and gzip-compressed tar payloads."""

from __future__ import annotations

import logging
import shutil
import tarfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Sequence
from zipfile import ZipFile

from plugin_assembler.modules.pluginassembly.domain import ConfigurationError, ResolvedArchive

from .fs import safe_target

log = logging.getLogger(__name__)

ZIP_SUFFIXES = (".zip", ".jar")
TAR_GZ_SUFFIXES = (".tar.gz", ".tgz")


def _add_exec_bits(path: Path, mode: int) -> None:
    exec_bits = mode & 0o111
    if exec_bits:
        path.chmod(path.stat().st_mode | exec_bits)


def extract_zip(archive: Path, destination: Path) -> List[Path]:
    """Extract every entry of ``archive`` under ``destination``."""
    destination.mkdir(parents=True, exist_ok=True)
    extracted: List[Path] = []
    with ZipFile(archive, "r") as zf:
        members = [(info, safe_target(destination, info.filename)) for info in zf.infolist()]
        for info, target in members:
            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(info) as source, open(target, "wb") as output:
                shutil.copyfileobj(source, output)
            _add_exec_bits(target, info.external_attr >> 16)
            extracted.append(target)
    log.debug("Archive extracted %s -> %s (%d files)", archive, destination, len(extracted))
    return extracted


def extract_tar_gz(archive: Path, destination: Path) -> List[Path]:
    """Stream-decompress ``archive`` and write its entries under ``destination``.

    Directory entries are created with their ancestors; regular files are
    copied byte for byte. Links and special files are skipped.
    """
    destination.mkdir(parents=True, exist_ok=True)
    extracted: List[Path] = []
    with tarfile.open(archive, mode="r|gz") as tar:
        for member in tar:
            target = safe_target(destination, member.name)
            if member.isdir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            if not member.isfile():
                log.warning("Skipping unsupported tar entry %s in %s", member.name, archive.name)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            source = tar.extractfile(member)
            if source is None:
                continue
            with source, open(target, "wb") as output:
                shutil.copyfileobj(source, output)
            _add_exec_bits(target, member.mode)
            extracted.append(target)
    log.debug("Tarball extracted %s -> %s (%d files)", archive, destination, len(extracted))
    return extracted


def expand_archive(archive: Path, destination: Path) -> List[Path]:
    name = archive.name.lower()
    if name.endswith(ZIP_SUFFIXES):
        return extract_zip(archive, destination)
    if name.endswith(TAR_GZ_SUFFIXES):
        return extract_tar_gz(archive, destination)
    raise ConfigurationError(f"Unsupported archive format: {archive.name}")


def _classifier_targets(archives: Sequence[ResolvedArchive], parent: Path) -> Dict[str, ResolvedArchive]:
    by_classifier: Dict[str, ResolvedArchive] = {}
    for archive in archives:
        if not archive.classifier:
            raise ConfigurationError(f"Archive {archive.coordinates} has no classifier")
        if archive.classifier in by_classifier:
            raise ConfigurationError(
                f"Classifier {archive.classifier!r} declared twice under {parent}"
            )
        by_classifier[archive.classifier] = archive
    return by_classifier


def expand_classified_zips(
    archives: Iterable[ResolvedArchive],
    parent: Path,
    workers: int = 1,
) -> Dict[str, List[Path]]:
    """Extract each classified zip into ``parent/<classifier>``."""
    by_classifier = _classifier_targets(list(archives), parent)
    results: Dict[str, List[Path]] = {}
    if workers <= 1 or len(by_classifier) <= 1:
        for classifier, archive in by_classifier.items():
            results[classifier] = extract_zip(archive.path, parent / classifier)
            log.info("Expanded %s into %s", archive.name, parent / classifier)
        return results

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(extract_zip, archive.path, parent / classifier): classifier
            for classifier, archive in by_classifier.items()
        }
        for future in as_completed(futures):
            classifier = futures[future]
            results[classifier] = future.result()
            log.info("Expanded %s into %s", by_classifier[classifier].name, parent / classifier)
    return results
