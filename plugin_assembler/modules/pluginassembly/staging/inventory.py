"""Report which analyzers and languages a plugins directory enables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import FrozenSet, Mapping

from plugin_assembler.modules.pluginassembly.domain import AnalyzerInventory
from plugin_assembler.modules.pluginassembly.domain.catalog import SUPPORTED_LANGUAGES_BY_ANALYZER, Language

log = logging.getLogger(__name__)


def inventory_plugins(
    plugins_dir: Path,
    analyzers: Mapping[str, FrozenSet[Language]] = SUPPORTED_LANGUAGES_BY_ANALYZER,
) -> AnalyzerInventory:
    inventory = AnalyzerInventory()
    if not plugins_dir.is_dir():
        log.warning("Plugins directory %s does not exist", plugins_dir)
        return inventory
    for jar in sorted(plugins_dir.glob("*.jar")):
        matched = False
        for analyzer, languages in analyzers.items():
            if analyzer in jar.name:
                matched = True
                if analyzer not in inventory.analyzers:
                    inventory.analyzers.append(analyzer)
                inventory.languages.update(language.value for language in languages)
        if matched:
            inventory.plugin_files.append(jar.name)
    log.info(
        "Found %d plugins, enabled languages: %s",
        len(inventory.plugin_files),
        ", ".join(sorted(inventory.languages)) or "-",
    )
    return inventory
