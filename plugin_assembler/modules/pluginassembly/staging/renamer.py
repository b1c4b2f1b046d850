"""Rename versioned plugin files to stable names."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable

from plugin_assembler.modules.pluginassembly.domain import AmbiguousRenameError, NamingPatternRule

from .fs import find_all

log = logging.getLogger(__name__)


def normalize_names(directory: Path, rules: Iterable[NamingPatternRule]) -> Dict[str, str]:
    """Move files matching each rule to the rule's canonical name.

    A rule matching more than one file raises :class:`AmbiguousRenameError`
    before anything is moved for that rule. Running twice is a no-op.
    """
    renamed: Dict[str, str] = {}
    for rule in rules:
        matches = find_all(directory, lambda path, rule=rule: path.is_file() and rule.matches(path.name))
        if not matches:
            continue
        if len(matches) > 1:
            raise AmbiguousRenameError(rule.pattern, [path.name for path in matches])
        source = matches[0]
        os.replace(source, directory / rule.canonical_name)
        log.info("Renamed %s -> %s", source.name, rule.canonical_name)
        renamed[source.name] = rule.canonical_name
    return renamed
