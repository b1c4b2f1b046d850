"""Ordered plugin assembly pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from plugin_assembler.modules.pluginassembly.domain import (
    DEFAULT_RENAME_RULES,
    AssemblyReport,
    DeclaredDependencies,
    NamingPatternRule,
    ResolvedArchive,
    StagedTree,
)
from plugin_assembler.modules.pluginassembly.domain.constants import (
    STAGE_COLLECT,
    STAGE_COPY,
    STAGE_ESLINT_BRIDGE,
    STAGE_OMNISHARP,
    STAGE_PRUNE,
    STAGE_RENAME,
    STAGE_SLOOP,
)
from plugin_assembler.modules.pluginassembly.fileget import ArtifactResolver
from plugin_assembler.modules.pluginassembly.staging import (
    collect_resources,
    copy_flat,
    expand_archive,
    expand_classified_zips,
    inventory_plugins,
    normalize_names,
    prune_stale_plugins,
    unpack_embedded_bundle,
)
from plugin_assembler.modules.pluginassembly.staging.fs import count_files

Stage = Callable[[StagedTree], StagedTree]


@dataclass
class ResolvedInputs:
    plugins: List[ResolvedArchive] = field(default_factory=list)
    omnisharp: List[ResolvedArchive] = field(default_factory=list)
    sloop: Optional[ResolvedArchive] = None


class PluginAssemblyService:
    """Runs resolve -> copy -> rename -> expand -> collect over one staging root.

    Each stage maps a :class:`StagedTree` to the next one and only reads what
    earlier stages wrote, so stages run strictly in order. The staging root is
    owned by a single run at a time.
    """

    def __init__(
        self,
        resolver: ArtifactResolver,
        *,
        build_dir: Path,
        staging_root_name: str,
        output_dir: Path,
        rename_rules: Sequence[NamingPatternRule] = DEFAULT_RENAME_RULES,
        expand_workers: int = 1,
        prune_stale: bool = False,
    ) -> None:
        self.resolver = resolver
        self.build_dir = Path(build_dir)
        self.staging_root_name = staging_root_name
        self.output_dir = Path(output_dir)
        self.rename_rules = tuple(rename_rules)
        self.expand_workers = expand_workers
        self.prune_stale = prune_stale
        self.log = logging.getLogger(self.__class__.__name__)

    def resolve(self, declared: DeclaredDependencies) -> ResolvedInputs:
        archives = self.resolver.resolve(declared.all())
        by_coords = {archive.coordinates: archive for archive in archives}
        return ResolvedInputs(
            plugins=[by_coords[coords] for coords in declared.plugins],
            omnisharp=[by_coords[coords] for coords in declared.omnisharp],
            sloop=by_coords[declared.sloop] if declared.sloop else None,
        )

    def assemble(self, declared: DeclaredDependencies) -> AssemblyReport:
        report = AssemblyReport(output_dir=str(self.output_dir))
        inputs = self.resolve(declared)
        tree = StagedTree(root=self.build_dir / self.staging_root_name)
        report.staging_root = str(tree.root)

        for name, stage in self._stages(inputs, report):
            self.log.info("...................%s-BEGIN...................", name.upper())
            tree = stage(tree).with_stage(name)
            self.log.info("...................%s-END...................", name.upper())

        report.completed_stages = list(tree.completed)
        report.inventory = inventory_plugins(self.output_dir / tree.plugins_dir.name)
        report.mark_success()
        return report

    def _stages(self, inputs: ResolvedInputs, report: AssemblyReport) -> List[Tuple[str, Stage]]:
        stages: List[Tuple[str, Stage]] = [(STAGE_COPY, lambda tree: self._copy(tree, inputs, report))]
        if self.prune_stale:
            stages.append((STAGE_PRUNE, lambda tree: self._prune(tree, inputs, report)))
        stages.append((STAGE_RENAME, lambda tree: self._rename(tree, report)))
        stages.append((STAGE_ESLINT_BRIDGE, lambda tree: self._eslint_bridge(tree, report)))
        if inputs.omnisharp:
            stages.append((STAGE_OMNISHARP, lambda tree: self._omnisharp(tree, inputs, report)))
        else:
            report.skipped_stages.append(STAGE_OMNISHARP)
        if inputs.sloop:
            stages.append((STAGE_SLOOP, lambda tree, archive=inputs.sloop: self._sloop(tree, archive, report)))
        else:
            report.skipped_stages.append(STAGE_SLOOP)
        stages.append((STAGE_COLLECT, lambda tree: self._collect(tree, report)))
        return stages

    def _copy(self, tree: StagedTree, inputs: ResolvedInputs, report: AssemblyReport) -> StagedTree:
        copied = copy_flat(inputs.plugins, tree.plugins_dir)
        report.copied_plugins = [path.name for path in copied]
        return tree

    def _prune(self, tree: StagedTree, inputs: ResolvedInputs, report: AssemblyReport) -> StagedTree:
        removed = prune_stale_plugins(tree.plugins_dir, (archive.name for archive in inputs.plugins))
        report.pruned_plugins = [path.name for path in removed]
        return tree

    def _rename(self, tree: StagedTree, report: AssemblyReport) -> StagedTree:
        report.renamed = normalize_names(tree.plugins_dir, self.rename_rules)
        return tree

    def _omnisharp(self, tree: StagedTree, inputs: ResolvedInputs, report: AssemblyReport) -> StagedTree:
        expanded = expand_classified_zips(inputs.omnisharp, tree.omnisharp_dir, workers=self.expand_workers)
        report.omnisharp_classifiers = sorted(expanded)
        return tree

    def _eslint_bridge(self, tree: StagedTree, report: AssemblyReport) -> StagedTree:
        report.eslint_bridge_files = len(unpack_embedded_bundle(tree.plugins_dir))
        return tree

    def _sloop(self, tree: StagedTree, archive: ResolvedArchive, report: AssemblyReport) -> StagedTree:
        expand_archive(archive.path, tree.sloop_dir)
        report.sloop_files = count_files(tree.sloop_dir)
        return tree

    def _collect(self, tree: StagedTree, report: AssemblyReport) -> StagedTree:
        collected = collect_resources(self.build_dir, self.staging_root_name, self.output_dir)
        report.collected_files = len(collected)
        return tree
