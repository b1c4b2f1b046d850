"""Wiring of the assembler services from settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from plugin_assembler.modules.pluginassembly import PluginAssemblyService
from plugin_assembler.modules.pluginassembly.domain import AssemblyReport, DeclaredDependencies
from plugin_assembler.modules.pluginassembly.domain.catalog import declared_dependencies
from plugin_assembler.modules.pluginassembly.fileget import ArtifactResolver, RepositoryDownloader

from .settings import Settings
from .switches import AssemblySwitch

log = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """Container that wires plain-Python services with shared settings."""

    settings: Settings
    http_client: Optional[httpx.Client] = None
    switches: AssemblySwitch = field(init=False)
    downloader: Optional[RepositoryDownloader] = field(init=False)
    resolver: ArtifactResolver = field(init=False)
    assembly_service: PluginAssemblyService = field(init=False)

    def __post_init__(self) -> None:
        self.switches = AssemblySwitch(self.settings)
        self.downloader = (
            None if self.settings.offline else RepositoryDownloader(self.settings, client=self.http_client)
        )
        self.resolver = ArtifactResolver(self.settings.local_repository_dir, downloader=self.downloader)
        self.assembly_service = PluginAssemblyService(
            self.resolver,
            build_dir=self.settings.build_dir,
            staging_root_name=self.settings.staging_root_name,
            output_dir=self.settings.resolved_output_dir,
            expand_workers=self.settings.expand_workers,
            prune_stale=self.settings.prune_stale_plugins,
        )

    def declared(self) -> DeclaredDependencies:
        return declared_dependencies(self.settings, self.switches)

    def close(self) -> None:
        if self.downloader is not None:
            self.downloader.close()


def run_assembly(container: ServiceContainer) -> AssemblyReport:
    """Resolve the declared dependencies and stage them."""

    settings = container.settings
    switches = container.switches
    missing = switches.missing_private_credentials()
    log.info("...................ASSEMBLY-RUN...................")
    if missing:
        log.info("Private artifacts require %s, skipping private plugins.", ", ".join(missing))
    elif not settings.omnisharp_classifiers:
        log.info("No omnisharp classifiers configured, skipping omnisharp.")
    log.info(
        "########### private=%s omnisharp=%s sloop=%s prune=%s offline=%s ############",
        not missing,
        switches.omnisharp_on(),
        switches.sloop_on(),
        switches.prune_on(),
        settings.offline,
    )
    declared = container.declared()
    report = container.assembly_service.assemble(declared)
    log.info(
        "Assembly finished root=%s output=%s collected=%d skipped=%s",
        report.staging_root,
        report.output_dir,
        report.collected_files,
        ", ".join(report.skipped_stages) or "-",
    )
    return report
