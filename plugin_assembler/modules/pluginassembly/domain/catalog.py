"""Declared plugin coordinates and the languages each analyzer enables."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, FrozenSet

from plugin_assembler.settings import Settings
from plugin_assembler.switches import AssemblySwitch

from .artifact import ArtifactCoordinates
from .models import DeclaredDependencies

log = logging.getLogger(__name__)


class Language(str, Enum):
    JAVA = "java"
    KOTLIN = "kotlin"
    CLOUDFORMATION = "cloudformation"
    KUBERNETES = "kubernetes"
    TERRAFORM = "terraform"
    AZURERESOURCEMANAGER = "azureresourcemanager"
    ANSIBLE = "ansible"
    DOCKER = "docker"
    PYTHON = "python"
    IPYTHON = "ipython"
    RUBY = "ruby"
    GO = "go"
    JS = "js"
    TS = "ts"
    JSP = "jsp"
    SECRETS = "secrets"
    PHP = "php"
    XML = "xml"
    HTML = "html"
    CSS = "css"


SUPPORTED_LANGUAGES_BY_ANALYZER: Dict[str, FrozenSet[Language]] = {
    "sonar-kotlin-plugin": frozenset({Language.KOTLIN}),
    "sonar-java-plugin": frozenset({Language.JAVA}),
    "sonar-iac-plugin": frozenset(
        {
            Language.CLOUDFORMATION,
            Language.KUBERNETES,
            Language.TERRAFORM,
            Language.AZURERESOURCEMANAGER,
            Language.ANSIBLE,
            Language.DOCKER,
        }
    ),
    "sonar-python-plugin": frozenset({Language.PYTHON, Language.IPYTHON}),
    "sonar-ruby-plugin": frozenset({Language.RUBY}),
    "sonar-java-symbolic-execution-plugin": frozenset(),
    "sonar-go-plugin": frozenset({Language.GO}),
    "sonar-javascript-plugin": frozenset({Language.JS, Language.TS, Language.JSP}),
    "sonar-text-plugin": frozenset({Language.SECRETS}),
    "sonar-php-plugin": frozenset({Language.PHP}),
    "sonar-xml-plugin": frozenset({Language.XML}),
    "sonar-html-plugin": frozenset({Language.HTML, Language.CSS}),
}


def declared_dependencies(settings: Settings, switches: AssemblySwitch) -> DeclaredDependencies:
    """Build the coordinate set for this run from settings.

    Private plugins and the omnisharp bundles are only declared when the
    private repository credentials are configured.
    """
    deps = DeclaredDependencies(
        plugins=[ArtifactCoordinates.parse(item) for item in settings.analyzer_plugins],
    )
    if switches.private_artifacts_on():
        for notation in (settings.cfamily_plugin, settings.csharp_enterprise_plugin):
            if notation:
                deps.plugins.append(ArtifactCoordinates.parse(notation))
        deps.omnisharp = [
            ArtifactCoordinates(
                groupid=settings.omnisharp_group,
                artifactid=settings.omnisharp_artifact,
                version=settings.omnisharp_version,
                classifier=classifier,
                extension="zip",
            )
            for classifier in settings.omnisharp_classifiers
        ]
    if switches.sloop_on():
        deps.sloop = ArtifactCoordinates.parse(settings.sloop_coordinate or "")
    log.debug(
        "Declared %d plugins, %d omnisharp bundles, sloop=%s",
        len(deps.plugins),
        len(deps.omnisharp),
        deps.sloop or "-",
    )
    return deps
