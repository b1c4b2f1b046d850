"""Feature toggles deciding which optional assembly stages run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .settings import Settings


@dataclass
class AssemblySwitch:
    """Derives optional stages from the configured settings."""

    settings: Settings

    def missing_private_credentials(self) -> List[str]:
        return [
            name
            for name in ("artifactory_private_username", "artifactory_private_password")
            if not getattr(self.settings, name)
        ]

    def private_artifacts_on(self) -> bool:
        return not self.missing_private_credentials()

    def omnisharp_on(self) -> bool:
        return self.private_artifacts_on() and bool(self.settings.omnisharp_classifiers)

    def sloop_on(self) -> bool:
        return bool(self.settings.sloop_coordinate)

    def prune_on(self) -> bool:
        return bool(self.settings.prune_stale_plugins)
