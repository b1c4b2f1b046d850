"""Runtime configuration for the plugin assembler."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def _default_analyzer_plugins() -> List[str]:
    return [
        "org.sonarsource.java:sonar-java-plugin:8.15.0.39343",
        "org.sonarsource.java:sonar-java-symbolic-execution-plugin:8.15.0.39343",
        "org.sonarsource.kotlin:sonar-kotlin-plugin:3.1.0.6829",
        "org.sonarsource.iac:sonar-iac-plugin:1.45.0.14930",
        "org.sonarsource.python:sonar-python-plugin:5.4.0.22255",
        "org.sonarsource.slang:sonar-ruby-plugin:1.19.0.471",
        "org.sonarsource.slang:sonar-go-plugin:1.19.0.471",
        "org.sonarsource.javascript:sonar-javascript-plugin:10.23.0.32711",
        "org.sonarsource.text:sonar-text-plugin:2.23.0.6196",
        "org.sonarsource.php:sonar-php-plugin:3.45.0.12991",
        "org.sonarsource.xml:sonar-xml-plugin:2.13.0.5938",
        "org.sonarsource.html:sonar-html-plugin:3.19.0.5695",
        "org.sonarsource.dotnet:sonar-csharp-plugin:10.10.0.116381",
    ]


def _default_omnisharp_classifiers() -> List[str]:
    return ["mono", "net472", "net6"]


class Settings(BaseSettings):
    """Configuration values mapped from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    log_level: str = Field("INFO")

    # Artifact repository
    artifact_repository_url: str = Field("https://repox.jfrog.io/repox/sonarsource")
    artifactory_private_username: Optional[str] = Field(None)
    artifactory_private_password: Optional[str] = Field(None)
    local_repository_dir: Path = Field(default_factory=lambda: Path.home() / ".m2" / "repository")
    offline: bool = Field(False)
    download_timeout: float = Field(60.0)

    # Staging layout
    build_dir: Path = Field(Path("build"))
    staging_root_name: str = Field("sonar-mcp-server")
    resources_output_dir: Optional[Path] = Field(None)

    # Declared dependencies
    # List fields take a JSON array or a comma-separated string.
    analyzer_plugins: Annotated[List[str], NoDecode] = Field(default_factory=_default_analyzer_plugins)
    cfamily_plugin: Optional[str] = Field("com.sonarsource.cpp:sonar-cfamily-plugin:6.68.0.86011")
    csharp_enterprise_plugin: Optional[str] = Field(
        "com.sonarsource.dotnet:sonar-csharp-enterprise-plugin:10.10.0.116381"
    )
    omnisharp_group: str = Field("org.sonarsource.sonarlint.omnisharp")
    omnisharp_artifact: str = Field("omnisharp-roslyn")
    omnisharp_version: str = Field("1.39.10.4")
    omnisharp_classifiers: Annotated[List[str], NoDecode] = Field(default_factory=_default_omnisharp_classifiers)
    sloop_coordinate: Optional[str] = Field(None)

    # Pipeline behaviour
    expand_workers: int = Field(1)
    prune_stale_plugins: bool = Field(False)

    @field_validator("analyzer_plugins", "omnisharp_classifiers", mode="before")
    @classmethod
    def _split_list(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [item.strip() for item in text.split(",") if item.strip()]

    @property
    def has_private_credentials(self) -> bool:
        return bool(self.artifactory_private_username and self.artifactory_private_password)

    @property
    def resolved_output_dir(self) -> Path:
        return self.resources_output_dir or (self.build_dir / "generated-resources" / "plugins")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance for dependency injection."""
    return Settings()
