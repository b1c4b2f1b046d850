import httpx
import pytest

from builders import build_settings, install_artifact
from plugin_assembler.modules.pluginassembly.domain import ArtifactCoordinates, ArtifactNotFoundError
from plugin_assembler.modules.pluginassembly.fileget import ArtifactResolver, RepositoryDownloader


def test_resolve_from_local_cache(cache_dir):
    path = install_artifact(cache_dir, "org.sonarsource.java:sonar-java-plugin:1.0")
    resolver = ArtifactResolver(cache_dir)

    resolved = resolver.resolve([ArtifactCoordinates.parse("org.sonarsource.java:sonar-java-plugin:1.0")])

    assert len(resolved) == 1
    assert resolved[0].path == path
    assert resolved[0].classifier is None


def test_resolve_reports_every_missing_coordinate(cache_dir):
    install_artifact(cache_dir, "g:present:1")
    resolver = ArtifactResolver(cache_dir)

    with pytest.raises(ArtifactNotFoundError) as excinfo:
        resolver.resolve(
            [
                ArtifactCoordinates.parse("g:missing-one:1"),
                ArtifactCoordinates.parse("g:present:1"),
                ArtifactCoordinates.parse("g:missing-two:2:net6@zip"),
            ]
        )

    assert excinfo.value.missing == ["g:missing-one:1", "g:missing-two:2:net6@zip"]


def test_resolve_downloads_into_cache(tmp_path, cache_dir):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"downloaded")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    downloader = RepositoryDownloader(build_settings(tmp_path), client=client)
    resolver = ArtifactResolver(cache_dir, downloader=downloader)
    coords = ArtifactCoordinates.parse("g:remote:3")

    resolved = resolver.resolve([coords])

    assert resolved[0].path == resolver.cache_path(coords)
    assert resolved[0].path.read_bytes() == b"downloaded"


def test_resolve_treats_remote_404_as_missing(tmp_path, cache_dir):
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    resolver = ArtifactResolver(cache_dir, downloader=RepositoryDownloader(build_settings(tmp_path), client=client))

    with pytest.raises(ArtifactNotFoundError):
        resolver.resolve([ArtifactCoordinates.parse("g:remote:3")])


def test_resolve_propagates_server_errors(tmp_path, cache_dir):
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    resolver = ArtifactResolver(cache_dir, downloader=RepositoryDownloader(build_settings(tmp_path), client=client))

    with pytest.raises(httpx.HTTPStatusError):
        resolver.resolve([ArtifactCoordinates.parse("g:remote:3")])
