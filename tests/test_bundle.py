import io
import tarfile

import pytest

from builders import make_plugin_jar, make_tgz_bytes, make_zip
from plugin_assembler.modules.pluginassembly.domain import (
    BundleNotFoundError,
    PluginNotFoundError,
    UnsafeArchiveEntryError,
)
from plugin_assembler.modules.pluginassembly.staging import unpack_embedded_bundle

BUNDLE_FILES = {
    "package/package.json": b'{"name": "sonarjs"}',
    "package/bin/server.cjs": b"\x00\x01binary\xff",
    "package/node_modules/dep/index.js": b"module.exports = 1;\n",
}


def test_bundle_is_reproduced_byte_for_byte(tmp_path):
    plugins = tmp_path / "plugins"
    make_plugin_jar(plugins / "sonar-javascript-plugin-10.23.0.jar", "sonarjs-1.0.0.tgz", BUNDLE_FILES)

    extracted = unpack_embedded_bundle(plugins)

    bridge = plugins / "eslint-bridge"
    assert len(extracted) == len(BUNDLE_FILES)
    for name, content in BUNDLE_FILES.items():
        assert (bridge / name).read_bytes() == content
    assert not (bridge / "sonarjs-1.0.0.tgz").exists()
    assert not list(bridge.glob("*.tgz"))


def test_directory_entries_are_created(tmp_path):
    plugins = tmp_path / "plugins"
    payload = make_tgz_bytes({"package/a.txt": b"a"}, directories=("package/", "package/empty/"))
    make_zip(plugins / "sonar-javascript-plugin-1.jar", {"sonarjs-2.tgz": payload})

    unpack_embedded_bundle(plugins)

    assert (plugins / "eslint-bridge" / "package" / "empty").is_dir()


def test_missing_plugin_is_fatal_and_extracts_nothing(tmp_path):
    plugins = tmp_path / "plugins"
    plugins.mkdir()
    (plugins / "sonar-java-plugin-1.jar").write_bytes(b"")

    with pytest.raises(PluginNotFoundError):
        unpack_embedded_bundle(plugins)

    assert not (plugins / "eslint-bridge").exists()


def test_missing_bundle_entry_is_fatal(tmp_path):
    plugins = tmp_path / "plugins"
    make_plugin_jar(plugins / "sonar-javascript-plugin-1.jar", bundle_name=None)

    with pytest.raises(BundleNotFoundError):
        unpack_embedded_bundle(plugins)

    assert not (plugins / "eslint-bridge").exists()


def test_first_plugin_is_used_when_several_match(tmp_path, caplog):
    plugins = tmp_path / "plugins"
    make_plugin_jar(plugins / "sonar-javascript-plugin-1.jar", "sonarjs-1.tgz", {"one.txt": b"1"})
    make_plugin_jar(plugins / "sonar-javascript-plugin-2.jar", "sonarjs-2.tgz", {"two.txt": b"2"})

    unpack_embedded_bundle(plugins)

    assert (plugins / "eslint-bridge" / "one.txt").exists()
    assert not (plugins / "eslint-bridge" / "two.txt").exists()
    assert "candidates" in caplog.text


def test_traversal_entries_are_rejected_and_tarball_removed(tmp_path):
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        info = tarfile.TarInfo("../../escaped.txt")
        info.size = 4
        tar.addfile(info, io.BytesIO(b"evil"))
    plugins = tmp_path / "plugins"
    make_zip(plugins / "sonar-javascript-plugin-1.jar", {"sonarjs-1.tgz": buffer.getvalue()})

    with pytest.raises(UnsafeArchiveEntryError):
        unpack_embedded_bundle(plugins)

    assert not (tmp_path / "escaped.txt").exists()
    assert not (plugins / "eslint-bridge" / "sonarjs-1.tgz").exists()
