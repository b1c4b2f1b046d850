from pathlib import Path

import pytest

from plugin_assembler.modules.pluginassembly.domain import UnsafeArchiveEntryError
from plugin_assembler.modules.pluginassembly.staging import find_first, name_predicate, safe_target


def test_find_first_returns_sorted_first_match(tmp_path):
    for name in ("sonar-javascript-plugin-2.jar", "sonar-javascript-plugin-1.jar", "sonar-java-plugin-1.jar"):
        (tmp_path / name).write_bytes(b"")

    found = find_first(tmp_path, name_predicate("sonar-javascript-plugin-", ".jar"))

    assert found == tmp_path / "sonar-javascript-plugin-1.jar"


def test_find_first_without_match_or_directory(tmp_path):
    (tmp_path / "sonar-javascript-plugin-1.zip").write_bytes(b"")
    (tmp_path / "sonar-javascript-plugin-dir.jar").mkdir()

    assert find_first(tmp_path, name_predicate("sonar-javascript-plugin-", ".jar")) is None
    assert find_first(tmp_path / "absent", lambda path: True) is None


def test_name_predicate_is_pure_on_names(tmp_path):
    jar = tmp_path / "sonar-javascript-plugin-1.jar"
    jar.write_bytes(b"")

    assert name_predicate("sonar-javascript-plugin-", ".jar")(jar)
    assert not name_predicate("sonar-python-plugin-", ".jar")(jar)


@pytest.mark.parametrize("member", ["package/a.txt", "./package/a.txt", "package\\win.txt"])
def test_safe_target_accepts_relative_members(tmp_path, member):
    target = safe_target(tmp_path, member)

    assert tmp_path.resolve() in target.resolve().parents


@pytest.mark.parametrize("member", ["/etc/passwd", "../up.txt", "package/../../up.txt"])
def test_safe_target_rejects_traversal(tmp_path, member):
    with pytest.raises(UnsafeArchiveEntryError):
        safe_target(tmp_path, member)


def test_safe_target_rejects_symlinked_escape(tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    root = tmp_path / "root"
    root.mkdir()
    (root / "link").symlink_to(outside, target_is_directory=True)

    with pytest.raises(UnsafeArchiveEntryError):
        safe_target(root, "link/file.txt")


def test_root_entry_maps_to_root(tmp_path):
    assert safe_target(tmp_path, "./") == Path(tmp_path)
