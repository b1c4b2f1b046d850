import pytest

from plugin_assembler.modules.pluginassembly.domain import (
    DEFAULT_RENAME_RULES,
    AmbiguousRenameError,
    NamingPatternRule,
)
from plugin_assembler.modules.pluginassembly.staging import normalize_names


def test_versioned_csharp_plugins_get_stable_names(tmp_path):
    (tmp_path / "sonar-csharp-plugin-10.10.0.1.jar").write_bytes(b"oss")
    (tmp_path / "sonar-csharp-enterprise-plugin-10.10.0.1.jar").write_bytes(b"ent")
    (tmp_path / "sonar-java-plugin-8.0.jar").write_bytes(b"java")

    renamed = normalize_names(tmp_path, DEFAULT_RENAME_RULES)

    assert renamed == {
        "sonar-csharp-enterprise-plugin-10.10.0.1.jar": "sonar-csharp-enterprise-plugin.jar",
        "sonar-csharp-plugin-10.10.0.1.jar": "sonar-csharp-plugin.jar",
    }
    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "sonar-csharp-enterprise-plugin.jar",
        "sonar-csharp-plugin.jar",
        "sonar-java-plugin-8.0.jar",
    ]
    assert (tmp_path / "sonar-csharp-plugin.jar").read_bytes() == b"oss"
    assert (tmp_path / "sonar-csharp-enterprise-plugin.jar").read_bytes() == b"ent"


def test_second_run_is_a_noop(tmp_path):
    (tmp_path / "sonar-csharp-plugin-1.0.jar").write_bytes(b"oss")
    normalize_names(tmp_path, DEFAULT_RENAME_RULES)

    assert normalize_names(tmp_path, DEFAULT_RENAME_RULES) == {}
    assert [path.name for path in tmp_path.iterdir()] == ["sonar-csharp-plugin.jar"]


def test_rerun_replaces_previous_canonical_file(tmp_path):
    (tmp_path / "sonar-csharp-plugin.jar").write_bytes(b"previous")
    (tmp_path / "sonar-csharp-plugin-2.0.jar").write_bytes(b"fresh")

    normalize_names(tmp_path, DEFAULT_RENAME_RULES)

    assert [path.name for path in tmp_path.iterdir()] == ["sonar-csharp-plugin.jar"]
    assert (tmp_path / "sonar-csharp-plugin.jar").read_bytes() == b"fresh"


def test_ambiguous_matches_fail_without_renaming(tmp_path):
    (tmp_path / "tool-1.0.jar").write_bytes(b"")
    (tmp_path / "tool-2.0.jar").write_bytes(b"")

    with pytest.raises(AmbiguousRenameError) as excinfo:
        normalize_names(tmp_path, [NamingPatternRule(r"tool-.*\.jar", "tool.jar")])

    assert excinfo.value.candidates == ["tool-1.0.jar", "tool-2.0.jar"]
    assert not (tmp_path / "tool.jar").exists()
