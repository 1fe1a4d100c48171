"""Tests for Cargo.toml parsing and crate name extraction."""

import pytest

from cargo_recent.errors import ManifestUnreadableError
from cargo_recent.manifest import (
    extract_project_name,
    has_manifest,
    is_workspace_manifest,
    read_manifest,
)


class TestExtractProjectName:
    """Test crate name lookup."""

    def test_name_from_package(self, tmp_path, write_manifest):
        write_manifest(tmp_path, name="test-crate")
        assert extract_project_name(tmp_path) == "test-crate"

    def test_fallback_to_directory_name(self, tmp_path):
        crate_dir = tmp_path / "fallback-crate"
        crate_dir.mkdir()
        (crate_dir / "Cargo.toml").write_text("")

        assert extract_project_name(crate_dir) == "fallback-crate"

    def test_workspace_without_package_uses_directory(self, tmp_path, write_manifest):
        root = tmp_path / "my-workspace"
        write_manifest(root, workspace=True, members=["a"])
        assert extract_project_name(root) == "my-workspace"

    def test_workspace_package_name_not_used(self, tmp_path):
        root = tmp_path / "ws"
        root.mkdir()
        (root / "Cargo.toml").write_text(
            '[workspace]\nmembers = ["a"]\n\n[workspace.package]\nversion = "1.0.0"\n'
        )
        assert extract_project_name(root) == "ws"

    def test_root_package_in_workspace(self, tmp_path, write_manifest):
        write_manifest(tmp_path, name="root-crate", workspace=True, members=["a"])
        assert extract_project_name(tmp_path) == "root-crate"

    def test_invalid_toml_uses_name_line(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text(
            '[package]\nname = "half-edited"\nversion = \n[dependencies\n'
        )
        assert extract_project_name(tmp_path) == "half-edited"

    def test_invalid_toml_without_name(self, tmp_path):
        crate_dir = tmp_path / "broken"
        crate_dir.mkdir()
        (crate_dir / "Cargo.toml").write_text("[package\n")
        assert extract_project_name(crate_dir) == "broken"

    def test_top_level_name_key(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text('name = "bare"\n')
        assert extract_project_name(tmp_path) == "bare"

    def test_dependency_names_are_not_the_crate_name(self, tmp_path):
        crate_dir = tmp_path / "app"
        crate_dir.mkdir()
        (crate_dir / "Cargo.toml").write_text(
            '[dependencies.serde]\nversion = "1"\n\n[[bin]]\nname = "tool"\npath = "src/main.rs"\n'
        )
        assert extract_project_name(crate_dir) == "app"

    def test_missing_manifest_raises(self, tmp_path):
        with pytest.raises(ManifestUnreadableError) as exc_info:
            extract_project_name(tmp_path)
        assert exc_info.value.manifest_path == tmp_path / "Cargo.toml"

    @pytest.mark.parametrize("name", ["a", "crate-b", "snake_case", "with.dots"])
    def test_name_literal_round_trip(self, tmp_path, name, write_manifest):
        write_manifest(tmp_path / "crate", name=name)
        assert extract_project_name(tmp_path / "crate") == name


class TestReadManifest:
    """Test manifest parsing into CrateManifest."""

    def test_workspace_members(self, tmp_path, write_manifest):
        write_manifest(tmp_path, workspace=True, members=["crates/a", "crates/b"])

        manifest = read_manifest(tmp_path)

        assert manifest.is_workspace
        assert manifest.members == ["crates/a", "crates/b"]
        assert manifest.name is None
        assert manifest.path == tmp_path / "Cargo.toml"

    def test_plain_crate(self, tmp_path, write_manifest):
        write_manifest(tmp_path, name="plain")

        manifest = read_manifest(tmp_path)

        assert not manifest.is_workspace
        assert manifest.members == []
        assert manifest.name == "plain"

    @pytest.mark.parametrize("members", ["5", '"crates/a"', "{ path = \"a\" }"])
    def test_malformed_members_are_dropped(self, tmp_path, members):
        (tmp_path / "Cargo.toml").write_text(f"[workspace]\nmembers = {members}\n")

        manifest = read_manifest(tmp_path)

        assert manifest.is_workspace
        assert manifest.members == []

    def test_non_string_members_are_skipped(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text('[workspace]\nmembers = ["a", 3, "b"]\n')
        assert read_manifest(tmp_path).members == ["a", "b"]

    def test_workspace_header_in_invalid_toml(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text('[workspace]\nmembers = ["a",\n')
        assert is_workspace_manifest(tmp_path)

    def test_workspace_word_in_value_is_not_a_header(self, tmp_path):
        (tmp_path / "Cargo.toml").write_text(
            '[package]\nname = "x"\ndescription = "not a [workspace] root"\n'
        )
        assert not is_workspace_manifest(tmp_path)

    def test_has_manifest(self, tmp_path):
        assert not has_manifest(tmp_path)
        (tmp_path / "Cargo.toml").mkdir()
        assert not has_manifest(tmp_path)
