"""Tests for manifest discovery and parsing (infra/manifest_reader.py).

All manifest trees live under ``tmp_path``.  The not-found cases use a
unique manifest file name so files above the temporary directory can
never satisfy the search.

Coverage:
* ``find_nearest`` picks the closest manifest at or above the start.
* ``find_nearest`` raises ``ManifestNotFoundError`` at the root.
* ``read`` parses names, scripts and both ``workspaces`` forms.
* Malformed manifests raise ``ManifestParseError``.
* ``list_members`` expands patterns in a deterministic order.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from pkgrun.config import Settings
from pkgrun.exceptions import ManifestNotFoundError, ManifestParseError
from pkgrun.infra.manifest_reader import ManifestReader

WriteManifest = Callable[..., Path]

_UNIQUE_NAME = "pkgrun-test-manifest-7f3a.json"


# ---------------------------------------------------------------------------
# find_nearest
# ---------------------------------------------------------------------------

class TestFindNearest:
    def test_manifest_in_start_directory(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        manifest = write_manifest(".", {"name": "here"})
        package = ManifestReader().find_nearest(tmp_path)

        assert package.name == "here"
        assert package.manifest_path == manifest.resolve()
        assert package.directory == tmp_path.resolve()

    def test_nearest_ancestor_wins(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        write_manifest(".", {"name": "outer"})
        write_manifest("a", {"name": "middle"})
        start = tmp_path / "a" / "b" / "c"
        start.mkdir(parents=True)

        package = ManifestReader().find_nearest(start)
        assert package.name == "middle"
        assert package.directory == (tmp_path / "a").resolve()

    def test_directory_named_like_manifest_is_ignored(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        write_manifest(".", {"name": "outer"})
        (tmp_path / "inner" / "package.json").mkdir(parents=True)

        package = ManifestReader().find_nearest(tmp_path / "inner")
        assert package.name == "outer"

    def test_not_found_raises(self, tmp_path: Path) -> None:
        reader = ManifestReader(Settings(manifest_name=_UNIQUE_NAME))
        with pytest.raises(ManifestNotFoundError, match="Could not find") as exc_info:
            reader.find_nearest(tmp_path)
        assert _UNIQUE_NAME in str(exc_info.value)

    def test_configured_manifest_name(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        write_manifest(".", {"name": "custom"}, name=_UNIQUE_NAME)
        (tmp_path / "sub").mkdir()

        reader = ManifestReader(Settings(manifest_name=_UNIQUE_NAME))
        assert reader.find_nearest(tmp_path / "sub").name == "custom"

    def test_malformed_nearest_is_fatal(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        write_manifest(".", {"name": "outer"})
        write_manifest("inner", "{not json")

        with pytest.raises(ManifestParseError, match="Malformed JSON"):
            ManifestReader().find_nearest(tmp_path / "inner")


# ---------------------------------------------------------------------------
# read
# ---------------------------------------------------------------------------

class TestRead:
    def test_scripts_keep_manifest_order(self, write_manifest: WriteManifest) -> None:
        manifest = write_manifest(
            ".",
            {"name": "app", "scripts": {"zeta": "z", "alpha": "a", "mid": "m"}},
        )
        package = ManifestReader().read(manifest)
        assert list(package.scripts) == ["zeta", "alpha", "mid"]
        assert package.get_script("alpha") == "a"

    def test_missing_fields_default(self, write_manifest: WriteManifest) -> None:
        package = ManifestReader().read(write_manifest(".", {}))
        assert package.name == ""
        assert dict(package.scripts) == {}
        assert package.is_workspace is False
        assert package.workspace_patterns == ()
        assert package.parent is None

    def test_null_scripts_is_empty(self, write_manifest: WriteManifest) -> None:
        package = ManifestReader().read(write_manifest(".", {"name": "x", "scripts": None}))
        assert dict(package.scripts) == {}

    def test_workspaces_list_form(self, write_manifest: WriteManifest) -> None:
        package = ManifestReader().read(
            write_manifest(".", {"name": "root", "workspaces": ["packages/*", "tools/cli"]}),
        )
        assert package.is_workspace is True
        assert package.workspace_patterns == ("packages/*", "tools/cli")

    def test_workspaces_object_form(self, write_manifest: WriteManifest) -> None:
        package = ManifestReader().read(
            write_manifest(
                ".",
                {
                    "name": "root",
                    "workspaces": {"packages": ["apps/*"], "nohoist": ["**/react-native"]},
                },
            ),
        )
        assert package.is_workspace is True
        assert package.workspace_patterns == ("apps/*",)

    def test_empty_workspaces_object_is_still_workspace(
        self, write_manifest: WriteManifest,
    ) -> None:
        package = ManifestReader().read(write_manifest(".", {"workspaces": {}}))
        assert package.is_workspace is True
        assert package.workspace_patterns == ()

    @pytest.mark.parametrize(
        "payload, message",
        [
            ("{oops", "Malformed JSON"),
            ("[1, 2]", "JSON object"),
            ('{"name": 3}', '"name"'),
            ('{"scripts": []}', '"scripts"'),
            ('{"scripts": {"build": 1}}', 'Script "build"'),
            ('{"workspaces": "packages/*"}', '"workspaces"'),
            ('{"workspaces": [1]}', '"workspaces"'),
        ],
    )
    def test_malformed_content_raises(
        self, write_manifest: WriteManifest, payload: str, message: str,
    ) -> None:
        manifest = write_manifest(".", payload)
        with pytest.raises(ManifestParseError, match=message):
            ManifestReader().read(manifest)

    def test_unreadable_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestParseError, match="Could not read"):
            ManifestReader().read(tmp_path / "missing" / "package.json")

    def test_invalid_utf8_raises(self, tmp_path: Path) -> None:
        manifest = tmp_path / "package.json"
        manifest.write_bytes(b'{"name": "\xff"}')
        with pytest.raises(ManifestParseError, match="Could not read"):
            ManifestReader().read(manifest)


# ---------------------------------------------------------------------------
# list_members
# ---------------------------------------------------------------------------

class TestListMembers:
    def test_members_sorted_lexically(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        root = write_manifest(".", {"name": "root", "workspaces": ["packages/*"]})
        write_manifest("packages/app-b", {"name": "app-b"})
        write_manifest("packages/app-a", {"name": "app-a"})
        write_manifest("packages/core", {"name": "core"})

        reader = ManifestReader()
        workspace = reader.read(root)
        members = reader.list_members(workspace)

        assert [member.name for member in members] == ["app-a", "app-b", "core"]
        assert all(member.parent is workspace for member in members)

    def test_pattern_order_then_dedupe(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        root = write_manifest(
            ".", {"name": "root", "workspaces": ["tools/*", "packages/*", "tools/zed"]},
        )
        write_manifest("packages/alpha", {"name": "alpha"})
        write_manifest("tools/zed", {"name": "zed"})

        reader = ManifestReader()
        members = reader.list_members(reader.read(root))
        assert [member.name for member in members] == ["zed", "alpha"]

    def test_patterns_expand_relative_to_workspace(
        self,
        tmp_path: Path,
        write_manifest: WriteManifest,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        root = write_manifest(".", {"name": "root", "workspaces": ["./packages/*/"]})
        write_manifest("packages/web", {"name": "web"})
        elsewhere = tmp_path / "packages" / "web"
        monkeypatch.chdir(elsewhere)

        reader = ManifestReader()
        members = reader.list_members(reader.read(root))
        assert [member.name for member in members] == ["web"]

    def test_skips_files_and_dirs_without_manifest(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        root = write_manifest(".", {"name": "root", "workspaces": ["packages/*"]})
        write_manifest("packages/real", {"name": "real"})
        (tmp_path / "packages" / "empty").mkdir()
        (tmp_path / "packages" / "README.md").write_text("hi", encoding="utf-8")

        reader = ManifestReader()
        members = reader.list_members(reader.read(root))
        assert [member.name for member in members] == ["real"]

    def test_malformed_member_is_fatal(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        root = write_manifest(".", {"name": "root", "workspaces": ["packages/*"]})
        write_manifest("packages/broken", "{")

        reader = ManifestReader()
        with pytest.raises(ManifestParseError):
            reader.list_members(reader.read(root))

    def test_absolute_pattern_ignored(
        self, tmp_path: Path, write_manifest: WriteManifest,
    ) -> None:
        absolute = (tmp_path / "packages" / "*").as_posix()
        root = write_manifest(".", {"name": "root", "workspaces": [absolute]})
        write_manifest("packages/a", {"name": "a"})

        reader = ManifestReader()
        assert reader.list_members(reader.read(root)) == []
