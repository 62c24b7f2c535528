"""
Tests for manifest loading, validation and selection.
"""

from pathlib import Path

import pytest

from dotstrap.core import manifest
from dotstrap.core.errors import ManifestNotFoundError, ManifestParseError
from dotstrap.core.models import Override, OverrideKind, Platform, Selection


class TestLoad:
    """Tests for manifest.load()."""

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ManifestNotFoundError) as exc:
            manifest.load(tmp_path / "nope.yaml")
        assert exc.value.context["path"].endswith("nope.yaml")

    def test_packages_key_layout(self, write_manifest):
        path = write_manifest("""\
            packages:
              - name: ripgrep
                description: Fast grep
                gui: false
                work: false
              - name: slack
                description: Chat
                gui: true
                work: true
        """)
        entries = manifest.load(path)

        assert [e.name for e in entries] == ["ripgrep", "slack"]
        assert entries[0].description == "Fast grep"
        assert entries[0].gui is False and entries[0].work is False
        assert entries[1].gui is True and entries[1].work is True
        assert [e.index for e in entries] == [0, 1]

    def test_top_level_list_layout(self, write_manifest):
        path = write_manifest("""\
            - name: fzf
              description: Fuzzy finder
              gui: false
              work: false
        """)
        assert [e.name for e in manifest.load(path)] == ["fzf"]

    def test_empty_document(self, write_manifest):
        assert manifest.load(write_manifest("")) == []

    def test_flags_default_to_false(self, write_manifest):
        path = write_manifest("""\
            packages:
              - name: jq
        """)
        entry = manifest.load(path)[0]
        assert entry.description == ""
        assert entry.gui is False
        assert entry.work is False
        assert entry.overrides == {}

    def test_absent_null_and_string_overrides_are_distinct(self, write_manifest):
        path = write_manifest("""\
            packages:
              - name: plain
                gui: false
                work: false
              - name: rectangle
                gui: true
                work: false
                overrides:
                  linux: null
              - name: dust
                gui: false
                work: false
                overrides:
                  linux: du-dust
        """)
        plain, rectangle, dust = manifest.load(path)

        assert plain.override_for(Platform.LINUX_FEDORA).kind is OverrideKind.INHERIT
        assert rectangle.override_for(Platform.LINUX_FEDORA).kind is OverrideKind.SKIP
        assert rectangle.override_for(Platform.MACOS).kind is OverrideKind.INHERIT
        assert dust.overrides["linux"] == Override.rename("du-dust")

    def test_empty_string_override_inherits(self, write_manifest):
        path = write_manifest("""\
            packages:
              - name: bat
                overrides:
                  macos: ""
        """)
        entry = manifest.load(path)[0]
        assert entry.override_for(Platform.MACOS).kind is OverrideKind.INHERIT

    def test_null_overrides_block_is_empty(self, write_manifest):
        path = write_manifest("""\
            packages:
              - name: bat
                overrides:
        """)
        assert manifest.load(path)[0].overrides == {}

    def test_duplicate_names_are_kept(self, write_manifest):
        path = write_manifest("""\
            packages:
              - name: alacritty
                gui: true
                work: false
                overrides:
                  linux: null
              - name: alacritty
                gui: false
                work: false
                overrides:
                  macos: null
        """)
        entries = manifest.load(path)

        assert len(entries) == 2
        assert entries[0].overrides["linux"].kind is OverrideKind.SKIP
        assert entries[1].overrides["macos"].kind is OverrideKind.SKIP


class TestLoadErrors:
    """Tests for structurally invalid manifests."""

    @pytest.mark.parametrize("content, field", [
        ("packages:\n  - description: no name\n", "name"),
        ("packages:\n  - name: ''\n", "name"),
        ("packages:\n  - name: 42\n", "name"),
        ("packages:\n  - name: x\n    gui: 'true'\n", "gui"),
        ("packages:\n  - name: x\n    work: 1\n", "work"),
        ("packages:\n  - name: x\n    description: [a]\n", "description"),
        ("packages:\n  - name: x\n    overrides: linux\n", "overrides"),
        ("packages:\n  - name: x\n    overrides:\n      windows: y\n", "overrides.windows"),
        ("packages:\n  - name: x\n    overrides:\n      linux: [a]\n", "overrides.linux"),
    ])
    def test_invalid_entry(self, write_manifest, content, field):
        with pytest.raises(ManifestParseError) as exc:
            manifest.load(write_manifest(content))
        assert exc.value.context["field"] == field
        assert exc.value.context["index"] == 0

    def test_entry_not_a_mapping(self, write_manifest):
        with pytest.raises(ManifestParseError) as exc:
            manifest.load(write_manifest("packages:\n  - ripgrep\n"))
        assert "mapping" in exc.value.message

    def test_mapping_without_packages_key(self, write_manifest):
        with pytest.raises(ManifestParseError):
            manifest.load(write_manifest("tools:\n  - name: x\n"))

    def test_packages_not_a_list(self, write_manifest):
        with pytest.raises(ManifestParseError):
            manifest.load(write_manifest("packages: ripgrep\n"))

    def test_yaml_syntax_error(self, write_manifest):
        with pytest.raises(ManifestParseError) as exc:
            manifest.load(write_manifest("packages: [\n"))
        assert "Invalid YAML" in exc.value.message

    def test_non_utf8_bytes(self, tmp_path):
        path = tmp_path / "packages.yaml"
        path.write_bytes(b"- name: caf\xe9\n")
        with pytest.raises(ManifestParseError) as exc:
            manifest.load(path)
        assert exc.value.context["path"] == str(path)

    def test_unreadable_file(self, write_manifest, monkeypatch):
        path = write_manifest("packages: []\n")

        def deny(self):
            raise PermissionError(13, "Permission denied", str(self))

        monkeypatch.setattr(Path, "read_bytes", deny)
        with pytest.raises(ManifestParseError) as exc:
            manifest.load(path)
        assert "Permission denied" in exc.value.message

    def test_error_reports_offending_index(self, write_manifest):
        path = write_manifest("""\
            packages:
              - name: ok
              - name: bad
                gui: maybe
        """)
        with pytest.raises(ManifestParseError) as exc:
            manifest.load(path)
        assert exc.value.context["index"] == 1


class TestQuery:
    """Tests for selection filtering."""

    def _entries(self, write_manifest):
        return manifest.load(write_manifest("""\
            packages:
              - name: personal-a
                work: false
              - name: work-a
                work: true
              - name: personal-b
                work: false
        """))

    def test_default_excludes_restricted(self, write_manifest):
        result = manifest.query(self._entries(write_manifest), Selection())
        assert [e.name for e in result] == ["personal-a", "personal-b"]

    def test_include_restricted_keeps_everything_in_order(self, write_manifest):
        entries = self._entries(write_manifest)
        result = manifest.query(entries, Selection(include_restricted=True))
        assert result == entries

    def test_unrestricted_entries_always_appear(self, write_manifest):
        entries = self._entries(write_manifest)
        for flag in (False, True):
            names = [e.name for e in manifest.query(entries, Selection(include_restricted=flag))]
            assert "personal-a" in names and "personal-b" in names

    def test_bundled_manifest_loads(self):
        path = Path(__file__).parent.parent / "packages.yaml"
        entries = manifest.load(path)
        assert len(entries) == 12
        assert sum(1 for e in entries if e.name == "alacritty") == 2
