"""
Tests for the layout loader.
"""

import textwrap
from pathlib import Path

import pytest

from kdcontext.core.config.loader import LayoutError, load_layout
from kdcontext.core.data import CONTENT_DIR


def _write_manifest(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "layout.yml"
    path.write_text(textwrap.dedent(body))
    return path


class TestPackagedLayout:
    def test_top_level_files(self, layout):
        assert [f.relative_path for f in layout.files] == ["CLAUDE.md", "README.md"]
        assert layout.ignore_file.relative_path == ".gitignore"

    def test_literal_contents_match_content_files(self, layout):
        claude = layout.files[0].literal_content
        assert claude.startswith("# Kernel Development Context Project\n")
        assert claude.endswith("[To be determined - likely GPLv2 to match kernel licensing]\n")
        assert claude == (CONTENT_DIR / "CLAUDE.md").read_bytes().decode("utf-8")

        readme = layout.files[1].literal_content
        assert readme.startswith("# Kernel Development Context Files\n")
        assert readme.endswith("Check back frequently for new content!\n")

    def test_ignore_rules(self, layout):
        rules = layout.ignore_file.literal_content.splitlines()
        for rule in ("*~", "*.swp", ".vscode/", ".DS_Store", "*.ko", "Module.symvers", "*.tmp"):
            assert rule in rules

    def test_directories(self, layout):
        assert len(layout.directories) == 11
        paths = [d.relative_path for d in layout.directories]
        assert "subsystems/scheduler" in paths
        assert "templates/subsystem-guide" in paths

    def test_placeholders(self, layout):
        paths = [p.relative_path for p in layout.placeholders]
        assert len(paths) == 8
        assert paths[:5] == [
            "common/building.md",
            "common/booting.md",
            "common/debugging.md",
            "common/testing.md",
            "common/workflow.md",
        ]
        assert all(p.literal_content == "" for p in layout.placeholders)

    def test_commit_message(self, layout):
        lines = layout.commit_message.splitlines()
        assert lines[0] == "Initial project setup"
        assert lines[1] == ""
        assert lines[-1] == "- Add .gitignore"


class TestLoaderErrors:
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(LayoutError, match="not found"):
            load_layout(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write_manifest(tmp_path, "files: [unclosed\n")
        with pytest.raises(LayoutError, match="Invalid YAML"):
            load_layout(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = _write_manifest(tmp_path, "- just\n- a list\n")
        with pytest.raises(LayoutError, match="mapping"):
            load_layout(path)

    def test_missing_ignore_file(self, tmp_path: Path):
        path = _write_manifest(tmp_path, "commit_message: x\n")
        with pytest.raises(LayoutError, match="ignore_file"):
            load_layout(path)

    def test_escaping_path_rejected(self, tmp_path: Path):
        path = _write_manifest(tmp_path, """\
            directories:
              - ../outside
            ignore_file:
              path: .gitignore
              content: ""
            commit_message: x
        """)
        with pytest.raises(LayoutError, match="inside the scaffold root"):
            load_layout(path)

    def test_absolute_path_rejected(self, tmp_path: Path):
        path = _write_manifest(tmp_path, """\
            placeholders:
              - /etc/passwd
            ignore_file:
              path: .gitignore
              content: ""
            commit_message: x
        """)
        with pytest.raises(LayoutError):
            load_layout(path)

    def test_missing_source(self, tmp_path: Path):
        path = _write_manifest(tmp_path, """\
            ignore_file:
              path: .gitignore
              source: missing.txt
            commit_message: x
        """)
        with pytest.raises(LayoutError, match="Cannot read content"):
            load_layout(path)

    def test_empty_commit_message(self, tmp_path: Path):
        path = _write_manifest(tmp_path, """\
            ignore_file:
              path: .gitignore
              content: "*.o"
            commit_message: ""
        """)
        with pytest.raises(LayoutError, match="commit_message"):
            load_layout(path)


class TestCustomLayout:
    def test_source_resolves_next_to_manifest(self, tmp_path: Path):
        (tmp_path / "content").mkdir()
        (tmp_path / "content" / "ignore.txt").write_text("*.o\n")
        path = _write_manifest(tmp_path, """\
            files:
              - path: docs/index.md
                content: "# Docs"
            directories:
              - docs/guides
            ignore_file:
              path: .gitignore
              source: ignore.txt
            commit_message: Initial
        """)
        layout = load_layout(path)
        assert layout.files[0].literal_content == "# Docs"
        assert layout.ignore_file.literal_content == "*.o\n"
        assert [d.relative_path for d in layout.directories] == ["docs/guides"]
