"""
Tests for the kdcontext command — output, exit codes, flags.
"""

import shutil
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from kdcontext.main import cli

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def in_root(scaffold_root: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(scaffold_root)
    return scaffold_root


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Kernel Development Context" in result.output
        assert "--quiet" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_module_entrypoint(self):
        result = subprocess.run(
            [sys.executable, "-m", "kdcontext", "--version"],
            cwd=Path(__file__).resolve().parent.parent,
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0, result.stderr
        assert "kdcontext, version 0.1.0" in result.stdout

    def test_rejects_arguments(self, in_root: Path):
        result = CliRunner().invoke(cli, ["somewhere"])
        assert result.exit_code != 0
        assert not (in_root / "CLAUDE.md").exists()


@requires_git
class TestScaffoldCommand:
    def test_scaffolds_current_directory(self, in_root: Path, git_env):
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 0, result.output
        assert "🚀 Initializing Kernel Development Context Project..." in result.output
        assert "📦 Initializing git repository..." in result.output
        assert "✓ CLAUDE.md created" in result.output
        assert "✅ Kernel Development Context Project initialized successfully!" in result.output
        assert "📋 Next steps:" in result.output
        assert "./subsystems/networking/" in result.output
        assert (in_root / "CLAUDE.md").is_file()
        assert (in_root / ".git").is_dir()

    def test_second_run_succeeds(self, in_root: Path, git_env):
        runner = CliRunner()
        assert runner.invoke(cli, []).exit_code == 0
        result = runner.invoke(cli, [])
        assert result.exit_code == 0, result.output
        assert "Git repository already exists, skipping initialization" in result.output
        assert "Nothing to commit" in result.output

    def test_quiet(self, in_root: Path, git_env):
        result = CliRunner().invoke(cli, ["--quiet"])
        assert result.exit_code == 0
        assert "📝" not in result.output
        assert "Next steps" not in result.output
        assert "initialized successfully" in result.output

    def test_failure_exit_code(self, in_root: Path, git_env):
        (in_root / "tools").write_text("not a directory")
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == 1
        assert "❌ ensure_directories failed" in result.output
        assert "initialized successfully" not in result.output
        assert not (in_root / ".gitignore").exists()
