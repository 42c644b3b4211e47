"""
Smoke tests — the package imports and the entrypoint responds.
"""

from click.testing import CliRunner

from kdcontext import __version__
from kdcontext.main import cli


class TestBootstrap:
    def test_version_is_set(self):
        assert __version__
        assert isinstance(__version__, str)

    def test_cli_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_packages_import(self):
        import kdcontext.adapters
        import kdcontext.core.config
        import kdcontext.core.data
        import kdcontext.core.engine.executor
        import kdcontext.core.models
        import kdcontext.core.observability.logging_config
        import kdcontext.core.use_cases.scaffold  # noqa: F401

    def test_packaged_data_present(self):
        from kdcontext.core.data import CONTENT_DIR, LAYOUT_FILE

        assert LAYOUT_FILE.is_file()
        for name in ("CLAUDE.md", "README.md", "gitignore.txt"):
            assert (CONTENT_DIR / name).is_file()
