"""Allow ``python -m kdcontext``."""

from kdcontext.main import cli

cli()
