"""Allow ``python -m veostudio``."""

from veostudio.cli.app import app

app()
