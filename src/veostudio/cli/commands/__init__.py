"""CLI commands for Veo Studio."""

from .config_cmd import config
from .generate import generate

__all__ = [
    "config",
    "generate",
]
