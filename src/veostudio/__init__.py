"""Veo Studio: generate, retry and extend short videos with Google Veo."""

__version__ = "0.1.0"
