"""Configuration module for Veo Studio."""

from .loader import ConfigLoader, load_settings
from .settings import APISettings, GenerationSettings, OutputSettings, Settings

__all__ = [
    "APISettings",
    "ConfigLoader",
    "GenerationSettings",
    "OutputSettings",
    "Settings",
    "load_settings",
]
