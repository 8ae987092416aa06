"""YAML configuration loading for Veo Studio.

A config file holds two optional sections, ``generation`` and ``output``.
Secrets are never read from YAML; the API key comes from the environment
or a ``.env`` file through ``APISettings``.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from .settings import GenerationSettings, OutputSettings, Settings

logger = logging.getLogger(__name__)

# Searched in order in the working directory when no path is given
DEFAULT_CONFIG_FILES = ("veostudio.yaml", "veostudio.yml", "config.yaml", "config.yml")

_SECTIONS = {"generation": GenerationSettings, "output": OutputSettings}


class ConfigLoader:
    """Finds a YAML config file and turns it into ``Settings``.

    Args:
        config_path: Explicit config file. When None (or missing on disk)
            the default file names are searched instead.
    """

    def __init__(self, config_path: Path | str | None = None) -> None:
        self.config_path = Path(config_path) if config_path else None

    def find_config_file(self, search_dir: Path | None = None) -> Path | None:
        if self.config_path is not None:
            if self.config_path.is_file():
                return self.config_path
            logger.warning("Config file %s not found; searching defaults", self.config_path)

        directory = search_dir or Path.cwd()
        return next(
            (directory / name for name in DEFAULT_CONFIG_FILES if (directory / name).is_file()),
            None,
        )

    def read_sections(self, path: Path | None = None) -> dict[str, dict[str, Any]]:
        """Read the known sections from *path* (or the discovered file).

        Raises:
            ValueError: If the file or a known section is not a mapping.
        """
        config_file = path or self.find_config_file()
        if config_file is None:
            return {}

        with open(config_file, encoding="utf-8") as f:
            content = yaml.safe_load(f) or {}
        logger.debug("Loaded configuration from %s", config_file)
        if not isinstance(content, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping of sections")

        unknown = sorted(set(content) - set(_SECTIONS))
        if unknown:
            logger.warning("Ignoring unknown config sections in %s: %s", config_file, unknown)

        sections: dict[str, dict[str, Any]] = {}
        for name in _SECTIONS:
            values = content.get(name) or {}
            if not isinstance(values, dict):
                raise ValueError(f"Config section '{name}' in {config_file} must be a mapping")
            sections[name] = values
        return sections

    def load_settings(self) -> Settings:
        sections = self.read_sections()
        return Settings(
            **{name: model(**sections.get(name, {})) for name, model in _SECTIONS.items()}
        )


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from *config_path*, or from a default config file if present."""
    return ConfigLoader(config_path).load_settings()
