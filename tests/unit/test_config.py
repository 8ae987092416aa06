"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from veostudio.config import load_settings
from veostudio.config.loader import ConfigLoader
from veostudio.config.settings import APISettings, GenerationSettings, Settings


@pytest.fixture(autouse=True)
def _no_env_keys(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    def test_default_values(self) -> None:
        settings = Settings()
        assert settings.output_dir == "videos"
        assert settings.generation.poll_interval == 10.0
        assert settings.generation.max_polls == 20
        assert settings.has_required_api_keys() is False
        assert settings.get_missing_api_keys() == ["GEMINI_API_KEY"]

    def test_loads_api_key_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "gk")
        assert APISettings().gemini_api_key.get_secret_value() == "gk"

    def test_accepts_api_key_alias(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_KEY", "ak")
        assert APISettings().gemini_api_key.get_secret_value() == "ak"

    def test_validates_ranges(self) -> None:
        with pytest.raises(ValueError):
            GenerationSettings(max_polls=0)
        with pytest.raises(ValueError):
            GenerationSettings(poll_interval=-1)
        with pytest.raises(ValueError):
            GenerationSettings(resolution="4k")


class TestConfigLoader:
    def test_load_yaml_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.yaml"
        cfg.write_text(
            "generation:\n  resolution: 1080p\n  max_polls: 5\noutput:\n  output_dir: clips\n"
        )
        settings = ConfigLoader(cfg).load_settings()
        assert settings.generation.resolution == "1080p"
        assert settings.generation.max_polls == 5
        assert settings.output_dir == "clips"

    def test_finds_default_file(self, tmp_path: Path) -> None:
        (tmp_path / "veostudio.yaml").write_text("generation:\n  aspect_ratio: '9:16'\n")
        assert load_settings().generation.aspect_ratio == "9:16"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("")
        assert load_settings(cfg).generation.max_polls == 20

    def test_missing_file_uses_defaults(self) -> None:
        assert ConfigLoader().find_config_file() is None
        assert load_settings().output_dir == "videos"

    @pytest.mark.parametrize("body", ["- generation\n- output\n", "just a string\n", "42\n"])
    def test_rejects_non_mapping_file(self, tmp_path: Path, body: str) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text(body)
        with pytest.raises(ValueError, match="must contain a mapping"):
            load_settings(cfg)

    def test_rejects_non_mapping_section(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text("generation:\n  - 1080p\n")
        with pytest.raises(ValueError, match="'generation'"):
            load_settings(cfg)
