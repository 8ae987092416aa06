"""Pydantic settings models for Veo Studio configuration."""

from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """API key configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    gemini_api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY"),
        description="Google Gemini/Veo API key (video generation and download)",
    )


class GenerationSettings(BaseSettings):
    """Defaults for new generation requests and the polling loop."""

    model_config = SettingsConfigDict(extra="ignore")

    model: Literal["veo-3.1-fast-generate-preview", "veo-3.1-generate-preview"] = Field(
        default="veo-3.1-fast-generate-preview",
        description="Veo model ID used when the request does not choose one",
    )
    resolution: Literal["720p", "1080p"] = Field(
        default="720p",
        description="Output resolution: 720p or 1080p",
    )
    aspect_ratio: Literal["16:9", "9:16"] = Field(
        default="16:9",
        description="Aspect ratio: 16:9 or 9:16",
    )
    poll_interval: float = Field(
        default=10.0,
        ge=0.0,
        le=300.0,
        description="Seconds to wait between operation status queries",
    )
    max_polls: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Maximum status queries before the attempt times out",
    )


class OutputSettings(BaseSettings):
    """Where generated videos are written."""

    model_config = SettingsConfigDict(extra="ignore")

    output_dir: str = Field(
        default="videos",
        description="Directory holding the current generated video",
    )


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    api: APISettings = Field(default_factory=APISettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)

    @property
    def output_dir(self) -> str:
        """Convenience accessor for the output directory."""
        return self.output.output_dir

    def has_required_api_keys(self) -> bool:
        """Check if required API keys are configured."""
        return bool(self.api.gemini_api_key.get_secret_value())

    def get_missing_api_keys(self) -> list[str]:
        """Return list of missing required API keys."""
        missing = []
        if not self.api.gemini_api_key.get_secret_value():
            missing.append("GEMINI_API_KEY")
        return missing
