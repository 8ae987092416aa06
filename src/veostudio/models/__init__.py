"""Data models for Veo Studio."""

from .request import (
    MAX_REFERENCE_IMAGES,
    AspectRatio,
    GenerateVideoParams,
    GenerationMode,
    MediaFile,
    Resolution,
    VeoModel,
)

__all__ = [
    "MAX_REFERENCE_IMAGES",
    "AspectRatio",
    "GenerateVideoParams",
    "GenerationMode",
    "MediaFile",
    "Resolution",
    "VeoModel",
]
