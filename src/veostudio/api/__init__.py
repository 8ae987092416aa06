"""API client module for Veo Studio."""

from .base import (
    CredentialProviderProtocol,
    OperationStatus,
    RemoteArtifact,
    VideoAPIError,
    VideoGenerationAPIProtocol,
)
from .credentials import SettingsCredentialProvider
from .veo_client import VeoClient

__all__ = [
    "CredentialProviderProtocol",
    "OperationStatus",
    "RemoteArtifact",
    "SettingsCredentialProvider",
    "VeoClient",
    "VideoAPIError",
    "VideoGenerationAPIProtocol",
]
