"""Media encoding and generated-video storage for Veo Studio."""

from .encoding import load_image, load_media, load_video
from .store import ArtifactStore, ArtifactStoreError

__all__ = [
    "ArtifactStore",
    "ArtifactStoreError",
    "load_image",
    "load_media",
    "load_video",
]
