"""Media encoding for user-supplied images and videos.

Turns a file on disk into a ``MediaFile`` the request models can carry.
"""

import mimetypes
from pathlib import Path

from veostudio.models.request import MediaFile

IMAGE_MIME_TYPES = frozenset({"image/png", "image/jpeg", "image/webp"})
VIDEO_MIME_TYPES = frozenset({"video/mp4", "video/quicktime", "video/webm"})


def guess_mime_type(path: Path) -> str | None:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type


def load_media(path: Path | str, allowed: frozenset[str] | None = None) -> MediaFile:
    """Read *path* into a MediaFile.

    Args:
        path: File to read.
        allowed: Optional set of accepted MIME types.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the MIME type cannot be determined or is not allowed.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Media file not found: {path}")

    mime_type = guess_mime_type(path)
    if mime_type is None:
        raise ValueError(f"Cannot determine the media type of {path.name}")
    if allowed is not None and mime_type not in allowed:
        raise ValueError(
            f"Unsupported media type {mime_type} for {path.name}. "
            f"Expected one of: {', '.join(sorted(allowed))}"
        )

    return MediaFile(name=path.name, mime_type=mime_type, data=path.read_bytes())


def load_image(path: Path | str) -> MediaFile:
    return load_media(path, IMAGE_MIME_TYPES)


def load_video(path: Path | str) -> MediaFile:
    return load_media(path, VIDEO_MIME_TYPES)
