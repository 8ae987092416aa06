"""Local storage for the current generated video.

The store exposes at most one "current" video. Publishing a new one, or
releasing, deletes the previous file so stale handles stop resolving.
"""

import logging
import mimetypes
import shutil
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)

# System MIME tables disagree on the extension for some video types
_SUFFIXES = {"video/mp4": ".mp4", "video/webm": ".webm", "video/quicktime": ".mov"}


class ArtifactStoreError(RuntimeError):
    """Raised when a video cannot be written to or copied from the store."""


class ArtifactStore:
    """Writes generated videos to a directory, keeping only the current one."""

    def __init__(self, output_dir: str | Path = "videos") -> None:
        self.output_dir = Path(output_dir)
        self._current: Path | None = None

    @property
    def current(self) -> Path | None:
        """Path of the current video, or None if nothing is published."""
        return self._current

    def publish(self, data: bytes, mime_type: str = "video/mp4") -> Path:
        """Write *data* as the new current video and release the previous one.

        Returns:
            Path to the newly written file.
        """
        suffix = _SUFFIXES.get(mime_type) or mimetypes.guess_extension(mime_type) or ".mp4"
        path = self.output_dir / f"veo_{uuid.uuid4().hex[:12]}{suffix}"
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise ArtifactStoreError(f"Could not write video to {path}: {exc}") from exc

        self.release()
        self._current = path
        logger.info("Published video to %s (%d bytes)", path, len(data))
        return path

    def release(self) -> None:
        """Delete the current video file, if any."""
        if self._current is None:
            return
        previous, self._current = self._current, None
        previous.unlink(missing_ok=True)
        logger.debug("Released video %s", previous)

    def save_copy(self, destination: str | Path) -> Path:
        """Copy the current video to *destination* and return the new path.

        Raises:
            ArtifactStoreError: If there is no current video.
        """
        if self._current is None or not self._current.exists():
            raise ArtifactStoreError("There is no generated video to save.")
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(self._current, destination)
        logger.info("Saved video copy to %s", destination)
        return destination
