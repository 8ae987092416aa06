"""Unit tests for media loading and the artifact store."""

from pathlib import Path

import pytest

from veostudio.assets import ArtifactStore, ArtifactStoreError, load_image, load_video
from veostudio.assets.encoding import load_media


class TestLoadMedia:
    def test_load_image(self, tmp_path: Path) -> None:
        path = tmp_path / "start.png"
        path.write_bytes(b"png-bytes")
        media = load_image(path)
        assert media.name == "start.png"
        assert media.mime_type == "image/png"
        assert media.data == b"png-bytes"

    def test_load_video(self, tmp_path: Path) -> None:
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"mp4")
        assert load_video(path).mime_type == "video/mp4"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_image(tmp_path / "nope.png")

    def test_wrong_kind(self, tmp_path: Path) -> None:
        path = tmp_path / "clip.mp4"
        path.write_bytes(b"mp4")
        with pytest.raises(ValueError, match="Unsupported media type"):
            load_image(path)

    def test_unknown_type(self, tmp_path: Path) -> None:
        path = tmp_path / "blob.zzz-unknown"
        path.write_bytes(b"?")
        with pytest.raises(ValueError, match="Cannot determine"):
            load_media(path)


class TestArtifactStore:
    def test_publish_writes_file(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path / "videos")
        path = store.publish(b"video", "video/mp4")
        assert path.parent == tmp_path / "videos"
        assert path.suffix == ".mp4"
        assert path.read_bytes() == b"video"
        assert store.current == path

    def test_publish_releases_previous(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path)
        first = store.publish(b"one")
        second = store.publish(b"two")
        assert not first.exists()
        assert store.current == second

    def test_release(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path)
        path = store.publish(b"one")
        store.release()
        store.release()
        assert store.current is None
        assert not path.exists()

    def test_save_copy(self, tmp_path: Path) -> None:
        store = ArtifactStore(tmp_path / "videos")
        store.publish(b"video")
        saved = store.save_copy(tmp_path / "out" / "final.mp4")
        assert saved.read_bytes() == b"video"
        assert store.current is not None and store.current.exists()

    def test_save_copy_without_video(self, tmp_path: Path) -> None:
        with pytest.raises(ArtifactStoreError):
            ArtifactStore(tmp_path).save_copy(tmp_path / "final.mp4")
