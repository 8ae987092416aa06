"""Pytest configuration and fixtures for Veo Studio tests."""

from pathlib import Path

import pytest

from veostudio.assets.store import ArtifactStore
from veostudio.core.orchestrator import GenerationOrchestrator
from veostudio.models.request import GenerateVideoParams, MediaFile, Resolution

from fakes import FakeCredentials

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


@pytest.fixture
def png() -> MediaFile:
    return MediaFile(name="frame.png", mime_type="image/png", data=PNG_BYTES)


@pytest.fixture
def cat_request() -> GenerateVideoParams:
    return GenerateVideoParams(prompt="a cat", resolution=Resolution.P1080)


@pytest.fixture
def cat_request_720() -> GenerateVideoParams:
    return GenerateVideoParams(prompt="a cat", resolution=Resolution.P720)


@pytest.fixture
def credentials() -> FakeCredentials:
    return FakeCredentials()


@pytest.fixture
def store(tmp_path: Path) -> ArtifactStore:
    return ArtifactStore(tmp_path / "videos")


@pytest.fixture
def make_orchestrator(store: ArtifactStore, credentials: FakeCredentials):
    """Factory building an orchestrator around a FakeVideoAPI with no poll delay."""

    def _make(
        api: object, creds: object | None = None, max_polls: int = 20, listeners=()
    ) -> GenerationOrchestrator:
        return GenerationOrchestrator(
            api=api,  # type: ignore[arg-type]
            credentials=creds or credentials,  # type: ignore[arg-type]
            store=store,
            poll_interval=0,
            max_polls=max_polls,
            listeners=listeners,
        )

    return _make
