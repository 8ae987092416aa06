"""Scripted stand-ins for the remote API and the credential provider."""

import asyncio

from veostudio.api.base import OperationStatus, RemoteArtifact
from veostudio.models.request import GenerateVideoParams


class FakeCredentials:
    """In-memory credential provider."""

    def __init__(
        self, key: str = "test-key", new_key: str | None = None, fail: bool = False
    ) -> None:
        self.key = key
        self.new_key = new_key
        self.fail = fail
        self.selections = 0

    @property
    def api_key(self) -> str:
        return self.key

    async def has_usable_credential(self) -> bool:
        if self.fail:
            raise RuntimeError("credential bridge unavailable")
        return bool(self.key)

    async def request_credential_selection(self) -> None:
        self.selections += 1
        if self.new_key:
            self.key = self.new_key


class FakeVideoAPI:
    """Scripted remote API: each status query pops the next scripted status."""

    def __init__(
        self,
        statuses: list[OperationStatus] | None = None,
        submit_error: Exception | None = None,
        query_error: Exception | None = None,
        data: bytes = b"fake-video",
    ) -> None:
        self.statuses = list(statuses or [])
        self.submit_error = submit_error
        self.query_error = query_error
        self.data = data
        self.submitted: list[GenerateVideoParams] = []
        self.query_count = 0
        self.fetched: list[RemoteArtifact] = []

    async def submit(self, params: GenerateVideoParams) -> OperationStatus:
        self.submitted.append(params)
        if self.submit_error is not None:
            raise self.submit_error
        return pending(f"operations/op-{len(self.submitted)}")

    async def query_status(self, status: OperationStatus) -> OperationStatus:
        self.query_count += 1
        if self.query_error is not None:
            raise self.query_error
        if self.statuses:
            return self.statuses.pop(0)
        return pending(status.handle)

    async def fetch_artifact(self, artifact: RemoteArtifact) -> tuple[bytes, str]:
        self.fetched.append(artifact)
        return self.data, "video/mp4"

    def estimate_cost(self, model: str, duration: int = 8) -> float:
        return 1.2


def pending(handle: str = "operations/op-1") -> OperationStatus:
    return OperationStatus(handle=handle, done=False)


def finished(count: int = 1, handle: str = "operations/op-1") -> OperationStatus:
    artifacts = tuple(
        RemoteArtifact(
            uri=f"https://generativelanguage.googleapis.com/v1beta/files/v{i}:download?alt=media",
            video=f"remote-video-{i}",
        )
        for i in range(count)
    )
    return OperationStatus(handle=handle, done=True, artifacts=artifacts)


class GatedVideoAPI(FakeVideoAPI):
    """Holds the first call to ``gated`` until ``gate`` is set.

    ``gated`` is one of ``submit``, ``query_status`` or ``fetch_artifact``.
    ``entered`` is set once that first call is waiting. A held status query
    answers with a finished operation; a held fetch answers ``first_data``.
    """

    def __init__(
        self,
        *args,
        gated: str = "submit",
        first_error: Exception | None = None,
        first_data: bytes = b"stale-video",
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.gated = gated
        self.first_error = first_error
        self.first_data = first_data
        self.gate = asyncio.Event()
        self.entered = asyncio.Event()
        self._held = False

    async def _hold(self, name: str) -> bool:
        if name != self.gated or self._held:
            return False
        self._held = True
        self.entered.set()
        await self.gate.wait()
        if self.first_error is not None:
            raise self.first_error
        return True

    async def submit(self, params: GenerateVideoParams) -> OperationStatus:
        status = await super().submit(params)
        await self._hold("submit")
        return status

    async def query_status(self, status: OperationStatus) -> OperationStatus:
        if await self._hold("query_status"):
            self.query_count += 1
            return finished(handle=status.handle)
        return await super().query_status(status)

    async def fetch_artifact(self, artifact: RemoteArtifact) -> tuple[bytes, str]:
        if await self._hold("fetch_artifact"):
            self.fetched.append(artifact)
            return self.first_data, "video/mp4"
        return await super().fetch_artifact(artifact)
