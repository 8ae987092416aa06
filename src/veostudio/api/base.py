"""Protocols and value types shared by the remote-facing collaborators.

The orchestrator only talks to these protocols, so tests and alternative
back ends can substitute any object with matching methods.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from veostudio.models.request import GenerateVideoParams


class VideoAPIError(RuntimeError):
    """Raised when the remote API reports a failure or returns something unusable."""


@dataclass(frozen=True)
class RemoteArtifact:
    """One produced video as reported by the remote operation."""

    uri: str | None
    video: Any = None


@dataclass(frozen=True)
class OperationStatus:
    """Snapshot of a long-running remote operation."""

    handle: Any
    done: bool
    artifacts: tuple[RemoteArtifact, ...] = ()
    error: str | None = None
    filtered_reasons: tuple[str, ...] = ()

    @property
    def name(self) -> str:
        return str(getattr(self.handle, "name", None) or "<unnamed operation>")


@runtime_checkable
class VideoGenerationAPIProtocol(Protocol):
    """Remote long-running video generation API."""

    async def submit(self, params: GenerateVideoParams) -> OperationStatus:
        """Start a generation and return the initial operation status."""
        ...

    async def query_status(self, status: OperationStatus) -> OperationStatus:
        """Re-query a previously returned operation."""
        ...

    async def fetch_artifact(self, artifact: RemoteArtifact) -> tuple[bytes, str]:
        """Download an artifact, returning its bytes and MIME type."""
        ...


@runtime_checkable
class CredentialProviderProtocol(Protocol):
    """Source of the API key used for submission and download."""

    @property
    def api_key(self) -> str:
        """The active API key, empty when none is available."""
        ...

    async def has_usable_credential(self) -> bool:
        """Report whether a key is available right now."""
        ...

    async def request_credential_selection(self) -> None:
        """Ask the user to pick a key; returns once they have acted."""
        ...
