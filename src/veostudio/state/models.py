"""Session state models for the generation lifecycle."""

from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from veostudio.models.request import GenerateVideoParams


class SessionState(StrEnum):
    """Lifecycle states of a generation attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorKind(StrEnum):
    """Actionable failure categories."""

    CREDENTIAL_MISSING = "credential-missing"
    CREDENTIAL_INVALID = "credential-invalid"
    NOT_FOUND = "not-found"
    TIMEOUT = "timeout"
    EMPTY_RESULT = "empty-result"
    UNKNOWN = "unknown"
    VALIDATION = "validation"


# Kinds that send the user back to pick another API key
CREDENTIAL_KINDS = frozenset(
    {ErrorKind.CREDENTIAL_MISSING, ErrorKind.CREDENTIAL_INVALID, ErrorKind.NOT_FOUND}
)


class ClassifiedError(BaseModel):
    """A failure tagged with its category and a message fit for the user."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str = Field(..., description="Original error message")
    user_message: str = Field(..., description="Actionable message shown to the user")

    @property
    def requests_credential_selection(self) -> bool:
        return self.kind in CREDENTIAL_KINDS


class GeneratedVideo(BaseModel):
    """A downloaded video plus the remote handle needed to extend it."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Local file holding the video bytes")
    data: bytes = Field(..., repr=False)
    mime_type: str = Field(default="video/mp4")
    uri: str = Field(..., description="Remote content locator")
    video: Any = Field(default=None, description="Remote video object for reuse")


class GenerationSession(BaseModel):
    """Snapshot of the orchestrator's current attempt.

    The orchestrator never mutates a session; every transition produces
    a new snapshot with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    attempt_id: int = Field(default=0, ge=0)
    state: SessionState = Field(default=SessionState.IDLE)
    request: GenerateVideoParams | None = None
    operation: Any = Field(default=None, description="Remote operation handle while polling")
    polls: int = Field(default=0, ge=0, description="Status queries made so far")
    video: GeneratedVideo | None = None
    error: ClassifiedError | None = None
    credential_selection_requested: bool = False

    @property
    def is_busy(self) -> bool:
        return self.state in (SessionState.SUBMITTING, SessionState.POLLING)

    @property
    def is_terminal(self) -> bool:
        return self.state in (SessionState.SUCCEEDED, SessionState.FAILED)
