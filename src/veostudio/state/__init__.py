"""Session state for Veo Studio."""

from .models import (
    CREDENTIAL_KINDS,
    ClassifiedError,
    ErrorKind,
    GeneratedVideo,
    GenerationSession,
    SessionState,
)

__all__ = [
    "CREDENTIAL_KINDS",
    "ClassifiedError",
    "ErrorKind",
    "GeneratedVideo",
    "GenerationSession",
    "SessionState",
]
