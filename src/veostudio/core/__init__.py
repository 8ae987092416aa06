"""Core generation lifecycle for Veo Studio."""

from .errors import classify_exception, classify_message
from .extension import ExtensionError, can_extend, derive_extend_request
from .orchestrator import GenerationOrchestrator, OrchestratorError
from .request_builder import (
    RawRequestInputs,
    RequestBuilder,
    RequestValidationError,
    build_request,
)

__all__ = [
    "ExtensionError",
    "GenerationOrchestrator",
    "OrchestratorError",
    "RawRequestInputs",
    "RequestBuilder",
    "RequestValidationError",
    "build_request",
    "can_extend",
    "classify_exception",
    "classify_message",
    "derive_extend_request",
]
