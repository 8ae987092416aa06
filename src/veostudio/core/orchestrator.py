"""Generation orchestrator: the request lifecycle state machine.

States run ``idle -> submitting -> polling -> succeeded | failed``. Each
``submit`` starts a new attempt with a fresh attempt id. After every
suspension point an attempt checks that it is still the current one and
quietly stops otherwise, so a superseded attempt can never overwrite the
state of a newer one.

All remote failures are caught here, classified and surfaced as a
``failed`` session. Nothing is retried automatically apart from the
bounded re-query of the operation status; recovery is always an explicit
``retry``, ``try_again`` or new ``submit``.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable

from tenacity import AsyncRetrying, RetryCallState, retry_if_result, stop_after_attempt

from veostudio.api.base import (
    CredentialProviderProtocol,
    OperationStatus,
    VideoAPIError,
    VideoGenerationAPIProtocol,
)
from veostudio.assets.store import ArtifactStore
from veostudio.config.settings import Settings
from veostudio.models.request import GenerateVideoParams
from veostudio.state.models import (
    ClassifiedError,
    GeneratedVideo,
    GenerationSession,
    SessionState,
)

from . import errors
from .extension import can_extend, derive_extend_request

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 10.0
DEFAULT_MAX_POLLS = 20

SessionListener = Callable[[GenerationSession], None]


class OrchestratorError(RuntimeError):
    """Raised when a command is not valid in the current state."""


class _Superseded(Exception):
    """The attempt was replaced by a newer submit or a reset."""


class _AttemptFailed(Exception):
    """The attempt ended without a remote error, e.g. timeout or empty result."""

    def __init__(self, error: ClassifiedError) -> None:
        super().__init__(error.message)
        self.error = error


def _not_done(status: OperationStatus) -> bool:
    return not status.done


def _last_status(retry_state: RetryCallState) -> OperationStatus:
    # Poll budget exhausted: hand back the final (still running) status
    return retry_state.outcome.result()  # type: ignore[union-attr]


class GenerationOrchestrator:
    """Owns one generation session and drives it through its lifecycle.

    Args:
        api: Remote generation API.
        credentials: Credential collaborator, checked before every submit.
        store: Where the current video is published.
        poll_interval: Seconds between operation status queries.
        max_polls: Status queries allowed before the attempt times out.
        listeners: Called with every new session snapshot.
    """

    def __init__(
        self,
        api: VideoGenerationAPIProtocol,
        credentials: CredentialProviderProtocol,
        store: ArtifactStore,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_polls: int = DEFAULT_MAX_POLLS,
        listeners: Iterable[SessionListener] = (),
    ) -> None:
        if max_polls < 1:
            raise ValueError("max_polls must be at least 1")
        self.api = api
        self.credentials = credentials
        self.store = store
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self._listeners: list[SessionListener] = list(listeners)
        self._attempts = 0
        self._session = GenerationSession()
        self._prefill: GenerateVideoParams | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        api: VideoGenerationAPIProtocol,
        credentials: CredentialProviderProtocol,
        listeners: Iterable[SessionListener] = (),
    ) -> "GenerationOrchestrator":
        return cls(
            api=api,
            credentials=credentials,
            store=ArtifactStore(settings.output_dir),
            poll_interval=settings.generation.poll_interval,
            max_polls=settings.generation.max_polls,
            listeners=listeners,
        )

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def session(self) -> GenerationSession:
        return self._session

    @property
    def prefill(self) -> GenerateVideoParams | None:
        """Request to pre-fill the next form with (after try-again or extend)."""
        return self._prefill

    @property
    def can_extend(self) -> bool:
        session = self._session
        return session.state == SessionState.SUCCEEDED and can_extend(
            session.request, session.video
        )

    def add_listener(self, listener: SessionListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def submit(self, request: GenerateVideoParams) -> GenerationSession:
        """Run a full generation attempt for *request*.

        Supersedes any attempt in progress. Returns the session as it
        stands when this attempt stops; for a superseded attempt that is
        the newer attempt's session.
        """
        attempt_id = self._begin(request)
        logger.info("Attempt %d: submitting %s request", attempt_id, request.mode)

        try:
            has_credential = await self._check_credential()
            self._ensure_current(attempt_id)
            if not has_credential:
                logger.warning("Attempt %d: no usable API key, not contacting the API", attempt_id)
                raise _AttemptFailed(errors.credential_missing())

            status = await self.api.submit(request)
            self._update(attempt_id, state=SessionState.POLLING, operation=status.handle)
            logger.info("Attempt %d: polling %s", attempt_id, status.name)

            status = await self._poll(attempt_id, status)
            video = await self._collect(attempt_id, status)
            self._update(
                attempt_id, state=SessionState.SUCCEEDED, operation=None, video=video
            )
            logger.info("Attempt %d: succeeded, video at %s", attempt_id, video.path)
        except _Superseded:
            logger.warning("Attempt %d was superseded; discarding its outcome", attempt_id)
        except _AttemptFailed as failure:
            self._fail(attempt_id, failure.error)
        except Exception as exc:
            self._fail(attempt_id, errors.classify_exception(exc))

        return self._session

    async def retry(self) -> GenerationSession:
        """Submit the previous request again, unchanged.

        Raises:
            OrchestratorError: If there is no finished attempt to retry.
        """
        session = self._session
        if session.request is None or not session.is_terminal:
            raise OrchestratorError("There is no finished generation to retry.")
        return await self.submit(session.request)

    def reset(self) -> GenerationSession:
        """Discard everything and return to idle."""
        self._attempts += 1
        self._prefill = None
        self.store.release()
        self._set(GenerationSession(attempt_id=self._attempts))
        logger.info("Session reset")
        return self._session

    def try_again(self) -> GenerateVideoParams | None:
        """Return to idle with the last request kept as the form pre-fill.

        Falls back to a full reset when no request is held.

        Raises:
            OrchestratorError: If an attempt is still running.
        """
        session = self._session
        if session.is_busy:
            raise OrchestratorError("Wait for the current generation to finish.")
        if session.request is None:
            self.reset()
            return None
        self._to_idle(prefill=session.request)
        return self._prefill

    def extend(self) -> GenerateVideoParams:
        """Prepare an extend request from the succeeded video.

        Raises:
            OrchestratorError: If the session has not succeeded.
            ExtensionError: If the result cannot be extended.
        """
        session = self._session
        if session.state != SessionState.SUCCEEDED or session.request is None:
            raise OrchestratorError("Only a successful generation can be extended.")
        request = derive_extend_request(session.request, session.video)
        self._to_idle(prefill=request)
        return request

    async def select_credential(self) -> GenerationSession:
        """Let the user pick an API key, then retry a failed attempt."""
        if self._session.credential_selection_requested:
            self._set(self._session.model_copy(update={"credential_selection_requested": False}))
        await self.credentials.request_credential_selection()
        session = self._session
        if session.state == SessionState.FAILED and session.request is not None:
            return await self.retry()
        return session

    # ------------------------------------------------------------------
    # Attempt internals
    # ------------------------------------------------------------------

    async def _check_credential(self) -> bool:
        try:
            return bool(await self.credentials.has_usable_credential())
        except Exception:
            logger.warning(
                "Credential check failed, assuming no API key is selected", exc_info=True
            )
            return False

    async def _poll(self, attempt_id: int, status: OperationStatus) -> OperationStatus:
        if status.done:
            return status

        latest = status

        async def poll_once() -> OperationStatus:
            nonlocal latest
            await asyncio.sleep(self.poll_interval)
            self._ensure_current(attempt_id)
            latest = await self.api.query_status(latest)
            polls = self._session.polls + 1
            self._update(attempt_id, polls=polls, operation=latest.handle)
            logger.debug(
                "Attempt %d: status query %d/%d done=%s",
                attempt_id,
                polls,
                self.max_polls,
                latest.done,
            )
            return latest

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_polls),
            retry=retry_if_result(_not_done),
            retry_error_callback=_last_status,
        )
        status = await retrying(poll_once)
        if not status.done:
            raise _AttemptFailed(errors.timed_out(self.max_polls, self.poll_interval))
        return status

    async def _collect(self, attempt_id: int, status: OperationStatus) -> GeneratedVideo:
        if status.error:
            raise VideoAPIError(status.error)
        if not status.artifacts:
            raise _AttemptFailed(errors.empty_result(status.filtered_reasons))

        artifact = status.artifacts[0]
        if not artifact.uri:
            raise VideoAPIError("Generated video is missing a URI.")

        data, mime_type = await self.api.fetch_artifact(artifact)
        self._ensure_current(attempt_id)
        path = self.store.publish(data, mime_type)
        return GeneratedVideo(
            path=path, data=data, mime_type=mime_type, uri=artifact.uri, video=artifact.video
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _begin(self, request: GenerateVideoParams) -> int:
        self._attempts += 1
        self._prefill = None
        self._set(
            GenerationSession(
                attempt_id=self._attempts, state=SessionState.SUBMITTING, request=request
            )
        )
        return self._attempts

    def _to_idle(self, prefill: GenerateVideoParams) -> None:
        self._attempts += 1
        self._prefill = prefill
        self._set(GenerationSession(attempt_id=self._attempts))

    def _ensure_current(self, attempt_id: int) -> None:
        if attempt_id != self._session.attempt_id:
            raise _Superseded

    def _update(self, attempt_id: int, **changes: object) -> None:
        self._ensure_current(attempt_id)
        self._set(self._session.model_copy(update=changes))

    def _fail(self, attempt_id: int, error: ClassifiedError) -> None:
        if attempt_id != self._session.attempt_id:
            logger.warning(
                "Attempt %d failed after being superseded: %s", attempt_id, error.message
            )
            return
        logger.error("Attempt %d failed [%s]: %s", attempt_id, error.kind, error.message)
        self._set(
            self._session.model_copy(
                update={
                    "state": SessionState.FAILED,
                    "operation": None,
                    "error": error,
                    "credential_selection_requested": error.requests_credential_selection,
                }
            )
        )

    def _set(self, session: GenerationSession) -> None:
        self._session = session
        for listener in self._listeners:
            listener(session)
