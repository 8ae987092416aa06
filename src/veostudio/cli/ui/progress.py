"""Live status display for a running generation."""

from collections.abc import Generator
from contextlib import contextmanager

from rich.status import Status

from veostudio.state.models import GenerationSession, SessionState

from .console import BRAND_COLOR, console, print_muted


def describe_session(session: GenerationSession, max_polls: int) -> str:
    """One-line description of where an attempt is in its lifecycle."""
    if session.state == SessionState.SUBMITTING:
        return "Submitting generation request..."
    if session.state == SessionState.POLLING:
        if session.polls == 0:
            return "Generating video..."
        return f"Generating video... status check {session.polls}/{max_polls}"
    if session.state == SessionState.SUCCEEDED:
        return "Video generated."
    if session.state == SessionState.FAILED:
        return "Video generation failed."
    return "Ready."


class SessionStatusRelay:
    """Orchestrator listener that mirrors session changes on the terminal.

    While a spinner is active (see ``spinning``) the spinner text follows
    the session; otherwise each state change is printed as a muted line.
    """

    def __init__(self, max_polls: int) -> None:
        self.max_polls = max_polls
        self._status: Status | None = None
        self._last_state: SessionState | None = None

    def __call__(self, session: GenerationSession) -> None:
        message = describe_session(session, self.max_polls)
        if self._status is not None:
            self._status.update(f"[{BRAND_COLOR}]{message}[/{BRAND_COLOR}]")
        elif session.state != self._last_state:
            print_muted(message)
        self._last_state = session.state

    @contextmanager
    def spinning(self) -> Generator[None, None, None]:
        """Show a spinner for the duration of the block.

        Usage::

            with relay.spinning():
                await orchestrator.submit(request)
        """
        with console.status(f"[{BRAND_COLOR}]Starting...[/{BRAND_COLOR}]") as status:
            self._status = status
            try:
                yield
            finally:
                self._status = None
