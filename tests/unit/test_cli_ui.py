"""Unit tests for the setup check and session status display."""

from unittest.mock import MagicMock

from pydantic import SecretStr

from veostudio.cli.ui.progress import SessionStatusRelay, describe_session
from veostudio.cli.ui.setup import run_setup_check
from veostudio.config.settings import APISettings, Settings
from veostudio.state.models import GenerationSession, SessionState


def _settings_with_key(gemini: str = "") -> Settings:
    s = Settings()
    s.api = APISettings.model_construct(gemini_api_key=SecretStr(gemini))
    return s


class TestRunSetupCheck:
    def test_all_present(self) -> None:
        assert run_setup_check(_settings_with_key("gk")) is True

    def test_missing_key(self) -> None:
        assert run_setup_check(_settings_with_key()) is False


class TestDescribeSession:
    def test_polling_shows_budget(self) -> None:
        session = GenerationSession(state=SessionState.POLLING, polls=4)
        assert describe_session(session, 20) == "Generating video... status check 4/20"

    def test_first_poll(self) -> None:
        session = GenerationSession(state=SessionState.POLLING)
        assert describe_session(session, 20) == "Generating video..."

    def test_idle(self) -> None:
        assert describe_session(GenerationSession(), 20) == "Ready."


class TestSessionStatusRelay:
    def test_updates_active_spinner(self) -> None:
        relay = SessionStatusRelay(max_polls=5)
        status = MagicMock()
        relay._status = status
        relay(GenerationSession(state=SessionState.POLLING, polls=2))
        assert "status check 2/5" in status.update.call_args.args[0]

    def test_prints_state_changes_once(self, monkeypatch) -> None:
        printed: list[str] = []
        monkeypatch.setattr("veostudio.cli.ui.progress.print_muted", printed.append)
        relay = SessionStatusRelay(max_polls=5)
        relay(GenerationSession(state=SessionState.POLLING, polls=1))
        relay(GenerationSession(state=SessionState.POLLING, polls=2))
        relay(GenerationSession(state=SessionState.FAILED))
        assert printed == ["Generating video... status check 1/5", "Video generation failed."]

    def test_spinning_clears_status(self) -> None:
        relay = SessionStatusRelay(max_polls=5)
        with relay.spinning():
            assert relay._status is not None
        assert relay._status is None
