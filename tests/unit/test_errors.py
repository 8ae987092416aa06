"""Unit tests for failure classification."""

import pytest

from veostudio.core import errors
from veostudio.state.models import ErrorKind


class TestClassifyMessage:
    @pytest.mark.parametrize(
        ("message", "kind"),
        [
            ("404 NOT_FOUND. Requested entity was not found.", ErrorKind.NOT_FOUND),
            ("400 INVALID_ARGUMENT API_KEY_INVALID", ErrorKind.CREDENTIAL_INVALID),
            ("API key not valid. Please pass a valid API key.", ErrorKind.CREDENTIAL_INVALID),
            ("403 Permission denied on resource", ErrorKind.CREDENTIAL_INVALID),
            ("503 The service is currently unavailable.", ErrorKind.UNKNOWN),
        ],
    )
    def test_kinds(self, message: str, kind: ErrorKind) -> None:
        assert errors.classify_message(message).kind == kind

    def test_not_found_takes_precedence(self) -> None:
        error = errors.classify_message("Requested entity was not found. API key not valid")
        assert error.kind == ErrorKind.NOT_FOUND
        assert error.user_message == errors.NOT_FOUND_MESSAGE

    def test_unknown_keeps_original_message(self) -> None:
        error = errors.classify_message("boom")
        assert error.message == "boom"
        assert error.user_message == "Video generation failed: boom"

    def test_exception_without_message_uses_type(self) -> None:
        assert errors.classify_exception(TimeoutError()).message == "TimeoutError"


class TestFactories:
    def test_credential_missing(self) -> None:
        error = errors.credential_missing()
        assert error.kind == ErrorKind.CREDENTIAL_MISSING
        assert error.requests_credential_selection

    def test_timed_out_mentions_budget(self) -> None:
        error = errors.timed_out(20, 10.0)
        assert error.kind == ErrorKind.TIMEOUT
        assert "20 status checks" in error.user_message
        assert "200s" in error.user_message

    def test_empty_result_without_reasons(self) -> None:
        error = errors.empty_result()
        assert error.kind == ErrorKind.EMPTY_RESULT
        assert "Reason" not in error.user_message
