"""Failure classification for generation attempts.

Remote failures only carry free-form messages, so classification scans
for phrases the Gemini API is known to use. This depends on the exact
wording of the remote API and is the weakest part of the error
handling; prefer structured error codes once the API exposes them.
"""

from veostudio.state.models import ClassifiedError, ErrorKind

NOT_FOUND_PHRASE = "Requested entity was not found."
INVALID_KEY_PHRASES = ("API_KEY_INVALID", "API key not valid")
PERMISSION_DENIED_PHRASE = "permission denied"

NOT_FOUND_MESSAGE = (
    "Model not found. This can be caused by an invalid API key or permission "
    "issues. Please check your API key."
)
INVALID_KEY_MESSAGE = (
    "Your API key is invalid or lacks permissions. Please select a valid, "
    "billing-enabled API key."
)
MISSING_KEY_MESSAGE = "No API key is selected. Please select an API key to generate videos."


def classify_message(message: str) -> ClassifiedError:
    """Classify a failure message.

    Precedence: "entity not found" first, then invalid-key and
    permission-denied phrases, then unknown.
    """
    if NOT_FOUND_PHRASE in message:
        return ClassifiedError(
            kind=ErrorKind.NOT_FOUND, message=message, user_message=NOT_FOUND_MESSAGE
        )
    if any(phrase in message for phrase in INVALID_KEY_PHRASES) or (
        PERMISSION_DENIED_PHRASE in message.lower()
    ):
        return ClassifiedError(
            kind=ErrorKind.CREDENTIAL_INVALID, message=message, user_message=INVALID_KEY_MESSAGE
        )
    return ClassifiedError(
        kind=ErrorKind.UNKNOWN,
        message=message,
        user_message=f"Video generation failed: {message}",
    )


def classify_exception(exc: BaseException) -> ClassifiedError:
    message = str(exc) or type(exc).__name__
    return classify_message(message)


def credential_missing() -> ClassifiedError:
    return ClassifiedError(
        kind=ErrorKind.CREDENTIAL_MISSING,
        message="No usable API key is available.",
        user_message=MISSING_KEY_MESSAGE,
    )


def timed_out(polls: int, interval: float) -> ClassifiedError:
    waited = polls * interval
    return ClassifiedError(
        kind=ErrorKind.TIMEOUT,
        message=f"Operation not done after {polls} status checks",
        user_message=(
            f"Video generation did not finish after {polls} status checks "
            f"(~{waited:.0f}s). Please try again."
        ),
    )


def empty_result(filtered_reasons: tuple[str, ...] = ()) -> ClassifiedError:
    user_message = (
        "No videos were generated. The prompt may have been blocked; "
        "try rephrasing it."
    )
    if filtered_reasons:
        user_message = f"{user_message} Reason: {' '.join(filtered_reasons)}"
    return ClassifiedError(
        kind=ErrorKind.EMPTY_RESULT,
        message="No videos were generated.",
        user_message=user_message,
    )
