"""User-facing errors for Relay front-ends."""

INVALID_KEY_MARKER = "API key not valid"
INVALID_KEY_MESSAGE = "The provided API key is not valid. Please check your key and try again."
MISSING_KEY_MESSAGE = "Please enter your Google Gemini API key to proceed."
MICROPHONE_MESSAGE = "Microphone access was denied or no input device is available."
INVALID_VIDEO_MESSAGE = "Please upload a valid video file."


class RelayError(Exception):
    """Base error whose message is shown to the user as-is."""


class ApiKeyError(RelayError):
    """Raised when no Gemini API key is configured."""


class MicrophoneError(RelayError):
    """Raised when the microphone cannot be opened."""


class VideoError(RelayError):
    """Raised when a video cannot be read or a frame cannot be extracted."""


def describe_error(exc: BaseException, action: str = "analysis") -> str:
    """
    Turn an exception into a message suitable for the console.

    Args:
        exc: The exception that ended the operation.
        action: Short noun describing what was running ("analysis", "the session").

    Returns:
        User-visible error message.
    """
    if isinstance(exc, RelayError):
        return str(exc)
    if INVALID_KEY_MARKER in str(exc):
        return INVALID_KEY_MESSAGE
    return f"An error occurred during {action}: {exc}"
