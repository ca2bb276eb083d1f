"""
Exception hierarchy for the voice agent.

HTTP handlers map these onto status codes; the chat controller maps them onto
status messages and apology turns.
"""


class VoiceBotError(Exception):
    """Base class for all application errors."""


class UnsupportedProvider(VoiceBotError, ValueError):
    """Raised when a speech-to-text provider name is not recognised."""

    def __init__(self, provider):
        self.provider = provider
        super().__init__(f"Unsupported STT provider: {provider!r}")


class TranscriptionFailed(VoiceBotError):
    """Raised when a transcription job finishes in an error state."""


class BackendError(VoiceBotError):
    """Raised by the UI backend client when the server returns an error."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class SpeechInputError(VoiceBotError):
    """Raised when a speech-input device or recogniser fails."""


class ChatStateError(VoiceBotError):
    """Raised when a chat action is not allowed in the current UI state."""
