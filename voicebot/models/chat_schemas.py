"""
Pydantic models for the chat HTTP API and the client-side transcript.

Field names follow the JSON wire format used by the browser client
(``sessionId``, ``botResponse``, ``userText``).
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from voicebot.config.constants import (
    PROVIDER_ASSEMBLYAI,
    PROVIDER_GOOGLE,
    PROVIDER_WEB_SPEECH,
)
from voicebot.errors import UnsupportedProvider


class SttProvider(str, Enum):
    """Speech-to-text strategies selectable in the chat UI."""
    WEB_SPEECH = PROVIDER_WEB_SPEECH
    GOOGLE = PROVIDER_GOOGLE
    ASSEMBLYAI = PROVIDER_ASSEMBLYAI

    @property
    def is_server_side(self) -> bool:
        """Whether audio for this provider is transcribed by the server."""
        return self in SERVER_PROVIDERS

    @classmethod
    def parse(cls, value) -> "SttProvider":
        """Coerce a provider name, raising UnsupportedProvider for unknown values."""
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedProvider(value) from None


SERVER_PROVIDERS = frozenset({SttProvider.GOOGLE, SttProvider.ASSEMBLYAI})


class ProcessTextRequest(BaseModel):
    """Body of POST /api/process-text."""

    model_config = ConfigDict(extra="forbid")

    text: str = Field(..., description="User utterance to send to the bot")
    sessionId: str = Field(..., description="Client-minted session identifier")

    @field_validator("text")
    def validate_text(cls, v):
        """Reject blank utterances."""
        if not v.strip():
            raise ValueError("Text cannot be empty")
        return v


class ProcessTextResponse(BaseModel):
    botResponse: str


class ProcessAudioResponse(BaseModel):
    userText: str
    botResponse: str


class ErrorResponse(BaseModel):
    error: str


class ConversationTurn(BaseModel):
    """One entry of the chat transcript."""
    speaker: Literal["user", "bot"]
    text: str
