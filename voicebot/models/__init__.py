"""
Models module for data structures used by the voice agent.

Key components:
- chat_schemas: Pydantic models for the chat HTTP API request/response bodies,
  the transcript turn, and the speech-to-text provider enum.
- conversation: The append-only transcript kept by the chat UI.
"""

from voicebot.models.chat_schemas import (
    ConversationTurn,
    ErrorResponse,
    ProcessAudioResponse,
    ProcessTextRequest,
    ProcessTextResponse,
    SERVER_PROVIDERS,
    SttProvider,
)
from voicebot.models.conversation import Conversation
