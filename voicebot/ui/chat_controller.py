"""
Client-side state machine for the voice chat window.

ChatController owns everything the chat view renders: the transcript, the
selected speech-to-text provider, and the ``is_recording`` / ``is_loading``
flags. A view calls :meth:`ChatController.handle_record_button` when the
record button is pressed and re-renders from the controller's state whenever
the ``on_change`` callback fires.

Recording is a two-state toggle. With the native provider the transcript is
produced locally and only the text goes to the server; with the server-side
providers the recording itself is uploaded. While a round trip is pending
``is_loading`` is set and further presses are ignored. An in-flight request
is never cancelled.
"""

import asyncio
import logging
import time
from typing import Callable, Optional

from voicebot.config.constants import (
    APOLOGY_MESSAGE,
    GREETING_MESSAGE,
    LOGGER_NAME,
    MICROPHONE_ERROR_MESSAGE,
    NATIVE_UNSUPPORTED_MESSAGE,
)
from voicebot.errors import BackendError, ChatStateError, SpeechInputError
from voicebot.models.chat_schemas import SttProvider
from voicebot.models.conversation import Conversation
from voicebot.ui.backend_client import ChatBackendClient
from voicebot.ui.speech_input import SpeechInput

logger = logging.getLogger(LOGGER_NAME)


def new_session_id() -> str:
    """Mint a session identifier from the current time in milliseconds."""
    return str(int(time.time() * 1000))


class ChatController:
    """
    Drives one chat session.

    Args:
        backend: Client for the process-text and process-audio endpoints
        native_input: Strategy used for the native (web-speech) provider
        recorder: Strategy used for the server-side providers
        provider: Initially selected provider
        session_id: Session identifier; minted from the clock when omitted
        on_change: Called with the controller after every state change
    """

    def __init__(
        self,
        backend: ChatBackendClient,
        native_input: SpeechInput,
        recorder: SpeechInput,
        provider: SttProvider = SttProvider.WEB_SPEECH,
        session_id: Optional[str] = None,
        on_change: Optional[Callable[["ChatController"], None]] = None,
    ):
        self.backend = backend
        self.native_input = native_input
        self.recorder = recorder
        self.provider = SttProvider.parse(provider)
        self.session_id = session_id or new_session_id()
        self.on_change = on_change

        self.conversation = Conversation(greeting=GREETING_MESSAGE)
        self.is_recording = False
        self.is_loading = False
        self.status = ""

    @property
    def can_select_provider(self) -> bool:
        return not (self.is_recording or self.is_loading)

    @property
    def can_press_record(self) -> bool:
        return not self.is_loading

    def select_provider(self, provider) -> SttProvider:
        """
        Switch the speech-to-text provider.

        Raises:
            UnsupportedProvider: For an unknown provider name
            ChatStateError: While recording or waiting for a reply
        """
        selected = SttProvider.parse(provider)
        if not self.can_select_provider:
            raise ChatStateError("Cannot change provider while recording or loading")
        self.provider = selected
        logger.info(f"STT provider selected: {selected.value}")
        self._changed()
        return selected

    async def handle_record_button(self) -> None:
        """React to a press of the record button."""
        if not self.can_press_record:
            logger.debug("Record button ignored while loading")
            return
        if self.provider.is_server_side:
            await self._toggle_recording()
        else:
            await self._toggle_native_recognition()

    def add_to_conversation(self, speaker: str, text: str) -> None:
        self.conversation.add_turn(speaker, text)
        self._changed()

    async def _toggle_native_recognition(self) -> None:
        if not self.is_recording:
            if not self.native_input.is_available():
                self._set_status(NATIVE_UNSUPPORTED_MESSAGE)
                return
            try:
                self.native_input.start()
            except SpeechInputError as e:
                logger.error(f"Speech recognition error: {e}")
                self._set_status(f"Speech recognition error: {e}")
                return
            self.is_recording = True
            self._set_status("Listening...")
            return

        try:
            transcript = await asyncio.to_thread(self.native_input.stop)
        except SpeechInputError as e:
            logger.error(f"Speech recognition error: {e}")
            self.is_recording = False
            self._set_status(f"Speech recognition error: {e}")
            return

        self.is_recording = False
        self._set_status("")
        if not transcript:
            return

        self.add_to_conversation("user", transcript)
        await self._round_trip(self._send_text, transcript)

    async def _toggle_recording(self) -> None:
        if not self.is_recording:
            try:
                self.recorder.start()
            except SpeechInputError as e:
                logger.error(f"Error accessing microphone: {e}")
                self._set_status(MICROPHONE_ERROR_MESSAGE)
                return
            self.is_recording = True
            self._set_status("Recording...")
            return

        try:
            audio = self.recorder.stop()
        except SpeechInputError as e:
            logger.error(f"Error stopping microphone: {e}")
            self.is_recording = False
            self._set_status(MICROPHONE_ERROR_MESSAGE)
            return

        self.is_recording = False
        self._set_status("")
        await self._round_trip(self._send_audio, audio)

    async def _round_trip(self, send, payload) -> None:
        self.is_loading = True
        self._changed()
        try:
            await send(payload)
        finally:
            self.is_loading = False
            self._changed()

    async def _send_text(self, text: str) -> None:
        try:
            reply = await asyncio.to_thread(self.backend.send_text, text, self.session_id)
        except BackendError as e:
            logger.error(f"Error sending text to backend: {e}")
            self.add_to_conversation("bot", APOLOGY_MESSAGE)
            return
        self.add_to_conversation("bot", reply)

    async def _send_audio(self, audio: bytes) -> None:
        try:
            user_text, reply = await asyncio.to_thread(
                self.backend.send_audio, audio, self.provider.value, self.session_id
            )
        except BackendError as e:
            logger.error(f"Error sending audio to backend: {e}")
            self.add_to_conversation("bot", APOLOGY_MESSAGE)
            return
        self.add_to_conversation("user", user_text)
        self.add_to_conversation("bot", reply)

    def _set_status(self, status: str) -> None:
        self.status = status
        self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
