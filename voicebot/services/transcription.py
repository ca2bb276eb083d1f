"""
Speech-to-text adapter for the server-side transcription providers.

SpeechTranscriber hides the Google Cloud Speech-to-Text and AssemblyAI SDKs
behind a single ``transcribe(audio, provider)`` call that returns plain text.
Both SDK clients are created on first use and reused afterwards.
"""

import io
import logging
import threading
from typing import Any, Optional

import assemblyai as aai
from google.cloud import speech

from voicebot.config.constants import LOGGER_NAME
from voicebot.config.settings import Settings
from voicebot.errors import TranscriptionFailed, UnsupportedProvider
from voicebot.models.chat_schemas import SttProvider

logger = logging.getLogger(LOGGER_NAME)


class SpeechTranscriber:
    """
    Transcribe recorded audio with Google Cloud Speech-to-Text or AssemblyAI.

    Clients may be injected for testing; otherwise they are built lazily
    from the settings the first time each provider is used.
    """

    def __init__(
        self,
        settings: Settings,
        google_client: Optional[Any] = None,
        assemblyai_transcriber: Optional[Any] = None,
    ):
        self.settings = settings
        self._google_client = google_client
        self._assemblyai_transcriber = assemblyai_transcriber
        self._lock = threading.Lock()

    @property
    def google_client(self):
        if self._google_client is None:
            with self._lock:
                if self._google_client is None:
                    # Authenticates with application-default credentials
                    self._google_client = speech.SpeechClient()
                    logger.info("Google Cloud Speech client created")
        return self._google_client

    @property
    def assemblyai_transcriber(self):
        if self._assemblyai_transcriber is None:
            with self._lock:
                if self._assemblyai_transcriber is None:
                    if not self.settings.assemblyai_configured:
                        logger.warning("ASSEMBLYAI_API_KEY environment variable not set")
                    # The SDK reads its API key from process-wide settings
                    aai.settings.api_key = self.settings.assemblyai_api_key
                    self._assemblyai_transcriber = aai.Transcriber()
                    logger.info("AssemblyAI transcriber created")
        return self._assemblyai_transcriber

    def transcribe(self, audio: bytes, provider) -> str:
        """
        Transcribe audio with the selected provider.

        Args:
            audio: Raw bytes of the recorded audio
            provider: "google" or "assemblyai" (or the matching SttProvider)

        Returns:
            The transcription text, possibly empty

        Raises:
            UnsupportedProvider: If provider is not a server-side provider
            TranscriptionFailed: If the provider reports a failed job
        """
        selected = SttProvider.parse(provider)
        logger.info(f"Transcribing {len(audio)} bytes with provider: {selected.value}")

        if selected is SttProvider.GOOGLE:
            return self._transcribe_google(audio)
        if selected is SttProvider.ASSEMBLYAI:
            return self._transcribe_assemblyai(audio)
        raise UnsupportedProvider(provider)

    def recognition_config(self) -> speech.RecognitionConfig:
        """The fixed recognition settings sent with every Google request."""
        return speech.RecognitionConfig(
            encoding=speech.RecognitionConfig.AudioEncoding[self.settings.google_encoding],
            sample_rate_hertz=self.settings.google_sample_rate,
            language_code=self.settings.google_language,
        )

    def _transcribe_google(self, audio: bytes) -> str:
        response = self.google_client.recognize(
            config=self.recognition_config(),
            audio=speech.RecognitionAudio(content=audio),
        )
        segments = [
            result.alternatives[0].transcript
            for result in response.results
            if result.alternatives
        ]
        logger.debug(f"Google returned {len(segments)} segment(s)")
        return "\n".join(segments)

    def _transcribe_assemblyai(self, audio: bytes) -> str:
        # Blocks until the transcription job has completed
        transcript = self.assemblyai_transcriber.transcribe(io.BytesIO(audio))
        if transcript.status == aai.TranscriptStatus.error:
            logger.error(f"AssemblyAI transcription failed: {transcript.error}")
            raise TranscriptionFailed(transcript.error or "AssemblyAI transcription failed")
        return transcript.text or ""


def create_transcriber(settings: Settings) -> SpeechTranscriber:
    return SpeechTranscriber(settings)
