"""
Speech-input strategies for the chat UI.

Two strategies are available:

- NativeRecognitionInput recognises speech on the client with the
  ``SpeechRecognition`` package and hands the controller plain text.
- MicrophoneRecorder records raw audio with ``pyaudio`` and hands the
  controller WAV bytes for server-side transcription.

Both audio libraries are optional (``pip install 'voicebot[voice]'``). A
strategy whose library or input device is missing reports itself as
unavailable instead of failing at import time.
"""

import io
import logging
import threading
import wave
from abc import ABC, abstractmethod
from typing import List, Optional

from voicebot.config.constants import (
    DEFAULT_GOOGLE_LANGUAGE,
    LOGGER_NAME,
    RECORDING_CHANNELS,
    RECORDING_CHUNK,
    RECORDING_SAMPLE_RATE,
)
from voicebot.errors import SpeechInputError

logger = logging.getLogger(LOGGER_NAME)


def _load_speech_recognition():
    try:
        import speech_recognition as sr
    except ImportError as exc:
        raise SpeechInputError(
            "Native speech recognition unavailable. Install extras with: pip install 'voicebot[voice]'"
        ) from exc
    return sr


def _load_pyaudio():
    try:
        import pyaudio
    except ImportError as exc:
        raise SpeechInputError(
            "Microphone recording unavailable. Install extras with: pip install 'voicebot[voice]'"
        ) from exc
    return pyaudio


class SpeechInput(ABC):
    """A way of turning the user's voice into something the backend accepts."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the host has what this strategy needs."""

    @abstractmethod
    def start(self) -> None:
        """Begin capturing speech."""

    @abstractmethod
    def stop(self):
        """Stop capturing and return the result."""


class NativeRecognitionInput(SpeechInput):
    """Recognise speech locally and return text."""

    def __init__(self, language: str = DEFAULT_GOOGLE_LANGUAGE, phrase_time_limit: Optional[float] = None):
        self.language = language
        self.phrase_time_limit = phrase_time_limit
        self._sr = None
        self._recognizer = None
        self._stop_listening = None
        self._phrases: List = []
        self._lock = threading.Lock()

    def is_available(self) -> bool:
        try:
            sr = _load_speech_recognition()
            return bool(sr.Microphone.list_microphone_names())
        except (SpeechInputError, AttributeError, OSError) as e:
            # speech_recognition raises AttributeError when PyAudio is missing
            logger.info(f"Native speech recognition not available: {e}")
            return False

    def start(self) -> None:
        sr = _load_speech_recognition()
        self._sr = sr
        self._recognizer = sr.Recognizer()
        self._phrases = []
        try:
            microphone = sr.Microphone()
            self._stop_listening = self._recognizer.listen_in_background(
                microphone, self._on_phrase, phrase_time_limit=self.phrase_time_limit
            )
        except (AttributeError, OSError) as e:
            raise SpeechInputError(f"Could not open microphone: {e}") from e
        logger.info("Native speech recognition started")

    def _on_phrase(self, recognizer, audio) -> None:
        with self._lock:
            self._phrases.append(audio)

    def stop(self) -> str:
        """
        Stop listening and recognise everything heard since start().

        Returns:
            The recognised text, or "" when nothing was understood
        """
        if self._stop_listening is None:
            return ""
        self._stop_listening(wait_for_stop=True)
        self._stop_listening = None

        with self._lock:
            phrases, self._phrases = self._phrases, []

        texts = []
        for audio in phrases:
            try:
                texts.append(self._recognizer.recognize_google(audio, language=self.language))
            except self._sr.UnknownValueError:
                logger.debug("Phrase not understood, skipping")
            except self._sr.RequestError as e:
                raise SpeechInputError(f"Speech recognition request failed: {e}") from e
        transcript = " ".join(t for t in texts if t)
        logger.info(f"Native speech recognition stopped: {transcript!r}")
        return transcript


class MicrophoneRecorder(SpeechInput):
    """Record 16-bit mono audio and return it as WAV bytes."""

    def __init__(
        self,
        sample_rate: int = RECORDING_SAMPLE_RATE,
        channels: int = RECORDING_CHANNELS,
        chunk: int = RECORDING_CHUNK,
    ):
        self.sample_rate = sample_rate
        self.channels = channels
        self.chunk = chunk
        self._pyaudio = None
        self._audio = None
        self._stream = None
        self._frames: List[bytes] = []

    def is_available(self) -> bool:
        try:
            pyaudio = _load_pyaudio()
        except SpeechInputError:
            return False
        audio = pyaudio.PyAudio()
        try:
            audio.get_default_input_device_info()
            return True
        except (IOError, OSError):
            return False
        finally:
            audio.terminate()

    def start(self) -> None:
        pyaudio = _load_pyaudio()
        self._pyaudio = pyaudio
        self._frames = []
        self._audio = pyaudio.PyAudio()
        try:
            self._stream = self._audio.open(
                format=pyaudio.paInt16,
                channels=self.channels,
                rate=self.sample_rate,
                input=True,
                frames_per_buffer=self.chunk,
                stream_callback=self._audio_callback,
            )
            self._stream.start_stream()
        except (IOError, OSError) as e:
            self._audio.terminate()
            self._audio = None
            self._stream = None
            raise SpeechInputError(f"Could not open microphone: {e}") from e
        logger.info("Microphone recording started")

    def _audio_callback(self, in_data, frame_count, time_info, status):
        self._frames.append(in_data)
        return (None, self._pyaudio.paContinue)

    def stop(self) -> bytes:
        """Stop recording and return the captured audio as a WAV file."""
        if self._stream is not None:
            self._stream.stop_stream()
            self._stream.close()
            self._stream = None
        if self._audio is not None:
            self._audio.terminate()
            self._audio = None

        audio = frames_to_wav(self._frames, self.sample_rate, self.channels)
        self._frames = []
        logger.info(f"Microphone recording stopped ({len(audio)} bytes)")
        return audio


def frames_to_wav(frames: List[bytes], sample_rate: int, channels: int) -> bytes:
    """Package 16-bit PCM frames as an in-memory WAV file."""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(2)  # 16-bit audio
        wf.setframerate(sample_rate)
        wf.writeframes(b"".join(frames))
    return buffer.getvalue()
