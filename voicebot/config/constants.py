"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the application,
providing a centralized location for fixed values and making it easier to
maintain consistent naming throughout the codebase.
"""

# Logger name used throughout the application
LOGGER_NAME = "voicebot"

# Amazon Lex V2 defaults
DEFAULT_LEX_LOCALE = "en_US"
FALLBACK_BOT_REPLY = "Sorry, I didn't understand."

# Speech-to-text provider identifiers
PROVIDER_WEB_SPEECH = "web-speech"
PROVIDER_GOOGLE = "google"
PROVIDER_ASSEMBLYAI = "assemblyai"

# Google Cloud Speech-to-Text defaults
DEFAULT_GOOGLE_ENCODING = "LINEAR16"
DEFAULT_GOOGLE_SAMPLE_RATE = 48000
DEFAULT_GOOGLE_LANGUAGE = "en-US"

# Error messages returned by the HTTP handlers
ERROR_INVALID_BODY = "Invalid request body."
ERROR_NO_TEXT = "No text provided."
ERROR_NO_SESSION_ID = "No session ID provided."
ERROR_NO_AUDIO = "No audio file uploaded."
ERROR_INVALID_PROVIDER = "Invalid STT provider."
ERROR_TRANSCRIPTION_FAILED = "Transcription failed."
ERROR_TEXT_SERVER = "Server error during text processing."
ERROR_AUDIO_SERVER = "Server error during audio processing."

# Chat UI messages
GREETING_MESSAGE = "Hello! How can I help you today?"
APOLOGY_MESSAGE = "Sorry, there was an error processing your request."
MICROPHONE_ERROR_MESSAGE = "Could not access your microphone. Please check permissions."
NATIVE_UNSUPPORTED_MESSAGE = "Native speech recognition is not supported on this system."

# Client-side recording format
RECORDING_SAMPLE_RATE = 48000
RECORDING_CHANNELS = 1
RECORDING_CHUNK = 960
RECORDING_FILENAME = "recording.wav"

# Default location of the chat API for desktop clients
DEFAULT_API_URL = "http://localhost:8000"
