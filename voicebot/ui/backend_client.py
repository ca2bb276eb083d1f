"""
HTTP client used by the chat UI to reach the voice agent server.
"""

import logging
import os
from typing import Any, Dict, Optional, Tuple

import requests

from voicebot.config.constants import DEFAULT_API_URL, LOGGER_NAME, RECORDING_FILENAME
from voicebot.errors import BackendError

logger = logging.getLogger(LOGGER_NAME)


class ChatBackendClient:
    """
    Posts user turns to the process-text and process-audio endpoints.

    Calls block until the server answers; there is no timeout or retry.
    Any transport failure or error status is raised as BackendError.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or os.getenv("VOICEBOT_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.http = session or requests.Session()

    def send_text(self, text: str, session_id: str) -> str:
        """Send recognised text and return the bot's reply."""
        data = self._post("/api/process-text", json={"text": text, "sessionId": session_id})
        return _field(data, "botResponse")

    def send_audio(self, audio: bytes, provider: str, session_id: str) -> Tuple[str, str]:
        """
        Upload a recording for server-side transcription.

        Returns:
            A (user_text, bot_response) tuple
        """
        data = self._post(
            "/api/process-audio",
            files={"audio": (RECORDING_FILENAME, audio, "audio/wav")},
            data={"provider": provider, "sessionId": session_id},
        )
        return _field(data, "userText"), _field(data, "botResponse")

    def _post(self, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"POST {url}")
        try:
            response = self.http.post(url, **kwargs)
        except requests.RequestException as e:
            raise BackendError(f"Request to {url} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            raise BackendError(message or f"HTTP {response.status_code}", response.status_code)
        return data


def _field(data: Dict[str, Any], name: str) -> str:
    try:
        value = data[name]
    except (KeyError, TypeError):
        raise BackendError(f"Malformed response: missing {name!r}") from None
    if not isinstance(value, str):
        raise BackendError(f"Malformed response: {name!r} is not a string")
    return value
