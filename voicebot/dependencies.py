"""
Process-wide service instances injected into the request handlers.

Each factory builds its service once, on first use, and returns the same
instance for the lifetime of the process. Building a service does not
contact any provider, so a misconfigured provider only fails the requests
that use it. Tests replace the factories through ``app.dependency_overrides``.
"""

import threading
from typing import Optional

from voicebot.config.settings import get_settings
from voicebot.services.bot_gateway import BotGatewayClient, create_bot_gateway
from voicebot.services.transcription import SpeechTranscriber, create_transcriber

_init_lock = threading.Lock()
_bot_gateway: Optional[BotGatewayClient] = None
_transcriber: Optional[SpeechTranscriber] = None


def get_bot_gateway() -> BotGatewayClient:
    global _bot_gateway
    if _bot_gateway is None:
        with _init_lock:
            if _bot_gateway is None:
                _bot_gateway = create_bot_gateway(get_settings())
    return _bot_gateway


def get_transcriber() -> SpeechTranscriber:
    global _transcriber
    if _transcriber is None:
        with _init_lock:
            if _transcriber is None:
                _transcriber = create_transcriber(get_settings())
    return _transcriber


def reset_services() -> None:
    """Forget the built services so the next request builds them again."""
    global _bot_gateway, _transcriber
    with _init_lock:
        _bot_gateway = None
        _transcriber = None
