"""
Client for the Amazon Lex V2 runtime.

The BotGatewayClient forwards a user utterance and session identifier to a
Lex bot and turns the bot's reply messages into a single string. Lex keeps
all dialogue state itself, keyed by the session identifier.
"""

import json
import logging
import threading
from typing import Any, Callable, Dict, Optional

import boto3

from voicebot.config.constants import DEFAULT_LEX_LOCALE, FALLBACK_BOT_REPLY, LOGGER_NAME
from voicebot.config.settings import Settings

logger = logging.getLogger(LOGGER_NAME)


class BotGatewayClient:
    """
    Sends text to a Lex V2 bot and returns the reply.

    The boto3 client may be injected; otherwise ``client_factory`` builds it
    on the first send, so configuration problems surface as errors of that
    send. Errors raised by the boto3 client (network, credentials,
    throttling) are not caught here and propagate to the caller.
    """

    def __init__(
        self,
        lex_client: Optional[Any] = None,
        bot_id: Optional[str] = None,
        bot_alias_id: Optional[str] = None,
        locale_id: str = DEFAULT_LEX_LOCALE,
        client_factory: Optional[Callable[[], Any]] = None,
    ):
        self._lex_client = lex_client
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self.bot_id = bot_id
        self.bot_alias_id = bot_alias_id
        self.locale_id = locale_id

    @property
    def lex_client(self):
        if self._lex_client is None:
            with self._lock:
                if self._lex_client is None:
                    if self._client_factory is None:
                        raise RuntimeError("No Lex runtime client configured")
                    self._lex_client = self._client_factory()
        return self._lex_client

    def build_request(self, text: str, session_id: str) -> Dict[str, str]:
        """Build the RecognizeText parameters for one utterance."""
        return {
            "botId": self.bot_id,
            "botAliasId": self.bot_alias_id,
            "localeId": self.locale_id,
            "sessionId": session_id,
            "text": text,
        }

    def send(self, text: str, session_id: str) -> str:
        """
        Send an utterance to the bot.

        Args:
            text: The user's utterance
            session_id: Client-minted identifier correlating turns of one chat

        Returns:
            The bot's messages joined with single spaces, or a fallback
            sentence when the bot returned nothing
        """
        params = self.build_request(text, session_id)
        logger.debug(f"Lex request: {json.dumps(params)}")

        response = self.lex_client.recognize_text(**params)
        return extract_reply(response)


def extract_reply(response: Dict[str, Any]) -> str:
    """Join the content of every Lex message, falling back when there is none."""
    messages = response.get("messages") or []
    contents = [msg.get("content") for msg in messages if msg.get("content")]
    reply = " ".join(contents)
    if not reply:
        logger.info("Lex returned no messages, using fallback reply")
        return FALLBACK_BOT_REPLY
    return reply


def create_bot_gateway(settings: Settings) -> BotGatewayClient:
    """Create a BotGatewayClient whose lexv2-runtime client is built on first use."""
    if not settings.lex_configured:
        logger.warning("LEX_BOT_ID or LEX_BOT_ALIAS_ID is not set")

    def build_lex_client():
        lex_client = boto3.client(
            "lexv2-runtime",
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
        logger.info(f"Lex runtime client created for region: {settings.aws_region}")
        return lex_client

    return BotGatewayClient(
        bot_id=settings.lex_bot_id,
        bot_alias_id=settings.lex_bot_alias_id,
        locale_id=settings.lex_locale_id,
        client_factory=build_lex_client,
    )
