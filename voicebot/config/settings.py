"""
Environment-driven settings for the voice agent server.

Values are read once per process from the environment (after an optional
``.env`` file has been loaded) and cached by :func:`get_settings`.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import dotenv
from pydantic import BaseModel, Field

from voicebot.config.constants import (
    DEFAULT_GOOGLE_ENCODING,
    DEFAULT_GOOGLE_LANGUAGE,
    DEFAULT_GOOGLE_SAMPLE_RATE,
    DEFAULT_LEX_LOCALE,
)


class Settings(BaseModel):
    """External service configuration. Secrets stay out of repr."""

    aws_region: Optional[str] = None
    aws_access_key_id: Optional[str] = Field(None, repr=False)
    aws_secret_access_key: Optional[str] = Field(None, repr=False)
    lex_bot_id: Optional[str] = None
    lex_bot_alias_id: Optional[str] = None
    lex_locale_id: str = DEFAULT_LEX_LOCALE
    assemblyai_api_key: Optional[str] = Field(None, repr=False)
    google_encoding: str = DEFAULT_GOOGLE_ENCODING
    google_sample_rate: int = DEFAULT_GOOGLE_SAMPLE_RATE
    google_language: str = DEFAULT_GOOGLE_LANGUAGE

    @property
    def lex_configured(self) -> bool:
        return bool(self.lex_bot_id and self.lex_bot_alias_id)

    @property
    def assemblyai_configured(self) -> bool:
        return bool(self.assemblyai_api_key)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the current process environment."""
        return cls(
            aws_region=os.getenv("AWS_REGION"),
            aws_access_key_id=os.getenv("AWS_ACCESS_KEY_ID"),
            aws_secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY"),
            lex_bot_id=os.getenv("LEX_BOT_ID"),
            lex_bot_alias_id=os.getenv("LEX_BOT_ALIAS_ID"),
            lex_locale_id=os.getenv("LEX_LOCALE_ID", DEFAULT_LEX_LOCALE),
            assemblyai_api_key=os.getenv("ASSEMBLYAI_API_KEY"),
            google_encoding=os.getenv("GOOGLE_STT_ENCODING", DEFAULT_GOOGLE_ENCODING),
            google_sample_rate=int(
                os.getenv("GOOGLE_STT_SAMPLE_RATE", str(DEFAULT_GOOGLE_SAMPLE_RATE))
            ),
            google_language=os.getenv("GOOGLE_STT_LANGUAGE", DEFAULT_GOOGLE_LANGUAGE),
        )


def load_env_file(path: Path = Path(".") / ".env") -> bool:
    """Load a .env file into the environment if it exists."""
    if path.exists():
        return dotenv.load_dotenv(path)
    return False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, reading the environment on first use."""
    return Settings.from_env()
