"""
Configuration module for the pluggable voice agent.

Key components:
- constants: Fixed values shared across modules, including provider names,
  the Lex locale, and the user-facing error and fallback messages.
- logging_config: Console and rotating-file logging for the application logger.
- settings: Environment-driven settings for the Lex, Google and AssemblyAI clients.

Usage examples:
```python
from voicebot.config.constants import LOGGER_NAME, FALLBACK_BOT_REPLY
from voicebot.config.logging_config import configure_logging
from voicebot.config.settings import get_settings

logger = configure_logging()
settings = get_settings()
logger.info(f"Lex configured: {settings.lex_configured}")
```
"""
