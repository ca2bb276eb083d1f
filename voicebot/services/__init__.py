"""
Services module for external API integrations.

Key components:
- bot_gateway: Client for the Amazon Lex V2 runtime that sends an utterance with
  a session identifier and returns the bot's reply as one string.
- transcription: Adapter over Google Cloud Speech-to-Text and AssemblyAI that
  turns recorded audio into plain text.

Usage examples:
```python
from voicebot.config.settings import get_settings
from voicebot.services.bot_gateway import create_bot_gateway
from voicebot.services.transcription import create_transcriber

settings = get_settings()
gateway = create_bot_gateway(settings)
transcriber = create_transcriber(settings)

text = transcriber.transcribe(audio_bytes, "google")
reply = gateway.send(text, session_id="1718000000000")
```
"""
