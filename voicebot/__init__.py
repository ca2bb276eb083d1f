"""
Pluggable Voice Agent - voice chat front end for Amazon Lex.

Speech is recognised by a user-selectable provider (native recognition on the
client, Google Cloud Speech-to-Text, or AssemblyAI), the resulting text is sent
to an Amazon Lex V2 bot, and the exchange is shown as a chat transcript.

Key Components:
- config: Constants, settings read from the environment, and logging setup
- handlers: The process-text and process-audio request pipelines
- models: Pydantic wire models and the client-side transcript
- services: The Lex bot gateway and the speech transcription adapter
- ui: The chat controller state machine, speech-input strategies, and API client
- main: The FastAPI application

Getting Started:
1. Set up environment variables (or a .env file):
   - AWS_REGION, AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY
   - LEX_BOT_ID, LEX_BOT_ALIAS_ID
   - ASSEMBLYAI_API_KEY
   - GOOGLE_APPLICATION_CREDENTIALS for Google Cloud Speech-to-Text

2. Start the server:
   ```bash
   python run.py
   ```

3. Start the desktop chat window:
   ```bash
   python voice_chat.py
   ```
"""

__version__ = "1.0.0"
