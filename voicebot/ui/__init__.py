"""
Client-side chat UI logic.

Key components:
- chat_controller: The ChatController state machine (transcript, provider
  selection, recording and loading flags).
- speech_input: Speech-input strategies: native recognition with
  SpeechRecognition, and microphone recording with pyaudio.
- backend_client: requests-based client for the chat HTTP API.

Usage examples:
```python
import asyncio
from voicebot.ui.backend_client import ChatBackendClient
from voicebot.ui.chat_controller import ChatController
from voicebot.ui.speech_input import MicrophoneRecorder, NativeRecognitionInput

controller = ChatController(
    backend=ChatBackendClient("http://localhost:8000"),
    native_input=NativeRecognitionInput(),
    recorder=MicrophoneRecorder(),
    provider="google",
)
asyncio.run(controller.handle_record_button())  # start recording
```
"""
