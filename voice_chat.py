"""
Desktop chat window for the pluggable voice agent.

Renders a ChatController in a tkinter window: a provider selector, the
running transcript, and a record button. The controller's coroutines run on
an asyncio loop in a background thread; state changes are marshalled back to
the tkinter main loop for rendering.

Usage:
    python voice_chat.py [--api-url URL] [--provider web-speech|google|assemblyai]
"""

import argparse
import asyncio
import os
import threading
import tkinter as tk
from tkinter import scrolledtext, ttk

from dotenv import load_dotenv

from voicebot.config.constants import DEFAULT_API_URL
from voicebot.config.logging_config import configure_logging
from voicebot.models.chat_schemas import SttProvider
from voicebot.ui.backend_client import ChatBackendClient
from voicebot.ui.chat_controller import ChatController
from voicebot.ui.speech_input import MicrophoneRecorder, NativeRecognitionInput

load_dotenv()

logger = configure_logging()

PROVIDER_LABELS = {
    SttProvider.WEB_SPEECH: "Native Speech Recognition (Local)",
    SttProvider.GOOGLE: "Google Cloud STT",
    SttProvider.ASSEMBLYAI: "AssemblyAI",
}


class VoiceChatApp:
    def __init__(self, root, controller: ChatController, loop: asyncio.AbstractEventLoop):
        self.root = root
        self.controller = controller
        self.loop = loop
        self.root.title("Pluggable Voice Agent")
        self.root.geometry("600x500")

        header = ttk.Frame(self.root)
        header.pack(fill=tk.X, padx=10, pady=5)
        ttk.Label(header, text="STT Provider:").pack(side=tk.LEFT)
        self.provider_var = tk.StringVar(value=PROVIDER_LABELS[controller.provider])
        self.provider_dropdown = ttk.Combobox(
            header, textvariable=self.provider_var, state="readonly",
            values=list(PROVIDER_LABELS.values()),
        )
        self.provider_dropdown.pack(side=tk.LEFT, padx=5)
        self.provider_dropdown.bind("<<ComboboxSelected>>", self.on_provider_selected)

        self.chat_area = scrolledtext.ScrolledText(self.root, wrap=tk.WORD, state=tk.DISABLED)
        self.chat_area.pack(padx=10, pady=5, fill=tk.BOTH, expand=True)

        self.status_label = ttk.Label(self.root, text="")
        self.status_label.pack(pady=2)

        self.record_button = ttk.Button(self.root, text="Record", command=self.on_record_pressed)
        self.record_button.pack(pady=10)

        controller.on_change = lambda _: self.root.after(0, self.render)
        self.render()

    def on_provider_selected(self, event=None):
        label = self.provider_var.get()
        provider = next(p for p, l in PROVIDER_LABELS.items() if l == label)
        self.controller.select_provider(provider)

    def on_record_pressed(self):
        asyncio.run_coroutine_threadsafe(self.controller.handle_record_button(), self.loop)

    def render(self):
        c = self.controller
        self.chat_area.config(state=tk.NORMAL)
        self.chat_area.delete("1.0", tk.END)
        for turn in c.conversation:
            who = "You" if turn.speaker == "user" else "Bot"
            self.chat_area.insert(tk.END, f"{who}: {turn.text}\n\n")
        if c.is_loading:
            self.chat_area.insert(tk.END, "Bot: Thinking...\n")
        self.chat_area.config(state=tk.DISABLED)
        self.chat_area.see(tk.END)

        self.status_label.config(text=c.status)
        self.record_button.config(
            text="Stop" if c.is_recording else "Record",
            state=tk.NORMAL if c.can_press_record else tk.DISABLED,
        )
        self.provider_dropdown.config(state="readonly" if c.can_select_provider else tk.DISABLED)


def parse_args():
    parser = argparse.ArgumentParser(description="Voice chat window for the pluggable voice agent")
    parser.add_argument(
        "--api-url",
        default=os.getenv("VOICEBOT_API_URL", DEFAULT_API_URL),
        help="Base URL of the voice agent server",
    )
    parser.add_argument(
        "--provider",
        default=SttProvider.WEB_SPEECH.value,
        choices=[p.value for p in SttProvider],
        help="Initial speech-to-text provider",
    )
    return parser.parse_args()


def main():
    args = parse_args()

    loop = asyncio.new_event_loop()
    threading.Thread(target=loop.run_forever, daemon=True).start()

    controller = ChatController(
        backend=ChatBackendClient(args.api_url),
        native_input=NativeRecognitionInput(),
        recorder=MicrophoneRecorder(),
        provider=args.provider,
    )
    logger.info(f"Chat session {controller.session_id} using {args.api_url}")

    root = tk.Tk()
    VoiceChatApp(root, controller, loop)
    try:
        root.mainloop()
    finally:
        loop.call_soon_threadsafe(loop.stop)


if __name__ == "__main__":
    main()
