"""
FastAPI server for the pluggable voice agent.

This module initializes and configures the FastAPI application that backs the
chat UI. It exposes two pass-through endpoints: one that sends typed or
locally recognised text to an Amazon Lex V2 bot, and one that transcribes an
uploaded recording with Google Cloud Speech-to-Text or AssemblyAI before
sending the transcription to the same bot.

The server holds no conversation state; Lex keeps dialogue state keyed by the
session identifier the client sends with every request.
"""

import os

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from voicebot.config.logging_config import configure_logging
from voicebot.config.settings import get_settings, load_env_file
from voicebot.dependencies import get_bot_gateway, get_transcriber
from voicebot.handlers.chat_handlers import handle_process_audio, handle_process_text
from voicebot.services.bot_gateway import BotGatewayClient
from voicebot.services.transcription import SpeechTranscriber

load_env_file()

logger = configure_logging()

PORT = int(os.getenv("PORT", "8000"))
HOST = os.getenv("HOST", "0.0.0.0")

app = FastAPI(
    title="Pluggable Voice Agent",
    description="Voice chat front end for Amazon Lex with selectable speech-to-text providers",
    version="1.0.0",
)

# The chat page may be served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/api/process-text")
async def process_text(
    request: Request,
    gateway: BotGatewayClient = Depends(get_bot_gateway),
):
    """Send text to the bot.

    Body: ``{"text": str, "sessionId": str}``. Returns ``{"botResponse": str}``
    or ``{"error": str}`` with status 400/500.
    """
    return await handle_process_text(request, gateway)


@app.post("/api/process-audio")
async def process_audio(
    request: Request,
    transcriber: SpeechTranscriber = Depends(get_transcriber),
    gateway: BotGatewayClient = Depends(get_bot_gateway),
):
    """Transcribe an uploaded recording and send the transcription to the bot.

    Multipart fields: ``audio`` (file), ``provider`` ("google" | "assemblyai"),
    ``sessionId``. Returns ``{"userText": str, "botResponse": str}`` or
    ``{"error": str}`` with status 400/500.
    """
    return await handle_process_audio(request, transcriber, gateway)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring system status.

    Returns:
        dict: Status information and whether each external service is configured.
    """
    settings = get_settings()
    return {
        "status": "healthy",
        "lex_configured": settings.lex_configured,
        "assemblyai_configured": settings.assemblyai_configured,
    }


@app.get("/")
async def root():
    """Root endpoint to display basic information about the API."""
    return {
        "name": "Pluggable Voice Agent",
        "description": "Voice chat front end for Amazon Lex with selectable speech-to-text providers",
        "version": "1.0.0",
        "endpoints": {
            "/api/process-text": "Send text to the bot",
            "/api/process-audio": "Transcribe audio and send it to the bot",
            "/health": "Health check endpoint",
        },
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, http="h11")
