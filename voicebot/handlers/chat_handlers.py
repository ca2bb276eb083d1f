"""
Request handlers for the chat HTTP API.

Each handler is a single linear pipeline: validate the request, optionally
transcribe the uploaded audio, send the text to the bot, and return JSON.
Validation problems become 400 responses with a fixed message; anything that
goes wrong downstream is logged and returned as a generic 500 so no provider
detail leaks to the caller.
"""

import json
import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from voicebot.config.constants import (
    ERROR_AUDIO_SERVER,
    ERROR_INVALID_BODY,
    ERROR_INVALID_PROVIDER,
    ERROR_NO_AUDIO,
    ERROR_NO_SESSION_ID,
    ERROR_NO_TEXT,
    ERROR_TEXT_SERVER,
    ERROR_TRANSCRIPTION_FAILED,
    LOGGER_NAME,
)
from voicebot.errors import UnsupportedProvider
from voicebot.models.chat_schemas import (
    ErrorResponse,
    ProcessAudioResponse,
    ProcessTextRequest,
    ProcessTextResponse,
    SttProvider,
)
from voicebot.services.bot_gateway import BotGatewayClient
from voicebot.services.transcription import SpeechTranscriber

logger = logging.getLogger(LOGGER_NAME)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


def _text_request_error(error: ValidationError) -> str:
    """Pick the client error message for an invalid process-text body."""
    for detail in error.errors():
        field = detail["loc"][0] if detail["loc"] else None
        if detail["type"] == "extra_forbidden":
            return ERROR_INVALID_BODY
        if field == "text":
            return ERROR_NO_TEXT
        if field == "sessionId":
            return ERROR_NO_SESSION_ID
    return ERROR_INVALID_BODY


async def handle_process_text(request: Request, gateway: BotGatewayClient) -> JSONResponse:
    """
    Handle POST /api/process-text.

    The body is ``{"text": str, "sessionId": str}``. The text is sent to the
    bot and the reply is returned as ``{"botResponse": str}``; the client
    already knows the user text so it is not echoed back.

    Args:
        request: The incoming request
        gateway: The bot gateway client

    Returns:
        A 200 response with the bot reply, 400 for invalid input, or 500 when
        the bot call fails
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Invalid JSON body in process-text request")
        return error_response(ERROR_INVALID_BODY, 400)

    if not isinstance(payload, dict):
        return error_response(ERROR_INVALID_BODY, 400)

    try:
        text_request = ProcessTextRequest(**payload)
    except ValidationError as e:
        logger.warning(f"Invalid process-text request: {e}")
        return error_response(_text_request_error(e), 400)

    try:
        reply = await run_in_threadpool(
            gateway.send, text_request.text, text_request.sessionId
        )
    except Exception as e:
        logger.error(f"Error in process-text handler: {e}", exc_info=True)
        return error_response(ERROR_TEXT_SERVER, 500)

    return JSONResponse(content=ProcessTextResponse(botResponse=reply).model_dump())


async def handle_process_audio(
    request: Request,
    transcriber: SpeechTranscriber,
    gateway: BotGatewayClient,
) -> JSONResponse:
    """
    Handle POST /api/process-audio.

    The multipart form carries ``audio`` (file), ``provider`` ("google" or
    "assemblyai") and ``sessionId``. The audio is transcribed first and the
    transcription is then sent to the bot.

    Args:
        request: The incoming request
        transcriber: The speech transcription adapter
        gateway: The bot gateway client

    Returns:
        ``{"userText": str, "botResponse": str}`` on success, 400 for invalid
        input, or 500 when transcription or the bot call fails
    """
    try:
        form = await request.form()
        audio_file = form.get("audio")
        provider = form.get("provider")
        session_id = form.get("sessionId")

        if not isinstance(audio_file, UploadFile):
            logger.warning("process-audio request without an audio file")
            return error_response(ERROR_NO_AUDIO, 400)

        audio = await audio_file.read()
        if not audio:
            logger.warning("process-audio request with an empty audio file")
            return error_response(ERROR_NO_AUDIO, 400)

        try:
            selected = SttProvider.parse(provider)
        except UnsupportedProvider:
            selected = None
        if selected is None or not selected.is_server_side:
            logger.warning(f"process-audio request with invalid provider: {provider!r}")
            return error_response(ERROR_INVALID_PROVIDER, 400)

        if not isinstance(session_id, str):
            return error_response(ERROR_NO_SESSION_ID, 400)

        transcription = await run_in_threadpool(
            transcriber.transcribe, audio, selected
        )
        if not transcription:
            logger.error(f"Empty transcription from provider: {provider}")
            return error_response(ERROR_TRANSCRIPTION_FAILED, 500)

        logger.info(f"Transcription ({provider}): {transcription}")
        reply = await run_in_threadpool(gateway.send, transcription, session_id)

        return JSONResponse(
            content=ProcessAudioResponse(
                userText=transcription, botResponse=reply
            ).model_dump()
        )
    except Exception as e:
        logger.error(f"Error in process-audio handler: {e}", exc_info=True)
        return error_response(ERROR_AUDIO_SERVER, 500)
