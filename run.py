"""
Run script for starting the Pluggable Voice Agent server.

Usage:
    python run.py [--port PORT] [--host HOST] [--log-level LEVEL]
"""

import argparse
import os

import uvicorn

from voicebot.config.logging_config import configure_logging
from voicebot.config.settings import get_settings, load_env_file

load_env_file()

logger = configure_logging()


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Start the Pluggable Voice Agent server"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to run the server on (default: 8000 or PORT env var)",
    )
    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "0.0.0.0"),
        help="Host to bind the server to (default: 0.0.0.0 or HOST env var)",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO or LOG_LEVEL env var)",
    )
    return parser.parse_args()


def main():
    """Main entry point for starting the server."""
    args = parse_args()
    settings = get_settings()

    # Missing credentials only fail the requests that need them
    if not settings.lex_configured:
        logger.warning("LEX_BOT_ID / LEX_BOT_ALIAS_ID not set; bot requests will fail")
    if not settings.assemblyai_configured:
        logger.warning("ASSEMBLYAI_API_KEY not set; the assemblyai provider will fail")

    logger.info(f"Starting server on http://{args.host}:{args.port}")
    logger.info(f"Log level: {args.log_level}")

    uvicorn.run(
        "voicebot.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level.lower(),
        http="h11",
        reload=os.getenv("ENV", "production").lower() == "development",
    )


if __name__ == "__main__":
    main()
