import logging

import pytest

from voicebot.config.settings import get_settings
from voicebot.dependencies import reset_services


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Make every test read the environment afresh"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_service_singletons():
    """Drop the process-wide Lex and transcription clients between tests"""
    reset_services()
    yield
    reset_services()
