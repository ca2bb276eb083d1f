import pytest

from voicebot.config.settings import Settings, get_settings, load_env_file


def test_from_env_reads_service_configuration(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("LEX_BOT_ID", "BOT123")
    monkeypatch.setenv("LEX_BOT_ALIAS_ID", "ALIAS456")
    monkeypatch.setenv("ASSEMBLYAI_API_KEY", "aai-key")
    monkeypatch.setenv("GOOGLE_STT_SAMPLE_RATE", "16000")

    settings = Settings.from_env()

    assert settings.aws_region == "us-east-1"
    assert settings.lex_bot_id == "BOT123"
    assert settings.lex_bot_alias_id == "ALIAS456"
    assert settings.lex_configured is True
    assert settings.assemblyai_configured is True
    assert settings.google_sample_rate == 16000


def test_defaults(monkeypatch):
    for name in ("LEX_BOT_ID", "LEX_BOT_ALIAS_ID", "LEX_LOCALE_ID", "ASSEMBLYAI_API_KEY",
                 "GOOGLE_STT_ENCODING", "GOOGLE_STT_SAMPLE_RATE", "GOOGLE_STT_LANGUAGE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.lex_locale_id == "en_US"
    assert settings.google_encoding == "LINEAR16"
    assert settings.google_sample_rate == 48000
    assert settings.google_language == "en-US"
    assert settings.lex_configured is False
    assert settings.assemblyai_configured is False


def test_secrets_are_hidden_from_repr():
    settings = Settings(aws_secret_access_key="super-secret", assemblyai_api_key="aai-secret")
    assert "super-secret" not in repr(settings)
    assert "aai-secret" not in repr(settings)


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("LEX_BOT_ID", "first")
    settings = get_settings()
    monkeypatch.setenv("LEX_BOT_ID", "second")
    assert get_settings() is settings
    assert get_settings().lex_bot_id == "first"


def test_load_env_file(tmp_path, monkeypatch):
    # Register the variable so teardown removes whatever dotenv sets
    monkeypatch.setenv("LEX_BOT_ALIAS_ID", "placeholder")
    monkeypatch.delenv("LEX_BOT_ALIAS_ID")
    env_file = tmp_path / ".env"
    env_file.write_text("LEX_BOT_ALIAS_ID=from-dotenv\n")

    assert load_env_file(env_file) is True
    assert Settings.from_env().lex_bot_alias_id == "from-dotenv"


def test_load_env_file_missing(tmp_path):
    assert load_env_file(tmp_path / "missing.env") is False
