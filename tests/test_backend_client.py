from unittest.mock import MagicMock

import pytest
import requests

from voicebot.errors import BackendError
from voicebot.ui.backend_client import ChatBackendClient


def make_response(status_code, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    if payload is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def backend(http):
    return ChatBackendClient("http://api.test/", session=http)


class TestChatBackendClient:

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("VOICEBOT_API_URL", "http://voice.example:9000")
        assert ChatBackendClient().base_url == "http://voice.example:9000"

    def test_default_base_url(self, monkeypatch):
        monkeypatch.delenv("VOICEBOT_API_URL", raising=False)
        assert ChatBackendClient().base_url == "http://localhost:8000"

    def test_send_text(self, backend, http):
        http.post.return_value = make_response(200, {"botResponse": "Sure."})

        assert backend.send_text("hello", "123") == "Sure."
        http.post.assert_called_once_with(
            "http://api.test/api/process-text", json={"text": "hello", "sessionId": "123"}
        )

    def test_send_audio(self, backend, http):
        http.post.return_value = make_response(
            200, {"userText": "hello", "botResponse": "Hi!"}
        )

        assert backend.send_audio(b"wav", "google", "123") == ("hello", "Hi!")
        url = http.post.call_args.args[0]
        kwargs = http.post.call_args.kwargs
        assert url == "http://api.test/api/process-audio"
        assert kwargs["files"] == {"audio": ("recording.wav", b"wav", "audio/wav")}
        assert kwargs["data"] == {"provider": "google", "sessionId": "123"}

    def test_error_status_carries_server_message(self, backend, http):
        http.post.return_value = make_response(400, {"error": "Invalid STT provider."})

        with pytest.raises(BackendError) as exc_info:
            backend.send_audio(b"wav", "whisper", "123")
        assert str(exc_info.value) == "Invalid STT provider."
        assert exc_info.value.status_code == 400

    def test_error_status_without_json(self, backend, http):
        http.post.return_value = make_response(502)

        with pytest.raises(BackendError, match="HTTP 502"):
            backend.send_text("hello", "123")

    def test_transport_error(self, backend, http):
        http.post.side_effect = requests.ConnectionError("refused")

        with pytest.raises(BackendError, match="refused"):
            backend.send_text("hello", "123")

    def test_malformed_success_body(self, backend, http):
        http.post.return_value = make_response(200, {"unexpected": True})

        with pytest.raises(BackendError, match="botResponse"):
            backend.send_text("hello", "123")

    @pytest.mark.parametrize("payload", [
        {"botResponse": 42},
        {"botResponse": None},
        {"botResponse": ["Hi"]},
    ])
    def test_non_string_bot_response(self, backend, http, payload):
        http.post.return_value = make_response(200, payload)

        with pytest.raises(BackendError, match="botResponse"):
            backend.send_text("hello", "123")

    def test_non_string_user_text(self, backend, http):
        http.post.return_value = make_response(200, {"userText": {"text": "hi"}, "botResponse": "Hi!"})

        with pytest.raises(BackendError, match="userText"):
            backend.send_audio(b"wav", "google", "123")
