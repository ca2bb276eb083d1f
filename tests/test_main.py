import threading
import time
from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient

from voicebot import dependencies
from voicebot.main import app

client = TestClient(app)


def test_health_check(monkeypatch):
    """Test the health check endpoint returns correct response"""
    monkeypatch.setenv("LEX_BOT_ID", "BOT")
    monkeypatch.setenv("LEX_BOT_ALIAS_ID", "ALIAS")
    monkeypatch.delenv("ASSEMBLYAI_API_KEY", raising=False)

    response = client.get("/health")
    assert response.status_code == 200

    response_json = response.json()
    assert response_json["status"] == "healthy"
    assert response_json["lex_configured"] is True
    assert response_json["assemblyai_configured"] is False


def test_root_endpoint():
    """Test the root endpoint returns the correct API information"""
    response = client.get("/")
    assert response.status_code == 200

    response_json = response.json()
    assert response_json["name"] == "Pluggable Voice Agent"
    assert response_json["version"] == "1.0.0"
    assert "/api/process-text" in response_json["endpoints"]
    assert "/api/process-audio" in response_json["endpoints"]
    assert "/health" in response_json["endpoints"]


def test_app_configuration():
    """Test the app configuration and routes"""
    assert app.title == "Pluggable Voice Agent"
    assert app.version == "1.0.0"

    route_paths = [route.path for route in app.routes]
    assert "/api/process-text" in route_paths
    assert "/api/process-audio" in route_paths
    assert "/health" in route_paths
    assert "/" in route_paths


def test_cors_preflight_allowed():
    response = client.options(
        "/api/process-text",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "http://localhost:3000")


def test_service_clients_are_process_singletons():
    """Each client is built once and then reused"""
    with patch("voicebot.dependencies.create_bot_gateway") as mock_gateway, \
            patch("voicebot.dependencies.create_transcriber") as mock_transcriber:
        assert dependencies.get_bot_gateway() is dependencies.get_bot_gateway()
        assert dependencies.get_transcriber() is dependencies.get_transcriber()

    mock_gateway.assert_called_once()
    mock_transcriber.assert_called_once()


def test_reset_services_rebuilds_clients():
    with patch("voicebot.dependencies.create_bot_gateway", side_effect=[MagicMock(), MagicMock()]):
        first = dependencies.get_bot_gateway()
        dependencies.reset_services()
        assert dependencies.get_bot_gateway() is not first


def test_concurrent_first_requests_build_one_gateway():
    def slow_create(settings):
        time.sleep(0.05)
        return MagicMock()

    results = []
    with patch("voicebot.dependencies.create_bot_gateway", side_effect=slow_create) as mock_create:
        threads = [
            threading.Thread(target=lambda: results.append(dependencies.get_bot_gateway()))
            for _ in range(4)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

    assert mock_create.call_count == 1
    assert len(results) == 4
    assert all(r is results[0] for r in results)
