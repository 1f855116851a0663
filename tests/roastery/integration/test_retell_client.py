"""Integration tests for the Retell voice client with the HTTP layer mocked."""

from unittest.mock import MagicMock, patch

import pytest
import requests
from roastery.voice import RetellClient, VoiceConfigurationError, VoiceServiceError, WebCall


def _response(status, body=None, text=""):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.text = text
    response.json.return_value = body or {}
    return response


def _client(**overrides):
    settings = {"api_key": "key_test", "agent_id": "agent_test"}
    settings.update(overrides)
    return RetellClient(**settings)


def _create(client):
    return client.create_web_call(
        order_id="order-001",
        customer_name="Ada Lovelace",
        product_names=["Colombian Supremo", "French Press Classic"],
        order_date="March 5, 2025",
    )


class TestRetellClient:
    def test_creates_web_call(self):
        body = {"call_id": "call_123", "access_token": "tok_456", "call_status": "registered"}
        with patch("roastery.voice.retell_adapter.requests.post", return_value=_response(201, body)) as post:
            web_call = _create(_client())

        assert web_call == WebCall(call_id="call_123", access_token="tok_456")

        args, kwargs = post.call_args
        assert args[0] == "https://api.retellai.com/v2/create-web-call"
        assert kwargs["headers"]["Authorization"] == "Bearer key_test"
        assert kwargs["json"] == {
            "agent_id": "agent_test",
            "metadata": {"order_id": "order-001"},
            "retell_llm_dynamic_variables": {
                "customer_name": "Ada Lovelace",
                "product_names": "Colombian Supremo, French Press Classic",
                "order_date": "March 5, 2025",
            },
        }
        assert kwargs["timeout"] == 10.0

    def test_reads_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("RETELL_API_KEY", "env_key")
        monkeypatch.setenv("RETELL_AGENT_ID", "env_agent")
        monkeypatch.setenv("RETELL_API_URL", "https://retell.test/v2/create-web-call")
        monkeypatch.setenv("RETELL_TIMEOUT_SECONDS", "3")

        client = RetellClient()
        assert client.api_key == "env_key"
        assert client.agent_id == "env_agent"
        assert client.api_url == "https://retell.test/v2/create-web-call"
        assert client.timeout == 3.0

    def test_missing_api_key(self):
        with patch("roastery.voice.retell_adapter.requests.post") as post:
            with pytest.raises(VoiceConfigurationError, match="RETELL_API_KEY"):
                _create(_client(api_key=""))
        post.assert_not_called()

    def test_missing_agent_id(self):
        with pytest.raises(VoiceConfigurationError, match="RETELL_AGENT_ID"):
            _create(_client(agent_id=""))

    def test_non_2xx_carries_upstream_status_and_body(self):
        with patch(
            "roastery.voice.retell_adapter.requests.post",
            return_value=_response(422, text='{"error":"agent not found"}'),
        ):
            with pytest.raises(VoiceServiceError) as exc_info:
                _create(_client())

        assert exc_info.value.status == 422
        assert exc_info.value.body == '{"error":"agent not found"}'
        assert "422" in str(exc_info.value)

    def test_network_error(self):
        with patch(
            "roastery.voice.retell_adapter.requests.post",
            side_effect=requests.ConnectionError("connection refused"),
        ):
            with pytest.raises(VoiceServiceError) as exc_info:
                _create(_client())
        assert exc_info.value.status is None
