"""
Unit tests for the ProviderGateway.

HTTP is mocked by patching requests.post in the gateway module.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from filecontext.core.config import Settings
from filecontext.llm.gateway import (
    MAX_BACKEND_ERROR_LENGTH,
    TOGETHER_INFERENCE_URL,
    TOGETHER_MAX_TOKENS,
    ProviderError,
    ProviderGateway,
)
from filecontext.models.query import ModelResponse, ProviderName

POST = "filecontext.llm.gateway.requests.post"


def _response(json_data=None, status_code=200, json_error=None):
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    return response


@pytest.fixture
def gateway(settings):
    return ProviderGateway(settings)


class TestOllama:
    """Test cases for the local-inference backend."""

    def test_success(self, gateway, settings):
        with patch(POST, return_value=_response({"response": "A greeting."})) as post:
            result = gateway.query("ollama", "PROMPT", "raw")

        assert result == ModelResponse(text="A greeting.", model="ollama", error="")
        post.assert_called_once_with(
            "http://ollama.test:11434/api/generate",
            json={"model": "llama2", "prompt": "PROMPT", "stream": False},
            headers=None,
            timeout=settings.provider_timeout_seconds,
        )

    def test_prompt_sent_unchanged(self, gateway):
        with patch(POST, return_value=_response({"response": "ok"})) as post:
            gateway.query("ollama", "exact prompt text", "raw context that is not sent")

        assert post.call_args.kwargs["json"]["prompt"] == "exact prompt text"

    @pytest.mark.parametrize("body", [{}, {"response": ""}, {"response": None}, ["x"], "text"])
    def test_missing_or_empty_text_is_an_error(self, gateway, body):
        with patch(POST, return_value=_response(body)):
            result = gateway.query("ollama", "p", "c")

        assert result.text == ""
        assert result.error == "Invalid response from Ollama"
        assert result.model == "ollama"

    def test_connection_error(self, gateway):
        with patch(POST, side_effect=requests.exceptions.ConnectionError("refused")):
            result = gateway.query("ollama", "p", "c")

        assert result.text == ""
        assert result.error == "Could not connect to Ollama"
        assert result.model == "ollama"

    def test_timeout(self, gateway):
        with patch(POST, side_effect=requests.exceptions.ReadTimeout("slow")):
            result = gateway.query("ollama", "p", "c")

        assert result.error == "Ollama request timed out"

    def test_http_error_status(self, gateway):
        with patch(POST, return_value=_response({"error": "boom"}, status_code=500)):
            result = gateway.query("ollama", "p", "c")

        assert result.error == "Ollama returned HTTP 500: boom"
        assert result.text == ""

    def test_http_error_includes_backend_message(self, gateway):
        body = {"error": "model 'mistral' not found, try pulling it first"}
        with patch(POST, return_value=_response(body, status_code=404)):
            result = gateway.query("ollama", "p", "c")

        assert result.error == (
            "Ollama returned HTTP 404: model 'mistral' not found, try pulling it first"
        )

    def test_long_backend_message_is_capped(self, gateway):
        body = {"error": "x" * 5000}
        with patch(POST, return_value=_response(body, status_code=500)):
            result = gateway.query("ollama", "p", "c")

        prefix = "Ollama returned HTTP 500: "
        assert result.error.startswith(prefix)
        assert result.error[len(prefix):] == "x" * MAX_BACKEND_ERROR_LENGTH + "..."

    @pytest.mark.parametrize("json_data,json_error", [
        ({"error": 42}, None),
        (["boom"], None),
        (None, ValueError("no json")),
    ])
    def test_error_body_without_message(self, gateway, json_data, json_error):
        response = _response(json_data, status_code=502, json_error=json_error)
        with patch(POST, return_value=response):
            result = gateway.query("ollama", "p", "c")

        assert result.error == "Ollama returned HTTP 502"

    def test_body_not_json(self, gateway):
        with patch(POST, return_value=_response(json_error=ValueError("no json"))):
            result = gateway.query("ollama", "p", "c")

        assert "not JSON" in result.error


class TestTogether:
    """Test cases for the cloud-inference backend."""

    def test_success_with_output_text(self, gateway):
        body = {"output": {"text": "cloud answer"}}
        with patch(POST, return_value=_response(body)) as post:
            result = gateway.query("together", "PROMPT", "raw")

        assert result == ModelResponse(text="cloud answer", model="together", error="")
        args, kwargs = post.call_args
        assert args[0] == TOGETHER_INFERENCE_URL
        assert kwargs["json"] == {
            "model": "mistral-7b",
            "prompt": "PROMPT",
            "max_tokens": TOGETHER_MAX_TOKENS,
        }
        assert kwargs["headers"] == {"Authorization": "Bearer test-key"}
        assert kwargs["timeout"] == 5

    def test_success_with_choices(self, gateway):
        body = {"output": {"choices": [{"text": "from choices"}]}}
        with patch(POST, return_value=_response(body)):
            result = gateway.query("together", "p", "c")

        assert result.text == "from choices"

    def test_malformed_body(self, gateway):
        with patch(POST, return_value=_response({"status": "finished"})):
            result = gateway.query("together", "p", "c")

        assert result.text == ""
        assert result.error == "Invalid response from Together"
        assert result.model == "together"

    def test_auth_failure(self, gateway):
        with patch(POST, return_value=_response({}, status_code=401)):
            result = gateway.query("together", "p", "c")

        assert result.error == "Together rejected the credentials (HTTP 401)"

    def test_auth_failure_keeps_backend_message(self, gateway):
        with patch(POST, return_value=_response({"error": "invalid api key"}, status_code=403)):
            result = gateway.query("together", "p", "c")

        assert result.error == "Together rejected the credentials (HTTP 403): invalid api key"

    def test_missing_api_key_makes_no_request(self, settings):
        no_key = Settings(**{**settings.__dict__, "together_api_key": ""})
        with patch(POST) as post:
            result = ProviderGateway(no_key).query("together", "p", "c")

        post.assert_not_called()
        assert result.error == "Together API key is not configured"
        assert result.model == "together"


class TestDispatch:
    """Test cases for provider selection and normalization."""

    def test_accepts_enum_identifier(self, gateway):
        with patch(POST, return_value=_response({"response": "ok"})):
            result = gateway.query(ProviderName.OLLAMA, "p", "c")

        assert result.model == "ollama"

    def test_unknown_provider_is_normalized(self, gateway):
        with patch(POST) as post:
            result = gateway.query("gpt", "p", "c")

        post.assert_not_called()
        assert result.model == "gpt"
        assert result.text == ""
        assert "Unknown provider" in result.error

    def test_custom_provider_table(self, settings):
        calls = []

        def echo(cfg, prompt):
            calls.append((cfg, prompt))
            return prompt.upper()

        gateway = ProviderGateway(settings, providers={"echo": echo})
        result = gateway.query("echo", "hi", "")

        assert result == ModelResponse(text="HI", model="echo", error="")
        assert calls == [(settings, "hi")]

    def test_unexpected_exception_never_escapes(self, settings):
        def broken(cfg, prompt):
            raise RuntimeError("kaboom")

        result = ProviderGateway(settings, providers={"ollama": broken}).query("ollama", "p", "c")

        assert result == ModelResponse(text="", model="ollama", error="kaboom")

    def test_provider_error_keeps_cause(self):
        cause = requests.exceptions.ConnectionError("refused")
        err = ProviderError("ollama", "Could not connect to Ollama", cause=cause)

        assert err.provider == "ollama"
        assert err.cause is cause
        assert str(err) == "Could not connect to Ollama"

    def test_response_ok_reflects_error(self, gateway):
        with patch(POST, return_value=_response({"response": "fine"})):
            success = gateway.query("ollama", "p", "c")
        with patch(POST, side_effect=requests.exceptions.ConnectionError("refused")):
            failure = gateway.query("ollama", "p", "c")

        assert success.ok
        assert not failure.ok
