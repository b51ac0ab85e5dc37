"""
Provider Gateway for Ollama and Together AI.

This module sends a finished prompt to one of two model backends:
- ollama:   a local Ollama server (POST {base_url}/api/generate)
- together: the Together AI inference API (bearer-authenticated)

Both backends share one signature and are selected from a dispatch table
keyed by provider id. Adding a backend means adding one function and one
table entry.

The gateway is the only place backend faults are handled. Transport errors,
HTTP error statuses, timeouts, a missing API key and malformed bodies are
raised internally as ProviderError, logged with their cause, and returned as
ModelResponse.error. query() never raises. No retries are attempted.
"""
from typing import Any, Callable, Dict, Optional

import requests

from filecontext.core.config import Settings
from filecontext.core.logging_config import get_logger
from filecontext.models.query import ModelResponse, ProviderName

logger = get_logger(__name__)

TOGETHER_INFERENCE_URL = "https://api.together.xyz/inference"
TOGETHER_MAX_TOKENS = 512

# Longest backend `error` text copied into ModelResponse.error
MAX_BACKEND_ERROR_LENGTH = 200


class LLMError(Exception):
    """
    Base exception for model backend failures.

    Never escapes the gateway; see ProviderGateway.query.
    """
    pass


class ProviderError(LLMError):
    """A backend call failed. Keeps the provider id and the underlying cause."""

    def __init__(self, provider: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.provider = provider
        self.message = message
        self.cause = cause


def _backend_error_message(response: Any) -> str:
    """Return the `error` field of a JSON error body, or "" when there is none."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if not isinstance(body, dict) or not isinstance(body.get("error"), str):
        return ""

    message = body["error"].strip()
    if len(message) > MAX_BACKEND_ERROR_LENGTH:
        message = message[:MAX_BACKEND_ERROR_LENGTH] + "..."
    return message


def _describe_http_error(provider: str, err: requests.exceptions.RequestException) -> str:
    """Build a short error description, with status code when there is one."""
    label = provider.capitalize()

    if isinstance(err, requests.exceptions.Timeout):
        return f"{label} request timed out"
    if isinstance(err, requests.exceptions.ConnectionError):
        return f"Could not connect to {label}"

    status_code = None
    if getattr(err, "response", None) is not None:
        status_code = getattr(err.response, "status_code", None)

    if status_code in (401, 403):
        description = f"{label} rejected the credentials (HTTP {status_code})"
    elif status_code:
        description = f"{label} returned HTTP {status_code}"
    else:
        return f"{label} request failed: {err}"

    backend_message = _backend_error_message(err.response)
    if backend_message:
        return f"{description}: {backend_message}"
    return description


def _post_json(
    provider: str,
    url: str,
    payload: Dict[str, Any],
    timeout: float,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """POST a JSON payload and return the decoded JSON body."""
    try:
        response = requests.post(url, json=payload, headers=headers, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise ProviderError(provider, _describe_http_error(provider, e), cause=e) from e

    try:
        return response.json()
    except ValueError as e:
        raise ProviderError(
            provider, f"Invalid response from {provider.capitalize()}: body is not JSON", cause=e
        ) from e


def query_ollama(settings: Settings, prompt: str) -> str:
    """
    Run a non-streamed generation on the local Ollama server.

    Returns:
        The generated text

    Raises:
        ProviderError: On any failure, including an empty `response` field
    """
    provider = ProviderName.OLLAMA.value
    data = _post_json(
        provider,
        f"{settings.ollama_base_url}/api/generate",
        {
            "model": settings.ollama_model,
            "prompt": prompt,
            "stream": False,
        },
        timeout=settings.provider_timeout_seconds,
    )

    text = data.get("response") if isinstance(data, dict) else None
    if not isinstance(text, str) or not text:
        raise ProviderError(provider, "Invalid response from Ollama")

    return text


def query_together(settings: Settings, prompt: str) -> str:
    """
    Run a completion on the Together AI inference endpoint.

    Returns:
        The completion text

    Raises:
        ProviderError: On any failure, including a missing API key
    """
    provider = ProviderName.TOGETHER.value
    if not settings.together_api_key:
        raise ProviderError(provider, "Together API key is not configured")

    data = _post_json(
        provider,
        TOGETHER_INFERENCE_URL,
        {
            "model": settings.together_model,
            "prompt": prompt,
            "max_tokens": TOGETHER_MAX_TOKENS,
        },
        timeout=settings.provider_timeout_seconds,
        headers={"Authorization": f"Bearer {settings.together_api_key}"},
    )

    text = _extract_together_text(data)
    if not text:
        raise ProviderError(provider, "Invalid response from Together")

    return text


def _extract_together_text(data: Any) -> Optional[str]:
    """Read output.text, falling back to output.choices[0].text."""
    if not isinstance(data, dict):
        return None

    output = data.get("output")
    if not isinstance(output, dict):
        return None

    text = output.get("text")
    if isinstance(text, str) and text:
        return text

    choices = output.get("choices")
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        text = choices[0].get("text")
        if isinstance(text, str):
            return text

    return None


ProviderFn = Callable[[Settings, str], str]

PROVIDERS: Dict[str, ProviderFn] = {
    ProviderName.OLLAMA.value: query_ollama,
    ProviderName.TOGETHER.value: query_together,
}


class ProviderGateway:
    """
    Dispatches prompts to a model backend and normalizes the outcome.

    Configuration is passed in at construction; nothing is read from the
    environment here, so tests can point the gateway at fake endpoints.

    Example:
        >>> gateway = ProviderGateway(get_settings())
        >>> response = gateway.query("ollama", prompt, raw_context)
        >>> response.model
        'ollama'
    """

    def __init__(self, settings: Settings, providers: Optional[Dict[str, ProviderFn]] = None):
        self.settings = settings
        self.providers = dict(providers) if providers is not None else dict(PROVIDERS)
        logger.info(
            f"Provider gateway initialized: providers={sorted(self.providers)}, "
            f"timeout={settings.provider_timeout_seconds}s"
        )

    def query(self, provider: str, prompt: str, raw_context: str = "") -> ModelResponse:
        """
        Send `prompt` to `provider` and return a ModelResponse.

        `raw_context` is the untruncated context; it is only used for
        diagnostics, the prompt already contains the bounded version.

        Never raises: every failure comes back as ModelResponse.error with
        `model` set to the requested provider.
        """
        provider = provider.value if isinstance(provider, ProviderName) else str(provider)

        logger.debug(
            f"Dispatching to {provider}: prompt_chars={len(prompt)}, "
            f"raw_context_chars={len(raw_context)}"
        )

        handler = self.providers.get(provider)
        if handler is None:
            logger.error(f"Unknown provider requested: {provider}")
            return ModelResponse.failure(provider, f"Unknown provider: {provider}")

        try:
            text = handler(self.settings, prompt)
        except ProviderError as e:
            logger.error(f"Provider failed ({provider}): {e.message}", exc_info=e.cause)
            return ModelResponse.failure(provider, e.message)
        except Exception as e:
            logger.exception(f"Unexpected error from provider {provider}: {e}")
            return ModelResponse.failure(provider, str(e) or type(e).__name__)

        logger.info(f"Provider {provider} answered: response_chars={len(text)}")
        return ModelResponse.success(provider, text)
