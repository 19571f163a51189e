"""
mediaconduit_anthropic.client - Minimal client for Anthropic's Claude API.

Wraps the async Anthropic SDK for the two calls the provider needs:
listing models (GET /v1/models) and creating a message (POST /v1/messages).
SDK errors are translated into TransportError so callers never have to
import the SDK to handle failures.

Example:
    >>> client = AnthropicAPIClient(AnthropicConfig(api_key="sk-ant-..."))
    >>> text = await client.generate_text(
    ...     "claude-3-5-haiku-latest",
    ...     "Write a haiku about rivers",
    ...     GenerationOptions(temperature=0.3),
    ... )
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import anthropic

from mediaconduit_anthropic.config import AnthropicConfig
from mediaconduit_anthropic.exceptions import (
    ConfigurationError,
    EmptyResponseError,
    ModelDiscoveryError,
    TransportError,
)
from mediaconduit_anthropic.types import (
    DEFAULT_MAX_TOKENS,
    GenerationOptions,
    GenerationResult,
    RemoteModel,
)

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"

# Page size for GET /v1/models (API maximum)
_MODELS_PAGE_LIMIT = 1000


def build_messages(prompt: str, system: str | None = None) -> list[dict[str, str]]:
    """Build the message list for a single-turn request.

    Args:
        prompt: User prompt.
        system: Optional system instruction, sent as a leading system-role message.

    Returns:
        Message dicts in send order.
    """
    messages: list[dict[str, str]] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    return messages


def build_request(
    model: str,
    prompt: str,
    options: GenerationOptions,
    default_max_tokens: int = DEFAULT_MAX_TOKENS,
) -> dict[str, Any]:
    """Build keyword arguments for ``messages.create``.

    Optional fields are only present when set, so the API applies its own
    defaults for anything the caller leaves out.
    """
    request: dict[str, Any] = {
        "model": model,
        "max_tokens": options.max_tokens or default_max_tokens,
        "messages": build_messages(prompt, options.system),
    }
    if options.temperature is not None:
        request["temperature"] = options.temperature
    if options.top_p is not None:
        request["top_p"] = options.top_p
    if options.stop_sequences:
        request["stop_sequences"] = list(options.stop_sequences)
    return request


def extract_text(response: Any) -> str:
    """Concatenate the text segments of a Messages API response, in order.

    Raises:
        EmptyResponseError: If the response has no text segments.
    """
    content = getattr(response, "content", None) if response is not None else None
    texts = [
        block.text
        for block in content or []
        if getattr(block, "type", "text") == "text"
    ]
    if not texts:
        raise EmptyResponseError(model_id=getattr(response, "model", None))
    return "".join(texts)


def _to_remote_model(model: Any) -> RemoteModel:
    created_at = getattr(model, "created_at", None)
    return RemoteModel(
        id=model.id,
        display_name=getattr(model, "display_name", None) or None,
        created_at=created_at.isoformat() if hasattr(created_at, "isoformat") else created_at,
        type=getattr(model, "type", None) or "model",
    )


def _transport_error(action: str, error: anthropic.APIError, cls=TransportError):
    status_code = getattr(error, "status_code", None)
    return cls(f"{action}: {error}", status_code=status_code)


class AnthropicAPIClient:
    """Thin async wrapper around ``anthropic.AsyncAnthropic``.

    The SDK client is created lazily on first use. Retries are disabled;
    a failed request surfaces immediately as TransportError.

    Args:
        config: Resolved provider configuration. Must carry an api_key.

    Raises:
        ConfigurationError: If config has no api_key.
    """

    def __init__(self, config: AnthropicConfig):
        if not config.api_key:
            raise ConfigurationError()
        self._config = config
        self._client: Any = None
        logger.debug(
            "Initializing Anthropic client (base_url=%s, timeout=%.0fs)",
            config.base_url or "default",
            config.timeout_seconds,
        )

    @property
    def config(self) -> AnthropicConfig:
        return self._config

    def _get_client(self) -> Any:
        """Lazy-load the async Anthropic client."""
        if self._client is None:
            kwargs: dict[str, Any] = {
                "api_key": self._config.api_key,
                "timeout": self._config.timeout_seconds,
                "max_retries": 0,
                "default_headers": {"anthropic-version": ANTHROPIC_VERSION},
            }
            if self._config.base_url:
                kwargs["base_url"] = self._config.base_url
            self._client = anthropic.AsyncAnthropic(**kwargs)
        return self._client

    async def test_connection(self) -> bool:
        """Probe the listing endpoint. Never raises."""
        try:
            await self._get_client().models.list(limit=1)
        except Exception as e:
            logger.warning("Anthropic connection test failed: %s", e)
            return False
        logger.debug("Anthropic connection test successful")
        return True

    async def get_available_models(self) -> list[RemoteModel]:
        """List every model visible to the API key, following pagination.

        Raises:
            ModelDiscoveryError: If the listing call fails or returns an
                unexpected shape.
        """
        client = self._get_client()
        models: list[RemoteModel] = []
        after_id: str | None = None
        try:
            while True:
                params: dict[str, Any] = {"limit": _MODELS_PAGE_LIMIT}
                if after_id:
                    params["after_id"] = after_id
                page = await client.models.list(**params)
                models.extend(_to_remote_model(m) for m in page.data or [])
                last_id = getattr(page, "last_id", None)
                if page.has_more is not True or not last_id or last_id == after_id:
                    break
                after_id = last_id
        except anthropic.APIError as e:
            raise _transport_error(
                "Failed to fetch Anthropic models", e, ModelDiscoveryError
            ) from e
        except (AttributeError, TypeError) as e:
            raise ModelDiscoveryError(
                f"Failed to fetch Anthropic models: unexpected response shape ({e})"
            ) from e
        return models

    async def create_message(
        self,
        model: str,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Send one Messages API request and collect the text result.

        Args:
            model: Model identifier.
            prompt: User prompt.
            options: Optional generation settings.

        Returns:
            GenerationResult with concatenated text and usage.

        Raises:
            ValueError: If options are invalid.
            TransportError: If the request fails.
            EmptyResponseError: If the response has no content.
        """
        opts = GenerationOptions.coerce(options)
        request = build_request(
            model, prompt, opts, self._config.max_tokens or DEFAULT_MAX_TOKENS
        )
        try:
            response = await self._get_client().messages.create(**request)
        except anthropic.APIError as e:
            raise _transport_error("Anthropic request failed", e) from e

        text = extract_text(response)
        usage = getattr(response, "usage", None)
        return GenerationResult(
            text=text,
            model=model,
            stop_reason=getattr(response, "stop_reason", None),
            input_tokens=getattr(usage, "input_tokens", None),
            output_tokens=getattr(usage, "output_tokens", None),
        )

    async def generate_text(
        self,
        model: str,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> str:
        """Like create_message, but returns only the text."""
        result = await self.create_message(model, prompt, options)
        return result.text

    async def aclose(self) -> None:
        """Close the underlying HTTP client, if one was created."""
        if self._client is not None:
            await self._client.close()
            self._client = None


__all__ = [
    "ANTHROPIC_VERSION",
    "AnthropicAPIClient",
    "build_messages",
    "build_request",
    "extract_text",
]
