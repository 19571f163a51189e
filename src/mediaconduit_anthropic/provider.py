"""
mediaconduit_anthropic.provider - AnthropicProvider implementation.

Exposes Claude models to the MediaConduit host as text-to-text models.
The provider owns one API client and one model registry; both live and
die with the provider instance.

Example:
    >>> provider = AnthropicProvider()          # reads ANTHROPIC_API_KEY
    >>> provider.supports_text_to_text_model("claude-3-5-sonnet-latest")
    True
    >>> await provider.configure({"api_key": "sk-ant-..."})  # live discovery
    >>> result = await provider.generate("claude-3-5-haiku-latest", "Hello")
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping
from typing import Any

from mediaconduit_anthropic.base import MediaProvider
from mediaconduit_anthropic.capabilities import (
    ANTHROPIC_INFO,
    MediaCapability,
    ProviderInfo,
    ProviderType,
)
from mediaconduit_anthropic.client import AnthropicAPIClient
from mediaconduit_anthropic.config import AnthropicConfig, get_anthropic_config
from mediaconduit_anthropic.exceptions import (
    ConfigurationError,
    UnsupportedModelError,
)
from mediaconduit_anthropic.registry import ModelRegistry, RegistryState
from mediaconduit_anthropic.text_model import AnthropicTextToTextModel
from mediaconduit_anthropic.types import (
    GenerationOptions,
    GenerationResult,
    ModelDescriptor,
    ProviderHealth,
    ServiceStatus,
)

logger = logging.getLogger(__name__)

_STARTED_AT = time.monotonic()

_NOT_CONFIGURED = (
    "Provider not configured - set ANTHROPIC_API_KEY environment variable "
    "or call configure()"
)


class AnthropicProvider(MediaProvider):
    """Anthropic Claude provider for text-to-text generation.

    Construction never touches the network. With credentials available
    (argument, config file or environment), the registry is seeded from
    the known-model list immediately; live discovery runs on configure(),
    on refresh_models(), or in the background when discover_on_init is set
    and an event loop is running.

    Without credentials the provider is constructible but inert until
    configure() is called.

    Args:
        config: Resolved configuration. Defaults to get_anthropic_config().
        discover_on_init: Schedule background discovery at construction.
    """

    id = "anthropic"
    name = "Anthropic"
    type = ProviderType.REMOTE

    def __init__(
        self,
        config: AnthropicConfig | None = None,
        *,
        discover_on_init: bool = False,
    ):
        self.capabilities = [MediaCapability.TEXT_TO_TEXT]
        self._config = config if config is not None else get_anthropic_config()
        self._api_client: AnthropicAPIClient | None = None
        self._registry = ModelRegistry()
        self._discovery_task: asyncio.Task | None = None

        if not self._config.has_credentials:
            logger.debug("No Anthropic API key found; provider inactive until configured")
            return

        self._api_client = AnthropicAPIClient(self._config)
        self._registry.seed()

        if discover_on_init:
            self._schedule_discovery()

    @property
    def info(self) -> ProviderInfo:
        return ANTHROPIC_INFO

    @property
    def config(self) -> AnthropicConfig:
        return self._config

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    @property
    def is_configured(self) -> bool:
        return self._api_client is not None

    @property
    def models(self) -> list[ModelDescriptor]:
        return self._registry.descriptors()

    def _schedule_discovery(self) -> None:
        """Start discovery as a background task on the running loop."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; skipping background model discovery")
            return
        self._discovery_task = loop.create_task(self.refresh_models())

    async def _cancel_discovery(self) -> None:
        task, self._discovery_task = self._discovery_task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def wait_for_discovery(self) -> RegistryState:
        """Wait for background discovery, if one was scheduled."""
        if self._discovery_task is not None:
            await self._discovery_task
        return self._registry.state

    async def refresh_models(self) -> RegistryState:
        """Re-run discovery against the API. Never raises.

        Returns:
            Registry state afterwards (EMPTY if not configured).
        """
        if self._api_client is None:
            return self._registry.state
        return await self._registry.discover(self._api_client)

    async def configure(self, config: AnthropicConfig | Mapping[str, Any]) -> None:
        """Apply new credentials and refresh the model list.

        Args:
            config: AnthropicConfig or a host mapping with api_key
                (or apiKey), base_url and timeout (milliseconds).

        Raises:
            ConfigurationError: If no api key is supplied.
        """
        if not isinstance(config, AnthropicConfig):
            config = AnthropicConfig.from_mapping(dict(config))
        self._config = config

        if not config.api_key:
            raise ConfigurationError()

        # A discovery still running under the old client must not land afterwards
        await self._cancel_discovery()
        if self._api_client is not None:
            await self._api_client.aclose()
        self._api_client = AnthropicAPIClient(config)
        await self.refresh_models()

    async def is_available(self) -> bool:
        if self._api_client is None:
            return False
        try:
            return await self._api_client.test_connection()
        except Exception as e:
            logger.warning(f"Anthropic availability check failed: {e}")
            return False

    def get_models_for_capability(
        self, capability: MediaCapability | str
    ) -> list[ModelDescriptor]:
        return self._registry.list_for_capability(capability)

    def supports_text_to_text_model(self, model_id: str) -> bool:
        return self._registry.supports(model_id)

    def get_supported_text_to_text_models(self) -> list[str]:
        return [
            d.id
            for d in self._registry.list_for_capability(MediaCapability.TEXT_TO_TEXT)
        ]

    async def create_text_to_text_model(self, model_id: str) -> AnthropicTextToTextModel:
        """Create a generation handle bound to model_id.

        Raises:
            ConfigurationError: If the provider has no API client yet.
            UnsupportedModelError: If model_id is not in the registry.
        """
        if self._api_client is None:
            raise ConfigurationError("Provider not configured")
        if not self.supports_text_to_text_model(model_id):
            raise UnsupportedModelError(model_id, available=self._registry.model_ids())
        return AnthropicTextToTextModel(self._api_client, model_id, self._registry)

    async def get_model(self, model_id: str) -> AnthropicTextToTextModel:
        if self._api_client is None:
            raise ConfigurationError(_NOT_CONFIGURED)
        return await self.create_text_to_text_model(model_id)

    async def generate(
        self,
        model_id: str,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Run one generation against model_id.

        Both preconditions are checked before any network I/O.

        Raises:
            ConfigurationError: If the provider is not configured.
            UnsupportedModelError: If model_id is not in the registry.
            TransportError: If the request fails.
            EmptyResponseError: If the response has no content.
        """
        model = await self.get_model(model_id)
        return await model.generate(prompt, options)

    async def get_health(self) -> ProviderHealth:
        available = await self.is_available()
        return ProviderHealth(
            status="healthy" if available else "unhealthy",
            uptime=time.monotonic() - _STARTED_AT,
            active_jobs=0,
            queued_jobs=0,
            last_error=None if available else "API connection failed",
        )

    async def get_service_status(self) -> ServiceStatus:
        # Remote APIs are always "running"
        healthy = await self.is_available()
        error = None if self.is_configured else _NOT_CONFIGURED
        return ServiceStatus(running=True, healthy=healthy, error=error)

    async def aclose(self) -> None:
        """Tear down the provider: stop discovery, close the client, drop models."""
        await self._cancel_discovery()
        if self._api_client is not None:
            await self._api_client.aclose()
            self._api_client = None
        self._registry.clear()

    def __repr__(self) -> str:
        return (
            f"AnthropicProvider(configured={self.is_configured}, "
            f"registry={self._registry!r})"
        )


__all__ = ["AnthropicProvider"]
