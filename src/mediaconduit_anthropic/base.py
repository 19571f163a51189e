"""
mediaconduit_anthropic.base - Host-facing provider contracts.

This module defines the contracts the MediaConduit host expects from a
dynamically loaded provider plugin.

Classes:
    MediaProvider: Abstract base class every provider plugin implements.

Protocols:
    TextToTextProvider: Provider that can hand out text-generation models.
    TextToTextModel: Per-model handle that turns a prompt into text.

Example:
    >>> provider = AnthropicProvider()
    >>> if isinstance(provider, TextToTextProvider):
    ...     model = await provider.create_text_to_text_model("claude-3-5-haiku-latest")
    ...     result = await model.generate("Hello")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mediaconduit_anthropic.capabilities import (
        MediaCapability,
        ProviderInfo,
        ProviderType,
    )
    from mediaconduit_anthropic.types import (
        GenerationOptions,
        GenerationResult,
        ModelDescriptor,
        ProviderHealth,
        ServiceStatus,
    )


class MediaProvider(ABC):
    """Abstract base class for all MediaConduit provider plugins.

    The host only talks to plugins through this surface: identity and
    capability enumeration, model listing and lookup, model-handle
    creation, availability probing, and service lifecycle.

    Attributes:
        id: Stable provider id (e.g., "anthropic").
        name: Human-readable provider name.
        type: Whether the host manages a local process for this provider.
        capabilities: Capabilities this provider offers.
    """

    id: str
    name: str
    type: ProviderType
    capabilities: list[MediaCapability]

    @property
    @abstractmethod
    def info(self) -> ProviderInfo:
        """Return provider capabilities and limits."""
        ...

    @property
    @abstractmethod
    def models(self) -> list[ModelDescriptor]:
        """All models currently offered by this provider."""
        ...

    @abstractmethod
    async def configure(self, config: Mapping[str, Any]) -> None:
        """Apply host-supplied configuration (credentials, endpoints).

        Raises:
            ConfigurationError: If required settings are missing.
        """
        ...

    @abstractmethod
    async def is_available(self) -> bool:
        """Check if the provider is configured and reachable.

        Implementations must not raise; any failure means False.
        """
        ...

    @abstractmethod
    def get_models_for_capability(
        self, capability: MediaCapability
    ) -> list[ModelDescriptor]:
        """Models that offer a capability. Empty for unsupported capabilities."""
        ...

    @abstractmethod
    async def get_model(self, model_id: str) -> Any:
        """Create a model handle for the given id."""
        ...

    @abstractmethod
    async def get_health(self) -> ProviderHealth:
        ...

    async def start_service(self) -> bool:
        """Start the backing service. Remote providers just probe availability."""
        return await self.is_available()

    async def stop_service(self) -> bool:
        """Stop the backing service. Remote providers have nothing to stop."""
        return True

    @abstractmethod
    async def get_service_status(self) -> ServiceStatus:
        ...


@runtime_checkable
class TextToTextModel(Protocol):
    """Protocol for a per-model text generation handle.

    Example:
        >>> model = await provider.create_text_to_text_model("claude-3-opus-latest")
        >>> result = await model.generate("Summarize this transcript...")
        >>> print(result.text)
    """

    model_id: str

    async def generate(
        self,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Generate text for a prompt.

        Raises:
            UnsupportedModelError: If the model is no longer offered.
            TransportError: If the request fails.
            EmptyResponseError: If the response has no content.
        """
        ...


@runtime_checkable
class TextToTextProvider(Protocol):
    """Protocol for providers offering text-to-text models."""

    async def create_text_to_text_model(self, model_id: str) -> TextToTextModel:
        """Create a handle bound to model_id.

        Raises:
            ConfigurationError: If the provider is not configured.
            UnsupportedModelError: If model_id is not offered.
        """
        ...

    def supports_text_to_text_model(self, model_id: str) -> bool:
        ...

    def get_supported_text_to_text_models(self) -> list[str]:
        ...


__all__ = [
    "MediaProvider",
    "TextToTextModel",
    "TextToTextProvider",
]
