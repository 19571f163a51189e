"""
mediaconduit_anthropic - Anthropic Claude provider plugin for MediaConduit.

This package exposes Claude models to the MediaConduit media-processing
host as text-to-text models. The host discovers it through the
``mediaconduit.providers`` entry point; the same classes can be used
directly.

Public API:
    AnthropicProvider: The provider plugin (host entry point).
    AnthropicTextToTextModel: Per-model generation handle.
    AnthropicAPIClient: Thin async client for the Claude API.
    load_provider(name) -> MediaProvider
        Load a provider by name or alias.

Example:
    >>> from mediaconduit_anthropic import AnthropicProvider
    >>> provider = AnthropicProvider()
    >>> model = await provider.create_text_to_text_model("claude-3-5-sonnet-latest")
    >>> result = await model.generate("Describe this scene", {"temperature": 0.2})
    >>> print(result.text)
"""

from __future__ import annotations

from mediaconduit_anthropic.base import (
    MediaProvider,
    TextToTextModel,
    TextToTextProvider,
)
from mediaconduit_anthropic.capabilities import (
    ANTHROPIC_INFO,
    MediaCapability,
    ProviderInfo,
    ProviderType,
)
from mediaconduit_anthropic.client import AnthropicAPIClient
from mediaconduit_anthropic.config import AnthropicConfig, get_anthropic_config
from mediaconduit_anthropic.exceptions import (
    AnthropicProviderError,
    ConfigurationError,
    EmptyResponseError,
    ModelDiscoveryError,
    TransportError,
    UnsupportedModelError,
)
from mediaconduit_anthropic.loader import list_providers, load_provider
from mediaconduit_anthropic.provider import AnthropicProvider
from mediaconduit_anthropic.registry import ModelRegistry, RegistryState
from mediaconduit_anthropic.text_model import AnthropicTextToTextModel
from mediaconduit_anthropic.types import (
    GenerationOptions,
    GenerationResult,
    ModelDescriptor,
    ParameterSpec,
    ProviderHealth,
    RemoteModel,
    ServiceStatus,
)

__version__ = "0.1.0"

# Default export for hosts that load the module rather than an entry point
default = AnthropicProvider

__all__ = [
    # Provider access
    "AnthropicProvider",
    "AnthropicTextToTextModel",
    "AnthropicAPIClient",
    "load_provider",
    "list_providers",
    "default",
    # Contracts
    "MediaProvider",
    "TextToTextModel",
    "TextToTextProvider",
    # Capability types
    "MediaCapability",
    "ProviderType",
    "ProviderInfo",
    "ANTHROPIC_INFO",
    # Registry
    "ModelRegistry",
    "RegistryState",
    # Config
    "AnthropicConfig",
    "get_anthropic_config",
    # Data types
    "GenerationOptions",
    "GenerationResult",
    "ModelDescriptor",
    "ParameterSpec",
    "ProviderHealth",
    "RemoteModel",
    "ServiceStatus",
    # Errors
    "AnthropicProviderError",
    "ConfigurationError",
    "EmptyResponseError",
    "ModelDiscoveryError",
    "TransportError",
    "UnsupportedModelError",
]
