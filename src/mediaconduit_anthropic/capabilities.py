"""
mediaconduit_anthropic.capabilities - Capability definitions and limits.

This module defines the media capabilities a MediaConduit provider can
offer, the kind of provider it is, and the Anthropic provider's static
metadata.

Classes:
    MediaCapability: Enum of host capabilities (TEXT_TO_TEXT, TEXT_TO_IMAGE, etc.).
    ProviderType: Whether a provider is backed by a local process or a remote API.
    ProviderInfo: Immutable metadata about a provider's capabilities and limits.

Example:
    >>> from mediaconduit_anthropic.capabilities import MediaCapability, ProviderInfo
    >>> info = ProviderInfo(
    ...     name="anthropic",
    ...     capabilities=frozenset({MediaCapability.TEXT_TO_TEXT}),
    ... )
    >>> info.can(MediaCapability.TEXT_TO_TEXT)
    True
    >>> info.can(MediaCapability.TEXT_TO_IMAGE)
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MediaCapability(str, Enum):
    """Media transformations a provider can offer to the host.

    Values match the host's capability tags so they survive a round-trip
    through plain strings (YAML metadata, host RPC payloads).

    Example:
        >>> MediaCapability("text-to-text") is MediaCapability.TEXT_TO_TEXT
        True
    """

    TEXT_TO_TEXT = "text-to-text"  # Chat / completion
    TEXT_TO_IMAGE = "text-to-image"
    TEXT_TO_AUDIO = "text-to-audio"  # TTS
    TEXT_TO_VIDEO = "text-to-video"
    AUDIO_TO_TEXT = "audio-to-text"  # Transcription
    IMAGE_TO_TEXT = "image-to-text"  # Captioning / vision
    IMAGE_TO_IMAGE = "image-to-image"
    VIDEO_TO_AUDIO = "video-to-audio"

    @classmethod
    def coerce(cls, value: MediaCapability | str) -> MediaCapability | None:
        """Return the enum member for a tag, or None if unrecognised."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class ProviderType(str, Enum):
    """How the host should manage a provider's lifecycle."""

    LOCAL = "local"  # Host starts/stops a local process
    REMOTE = "remote"  # Remote API, nothing to start or stop


@dataclass(frozen=True)
class ProviderInfo:
    """Immutable provider metadata and capabilities.

    Attributes:
        name: Provider identifier (e.g., "anthropic").
        display_name: Human-readable provider name.
        provider_type: Local process or remote API.
        capabilities: Frozenset of MediaCapability values this provider supports.
        supports_structured_output: Whether provider can return JSON matching a schema.
        supports_streaming: Whether provider streams responses.
        max_context_tokens: Maximum context window size (None = unlimited).
        cost_per_1m_input_tokens: Cost in USD per million input tokens (None = unknown).
        cost_per_1m_output_tokens: Cost in USD per million output tokens (None = unknown).
    """

    name: str
    capabilities: frozenset[MediaCapability]
    display_name: str = ""
    provider_type: ProviderType = ProviderType.REMOTE

    # Feature flags
    supports_structured_output: bool = False
    supports_streaming: bool = False

    # Context limits
    max_context_tokens: int | None = None

    # Cost estimation (per unit)
    cost_per_1m_input_tokens: float | None = None
    cost_per_1m_output_tokens: float | None = None

    def can(self, capability: MediaCapability) -> bool:
        """Check if provider has a specific capability.

        Args:
            capability: The capability to check for.

        Returns:
            True if the provider supports this capability.
        """
        return capability in self.capabilities

    def can_all(self, *capabilities: MediaCapability) -> bool:
        """Check if provider has ALL specified capabilities."""
        return all(c in self.capabilities for c in capabilities)

    def can_any(self, *capabilities: MediaCapability) -> bool:
        """Check if provider has ANY of specified capabilities."""
        return any(c in self.capabilities for c in capabilities)


# Streaming and structured output exist upstream but this provider
# only issues plain single-shot requests.
ANTHROPIC_INFO = ProviderInfo(
    name="anthropic",
    display_name="Anthropic",
    provider_type=ProviderType.REMOTE,
    capabilities=frozenset({MediaCapability.TEXT_TO_TEXT}),
    supports_structured_output=False,
    supports_streaming=False,
    max_context_tokens=200_000,
    cost_per_1m_input_tokens=3.00,
    cost_per_1m_output_tokens=15.00,
)


__all__ = [
    "MediaCapability",
    "ProviderType",
    "ProviderInfo",
    "ANTHROPIC_INFO",
]
