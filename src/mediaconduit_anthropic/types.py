"""
mediaconduit_anthropic.types - Data types shared by the client, registry and provider.

Types:
    ParameterSpec: Advertised range and default for one generation parameter.
    ModelDescriptor: Immutable metadata for one remote model.
    RemoteModel: One entry returned by the model listing endpoint.
    GenerationOptions: Optional knobs for a single generation request.
    GenerationResult: Text (and bookkeeping) returned by a generation.
    ProviderHealth: Health snapshot reported to the host.
    ServiceStatus: Service lifecycle snapshot reported to the host.

Example:
    >>> options = GenerationOptions(system="Be terse.", temperature=0.2)
    >>> options.max_tokens is None
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from types import MappingProxyType
from typing import Any, Literal

from mediaconduit_anthropic.capabilities import MediaCapability

# Default when the caller does not cap the response length
DEFAULT_MAX_TOKENS = 1024


@dataclass(frozen=True)
class ParameterSpec:
    """Advertised schema for a single generation parameter.

    Attributes:
        type: JSON-ish type name ("number", "integer", "string").
        min: Inclusive lower bound.
        max: Inclusive upper bound.
        default: Value used when the caller leaves the parameter unset.
    """

    type: str
    min: float | None = None
    max: float | None = None
    default: Any = None

    def to_dict(self) -> dict:
        return asdict(self)


# Parameter schema advertised for every Claude model
DEFAULT_PARAMETERS: Mapping[str, ParameterSpec] = MappingProxyType(
    {
        "temperature": ParameterSpec(type="number", min=0, max=1, default=0.7),
        "max_tokens": ParameterSpec(
            type="number", min=1, max=100000, default=DEFAULT_MAX_TOKENS
        ),
        "top_p": ParameterSpec(type="number", min=0, max=1, default=1),
    }
)


@dataclass(frozen=True)
class ModelDescriptor:
    """Immutable metadata for one remote model.

    Descriptors are created during seeding or discovery and never mutated;
    re-discovery replaces them wholesale.

    Attributes:
        id: Vendor-assigned model identifier (unique).
        name: Human-readable display name.
        description: Short description shown by the host.
        capabilities: Capability tags (always {TEXT_TO_TEXT} here).
        parameters: Parameter name -> ParameterSpec.
    """

    id: str
    name: str
    description: str = ""
    capabilities: frozenset[MediaCapability] = frozenset(
        {MediaCapability.TEXT_TO_TEXT}
    )
    parameters: Mapping[str, ParameterSpec] = field(
        default_factory=lambda: DEFAULT_PARAMETERS
    )

    def has_capability(self, capability: MediaCapability) -> bool:
        return capability in self.capabilities

    def to_dict(self) -> dict:
        """Convert descriptor to the host's plain-dict model shape."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "capabilities": sorted(c.value for c in self.capabilities),
            "parameters": {k: v.to_dict() for k, v in self.parameters.items()},
        }


@dataclass(frozen=True)
class RemoteModel:
    """One model entry from the listing endpoint, independent of the SDK."""

    id: str
    display_name: str | None = None
    created_at: str | None = None
    type: str = "model"


@dataclass(frozen=True)
class GenerationOptions:
    """Optional settings for one generation request.

    Unset fields are omitted from the request, except max_tokens which
    falls back to DEFAULT_MAX_TOKENS.

    Attributes:
        system: Optional system instruction sent ahead of the prompt.
        temperature: Sampling temperature in [0, 1].
        top_p: Nucleus-sampling probability mass in [0, 1].
        max_tokens: Positive cap on generated tokens.
        stop_sequences: Strings that end generation when produced.

    Raises:
        ValueError: If a value is out of range.
    """

    system: str | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_tokens: int | None = None
    stop_sequences: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        for name in ("temperature", "top_p"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{name} must be a number, got {type(value).__name__}")
            if not 0 <= value <= 1:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if self.max_tokens is not None:
            if isinstance(self.max_tokens, bool) or not isinstance(self.max_tokens, int):
                raise ValueError(
                    f"max_tokens must be an integer, got {type(self.max_tokens).__name__}"
                )
            if self.max_tokens < 1:
                raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if isinstance(self.stop_sequences, str):
            # A bare string is one sequence, not one per character
            object.__setattr__(self, "stop_sequences", (self.stop_sequences,))
        elif self.stop_sequences is not None and not isinstance(self.stop_sequences, tuple):
            object.__setattr__(self, "stop_sequences", tuple(self.stop_sequences))

    @classmethod
    def coerce(
        cls, options: GenerationOptions | Mapping[str, Any] | None
    ) -> GenerationOptions:
        """Build options from None, a mapping, or an existing instance.

        Raises:
            ValueError: If the mapping has unknown keys or invalid values.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        known = {f.name for f in fields(cls)}
        unknown = set(options) - known
        if unknown:
            raise ValueError(
                f"Unknown generation option(s): {', '.join(sorted(unknown))}. "
                f"Valid options: {', '.join(sorted(known))}"
            )
        return cls(**dict(options))


@dataclass
class GenerationResult:
    """Result of one generation call.

    Attributes:
        text: Concatenation of all returned text segments, in response order.
        model: Model id that produced the text.
        stop_reason: Why generation stopped, as reported by the API.
        input_tokens: Prompt tokens billed, when reported.
        output_tokens: Completion tokens billed, when reported.
    """

    text: str
    model: str
    stop_reason: str | None = None
    input_tokens: int | None = None
    output_tokens: int | None = None

    def __str__(self) -> str:
        return self.text

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class ProviderHealth:
    """Health snapshot reported to the host."""

    status: Literal["healthy", "unhealthy"]
    uptime: float
    active_jobs: int = 0
    queued_jobs: int = 0
    last_error: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ServiceStatus:
    """Service lifecycle snapshot reported to the host."""

    running: bool
    healthy: bool
    error: str | None = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}


__all__ = [
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_PARAMETERS",
    "ParameterSpec",
    "ModelDescriptor",
    "RemoteModel",
    "GenerationOptions",
    "GenerationResult",
    "ProviderHealth",
    "ServiceStatus",
]
