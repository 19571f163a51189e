"""
mediaconduit_anthropic.registry - Remote model registry with discovery.

The registry owns the set of model ids the provider will accept, along
with each model's advertised metadata. It is populated in one of two ways:

- seed(): synchronous and offline, from the full known-model list.
- discover(): one listing call against the API. A non-empty result
  replaces the registry wholesale; an empty result or any failure
  replaces it with the minimal fallback list instead.

Population is a small state machine. Each population step computes an
outcome, and ``_transition`` maps that outcome to the next state and the
descriptors to install:

    EMPTY ──seed──▶ SEEDED ──discover ok──▶ DISCOVERED
                       │                        │
                       └──discover failed──▶ FALLBACK ◀┘

Any state can move to SEEDED, DISCOVERED or FALLBACK on the next seed or
discover call; clear() returns it to EMPTY.

Example:
    >>> registry = ModelRegistry()
    >>> registry.seed()
    >>> registry.supports("claude-3-5-sonnet-latest")
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from mediaconduit_anthropic.capabilities import MediaCapability
from mediaconduit_anthropic.catalog import (
    FALLBACK_MODELS,
    KNOWN_MODELS,
    get_display_name,
)
from mediaconduit_anthropic.types import ModelDescriptor

if TYPE_CHECKING:
    from mediaconduit_anthropic.client import AnthropicAPIClient
    from mediaconduit_anthropic.types import RemoteModel

logger = logging.getLogger(__name__)


class RegistryState(Enum):
    """Where the registry's current contents came from."""

    EMPTY = "empty"  # Nothing loaded (no credentials, or torn down)
    SEEDED = "seeded"  # Known-model list, no network
    DISCOVERED = "discovered"  # Live listing from the API
    FALLBACK = "fallback"  # Discovery failed or was empty


class _Outcome(Enum):
    SEED = "seed"
    DISCOVERY_OK = "discovery_ok"
    DISCOVERY_EMPTY = "discovery_empty"
    DISCOVERY_FAILED = "discovery_failed"
    CLEAR = "clear"


@dataclass(frozen=True)
class _Step:
    state: RegistryState
    descriptors: tuple[ModelDescriptor, ...]


def _describe(model_id: str, label: str | None = None, note: str = "") -> ModelDescriptor:
    name = get_display_name(model_id, label)
    description = f"Anthropic Claude model: {label or model_id}"
    if note:
        description = f"{description} ({note})"
    return ModelDescriptor(id=model_id, name=name, description=description)


def _transition(
    outcome: _Outcome, discovered: Sequence[RemoteModel] = ()
) -> _Step:
    """Map a population outcome to the next state and its descriptors."""
    if outcome is _Outcome.SEED:
        return _Step(
            RegistryState.SEEDED,
            tuple(_describe(m, note="known") for m in KNOWN_MODELS),
        )
    if outcome is _Outcome.DISCOVERY_OK:
        return _Step(
            RegistryState.DISCOVERED,
            tuple(_describe(m.id, m.display_name) for m in discovered),
        )
    if outcome in (_Outcome.DISCOVERY_EMPTY, _Outcome.DISCOVERY_FAILED):
        return _Step(
            RegistryState.FALLBACK,
            tuple(_describe(m, note="fallback") for m in FALLBACK_MODELS),
        )
    return _Step(RegistryState.EMPTY, ())


class ModelRegistry:
    """In-memory mapping from model id to ModelDescriptor.

    Owned by exactly one provider instance. Contents are only ever replaced
    wholesale, so readers always see either the old or the new set.
    """

    def __init__(self) -> None:
        self._models: dict[str, ModelDescriptor] = {}
        self._state = RegistryState.EMPTY

    @property
    def state(self) -> RegistryState:
        return self._state

    def _apply(self, step: _Step) -> None:
        self._models = {d.id: d for d in step.descriptors}
        self._state = step.state

    def seed(self) -> None:
        """Populate from the known-model list. Offline, never fails."""
        self._apply(_transition(_Outcome.SEED))
        logger.debug(f"Seeded registry with {len(self._models)} known models")

    initialize_with_known_models = seed

    async def discover(self, client: AnthropicAPIClient) -> RegistryState:
        """Refresh from the API, falling back to the minimal list.

        Never raises: every failure is logged and turned into the
        fallback population.

        Args:
            client: Configured API client used for the listing call.

        Returns:
            The registry state after discovery.
        """
        logger.info("Discovering models from Anthropic API...")
        try:
            models = await client.get_available_models()
        except Exception as e:
            logger.warning(f"Model discovery failed, using fallback models: {e}")
            self._apply(_transition(_Outcome.DISCOVERY_FAILED))
            return self._state

        # Duplicate ids collapse to the last entry
        unique = list({m.id: m for m in models if m.id}.values())
        if not unique:
            logger.warning("No models returned from API, using fallback model list")
            self._apply(_transition(_Outcome.DISCOVERY_EMPTY))
            return self._state

        for m in unique:
            logger.debug(f"Discovered model: {m.id} ({m.display_name or m.id})")
        self._apply(_transition(_Outcome.DISCOVERY_OK, unique))
        logger.info(f"Discovered {len(self._models)} models from API")
        return self._state

    def clear(self) -> None:
        """Drop all models (provider teardown)."""
        self._apply(_transition(_Outcome.CLEAR))

    def supports(self, model_id: str) -> bool:
        return model_id in self._models

    def get(self, model_id: str) -> ModelDescriptor | None:
        return self._models.get(model_id)

    def list_for_capability(
        self, capability: MediaCapability | str
    ) -> list[ModelDescriptor]:
        """Return descriptors advertising a capability.

        Unrecognised capability values yield an empty list.
        """
        cap = MediaCapability.coerce(capability)
        if cap is None:
            return []
        return [d for d in self._models.values() if d.has_capability(cap)]

    def model_ids(self) -> list[str]:
        return list(self._models)

    def descriptors(self) -> list[ModelDescriptor]:
        return list(self._models.values())

    def replace(self, descriptors: Iterable[ModelDescriptor], state: RegistryState) -> None:
        """Install an explicit descriptor set (used by hosts and tests)."""
        self._apply(_Step(state, tuple(descriptors)))

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._models

    def __iter__(self) -> Iterator[ModelDescriptor]:
        return iter(list(self._models.values()))

    def __len__(self) -> int:
        return len(self._models)

    def __repr__(self) -> str:
        return f"ModelRegistry(state={self._state.value!r}, models={len(self)})"


__all__ = ["ModelRegistry", "RegistryState"]
