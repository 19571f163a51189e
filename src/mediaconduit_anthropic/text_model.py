"""
mediaconduit_anthropic.text_model - Per-model text generation handle.

Example:
    >>> model = await provider.create_text_to_text_model("claude-3-5-haiku-latest")
    >>> result = await model.generate("hello", {"system": "Answer in French."})
    >>> print(result.text)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mediaconduit_anthropic.exceptions import UnsupportedModelError
from mediaconduit_anthropic.types import GenerationOptions

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mediaconduit_anthropic.client import AnthropicAPIClient
    from mediaconduit_anthropic.registry import ModelRegistry
    from mediaconduit_anthropic.types import GenerationResult, ModelDescriptor

logger = logging.getLogger(__name__)


class AnthropicTextToTextModel:
    """Text generation bound to one Claude model.

    The handle checks the registry on every call, so a model dropped by a
    later re-discovery is rejected before any request is sent.

    Args:
        api_client: Configured API client.
        model_id: Model identifier.
        registry: Registry of the provider that created this handle.
    """

    def __init__(
        self,
        api_client: AnthropicAPIClient,
        model_id: str,
        registry: ModelRegistry,
    ):
        self._api_client = api_client
        self._registry = registry
        self.model_id = model_id

    @property
    def descriptor(self) -> ModelDescriptor | None:
        return self._registry.get(self.model_id)

    async def generate(
        self,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> GenerationResult:
        """Generate text for a prompt.

        Args:
            prompt: User prompt.
            options: System instruction, temperature, top_p, max_tokens,
                stop_sequences. Either a GenerationOptions or a mapping
                with those keys.

        Returns:
            GenerationResult whose text joins every returned text segment.

        Raises:
            UnsupportedModelError: If the model is not in the registry.
            ValueError: If options are invalid.
            TransportError: If the request fails.
            EmptyResponseError: If the response has no content.
        """
        if not self._registry.supports(self.model_id):
            raise UnsupportedModelError(
                self.model_id, available=self._registry.model_ids()
            )
        opts = GenerationOptions.coerce(options)
        logger.debug(f"Generating with {self.model_id} ({len(prompt)} prompt chars)")
        return await self._api_client.create_message(self.model_id, prompt, opts)

    async def generate_text(
        self,
        prompt: str,
        options: GenerationOptions | Mapping[str, Any] | None = None,
    ) -> str:
        result = await self.generate(prompt, options)
        return result.text

    def __repr__(self) -> str:
        return f"AnthropicTextToTextModel(model_id={self.model_id!r})"


__all__ = ["AnthropicTextToTextModel"]
