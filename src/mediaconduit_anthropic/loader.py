"""
mediaconduit_anthropic.loader - Plugin discovery and instance management.

The MediaConduit host loads providers dynamically. Installed plugins
advertise themselves through the ``mediaconduit.providers`` entry-point
group; this module resolves a provider name (or alias) through that group,
falling back to a built-in module mapping so the plugin also works from a
source checkout.

Functions:
    load_provider: Get a provider instance by name.
    list_providers: List all known provider names.
    clear_cache: Clear the provider instance cache.

Example:
    >>> from mediaconduit_anthropic.loader import load_provider
    >>> provider = load_provider("claude")
    >>> provider.id
    'anthropic'
"""

from __future__ import annotations

import logging
from importlib import import_module
from importlib.metadata import entry_points
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mediaconduit_anthropic.base import MediaProvider

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "mediaconduit.providers"

# Built-in mapping: canonical name -> "module:attribute"
PROVIDER_MODULES: dict[str, str] = {
    "anthropic": "mediaconduit_anthropic.provider:AnthropicProvider",
}

# Maps alias -> canonical name
PROVIDER_ALIASES: dict[str, str] = {
    "claude": "anthropic",
    "claude-3": "anthropic",
    "claude-sonnet": "anthropic",
    "claude-opus": "anthropic",
    "claude-haiku": "anthropic",
}

# Only caches instances created without custom kwargs
_cache: dict[str, MediaProvider] = {}


def _resolve_name(name: str) -> str:
    """Resolve provider aliases to canonical names (case-insensitive)."""
    normalized = name.lower().strip()
    return PROVIDER_ALIASES.get(normalized, normalized)


def _entry_point_targets() -> dict[str, str]:
    """Installed plugins, as name -> "module:attribute"."""
    return {ep.name: ep.value for ep in entry_points(group=ENTRY_POINT_GROUP)}


def _import_target(target: str) -> type:
    module_path, _, attr = target.partition(":")
    try:
        module = import_module(module_path)
    except ImportError as e:
        raise ImportError(
            f"Failed to import provider module {module_path}: {e}. "
            "You may need to install dependencies: pip install anthropic"
        ) from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ImportError(f"No provider class '{attr}' in {module_path}") from e


def load_provider(name: str, **kwargs) -> MediaProvider:
    """Get a provider instance by name.

    Args:
        name: Provider name or alias (e.g., "anthropic", "claude"). Case-insensitive.
        **kwargs: Provider constructor arguments. If provided, the instance
            is not cached.

    Returns:
        Provider instance.

    Raises:
        ValueError: If the provider name is unknown.
        ImportError: If the provider module fails to import.
    """
    canonical = _resolve_name(name)

    cache_key = canonical if not kwargs else None
    if cache_key and cache_key in _cache:
        logger.debug(f"Returning cached provider: {canonical}")
        return _cache[cache_key]

    targets = {**PROVIDER_MODULES, **_entry_point_targets()}
    if canonical not in targets:
        available = ", ".join(sorted(targets))
        raise ValueError(f"Unknown provider '{name}'. Available providers: {available}")

    provider_class = _import_target(targets[canonical])
    try:
        instance = provider_class(**kwargs)
    except TypeError as e:
        raise TypeError(
            f"Failed to instantiate {provider_class.__name__}: {e}. "
            "Check that the kwargs match the provider's __init__ signature."
        ) from e

    if cache_key:
        _cache[cache_key] = instance
        logger.debug(f"Cached provider instance: {canonical}")

    logger.debug(f"Loaded provider: {canonical} ({provider_class.__name__})")
    return instance


def list_providers() -> list[str]:
    """List all known provider names, sorted. Does not import anything."""
    return sorted({*PROVIDER_MODULES, *_entry_point_targets()})


def clear_cache() -> None:
    """Clear the provider instance cache."""
    _cache.clear()
    logger.debug("Provider cache cleared")


__all__ = [
    "ENTRY_POINT_GROUP",
    "PROVIDER_MODULES",
    "PROVIDER_ALIASES",
    "load_provider",
    "list_providers",
    "clear_cache",
]
