"""
mediaconduit_anthropic.catalog - Static Claude model catalog.

Two hardcoded lists back the registry when the listing endpoint is not
consulted or not usable:

- KNOWN_MODELS: every model id the provider knows to be stable. Used for
  instant, offline seeding at construction time.
- FALLBACK_MODELS: the highest-confidence current models only. Used when
  live discovery fails or comes back empty. Always a strict subset of
  KNOWN_MODELS.
"""

from __future__ import annotations

import re
from types import MappingProxyType

# Friendly names for ids whose derived name would read poorly
MODEL_DISPLAY_NAMES = MappingProxyType(
    {
        "claude-3-5-sonnet-latest": "Claude 3.5 Sonnet (Latest)",
        "claude-3-5-haiku-latest": "Claude 3.5 Haiku (Latest)",
        "claude-3-opus-latest": "Claude 3 Opus (Latest)",
        "claude-3-5-sonnet-20241022": "Claude 3.5 Sonnet (Oct 2024)",
        "claude-3-5-sonnet-20240620": "Claude 3.5 Sonnet (Jun 2024)",
        "claude-3-5-haiku-20241022": "Claude 3.5 Haiku (Oct 2024)",
        "claude-3-opus-20240229": "Claude 3 Opus",
        "claude-3-sonnet-20240229": "Claude 3 Sonnet",
        "claude-3-haiku-20240307": "Claude 3 Haiku",
        "claude-2.1": "Claude 2.1",
        "claude-2.0": "Claude 2.0",
    }
)

KNOWN_MODELS: tuple[str, ...] = tuple(MODEL_DISPLAY_NAMES)

FALLBACK_MODELS: tuple[str, ...] = (
    "claude-3-5-sonnet-latest",
    "claude-3-5-haiku-latest",
    "claude-3-opus-latest",
)

# Start of each word in a spaced-out id
_WORD_START = re.compile(r"\b\w")


def derive_display_name(model_id: str) -> str:
    """Derive a display name from a model id.

    Hyphens become spaces and the first character of each word is
    upper-cased; the rest of the id is left as-is.

    Example:
        >>> derive_display_name("claude-sonnet-4-20250514")
        'Claude Sonnet 4 20250514'
    """
    spaced = model_id.replace("-", " ")
    return _WORD_START.sub(lambda m: m.group(0).upper(), spaced)


def get_display_name(model_id: str, api_label: str | None = None) -> str:
    """Pick the display name for a model.

    Priority: the label the API returned, then the friendly-name table,
    then a name derived from the id.
    """
    if api_label:
        return api_label
    return MODEL_DISPLAY_NAMES.get(model_id) or derive_display_name(model_id)


__all__ = [
    "MODEL_DISPLAY_NAMES",
    "KNOWN_MODELS",
    "FALLBACK_MODELS",
    "derive_display_name",
    "get_display_name",
]
