"""Tests for capability metadata and the static model catalog."""

from __future__ import annotations

import pytest

from mediaconduit_anthropic.capabilities import (
    ANTHROPIC_INFO,
    MediaCapability,
    ProviderInfo,
    ProviderType,
)
from mediaconduit_anthropic.catalog import (
    FALLBACK_MODELS,
    KNOWN_MODELS,
    derive_display_name,
    get_display_name,
)


class TestMediaCapability:
    def test_string_values(self):
        assert MediaCapability.TEXT_TO_TEXT.value == "text-to-text"
        assert MediaCapability.TEXT_TO_TEXT == "text-to-text"

    def test_coerce_member(self):
        assert MediaCapability.coerce(MediaCapability.IMAGE_TO_TEXT) is MediaCapability.IMAGE_TO_TEXT

    def test_coerce_tag(self):
        assert MediaCapability.coerce(" Text-To-Text ") is MediaCapability.TEXT_TO_TEXT

    def test_coerce_unknown(self):
        assert MediaCapability.coerce("mind-reading") is None


class TestProviderInfo:
    def test_anthropic_info(self):
        assert ANTHROPIC_INFO.name == "anthropic"
        assert ANTHROPIC_INFO.provider_type is ProviderType.REMOTE
        assert ANTHROPIC_INFO.can(MediaCapability.TEXT_TO_TEXT)
        assert not ANTHROPIC_INFO.can(MediaCapability.TEXT_TO_AUDIO)

    def test_can_all_and_any(self):
        info = ProviderInfo(
            name="multi",
            capabilities=frozenset(
                {MediaCapability.TEXT_TO_TEXT, MediaCapability.IMAGE_TO_TEXT}
            ),
        )
        assert info.can_all(MediaCapability.TEXT_TO_TEXT, MediaCapability.IMAGE_TO_TEXT)
        assert not info.can_all(MediaCapability.TEXT_TO_TEXT, MediaCapability.TEXT_TO_IMAGE)
        assert info.can_any(MediaCapability.TEXT_TO_IMAGE, MediaCapability.IMAGE_TO_TEXT)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ANTHROPIC_INFO.name = "other"  # type: ignore[misc]


class TestCatalog:
    def test_fallback_is_strict_subset_of_known(self):
        assert set(FALLBACK_MODELS) < set(KNOWN_MODELS)

    def test_no_duplicates(self):
        assert len(set(KNOWN_MODELS)) == len(KNOWN_MODELS)

    def test_known_models_are_claude(self):
        assert all(model_id.startswith("claude-") for model_id in KNOWN_MODELS)

    @pytest.mark.parametrize(
        ("model_id", "expected"),
        [
            ("claude-sonnet-4-20250514", "Claude Sonnet 4 20250514"),
            ("claude-opus-4-1", "Claude Opus 4 1"),
            ("claude-instant-1.2", "Claude Instant 1.2"),
        ],
    )
    def test_derive_display_name(self, model_id, expected):
        assert derive_display_name(model_id) == expected

    def test_display_name_priority(self):
        assert get_display_name("claude-3-haiku-20240307", "From API") == "From API"
        assert get_display_name("claude-3-haiku-20240307") == "Claude 3 Haiku"
        assert get_display_name("claude-next") == "Claude Next"
