"""Pytest configuration for mediaconduit-anthropic tests."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from mediaconduit_anthropic import config as config_module
from mediaconduit_anthropic import loader

_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "MEDIACONDUIT_ANTHROPIC_API_KEY",
    "ANTHROPIC_BASE_URL",
    "ANTHROPIC_TIMEOUT",
    "MEDIACONDUIT_CONFIG",
)


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against the real Anthropic API (requires API key)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


@pytest.fixture(autouse=True)
def isolated_config(request, monkeypatch, tmp_path):
    """Keep real credentials and config files out of unit tests."""
    if "integration" in request.keywords:
        yield
        return
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    config_module.clear_config_cache()
    loader.clear_cache()
    yield
    config_module.clear_config_cache()
    loader.clear_cache()


def text_block(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="text", text=text)


def make_response(*texts: str, model: str = "claude-3-5-haiku-latest") -> SimpleNamespace:
    """Build a Messages API response with one text block per string."""
    return SimpleNamespace(
        id="msg_01",
        type="message",
        role="assistant",
        content=[text_block(t) for t in texts],
        model=model,
        stop_reason="end_turn",
        stop_sequence=None,
        usage=SimpleNamespace(input_tokens=12, output_tokens=7),
    )


def make_model(model_id: str, display_name: str | None = None) -> SimpleNamespace:
    return SimpleNamespace(
        id=model_id, display_name=display_name, created_at=None, type="model"
    )


def make_page(*models, has_more: bool = False, last_id: str | None = None):
    """Build a models.list() page."""
    return SimpleNamespace(
        data=list(models),
        has_more=has_more,
        first_id=models[0].id if models else None,
        last_id=last_id if last_id is not None else (models[-1].id if models else None),
    )


@pytest.fixture
def mock_sdk():
    """Stand-in for anthropic.AsyncAnthropic with empty defaults."""
    sdk = MagicMock()
    sdk.messages.create = AsyncMock(return_value=make_response("ok"))
    sdk.models.list = AsyncMock(return_value=make_page())
    sdk.close = AsyncMock()
    return sdk
