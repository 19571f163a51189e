"""Tests for the mediaconduit-anthropic command line."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

import pytest
from conftest import make_model, make_page, make_response

from mediaconduit_anthropic.catalog import KNOWN_MODELS
from mediaconduit_anthropic.cli import build_parser, main
from mediaconduit_anthropic.client import AnthropicAPIClient


def _run(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestParser:
    def test_generate_options(self):
        args = build_parser().parse_args(
            ["generate", "hi", "-m", "claude-x", "--top-p", "0.5", "--stop", "a", "--stop", "b"]
        )
        assert args.model == "claude-x"
        assert args.top_p == 0.5
        assert args.stop == ["a", "b"]
        assert args.temperature is None

    def test_generate_requires_model(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "hi"])

    def test_no_command_prints_help(self, capsys):
        assert _run([]) == 0
        assert "usage:" in capsys.readouterr().out


class TestModels:
    def test_requires_key(self, capsys):
        assert _run(["models"]) == 1
        assert "ANTHROPIC_API_KEY" in capsys.readouterr().err

    def test_json_lists_seeded_models(self, monkeypatch, capsys):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        assert _run(["models", "--json"]) == 0
        models = json.loads(capsys.readouterr().out)
        assert {m["id"] for m in models} == set(KNOWN_MODELS)

    def test_discover(self, monkeypatch, capsys, mock_sdk):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        mock_sdk.models.list = AsyncMock(
            return_value=make_page(make_model("claude-fresh", "Claude Fresh"))
        )
        with patch("anthropic.AsyncAnthropic", return_value=mock_sdk):
            assert _run(["models", "--discover"]) == 0

        out = capsys.readouterr().out
        assert "Models (discovered):" in out
        assert "claude-fresh: Claude Fresh" in out


class TestGenerate:
    def test_prints_text(self, monkeypatch, capsys, mock_sdk):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        mock_sdk.messages.create = AsyncMock(return_value=make_response("Hello ", "there"))
        with patch("anthropic.AsyncAnthropic", return_value=mock_sdk):
            code = _run(
                ["generate", "Hi", "-m", "claude-3-5-haiku-latest", "--system", "Be brief"]
            )

        assert code == 0
        assert capsys.readouterr().out.strip() == "Hello there"
        call_kwargs = mock_sdk.messages.create.call_args[1]
        assert call_kwargs["messages"][0] == {"role": "system", "content": "Be brief"}
        assert "temperature" not in call_kwargs

    def test_unknown_model(self, monkeypatch, capsys, mock_sdk):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        with patch("anthropic.AsyncAnthropic", return_value=mock_sdk):
            assert _run(["generate", "Hi", "-m", "gpt-4o"]) == 1

        assert "not supported" in capsys.readouterr().err
        mock_sdk.messages.create.assert_not_called()

    def test_not_configured(self, capsys):
        assert _run(["generate", "Hi", "-m", "claude-3-5-haiku-latest"]) == 1
        assert "not configured" in capsys.readouterr().err

    def test_invalid_temperature(self, monkeypatch, capsys, mock_sdk):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        with patch("anthropic.AsyncAnthropic", return_value=mock_sdk):
            code = _run(
                ["generate", "Hi", "-m", "claude-3-5-haiku-latest", "--temperature", "3"]
            )
        assert code == 1
        assert "temperature" in capsys.readouterr().err


class TestCheck:
    def test_healthy(self, monkeypatch, capsys):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
        with patch.object(
            AnthropicAPIClient, "test_connection", AsyncMock(return_value=True)
        ):
            assert _run(["check"]) == 0
        assert json.loads(capsys.readouterr().out) == {"running": True, "healthy": True}

    def test_unconfigured(self, capsys):
        assert _run(["check"]) == 1
        status = json.loads(capsys.readouterr().out)
        assert status["healthy"] is False
        assert "ANTHROPIC_API_KEY" in status["error"]


class TestValidateConfig:
    def test_no_file(self, capsys):
        assert _run(["validate-config"]) == 0
        assert "No config file found." in capsys.readouterr().out

    def test_valid_file(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("providers:\n  anthropic:\n    api_key: ${ANTHROPIC_API_KEY}\n")
        monkeypatch.setenv("MEDIACONDUIT_CONFIG", str(path))
        assert _run(["validate-config"]) == 0
        assert "Config is valid." in capsys.readouterr().out

    def test_invalid_file(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("providers:\n  anthropic:\n    timeout: fast\n")
        monkeypatch.setenv("MEDIACONDUIT_CONFIG", str(path))
        assert _run(["validate-config"]) == 1
        out = capsys.readouterr().out
        assert "'timeout' must be a positive integer" in out

    def test_unparseable_file(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        monkeypatch.setenv("MEDIACONDUIT_CONFIG", str(path))
        assert _run(["validate-config"]) == 1
        assert "Failed to parse" in capsys.readouterr().out
