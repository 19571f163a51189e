"""Tests for shared data types and the exception hierarchy."""

from __future__ import annotations

import pytest

from mediaconduit_anthropic.capabilities import MediaCapability
from mediaconduit_anthropic.exceptions import (
    AnthropicProviderError,
    ConfigurationError,
    EmptyResponseError,
    ModelDiscoveryError,
    TransportError,
    UnsupportedModelError,
)
from mediaconduit_anthropic.types import (
    DEFAULT_PARAMETERS,
    GenerationOptions,
    GenerationResult,
    ModelDescriptor,
    ProviderHealth,
    ServiceStatus,
)


class TestGenerationOptions:
    def test_defaults_are_unset(self):
        options = GenerationOptions()
        assert options.system is None
        assert options.temperature is None
        assert options.top_p is None
        assert options.max_tokens is None
        assert options.stop_sequences is None

    @pytest.mark.parametrize("value", [-0.1, 1.01])
    def test_temperature_range(self, value):
        with pytest.raises(ValueError, match="temperature"):
            GenerationOptions(temperature=value)

    def test_bounds_inclusive(self):
        options = GenerationOptions(temperature=0, top_p=1)
        assert options.temperature == 0
        assert options.top_p == 1

    def test_top_p_range(self):
        with pytest.raises(ValueError, match="top_p"):
            GenerationOptions(top_p=2)

    @pytest.mark.parametrize("value", [0, -3])
    def test_max_tokens_positive(self, value):
        with pytest.raises(ValueError, match="max_tokens"):
            GenerationOptions(max_tokens=value)

    def test_max_tokens_integer(self):
        with pytest.raises(ValueError, match="integer"):
            GenerationOptions(max_tokens=10.5)  # type: ignore[arg-type]

    def test_stop_sequences_frozen_to_tuple(self):
        options = GenerationOptions(stop_sequences=["a", "b"])  # type: ignore[arg-type]
        assert options.stop_sequences == ("a", "b")

    def test_single_stop_sequence_string(self):
        options = GenerationOptions.coerce({"stop_sequences": "END"})
        assert options.stop_sequences == ("END",)

    @pytest.mark.parametrize("name", ["temperature", "top_p"])
    def test_non_numeric_sampling_value(self, name):
        with pytest.raises(ValueError, match=f"{name} must be a number"):
            GenerationOptions.coerce({name: "0.5"})

    def test_coerce_none(self):
        assert GenerationOptions.coerce(None) == GenerationOptions()

    def test_coerce_instance_passthrough(self):
        options = GenerationOptions(system="S")
        assert GenerationOptions.coerce(options) is options

    def test_coerce_mapping(self):
        options = GenerationOptions.coerce({"system": "S", "max_tokens": 5})
        assert options.system == "S"
        assert options.max_tokens == 5

    def test_coerce_unknown_key(self):
        with pytest.raises(ValueError, match="maxTokens"):
            GenerationOptions.coerce({"maxTokens": 5})


class TestModelDescriptor:
    def test_defaults(self):
        descriptor = ModelDescriptor(id="claude-x", name="Claude X")
        assert descriptor.has_capability(MediaCapability.TEXT_TO_TEXT)
        assert not descriptor.has_capability(MediaCapability.TEXT_TO_IMAGE)
        assert descriptor.parameters is DEFAULT_PARAMETERS

    def test_frozen(self):
        descriptor = ModelDescriptor(id="claude-x", name="Claude X")
        with pytest.raises(AttributeError):
            descriptor.name = "other"  # type: ignore[misc]

    def test_parameter_schema(self):
        assert DEFAULT_PARAMETERS["temperature"].min == 0
        assert DEFAULT_PARAMETERS["temperature"].max == 1
        assert DEFAULT_PARAMETERS["temperature"].default == 0.7
        assert DEFAULT_PARAMETERS["max_tokens"].max == 100000
        assert DEFAULT_PARAMETERS["max_tokens"].default == 1024
        assert DEFAULT_PARAMETERS["top_p"].default == 1

    def test_parameter_schema_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_PARAMETERS["seed"] = None  # type: ignore[index]

    def test_to_dict(self):
        data = ModelDescriptor(id="claude-x", name="Claude X", description="d").to_dict()
        assert data["id"] == "claude-x"
        assert data["capabilities"] == ["text-to-text"]
        assert data["parameters"]["top_p"] == {
            "type": "number",
            "min": 0,
            "max": 1,
            "default": 1,
        }


class TestResultTypes:
    def test_generation_result(self):
        result = GenerationResult(text="hi", model="claude-x", stop_reason="end_turn")
        assert str(result) == "hi"
        assert result.to_dict() == {
            "text": "hi",
            "model": "claude-x",
            "stop_reason": "end_turn",
        }

    def test_health_to_dict(self):
        health = ProviderHealth(status="healthy", uptime=1.5)
        assert health.to_dict() == {
            "status": "healthy",
            "uptime": 1.5,
            "active_jobs": 0,
            "queued_jobs": 0,
            "last_error": None,
        }

    def test_service_status_drops_empty_error(self):
        assert ServiceStatus(running=True, healthy=True).to_dict() == {
            "running": True,
            "healthy": True,
        }


class TestExceptions:
    def test_hierarchy(self):
        for cls in (ConfigurationError, EmptyResponseError, TransportError):
            assert issubclass(cls, AnthropicProviderError)
        assert issubclass(ModelDiscoveryError, TransportError)

    def test_configuration_error(self):
        error = ConfigurationError()
        assert str(error) == "Anthropic API key is required"
        assert "ANTHROPIC_API_KEY" in error.to_dict()["suggestion"]

    def test_unsupported_model(self):
        error = UnsupportedModelError("gpt-4o", available=["b", "a"])
        assert str(error) == "Model 'gpt-4o' is not supported by Anthropic provider"
        assert error.model_id == "gpt-4o"
        assert error.details["available"] == ["a", "b"]

    def test_empty_response(self):
        error = EmptyResponseError(model_id="claude-x")
        assert str(error) == "No response content returned from Anthropic"
        assert error.to_dict()["details"] == {"model_id": "claude-x"}

    def test_transport_error_status(self):
        error = TransportError("boom", status_code=503)
        data = error.to_dict()
        assert data["type"] == "TransportError"
        assert data["details"] == {"status_code": 503}

    def test_to_dict_omits_empty(self):
        assert AnthropicProviderError("plain").to_dict() == {
            "type": "AnthropicProviderError",
            "message": "plain",
        }
