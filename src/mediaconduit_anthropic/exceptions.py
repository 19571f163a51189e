"""
Custom exceptions for mediaconduit-anthropic.

All provider exceptions inherit from AnthropicProviderError for easy catching.
"""

from __future__ import annotations

from typing import Any


class AnthropicProviderError(Exception):
    """Base exception for all Anthropic provider errors.

    Attributes:
        message: Human-readable error message
        details: Additional diagnostic information
        suggestion: Recommended remediation steps
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        suggestion: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for host error responses."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


class ConfigurationError(AnthropicProviderError):
    """Provider is missing credentials or has not been configured."""

    def __init__(
        self,
        message: str = "Anthropic API key is required",
        *,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            details=details,
            suggestion=(
                "Set the ANTHROPIC_API_KEY environment variable "
                "or call configure() with an api_key."
            ),
        )


class UnsupportedModelError(AnthropicProviderError):
    """Requested model id is not present in the provider's registry."""

    def __init__(self, model_id: str, *, available: list[str] | None = None):
        details: dict[str, Any] = {"model_id": model_id}
        if available:
            details["available"] = sorted(available)
        super().__init__(
            f"Model '{model_id}' is not supported by Anthropic provider",
            details=details,
            suggestion="Call the provider's models listing to see supported ids.",
        )
        self.model_id = model_id


class EmptyResponseError(AnthropicProviderError):
    """The API call succeeded but returned no content segments."""

    def __init__(
        self,
        message: str = "No response content returned from Anthropic",
        *,
        model_id: str | None = None,
    ):
        details = {"model_id": model_id} if model_id else None
        super().__init__(message, details=details)
        self.model_id = model_id


class TransportError(AnthropicProviderError):
    """Network failure, non-2xx status, or malformed response.

    Attributes:
        status_code: HTTP status code when the server answered, else None.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        details = dict(details or {})
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.status_code = status_code


class ModelDiscoveryError(TransportError):
    """Listing the remote models failed."""

    pass


__all__ = [
    "AnthropicProviderError",
    "ConfigurationError",
    "UnsupportedModelError",
    "EmptyResponseError",
    "TransportError",
    "ModelDiscoveryError",
]
