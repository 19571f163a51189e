"""
mediaconduit_anthropic.config - Provider configuration loading.

Loads the Anthropic provider configuration from YAML config files and the
environment, with support for:
- ${ENV_VAR} interpolation for API keys
- Base URL and request timeout overrides
- Environment fallbacks (ANTHROPIC_API_KEY, ANTHROPIC_BASE_URL, ANTHROPIC_TIMEOUT)

Config file discovery (first hit wins):
1. $MEDIACONDUIT_CONFIG (explicit path)
2. Project config (.mediaconduit/config.yaml, searched upward from cwd)
3. User config (~/.mediaconduit/config.yaml)

YAML structure:
    providers:
      anthropic:
        api_key: ${ANTHROPIC_API_KEY}
        base_url: https://api.anthropic.com
        timeout: 300000        # milliseconds
        max_tokens: 1024
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Pattern for ${ENV_VAR} interpolation
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

API_KEY_ENV = "ANTHROPIC_API_KEY"
BASE_URL_ENV = "ANTHROPIC_BASE_URL"
TIMEOUT_ENV = "ANTHROPIC_TIMEOUT"
CONFIG_PATH_ENV = "MEDIACONDUIT_CONFIG"

# Prefixed key, checked after the direct variable
_PREFIXED_API_KEY_ENV = f"MEDIACONDUIT_{API_KEY_ENV}"

# Five minutes, in milliseconds
DEFAULT_TIMEOUT_MS = 300_000

_VALID_ANTHROPIC_KEYS = frozenset({"api_key", "base_url", "timeout", "max_tokens"})


@dataclass(frozen=True)
class AnthropicConfig:
    """Resolved configuration for the Anthropic provider.

    Attributes:
        api_key: Anthropic API key. None if not set anywhere.
        base_url: Override for the API base URL. None uses the SDK default.
        timeout_ms: Request timeout in milliseconds. None uses DEFAULT_TIMEOUT_MS.
        max_tokens: Default response cap when a request does not set one.
        extra: Unrecognised keys from the YAML section, kept for the host.
    """

    api_key: str | None = None
    base_url: str | None = None
    timeout_ms: int | None = None
    max_tokens: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def timeout_seconds(self) -> float:
        return (self.timeout_ms or DEFAULT_TIMEOUT_MS) / 1000.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    def __repr__(self) -> str:
        masked = "***" if self.api_key else None
        return (
            f"AnthropicConfig(api_key={masked!r}, base_url={self.base_url!r}, "
            f"timeout_ms={self.timeout_ms!r}, max_tokens={self.max_tokens!r})"
        )

    @classmethod
    def from_env(cls) -> AnthropicConfig:
        """Build config from environment variables only."""
        return _apply_env_fallbacks(cls())

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> AnthropicConfig:
        """Build config from a host-supplied mapping (e.g. configure() payload).

        Accepts both snake_case and the host's camelCase keys
        (apiKey, baseUrl). ``timeout`` is in milliseconds.
        """
        resolved = _interpolate_env_vars(dict(data))
        aliases = {"apiKey": "api_key", "baseUrl": "base_url", "maxTokens": "max_tokens"}
        normalized = {aliases.get(k, k): v for k, v in resolved.items()}
        return cls(
            api_key=normalized.get("api_key") or None,
            base_url=normalized.get("base_url") or None,
            timeout_ms=_parse_timeout(normalized.get("timeout"), source="config"),
            max_tokens=_parse_positive_int(normalized.get("max_tokens")),
            extra={
                k: v
                for k, v in normalized.items()
                if k not in ("api_key", "base_url", "timeout", "max_tokens")
            },
        )


def _interpolate_env_vars(value: Any) -> Any:
    """Replace ${ENV_VAR} patterns with environment variable values.

    Recursively processes strings, dicts, and lists. Missing env vars
    produce a warning and are replaced with empty string.
    """
    if isinstance(value, str):

        def _replace_match(match: re.Match) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                logger.warning(
                    "Environment variable %s not set (referenced in provider config)",
                    var_name,
                )
                return ""
            return env_value

        return ENV_VAR_PATTERN.sub(_replace_match, value)
    elif isinstance(value, dict):
        return {k: _interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_interpolate_env_vars(v) for v in value]
    return value


def _parse_timeout(value: Any, *, source: str) -> int | None:
    """Parse a millisecond timeout, ignoring unusable values with a warning."""
    if value is None or value == "":
        return None
    try:
        timeout = int(str(value).strip())
    except ValueError:
        logger.warning("Ignoring non-numeric timeout %r from %s", value, source)
        return None
    if timeout <= 0:
        logger.warning("Ignoring non-positive timeout %r from %s", value, source)
        return None
    return timeout


def _parse_positive_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None


def _apply_env_fallbacks(config: AnthropicConfig) -> AnthropicConfig:
    """Fill fields the config leaves unset from the environment.

    Checks ANTHROPIC_API_KEY, then MEDIACONDUIT_ANTHROPIC_API_KEY for the key.
    """
    api_key = (
        config.api_key
        or os.environ.get(API_KEY_ENV)
        or os.environ.get(_PREFIXED_API_KEY_ENV)
        or None
    )
    base_url = config.base_url or os.environ.get(BASE_URL_ENV) or None
    timeout_ms = config.timeout_ms
    if timeout_ms is None:
        timeout_ms = _parse_timeout(os.environ.get(TIMEOUT_ENV), source=TIMEOUT_ENV)
    return replace(config, api_key=api_key, base_url=base_url, timeout_ms=timeout_ms)


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".mediaconduit" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_user_config_path() -> Path:
    return Path.home() / ".mediaconduit" / "config.yaml"


def find_config_file() -> Path | None:
    """Locate the config file to use, or None if there is none."""
    explicit = os.environ.get(CONFIG_PATH_ENV)
    if explicit:
        return Path(explicit).expanduser()

    project_path = _find_project_config()
    if project_path:
        return project_path

    user_path = _get_user_config_path()
    return user_path if user_path.exists() else None


@dataclass
class ConfigValidationResult:
    """Result of validating a config dict.

    Attributes:
        errors: Fatal issues that prevent correct operation.
        warnings: Non-fatal issues that may cause unexpected behavior.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no errors were found."""
        return len(self.errors) == 0


def validate_anthropic_config(config_dict: dict | None = None) -> ConfigValidationResult:
    """Validate the anthropic section of a parsed YAML config.

    Checks for:
    - Structural issues (sections that are not mappings)
    - Unknown keys in the anthropic section
    - Non-string api_key / base_url
    - Non-numeric or non-positive timeout and max_tokens

    Args:
        config_dict: Parsed YAML config dict (the full config, not just the section).

    Returns:
        ConfigValidationResult with errors and warnings.
    """
    result = ConfigValidationResult()

    if config_dict is None:
        return result

    if not isinstance(config_dict, dict):
        result.errors.append(
            f"Config must be a YAML mapping (dict), got {type(config_dict).__name__}"
        )
        return result

    providers_section = config_dict.get("providers")
    if providers_section is None:
        return result
    if not isinstance(providers_section, dict):
        result.errors.append(
            "The 'providers' section must be a mapping (dict), "
            f"got {type(providers_section).__name__}"
        )
        return result

    section = providers_section.get("anthropic")
    if section is None:
        return result
    if not isinstance(section, dict):
        result.errors.append(
            "Config for provider 'anthropic' must be a mapping (dict), "
            f"got {type(section).__name__}. "
            "Example: anthropic:\n"
            "           api_key: ${ANTHROPIC_API_KEY}"
        )
        return result

    for key in section:
        if key not in _VALID_ANTHROPIC_KEYS:
            result.warnings.append(
                f"Unknown key '{key}' in anthropic section. "
                f"Valid keys: {', '.join(sorted(_VALID_ANTHROPIC_KEYS))}"
            )

    for key in ("api_key", "base_url"):
        value = section.get(key)
        if value is not None and not isinstance(value, str):
            result.errors.append(
                f"'{key}' must be a string, got {type(value).__name__}"
            )

    base_url = section.get("base_url")
    if isinstance(base_url, str) and base_url and not base_url.startswith(
        ("http://", "https://")
    ):
        result.warnings.append(f"base_url '{base_url}' does not look like an HTTP URL")

    for key in ("timeout", "max_tokens"):
        value = section.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            result.errors.append(f"'{key}' must be a positive integer, got {value!r}")

    return result


def load_anthropic_config(config_dict: dict | None = None) -> AnthropicConfig:
    """Load the Anthropic provider config from a parsed YAML dict.

    Validation issues are logged, values are interpolated, and anything
    still unset is filled from the environment.

    Args:
        config_dict: Parsed YAML config dict. If None, only env vars are used.

    Returns:
        AnthropicConfig with all settings resolved.
    """
    if config_dict is None:
        config_dict = {}

    validation = validate_anthropic_config(config_dict)
    for error in validation.errors:
        logger.error("Config error: %s", error)
    for warning in validation.warnings:
        logger.warning("Config warning: %s", warning)

    section: Any = {}
    if isinstance(config_dict, dict):
        providers_section = config_dict.get("providers", {})
        if isinstance(providers_section, dict):
            section = providers_section.get("anthropic", {})
    if not isinstance(section, dict):
        section = {}

    return _apply_env_fallbacks(AnthropicConfig.from_mapping(section))


# Cached resolved config
_config: AnthropicConfig | None = None


def get_anthropic_config() -> AnthropicConfig:
    """Get the resolved provider configuration.

    Loads from the config file and environment on first call, then
    returns the cached value.
    """
    global _config
    if _config is not None:
        return _config

    yaml_config: dict | None = None
    config_path = find_config_file()
    if config_path is not None:
        yaml_config = _load_yaml_config(config_path)
        logger.debug(f"Loaded provider config from {config_path}")

    _config = load_anthropic_config(yaml_config)
    return _config


def clear_config_cache() -> None:
    """Clear cached config (for testing or config reload)."""
    global _config
    _config = None


__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "AnthropicConfig",
    "ConfigValidationResult",
    "find_config_file",
    "validate_anthropic_config",
    "load_anthropic_config",
    "get_anthropic_config",
    "clear_config_cache",
]
