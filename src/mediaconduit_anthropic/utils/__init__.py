"""
Shared utilities.
"""

from mediaconduit_anthropic.utils.logging import configure_cli_logging, log_timed

__all__ = ["configure_cli_logging", "log_timed"]
