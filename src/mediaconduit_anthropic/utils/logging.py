"""
Logging utilities for the command line entry point.

The library itself never installs handlers; only the CLI does.
"""

import logging
import sys
import time

logger = logging.getLogger("mediaconduit_anthropic")


def configure_cli_logging(verbose: bool = False) -> None:
    """Send log records to stderr so stdout stays clean for results."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )
    # The SDK's HTTP stack is chatty at DEBUG
    if verbose:
        logging.getLogger("httpx").setLevel(logging.INFO)


def log_timed(msg: str, start_time: float | None = None) -> None:
    """Log a message prefixed with elapsed seconds, or [START] without a start time."""
    elapsed = f"[{time.time() - start_time:.1f}s]" if start_time else "[START]"
    logger.info(f"{elapsed} {msg}")
