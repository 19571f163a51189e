#!/usr/bin/env python3
"""
mediaconduit-anthropic CLI - Try the Anthropic provider outside the host.

Usage:
    mediaconduit-anthropic models
    mediaconduit-anthropic models --discover --json
    mediaconduit-anthropic generate "Write a haiku" --model claude-3-5-haiku-latest
    mediaconduit-anthropic check
    mediaconduit-anthropic validate-config
"""

import argparse
import asyncio
import json
import sys
import time

from mediaconduit_anthropic.exceptions import AnthropicProviderError
from mediaconduit_anthropic.provider import AnthropicProvider
from mediaconduit_anthropic.utils.logging import configure_cli_logging, log_timed


async def _list_models(args) -> int:
    provider = AnthropicProvider()
    if not provider.is_configured:
        print("ERROR: ANTHROPIC_API_KEY not set", file=sys.stderr)
        return 1
    try:
        if args.discover:
            await provider.refresh_models()

        if args.json:
            print(json.dumps([m.to_dict() for m in provider.models], indent=2))
        else:
            print(f"Models ({provider.registry.state.value}):")
            for model in provider.models:
                print(f"  {model.id}: {model.name}")
    finally:
        await provider.aclose()
    return 0


async def _generate(args) -> int:
    provider = AnthropicProvider()
    options = {
        "system": args.system,
        "temperature": args.temperature,
        "top_p": args.top_p,
        "max_tokens": args.max_tokens,
        "stop_sequences": args.stop,
    }
    options = {k: v for k, v in options.items() if v is not None}

    start = time.time()
    try:
        if args.discover:
            await provider.refresh_models()
        result = await provider.generate(args.model, args.prompt, options)
    except (AnthropicProviderError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        await provider.aclose()

    log_timed(f"Generated {len(result.text)} chars with {result.model}", start)
    print(result.text)
    return 0


async def _check(args) -> int:
    provider = AnthropicProvider()
    try:
        status = await provider.get_service_status()
    finally:
        await provider.aclose()
    print(json.dumps(status.to_dict(), indent=2))
    return 0 if status.healthy else 1


def _cmd_validate_config(args) -> int:
    """Handle the validate-config subcommand."""
    from mediaconduit_anthropic.config import (
        _load_yaml_config,
        find_config_file,
        validate_anthropic_config,
    )

    config_path = find_config_file()
    if config_path is None:
        print("No config file found.")
        print("\nUsing environment variables only (no validation needed).")
        return 0

    print(f"Config file: {config_path}")
    yaml_config = _load_yaml_config(config_path)
    if yaml_config is None:
        print("  Failed to parse config file.")
        return 1

    result = validate_anthropic_config(yaml_config)

    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  x {error}")

    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  ! {warning}")

    if result.is_valid and not result.warnings:
        print("\nConfig is valid.")
    elif result.is_valid:
        print(f"\nConfig is valid with {len(result.warnings)} warning(s).")
    else:
        print(
            f"\nConfig is invalid: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)."
        )
    return 0 if result.is_valid else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediaconduit-anthropic",
        description="Anthropic Claude provider for MediaConduit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s models
    %(prog)s models --discover --json
    %(prog)s generate "Summarize this" --model claude-3-5-haiku-latest --system "Be brief"
    %(prog)s check
    %(prog)s validate-config
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    models_parser = subparsers.add_parser("models", help="List supported models")
    models_parser.add_argument(
        "--discover", action="store_true",
        help="Refresh the list from the API before printing",
    )
    models_parser.add_argument("--json", action="store_true", help="Print JSON")

    gen_parser = subparsers.add_parser("generate", help="Generate text from a prompt")
    gen_parser.add_argument("prompt", help="User prompt")
    gen_parser.add_argument("-m", "--model", required=True, help="Model id")
    gen_parser.add_argument("--system", default=None, help="System instruction")
    gen_parser.add_argument("--temperature", type=float, default=None)
    gen_parser.add_argument("--top-p", type=float, default=None)
    gen_parser.add_argument("--max-tokens", type=int, default=None)
    gen_parser.add_argument(
        "--stop", action="append", default=None,
        help="Stop sequence (repeatable)",
    )
    gen_parser.add_argument(
        "--discover", action="store_true",
        help="Refresh the model list from the API first",
    )

    subparsers.add_parser("check", help="Probe API availability")
    subparsers.add_parser("validate-config", help="Validate provider configuration")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_cli_logging(args.verbose)

    if args.command == "models":
        code = asyncio.run(_list_models(args))
    elif args.command == "generate":
        code = asyncio.run(_generate(args))
    elif args.command == "check":
        code = asyncio.run(_check(args))
    elif args.command == "validate-config":
        code = _cmd_validate_config(args)
    else:
        parser.print_help()
        code = 0

    sys.exit(code)


if __name__ == "__main__":
    main()
