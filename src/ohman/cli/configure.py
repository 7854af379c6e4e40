"""`ohman config` command implementation."""

import argparse
import sys

from ohman.cli.shared import configure_logging
from ohman.cli.wizard import run_configure
from ohman.config import PROVIDERS, config_path, load_config
from ohman.errors import OhmanError

API_KEY_CLI_WARNING = (
    "Warning: --api-key may leak secrets via shell history and process lists. "
    "Prefer the interactive `ohman config` prompts or the OHMAN_API_KEY environment variable."
)


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the config command."""
    parser = argparse.ArgumentParser(
        prog="ohman config",
        description="Configure the ohman LLM provider, model, and API key",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-c", "--config", help="Config file path")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Run the interactive wizard (default when no explicit options are given)",
    )
    parser.add_argument(
        "--provider",
        choices=sorted(PROVIDERS.keys()),
        help="LLM provider to use",
    )
    parser.add_argument("--model", help="Model name (example: gpt-4o-mini or openai/gpt-4o)")
    parser.add_argument(
        "--api-key",
        help=(
            "Provider API key to store in config "
            "(not recommended; may leak via shell history/process list)"
        ),
    )
    parser.add_argument(
        "--clear-api-key",
        action="store_true",
        help="Remove stored API key from config",
    )
    parser.add_argument("--base-url", help="OpenAI-compatible API base URL")
    parser.add_argument(
        "--clear-base-url",
        action="store_true",
        help="Remove stored base URL from config",
    )
    return parser


def run(argv: list[str]) -> int:
    """Execute the config command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.clear_api_key and args.api_key is not None:
        print("Error: --api-key and --clear-api-key cannot be used together", file=sys.stderr)
        return 2
    if args.clear_base_url and args.base_url is not None:
        print("Error: --base-url and --clear-base-url cannot be used together", file=sys.stderr)
        return 2
    if args.api_key is not None:
        print(API_KEY_CLI_WARNING, file=sys.stderr)

    has_explicit_options = any(
        [
            args.provider is not None,
            args.model is not None,
            args.api_key is not None,
            args.clear_api_key,
            args.base_url is not None,
            args.clear_base_url,
        ]
    )
    interactive = args.interactive or not has_explicit_options

    try:
        configure_logging(args.debug)
        existing = load_config(args.config, apply_env=False)
        updated = run_configure(
            existing,
            provider=args.provider,
            model=args.model,
            api_key=args.api_key,
            clear_api_key=args.clear_api_key,
            base_url=args.base_url,
            clear_base_url=args.clear_base_url,
            interactive=interactive,
            config_file=args.config,
        )
    except (OhmanError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\n✅ Saved to: {config_path(args.config)}")
    print(f"  provider: {updated.llm.provider}")
    print(f"  model: {updated.llm.model}")
    print(f"  api_key: {'set' if updated.llm.api_key else 'not set'}")
    print(f"  base_url: {updated.llm.base_url or 'not set'}")
    print("")
    print('Try: ohman grep "how to search recursively?"')
    return 0
