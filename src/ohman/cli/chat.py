"""`ohman chat` command implementation."""

import argparse
import sys

from ohman.app import Assistant
from ohman.cli.shared import load_runtime_config
from ohman.errors import OhmanError
from ohman.logs import analyze_file


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ohman chat",
        description="Free-form chat, optionally about a log file",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-c", "--config", help="Config file path")
    parser.add_argument("-m", "--model", help="LLM model name")
    parser.add_argument("-l", "--log", metavar="FILE", help="Log file to discuss")
    parser.add_argument(
        "-n",
        "--lines",
        type=int,
        default=0,
        help="Maximum number of log lines to load (0 = all)",
    )
    return parser


def run(argv: list[str]) -> int:
    """Execute the chat command."""
    args = build_parser().parse_args(argv)
    try:
        config = load_runtime_config(args.config, args.debug, allow_setup=True)
        if args.model:
            config.llm.model = args.model
        log_context = ""
        if args.log:
            log_context = analyze_file(args.log, args.lines).to_text()
        Assistant(config).chat(log_context)
    except OhmanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
