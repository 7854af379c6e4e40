"""Default command: ask, diagnose, analyze errors and logs."""

import argparse
import logging
import os
import sys

from ohman import __version__
from ohman.app import Assistant
from ohman.cli.shared import load_runtime_config
from ohman.errors import OhmanError
from ohman.logs import is_journal_unit, is_piped_input, read_piped_input

log = logging.getLogger(__name__)

ERROR_KEYWORDS = (
    "error:",
    "failed",
    "cannot",
    "permission denied",
    "no such file",
    "command not found",
    "segmentation fault",
    "core dumped",
    "fatal",
    "exception",
    "undefined",
    "not found",
    "connection refused",
    "timeout",
)
LONG_INPUT_CHARS = 150


def looks_like_error_message(text: str) -> bool:
    """Return whether text looks like pasted error output rather than a question."""
    if "\n" in text:
        return True
    lower = text.lower()
    if any(keyword in lower for keyword in ERROR_KEYWORDS):
        return True
    return len(text) > LONG_INPUT_CHARS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ohman",
        description="Oh Man! - AI-powered man page assistant",
        epilog=(
            "examples:\n"
            '  ohman grep "How to search recursively?"   ask about grep usage\n'
            "  ohman git                                 interactive mode\n"
            "  ohman                                     diagnose the last failed command\n"
            "  ohman -l /var/log/nginx/error.log         analyze a log file\n"
            "  journalctl -b | ohman                     analyze piped log text\n"
            "\n"
            "subcommands: config, history, clear, chat"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-c", "--config", help="Config file path")
    parser.add_argument(
        "-s", "--section", type=int, default=0, help="Man page section (1-8)"
    )
    parser.add_argument("-m", "--model", help="LLM model name")
    parser.add_argument(
        "-r", "--raw", action="store_true", help="Show raw man page content only"
    )
    parser.add_argument(
        "-i", "--interactive", action="store_true", help="Force interactive mode"
    )
    parser.add_argument(
        "-l", "--log", metavar="TARGET", help="Log file or systemd unit to analyze"
    )
    parser.add_argument(
        "-n",
        "--lines",
        type=int,
        default=0,
        help="Maximum number of log lines to analyze (0 = all)",
    )
    parser.add_argument(
        "words",
        nargs="*",
        metavar="command/question",
        help="A command followed by an optional question, or pasted error text",
    )
    return parser


def _dispatch(assistant: Assistant, args: argparse.Namespace) -> None:
    if args.log:
        if os.path.exists(args.log):
            assistant.analyze_log_file(args.log, args.lines)
        elif is_journal_unit(args.log):
            assistant.analyze_journal(args.log, args.lines)
        else:
            raise OhmanError(f"{args.log} is neither a readable file nor a systemd unit")
        return

    if not args.words:
        if is_piped_input():
            content = read_piped_input()
            if content.strip():
                assistant.analyze_log_content(content)
                return
        assistant.diagnose_last_failed()
        return

    text = " ".join(args.words)
    if looks_like_error_message(text):
        assistant.analyze_error(text)
        return

    command, question = args.words[0], " ".join(args.words[1:])
    log.debug("command=%s question=%r", command, question)
    if args.raw:
        assistant.show_man_page(command, args.section)
    elif args.interactive or not question:
        assistant.interactive(command, args.section)
    else:
        assistant.ask(command, args.section, question)


def run(argv: list[str]) -> int:
    """Execute the default command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_runtime_config(args.config, args.debug, allow_setup=not args.raw)
        if args.model:
            config.llm.model = args.model
        _dispatch(Assistant(config), args)
    except OhmanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0
