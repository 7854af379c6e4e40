"""`ohman history` and `ohman clear` command implementations."""

import argparse
import sys
from datetime import datetime

from ohman.cli.shared import load_runtime_config
from ohman.errors import OhmanError
from ohman.models import SessionEntry
from ohman.output import Printer
from ohman.session import SessionStore

DEFAULT_HISTORY_LIMIT = 10
PREVIEW_CHARS = 60


def truncate_string(s: str, max_len: int) -> str:
    """Collapse newlines and cut s to max_len characters with a trailing ellipsis."""
    s = s.replace("\n", " ")
    if len(s) <= max_len:
        return s
    return s[: max(max_len - 3, 0)] + "..."


def format_timestamp(ts: datetime, now: datetime | None = None) -> str:
    """Render ts relative to now for recent times, as a date otherwise."""
    if now is None:
        now = datetime.now(ts.tzinfo)
    seconds = (now - ts).total_seconds()
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{int(seconds // 60)} minutes ago"
    if seconds < 86400:
        return f"{int(seconds // 3600)} hours ago"
    if seconds < 7 * 86400:
        return f"{int(seconds // 86400)} days ago"
    return ts.strftime("%Y-%m-%d %H:%M")


def _print_entry(printer: Printer, index: int, entry: SessionEntry) -> None:
    when = format_timestamp(entry.timestamp) if entry.timestamp else "unknown time"
    label = entry.command or entry.type.value
    printer.plain(f"{index}. [{when}] {entry.type.value}: {label}")
    if entry.question:
        printer.plain(f"   Q: {truncate_string(entry.question, PREVIEW_CHARS)}")
    if entry.answer:
        printer.plain(f"   A: {truncate_string(entry.answer, PREVIEW_CHARS)}")


def build_history_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ohman history", description="Show recent sessions")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-c", "--config", help="Config file path")
    parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=DEFAULT_HISTORY_LIMIT,
        help="Number of entries to show (0 = all)",
    )
    return parser


def run_history(argv: list[str], store: SessionStore | None = None) -> int:
    """Execute the history command."""
    args = build_history_parser().parse_args(argv)
    try:
        config = load_runtime_config(args.config, args.debug)
        store = store if store is not None else SessionStore()
        entries = store.last(args.limit)
    except OhmanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    printer = Printer(color=config.output.color)
    if not entries:
        printer.info("No session history yet.")
        return 0

    printer.heading(f"📜 Recent sessions ({len(entries)} of {store.count()})")
    printer.plain()
    for i, entry in enumerate(entries, start=1):
        _print_entry(printer, i, entry)
    return 0


def build_clear_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ohman clear", description="Clear session history")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-c", "--config", help="Config file path")
    parser.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    return parser


def run_clear(argv: list[str], store: SessionStore | None = None) -> int:
    """Execute the clear command."""
    args = build_clear_parser().parse_args(argv)
    try:
        config = load_runtime_config(args.config, args.debug)
        store = store if store is not None else SessionStore()
        printer = Printer(color=config.output.color)
        if store.count() == 0:
            printer.info("Session history is already empty.")
            return 0
        if not args.yes:
            answer = input(f"Delete {store.count()} history entries? [y/N] ")
            if answer.strip().lower() not in ("y", "yes"):
                printer.plain("Cancelled.")
                return 0
        store.clear()
    except OhmanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except EOFError:
        print("Cancelled.")
        return 0

    printer.success("Session history cleared.")
    return 0
