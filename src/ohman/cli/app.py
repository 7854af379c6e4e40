"""Top-level CLI router."""

import sys

from . import chat as chat_cmd
from . import configure as configure_cmd
from . import history as history_cmd
from . import query as query_cmd

EXIT_INTERRUPTED = 130

SUBCOMMANDS = {
    "config": configure_cmd.run,
    "history": history_cmd.run_history,
    "clear": history_cmd.run_clear,
    "chat": chat_cmd.run,
}


def main(argv: list[str] | None = None) -> int:
    """Route to a subcommand or to the default query mode."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if args and args[0] in SUBCOMMANDS:
            return SUBCOMMANDS[args[0]](args[1:])
        return query_cmd.run(args)
    except KeyboardInterrupt:
        print(file=sys.stderr)
        return EXIT_INTERRUPTED


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
