"""Shared CLI helpers."""

import logging
import sys

from ohman.cli.wizard import run_setup
from ohman.config import load_config, needs_setup
from ohman.models import OhmanConfig

LOG_FORMAT = "%(name)s %(levelname)s: %(message)s"


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
    )


def load_runtime_config(
    config_file: str | None = None, debug: bool = False, allow_setup: bool = False
) -> OhmanConfig:
    """Load config (honouring --config) and turn on debug logging if requested.

    With allow_setup, a first run on an interactive terminal goes through the
    setup wizard instead of silently using defaults.
    """
    configure_logging(debug)
    if allow_setup and needs_setup(config_file) and sys.stdin.isatty():
        config = run_setup(config_file)
    else:
        config = load_config(config_file)
    if config.debug.enabled and not debug:
        logging.getLogger().setLevel(logging.DEBUG)
    return config
