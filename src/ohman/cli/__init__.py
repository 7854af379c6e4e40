"""Command-line interface for ohman."""

from .app import entrypoint, main

__all__ = ["entrypoint", "main"]
