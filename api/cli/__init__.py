"""Command line interface for block-inspector."""

from .repl import create_parser, main, run_cli

__all__ = ["create_parser", "main", "run_cli"]
