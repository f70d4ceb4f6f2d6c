"""Command line interface."""

from impeval.cli.app import app, main

__all__ = ["app", "main"]
