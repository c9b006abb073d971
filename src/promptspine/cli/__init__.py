"""prompt-spine command line interface."""

from promptspine.cli.app import app

__all__ = ["app"]
