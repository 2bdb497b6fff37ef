"""Command line interface for simrender."""

from simrender.cli.main import app

__all__ = ["app"]
