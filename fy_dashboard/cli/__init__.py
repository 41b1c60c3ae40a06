"""Command line interface for the financial-year dashboard."""

from .__main__ import main

__all__ = ["main"]
