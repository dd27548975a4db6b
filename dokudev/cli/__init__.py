"""
CLI module for the DokuWiki extension developer tools.

Provides the ``dokudev`` console script entry point.
"""

from .commands import main

__all__ = ["main"]
