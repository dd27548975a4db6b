"""
DokuWiki Extension Developer Tools

A scaffolding engine for DokuWiki plugins and templates: creates the
boilerplate files of an extension from remote skeletons and maintains
the list of files deleted over its history.
"""

__version__ = "0.1.0"

from dokudev.cli.commands import main
from dokudev.core.locator import ExtensionIdentity, ExtensionKind, classify

__all__ = [
    "ExtensionIdentity",
    "ExtensionKind",
    "classify",
    "main",
]
