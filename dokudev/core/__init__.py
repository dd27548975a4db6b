"""Core scaffolding logic: locating the extension, building replacements,
materializing skeletons and reconciling deleted files."""

from dokudev.core.locator import ExtensionIdentity, ExtensionKind, classify

__all__ = ["ExtensionIdentity", "ExtensionKind", "classify"]
