"""Extension identification from the working directory.

An extension lives exactly one directory below the plugin root
(``lib/plugins/<name>``) or the template root (``lib/tpl/<name>``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath

from dokudev.core.errors import ConfigurationError


class ExtensionKind(Enum):
    """The two kinds of DokuWiki extensions."""

    PLUGIN = "plugin"
    TEMPLATE = "template"

    @property
    def install_dir(self) -> str:
        """Directory name below ``lib/`` the extension is installed into."""
        return "tpl" if self is ExtensionKind.TEMPLATE else "plugins"

    @property
    def info_file(self) -> str:
        """Name of the extension's metadata file."""
        return f"{self.value}.info.txt"


@dataclass(frozen=True)
class ExtensionIdentity:
    name: str
    kind: ExtensionKind


def _relative_to(path: Path, root: Path | None) -> PurePath | None:
    if root is None:
        return None
    try:
        return path.relative_to(root)
    except ValueError:
        return None


def classify(
    working_dir: Path,
    plugin_root: Path | None,
    template_root: Path | None,
) -> ExtensionIdentity:
    """Get the extension name and kind from a directory.

    Args:
        working_dir: Absolute, normalized directory to classify.
        plugin_root: Absolute plugin directory, or None if unknown.
        template_root: Absolute template directory, or None if unknown.

    Returns:
        The identity of the extension living in ``working_dir``.

    Raises:
        ConfigurationError: If the directory is outside both roots, or is not
            exactly one level below its root.
    """
    local = _relative_to(working_dir, plugin_root)
    kind = ExtensionKind.PLUGIN
    if local is None:
        local = _relative_to(working_dir, template_root)
        kind = ExtensionKind.TEMPLATE
    if local is None:
        raise ConfigurationError("Current directory needs to be in plugin or template directory")

    if len(local.parts) != 1:
        raise ConfigurationError("Current directory has to be main extension directory")

    return ExtensionIdentity(name=local.parts[0], kind=kind)
