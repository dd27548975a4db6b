"""Build the token replacements applied to skeleton files.

Layers are merged in a fixed order, later ones winning:

1. built-in defaults
2. values from an existing ``<kind>.info.txt``
3. extension name and kind
4. kind-dependent install directory
5. caller overrides
6. documentation URL, only if still empty
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date
from pathlib import Path

from dokudev.core.locator import ExtensionIdentity, ExtensionKind
from dokudev.helpers.conf_parser import conf_to_hash

ReplacementContext = dict[str, str]
MetadataLoader = Callable[[ExtensionKind, Path], dict[str, str] | None]

AUTHOR_NAME = "@@AUTHOR_NAME@@"
AUTHOR_MAIL = "@@AUTHOR_MAIL@@"
PLUGIN_NAME = "@@PLUGIN_NAME@@"
PLUGIN_DESC = "@@PLUGIN_DESC@@"
PLUGIN_URL = "@@PLUGIN_URL@@"
PLUGIN_TYPE = "@@PLUGIN_TYPE@@"
INSTALL_DIR = "@@INSTALL_DIR@@"
DATE = "@@DATE@@"

DOCS_BASE_URL = "https://www.dokuwiki.org/"

# info.txt key -> token
_INFO_TOKENS: dict[str, str] = {
    "author": AUTHOR_NAME,
    "email": AUTHOR_MAIL,
    "desc": PLUGIN_DESC,
    "url": PLUGIN_URL,
}


def load_info_file(kind: ExtensionKind, directory: Path) -> dict[str, str] | None:
    """Read ``<kind>.info.txt`` from ``directory``; None if there is none."""
    info_path = directory / kind.info_file
    if not info_path.is_file():
        return None
    return conf_to_hash(info_path)


def docs_url(kind: str, name: str) -> str:
    """Documentation page of an extension on dokuwiki.org."""
    return f"{DOCS_BASE_URL}{kind}:{name}"


def build_context(
    identity: ExtensionIdentity,
    directory: Path,
    overrides: Mapping[str, str] | None = None,
    *,
    metadata_loader: MetadataLoader = load_info_file,
    today: date | None = None,
) -> ReplacementContext:
    """Prepare the string replacements for one command.

    Args:
        identity: The extension being worked on.
        directory: Extension directory, searched for an existing info file.
        overrides: Command-specific tokens; they win over everything but are
            still subject to the URL default when they leave it empty.
        metadata_loader: Reads existing metadata (injectable for tests).
        today: Date used for ``@@DATE@@`` (defaults to today).

    Returns:
        Ordered token -> value mapping.
    """
    data: ReplacementContext = {
        AUTHOR_NAME: "",
        AUTHOR_MAIL: "",
        PLUGIN_NAME: "",
        PLUGIN_DESC: "",
        PLUGIN_URL: "",
        PLUGIN_TYPE: "",
        INSTALL_DIR: ExtensionKind.PLUGIN.install_dir,
        DATE: (today or date.today()).isoformat(),
    }

    info = metadata_loader(identity.kind, directory)
    if info is not None:
        for key, token in _INFO_TOKENS.items():
            data[token] = info.get(key, "")

    data[PLUGIN_NAME] = identity.name
    data[PLUGIN_TYPE] = identity.kind.value
    data[INSTALL_DIR] = identity.kind.install_dir

    if overrides:
        data.update(overrides)

    if not data.get(PLUGIN_URL):
        data[PLUGIN_URL] = docs_url(data[PLUGIN_TYPE], data[PLUGIN_NAME])

    return data
