"""Generate the ``deleted.files`` list from the git history.

DokuWiki's extension manager removes every path listed in an extension's
``deleted.files`` on upgrade. The list holds each path that was deleted in
some commit and does not exist in the working tree now, so a file that was
deleted and later re-added is not listed.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from dokudev.core.errors import ConfigurationError, WriteFailedError
from dokudev.helpers.helpers_git import HistoryProvider
from dokudev.helpers.helpers_logging import print_info, print_success

MANIFEST_NAME = "deleted.files"
MANIFEST_HEADER = (
    "# This is a list of files that were present in previous releases\n"
    "# but were removed later. They should not exist in your installation.\n"
)

DeletionRecord = tuple[str, ...]


def reconcile(history: HistoryProvider, exists: Callable[[str], bool]) -> DeletionRecord:
    """Reduce deletion events to the sorted set of currently missing paths.

    Steps run in this order: trim, drop empties, dedupe, drop existing, sort.

    Args:
        history: Provides one path per historical deletion event.
        exists: Tells whether a relative path exists in the working tree.
    """
    trimmed = (path.strip() for path in history.deleted_paths())
    unique = dict.fromkeys(path for path in trimmed if path)
    missing = [path for path in unique if not exists(path)]
    return tuple(sorted(missing))


def render_manifest(paths: DeletionRecord) -> str:
    return MANIFEST_HEADER + "".join(f"{path}\n" for path in paths)


def write_deleted_files(directory: Path, history: HistoryProvider) -> Path | None:
    """Write ``deleted.files`` for the extension in ``directory``.

    Returns:
        The manifest path, or None when no deleted files were found (an
        existing manifest is then left as it is).

    Raises:
        ConfigurationError: If the directory is not a git checkout.
        WriteFailedError: If the manifest could not be written.
    """
    if not (directory / ".git").is_dir():
        raise ConfigurationError("This extension seems not to be managed by git")

    paths = reconcile(history, lambda path: (directory / path).exists())
    if not paths:
        print_info("No deleted files found")
        return None

    manifest = directory / MANIFEST_NAME
    try:
        with manifest.open("w", encoding="utf-8", newline="\n") as f:
            f.write(render_manifest(paths))
    except OSError as e:
        raise WriteFailedError(MANIFEST_NAME, e.strerror or str(e)) from e
    print_success(f"written {MANIFEST_NAME}")
    return manifest
