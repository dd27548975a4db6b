"""Thin wrappers around the ``git`` executable.

``GitRunner`` implements both collaborator roles the scaffolding engine needs:
a history provider (deleted paths) and a repository initializer. Tests swap
either role for a fake without spawning processes.
"""

from __future__ import annotations

import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from dokudev.core.errors import ExternalToolError
from dokudev.helpers.helpers_logging import print_info

# git log invocation listing every path removed by any commit.
# --no-renames keeps a rename from showing up as delete + add.
DELETED_FILES_LOG_ARGS = (
    "log",
    "--no-renames",
    "--pretty=format:",
    "--name-only",
    "--diff-filter=D",
)


class HistoryProvider(Protocol):
    """Source of file deletion events from version control."""

    def deleted_paths(self) -> list[str]:
        """Return every deleted path, one entry per deletion event."""
        ...


class RepositoryInitializer(Protocol):
    """Creates a new version control repository."""

    def init_repository(self) -> None:
        """Initialize the repository, raising ExternalToolError on failure."""
        ...


def run_git(*args: str, cwd: Path) -> list[str]:
    """Run git with the given arguments and return its output lines.

    Raises:
        ExternalToolError: If git is missing or exits non-zero.
    """
    cmd = ["git", *args]
    print_info(shlex.join(cmd))

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        raise ExternalToolError("Running git failed: git executable not found") from None

    if result.returncode != 0:
        detail = (result.stderr or result.stdout or "").strip()
        msg = "Running git failed"
        if detail:
            msg += f": {detail}"
        raise ExternalToolError(msg)

    return result.stdout.splitlines()


class GitRunner:
    """git bound to one working directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def deleted_paths(self) -> list[str]:
        return run_git(*DELETED_FILES_LOG_ARGS, cwd=self.directory)

    def init_repository(self) -> None:
        run_git("init", cwd=self.directory)
