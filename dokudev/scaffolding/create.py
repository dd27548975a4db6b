"""Initialize a new plugin or template in an empty directory."""

from __future__ import annotations

from dokudev.core.errors import ConfigurationError, ExternalToolError
from dokudev.core.locator import ExtensionKind
from dokudev.core.replacements import (
    AUTHOR_MAIL,
    AUTHOR_NAME,
    PLUGIN_DESC,
    PLUGIN_NAME,
    PLUGIN_TYPE,
)
from dokudev.helpers.helpers_git import RepositoryInitializer
from dokudev.helpers.helpers_logging import print_header, print_warning
from dokudev.helpers.prompt import Prompter

from .workspace import Workspace

PROMPT_NAME = "Your Name"
PROMPT_MAIL = "Your E-Mail"
PROMPT_DESC = "Short description"


def init_files(kind: ExtensionKind) -> list[tuple[str, str]]:
    """Skeleton -> target pairs created by ``init``."""
    return [
        ("info.skel", kind.info_file),
        ("README.skel", "README"),
        ("LICENSE.skel", "LICENSE"),
    ]


def init_extension(
    workspace: Workspace,
    prompter: Prompter,
    initializer: RepositoryInitializer,
) -> int:
    """Initialize the workspace directory as a plugin or template.

    Asks for author name and e-mail (remembered for the next run) and a
    short description, creates the info file, README and LICENSE, then
    tries to ``git init``. A git failure is only a warning.

    Raises:
        ConfigurationError: If the directory is not empty or not an
            extension directory. Nothing is written in that case.
        FetchFailedError: If a skeleton can't be downloaded.
    """
    if any(workspace.directory.iterdir()):
        raise ConfigurationError("Current directory needs to be empty")

    identity = workspace.identity()
    print_header(f"Creating {identity.kind.value} {identity.name}")
    user = prompter.read_line(PROMPT_NAME, cache=True)
    mail = prompter.read_line(PROMPT_MAIL, cache=True)
    desc = prompter.read_line(PROMPT_DESC)

    replacements = workspace.replacements(
        {
            AUTHOR_NAME: user,
            AUTHOR_MAIL: mail,
            PLUGIN_NAME: identity.name,
            PLUGIN_DESC: desc,
            PLUGIN_TYPE: identity.kind.value,
        }
    )

    for skeleton, target in init_files(identity.kind):
        workspace.load_skeleton(skeleton, target, replacements)

    try:
        initializer.init_repository()
    except ExternalToolError as e:
        print_warning(str(e))

    return 0
