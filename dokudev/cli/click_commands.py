"""Click command definitions for every dokudev operation.

Each command resolves settings, builds a ``Workspace`` for the current
directory and hands over to the scaffolding layer. Handled errors
(``DevToolError``) become one error line and exit status 1.
"""

from __future__ import annotations

from collections.abc import Callable

import click

from dokudev.core.deleted_files import write_deleted_files
from dokudev.core.errors import DevToolError
from dokudev.helpers.helpers_git import GitRunner
from dokudev.helpers.helpers_logging import print_error
from dokudev.helpers.prompt import FileAnswerCache, Prompter
from dokudev.helpers.settings import DevSettings, load_settings
from dokudev.scaffolding import (
    ComponentType,
    Workspace,
    add_component,
    add_conf,
    add_lang,
    add_test,
    init_extension,
    remove_obsolete,
)

WorkspaceAction = Callable[[Workspace, DevSettings], int]


def run_in_workspace(action: WorkspaceAction) -> int:
    """Run ``action`` on the current directory, reporting handled errors."""
    try:
        settings = load_settings()
        workspace = Workspace.from_settings(settings)
        return action(workspace, settings)
    except DevToolError as e:
        print_error(str(e))
        return 1


def complete_component_types(
    _ctx: click.Context,
    _param: click.Parameter,
    incomplete: str,
) -> list[str]:
    return [name for name in ComponentType.names() if name.startswith(incomplete)]


# ============================================================================


@click.command(
    name="init",
    help="Initialize a new plugin or template in the current (empty) directory.",
)
def init_cmd() -> int:
    def _init(workspace: Workspace, settings: DevSettings) -> int:
        prompter = Prompter(FileAnswerCache(settings.answers_file))
        return init_extension(workspace, prompter, GitRunner(workspace.directory))

    return run_in_workspace(_init)


@click.command(name="add-test", help="Add the testing framework files and a test. (_test/)")
@click.argument("test", required=False, default=None)
def add_test_cmd(test: str | None) -> int:
    return run_in_workspace(lambda workspace, _settings: add_test(workspace, test))


@click.command(name="add-conf", help="Add the configuration files. (conf/)")
def add_conf_cmd() -> int:
    return run_in_workspace(lambda workspace, _settings: add_conf(workspace))


@click.command(name="add-lang", help="Add the language files. (lang/)")
def add_lang_cmd() -> int:
    return run_in_workspace(lambda workspace, _settings: add_lang(workspace))


@click.command(
    name="add-component",
    help=(
        "Add a new plugin component. TYPE needs to be one of "
        + ", ".join(ComponentType.names())
        + ". NAME defaults to a base component."
    ),
)
@click.argument("component_type", metavar="TYPE", shell_complete=complete_component_types)
@click.argument("name", required=False, default=None)
def add_component_cmd(component_type: str, name: str | None) -> int:
    return run_in_workspace(
        lambda workspace, _settings: add_component(workspace, component_type, name)
    )


@click.command(
    name="deleted-files",
    help="Create the list of deleted files based on the git history.",
)
def deleted_files_cmd() -> int:
    def _deleted(workspace: Workspace, _settings: DevSettings) -> int:
        write_deleted_files(workspace.directory, GitRunner(workspace.directory))
        return 0

    return run_in_workspace(_deleted)


@click.command(name="rm-obsolete", help="Delete obsolete files.")
def rm_obsolete_cmd() -> int:
    return run_in_workspace(lambda workspace, _settings: remove_obsolete(workspace))


# Canonical name -> command object
CLICK_COMMANDS: dict[str, click.Command] = {
    "init": init_cmd,
    "add-test": add_test_cmd,
    "add-conf": add_conf_cmd,
    "add-lang": add_lang_cmd,
    "add-component": add_component_cmd,
    "deleted-files": deleted_files_cmd,
    "rm-obsolete": rm_obsolete_cmd,
}
