#!/usr/bin/env python3
"""DokuWiki extension developer CLI - Main Entry Point.

Run this from within the extension's directory
(``<dokuwiki>/lib/plugins/<name>`` or ``<dokuwiki>/lib/tpl/<name>``).

Usage:
    dokudev <command> [arguments]

Commands:
    init                       Initialize a new plugin or template in the current (empty) directory
    add-test [TEST]            Add the testing framework files and a test (_test/)
    add-conf                   Add the configuration files (conf/)
    add-lang                   Add the language files (lang/)
    add-component TYPE [NAME]  Add a new plugin component
    deleted-files              Create the list of deleted files based on the git history
    rm-obsolete                Delete obsolete files
    help                       Show this help message

Settings come from ~/.config/dokudev/config.yaml ($DOKUDEV_CONFIG) and the
DOKUWIKI_ROOT / DOKUDEV_* environment variables.
"""

from __future__ import annotations

import contextlib
import os
import sys

import click

# Minimum number of CLI args (program name + command)
_MIN_ARGS = 2

# Historical camelCase command names
COMMAND_ALIASES: dict[str, str] = {
    "addTest": "add-test",
    "addConf": "add-conf",
    "addLang": "add-lang",
    "addComponent": "add-component",
    "deletedFiles": "deleted-files",
    "rmObsolete": "rm-obsolete",
}


def print_help() -> None:
    """Print help message with all available commands."""
    print(__doc__)
    print("⚡ Aliases:")
    for alias, canonical in COMMAND_ALIASES.items():
        print(f"  {alias:26} - alias for {canonical}")


@click.group(invoke_without_command=True)
@click.pass_context
def _click_cli(ctx: click.Context) -> int:
    """DokuWiki extension developer tools."""
    if ctx.invoked_subcommand is not None:
        return 0

    print_help()
    return 0


def _register_commands() -> None:
    """Register all commands and their aliases in the click app."""
    from dokudev.cli.click_commands import CLICK_COMMANDS

    for _name, cmd_obj in CLICK_COMMANDS.items():
        _click_cli.add_command(cmd_obj)

    for alias, canonical in COMMAND_ALIASES.items():
        _click_cli.add_command(CLICK_COMMANDS[canonical], name=alias)

    @click.command(name="help", help="Show help message")
    def _help_cmd() -> int:
        print_help()
        return 0

    _click_cli.add_command(_help_cmd)


_register_commands()


def main() -> int:
    """Main CLI entry point."""
    # Let Click answer shell completion requests before anything else.
    if os.environ.get("_DOKUDEV_COMPLETE"):
        with contextlib.suppress(SystemExit):
            _click_cli.main(
                args=sys.argv[1:],
                prog_name="dokudev",
                standalone_mode=True,
            )
        return 0

    if len(sys.argv) < _MIN_ARGS or sys.argv[1] in ["help", "--help", "-h"]:
        print_help()
        return 0

    try:
        result = _click_cli.main(
            args=sys.argv[1:],
            prog_name="dokudev",
            standalone_mode=False,
        )
    except click.Abort:
        print("\n⚠️  Cancelled by user")
        return 130
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    return 0 if result is None else int(result)


if __name__ == "__main__":
    sys.exit(main())
