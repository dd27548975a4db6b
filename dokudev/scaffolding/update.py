"""Add files to an existing extension.

Every command fetches its skeletons in order. An existing target is skipped
with an error line; a download failure aborts the remaining files but keeps
the ones already written.
"""

from __future__ import annotations

from dokudev.core.errors import ConfigurationError
from dokudev.core.locator import ExtensionKind
from dokudev.helpers.helpers_logging import print_error, print_success

from .components import ComponentType, component_files
from .workspace import Workspace

TEST = "@@TEST@@"

WORKFLOW_SKELETON = ".github/workflows/phpTestLinux.skel"
WORKFLOW_TARGET = ".github/workflows/phpTestLinux.yml"
LANG_SETTINGS_SKELETON = "lang/settings.skel"
LANG_SETTINGS_TARGET = "lang/en/settings.php"

# Files older tool versions generated that are no longer wanted
OBSOLETE_FILES = (
    "_test/general.test.php",
    ".travis.yml",
)


def normalize_test_name(test: str) -> str:
    """``fooBAR`` -> ``Foobar``."""
    test = test.lower()
    return test[:1].upper() + test[1:]


def add_test(workspace: Workspace, test: str | None = None) -> int:
    """Add the general test, or a named test plus the CI workflow."""
    name = normalize_test_name(test or "")
    replacements = workspace.replacements({TEST: name})

    if name:
        workspace.load_skeleton(WORKFLOW_SKELETON, WORKFLOW_TARGET, replacements)
        workspace.load_skeleton("_test/StandardTest.skel", f"_test/{name}Test.php", replacements)
    else:
        workspace.load_skeleton("_test/GeneralTest.skel", "_test/GeneralTest.php", replacements)

    return 0


def add_conf(workspace: Workspace) -> int:
    """Add configuration defaults and metadata (conf/).

    The settings language file is only added when lang/ already exists.
    """
    replacements = workspace.replacements()
    workspace.load_skeleton("conf/default.skel", "conf/default.php", replacements)
    workspace.load_skeleton("conf/metadata.skel", "conf/metadata.php", replacements)
    if workspace.has_dir("lang"):
        workspace.load_skeleton(LANG_SETTINGS_SKELETON, LANG_SETTINGS_TARGET, replacements)

    return 0


def add_lang(workspace: Workspace) -> int:
    """Add the English language file (lang/).

    The settings language file is only added when conf/ already exists.
    """
    replacements = workspace.replacements()
    workspace.load_skeleton("lang/lang.skel", "lang/en/lang.php", replacements)
    if workspace.has_dir("conf"):
        workspace.load_skeleton(LANG_SETTINGS_SKELETON, LANG_SETTINGS_TARGET, replacements)

    return 0


def add_component(workspace: Workspace, component_type: str, component: str | None = None) -> int:
    """Add a new component to a plugin.

    Raises:
        ConfigurationError: If the extension is a template or the type is unknown.
    """
    identity = workspace.identity()
    if identity.kind is not ExtensionKind.PLUGIN:
        raise ConfigurationError("Components can only be added to plugins")
    kind = ComponentType.parse(component_type)

    files = component_files(kind, identity.name, component)
    replacements = workspace.replacements(files.replacements())
    workspace.load_skeleton(kind.skeleton, files.path, replacements)

    return 0


def remove_obsolete(workspace: Workspace) -> int:
    """Delete files that should no longer be part of an extension."""
    failed = False
    for relative in OBSOLETE_FILES:
        path = workspace.directory / relative
        if not path.exists():
            continue
        try:
            path.unlink()
        except OSError as e:
            print_error(f"Could not delete {relative}: {e}")
            failed = True
            continue
        print_success(f"Delete {relative}")

    return 1 if failed else 0
