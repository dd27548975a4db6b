"""Extension scaffolding commands.

Public API:
    init_extension: Create info file, README and LICENSE in an empty directory
    add_test / add_conf / add_lang / add_component: Add files to an extension
    remove_obsolete: Delete files older versions used to generate

Example:
    from dokudev.scaffolding import Workspace, add_component
    from dokudev.helpers.settings import load_settings

    workspace = Workspace.from_settings(load_settings())
    add_component(workspace, "action", "cache")
"""

from .components import ComponentFiles, ComponentType, component_files
from .create import init_extension
from .update import add_component, add_conf, add_lang, add_test, remove_obsolete
from .workspace import Workspace

__all__ = [
    "ComponentFiles",
    "ComponentType",
    "Workspace",
    "add_component",
    "add_conf",
    "add_lang",
    "add_test",
    "component_files",
    "init_extension",
    "remove_obsolete",
]
