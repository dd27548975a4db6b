"""Plugin component types and their naming convention.

A plugin consists of components such as ``syntax.php`` or
``action/cache.php``. Each component's class name is derived from type,
plugin name and optional component name::

    action            -> action.php         action_plugin_example
    action + cache    -> action/cache.php   action_plugin_example_cache
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from dokudev.core.errors import ConfigurationError

PLUGIN_COMPONENT_NAME = "@@PLUGIN_COMPONENT_NAME@@"
SYNTAX_COMPONENT_NAME = "@@SYNTAX_COMPONENT_NAME@@"
REGISTER = "@@REGISTER@@"
HANDLERS = "@@HANDLERS@@"


class ComponentType(Enum):
    """Component types DokuWiki's plugin controller knows about."""

    AUTH = "auth"
    ADMIN = "admin"
    SYNTAX = "syntax"
    ACTION = "action"
    RENDERER = "renderer"
    HELPER = "helper"
    REMOTE = "remote"
    CLI = "cli"

    @classmethod
    def parse(cls, value: str) -> ComponentType:
        """Look up a type by name.

        Raises:
            ConfigurationError: If ``value`` is not a known component type.
        """
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(f"Invalid type {value}") from None

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]

    @property
    def skeleton(self) -> str:
        return f"{self.value}.skel"

    def extra_replacements(self) -> dict[str, str]:
        """Additional tokens only some skeletons need."""
        builder = _EXTRA_REPLACEMENTS.get(self)
        return builder() if builder is not None else {}


def action_replacements() -> dict[str, str]:
    """Register one example event hook and its empty handler."""
    fn = "handleEventName"
    register = (
        "        $controller->register_hook('EVENT_NAME', 'AFTER|BEFORE', $this, '"
        + fn
        + "');"
    )
    handler = (
        f"    public function {fn}(Doku_Event $event, $param)\n"
        "    {\n"
        "    }\n"
    )

    return {
        REGISTER: register + "\n   ",
        HANDLERS: handler,
    }


_EXTRA_REPLACEMENTS: dict[ComponentType, Callable[[], dict[str, str]]] = {
    ComponentType.ACTION: action_replacements,
}


@dataclass(frozen=True)
class ComponentFiles:
    """Naming of one new plugin component.

    Attributes:
        component_type: Kind of component.
        path: File to create, relative to the plugin directory.
        class_name: Fully qualified class name of the component.
        self_name: Short name the component refers to itself by.
        extra: Type-specific additional tokens.
    """

    component_type: ComponentType
    path: str
    class_name: str
    self_name: str
    extra: Mapping[str, str] = field(default_factory=dict)

    def replacements(self) -> dict[str, str]:
        return {
            **self.extra,
            PLUGIN_COMPONENT_NAME: self.class_name,
            SYNTAX_COMPONENT_NAME: self.self_name,
        }


def component_files(
    component_type: ComponentType,
    plugin: str,
    component: str | None = None,
) -> ComponentFiles:
    """Derive file path and class names for a new component."""
    kind = component_type.value
    if component:
        path = f"{kind}/{component}.php"
        class_name = f"{kind}_plugin_{plugin}_{component}"
        self_name = f"{plugin}_{component}"
    else:
        path = f"{kind}.php"
        class_name = f"{kind}_plugin_{plugin}"
        self_name = plugin

    return ComponentFiles(
        component_type=component_type,
        path=path,
        class_name=class_name,
        self_name=self_name,
        extra=component_type.extra_replacements(),
    )
