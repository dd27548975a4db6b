"""Runtime settings for dokudev.

Settings are resolved from (lowest to highest priority):

1. Built-in defaults
2. YAML config file (``$DOKUDEV_CONFIG`` or ``~/.config/dokudev/config.yaml``)
3. Environment variables

Example config.yaml::

    dokuwiki_root: ~/www/dokuwiki
    skeleton_base_url: https://example.org/skel/
    http_timeout: 10

When no DokuWiki root is configured it is detected by walking up from the
working directory, so running inside ``lib/plugins/<name>`` needs no config.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

import yaml

from dokudev.core.errors import ConfigurationError
from dokudev.helpers.helpers_logging import print_warning

DEFAULT_SKELETON_BASE_URL = (
    "https://raw.githubusercontent.com/dokufreaks/dokuwiki-plugin-wizard/master/skel/"
)
DEFAULT_HTTP_TIMEOUT = 30.0

CONFIG_ENV_VAR = "DOKUDEV_CONFIG"

# Environment variable -> settings key
_ENV_KEYS: dict[str, str] = {
    "DOKUWIKI_ROOT": "dokuwiki_root",
    "DOKUDEV_PLUGIN_ROOT": "plugin_root",
    "DOKUDEV_TEMPLATE_ROOT": "template_root",
    "DOKUDEV_SKELETON_URL": "skeleton_base_url",
    "DOKUDEV_CACHE_DIR": "cache_dir",
    "DOKUDEV_HTTP_TIMEOUT": "http_timeout",
}

_KNOWN_KEYS = frozenset(_ENV_KEYS.values())


def default_config_path() -> Path:
    return Path.home() / ".config" / "dokudev" / "config.yaml"


def default_cache_dir() -> Path:
    return Path.home() / ".cache" / "dokudev"


@dataclass(frozen=True)
class DevSettings:
    """Resolved settings.

    Attributes:
        dokuwiki_root: DokuWiki installation directory, if known.
        plugin_root: Directory holding plugins (``<root>/lib/plugins``).
        template_root: Directory holding templates (``<root>/lib/tpl``).
        skeleton_base_url: Base URL skeleton identifiers are appended to.
        cache_dir: Directory for cached prompt answers.
        http_timeout: Seconds before a skeleton download is abandoned.
    """

    dokuwiki_root: Path | None = None
    plugin_root: Path | None = None
    template_root: Path | None = None
    skeleton_base_url: str = DEFAULT_SKELETON_BASE_URL
    cache_dir: Path = field(default_factory=default_cache_dir)
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @property
    def answers_file(self) -> Path:
        return self.cache_dir / "answers.yaml"


def find_dokuwiki_root(start: Path) -> Path | None:
    """Find the DokuWiki installation containing ``start``.

    A directory qualifies when it holds ``doku.php`` and ``lib/plugins/``.
    """
    for parent in [start, *start.parents]:
        if (parent / "doku.php").is_file() and (parent / "lib" / "plugins").is_dir():
            return parent
    return None


def _read_config_file(config_path: Path) -> dict[str, object]:
    """Load the YAML config file as a flat mapping."""
    try:
        with config_path.open(encoding="utf-8") as f:
            raw: object = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping, got {type(raw).__name__}"
        )

    values: dict[str, object] = {}
    for key, value in cast(dict[object, object], raw).items():
        if key not in _KNOWN_KEYS:
            print_warning(f"Ignoring unknown setting '{key}' in {config_path}")
            continue
        values[str(key)] = value
    return values


def _to_path(value: object) -> Path:
    return Path(str(value)).expanduser().resolve()


def _to_timeout(value: object) -> float:
    try:
        timeout = float(cast(str, value))
    except (TypeError, ValueError):
        raise ConfigurationError(f"http_timeout must be a number, got {value!r}") from None
    if timeout <= 0:
        raise ConfigurationError(f"http_timeout must be positive, got {timeout}")
    return timeout


def load_settings(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> DevSettings:
    """Resolve settings from defaults, config file and environment.

    Args:
        config_path: Explicit config file. Must exist when given.
        environ: Environment mapping (defaults to ``os.environ``).
        cwd: Directory used for DokuWiki root detection (defaults to cwd).

    Raises:
        ConfigurationError: If the config file is missing, malformed, or
            holds invalid values.
    """
    env = os.environ if environ is None else environ
    start = (cwd or Path.cwd()).resolve()

    explicit = config_path or (Path(env[CONFIG_ENV_VAR]) if env.get(CONFIG_ENV_VAR) else None)
    values: dict[str, object] = {}
    if explicit is not None:
        explicit = explicit.expanduser()
        if not explicit.is_file():
            raise ConfigurationError(f"Config file not found: {explicit}")
        values.update(_read_config_file(explicit))
    elif default_config_path().is_file():
        values.update(_read_config_file(default_config_path()))

    for env_name, key in _ENV_KEYS.items():
        raw = env.get(env_name)
        if raw:
            values[key] = raw

    dokuwiki_root = (
        _to_path(values["dokuwiki_root"]) if values.get("dokuwiki_root")
        else find_dokuwiki_root(start)
    )

    plugin_root: Path | None = None
    template_root: Path | None = None
    if values.get("plugin_root"):
        plugin_root = _to_path(values["plugin_root"])
    elif dokuwiki_root is not None:
        plugin_root = dokuwiki_root / "lib" / "plugins"
    if values.get("template_root"):
        template_root = _to_path(values["template_root"])
    elif dokuwiki_root is not None:
        template_root = dokuwiki_root / "lib" / "tpl"

    base_url = str(values.get("skeleton_base_url") or DEFAULT_SKELETON_BASE_URL)
    if not base_url.endswith("/"):
        base_url += "/"

    cache_dir = _to_path(values["cache_dir"]) if values.get("cache_dir") else default_cache_dir()
    timeout = (
        _to_timeout(values["http_timeout"]) if values.get("http_timeout") is not None
        else DEFAULT_HTTP_TIMEOUT
    )

    return DevSettings(
        dokuwiki_root=dokuwiki_root,
        plugin_root=plugin_root,
        template_root=template_root,
        skeleton_base_url=base_url,
        cache_dir=cache_dir,
        http_timeout=timeout,
    )
