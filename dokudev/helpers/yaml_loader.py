"""
Round-trip YAML loader used for files dokudev writes back.
Provides a configured ruamel.yaml instance and load/save helpers.
"""

from pathlib import Path
from typing import Protocol, TextIO, Union, cast

from ruamel.yaml import YAML

# Recursive type for nested YAML structures
ConfigValue = Union[str, int, float, bool, None, 'ConfigDict', list['ConfigValue']]
ConfigDict = dict[str, ConfigValue]


class YAMLLoader(Protocol):
    """Protocol for YAML loader with comment preservation."""
    preserve_quotes: bool
    default_flow_style: bool

    def load(self, stream: TextIO) -> ConfigValue:
        """Load YAML from stream."""
        ...

    def dump(self, data: object, stream: TextIO) -> None:
        """Dump YAML to stream."""
        ...


def _create_yaml_loader() -> YAMLLoader:
    """Create the round-trip YAML loader instance."""
    yaml_obj = YAML()
    yaml_obj.preserve_quotes = True
    yaml_obj.default_flow_style = False
    return cast(YAMLLoader, yaml_obj)


yaml: YAMLLoader = _create_yaml_loader()


def load_yaml_file(file_path: Path) -> ConfigDict:
    """Load a YAML mapping from file.

    An empty document loads as an empty dict.

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If the document is not a mapping
    """
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with file_path.open(encoding="utf-8") as f:
        raw: ConfigValue = yaml.load(f)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"Expected a mapping in {file_path}, got {type(raw).__name__}")
    return cast(ConfigDict, raw)


def save_yaml_file(data: ConfigDict, file_path: Path) -> None:
    """Save data to YAML file, creating parent directories as needed."""
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with file_path.open('w', encoding='utf-8') as f:
        yaml.dump(data, f)
