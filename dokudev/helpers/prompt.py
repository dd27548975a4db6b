"""Interactive line input with optionally cached answers.

Answers to prompts like "Your Name" are remembered between runs so repeated
``dokudev init`` calls only need Enter. The cache is an explicit object:
``MemoryAnswerCache`` for tests, ``FileAnswerCache`` (YAML) in production.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from ruamel.yaml.error import YAMLError

from dokudev.core.errors import ConfigurationError
from dokudev.helpers.yaml_loader import ConfigDict, load_yaml_file, save_yaml_file


class AnswerCache(Protocol):
    """Key/value store for previous prompt answers, keyed by prompt text."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryAnswerCache:
    """Answer cache kept in a dict."""

    def __init__(self, answers: dict[str, str] | None = None) -> None:
        self.answers: dict[str, str] = dict(answers or {})

    def get(self, key: str) -> str | None:
        return self.answers.get(key)

    def set(self, key: str, value: str) -> None:
        self.answers[key] = value


class FileAnswerCache:
    """Answer cache persisted as a YAML mapping."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> ConfigDict:
        if not self.path.exists():
            return {}
        try:
            return load_yaml_file(self.path)
        except (ValueError, YAMLError) as e:
            raise ConfigurationError(f"Corrupt answer cache {self.path}: {e}") from e

    def get(self, key: str) -> str | None:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        save_yaml_file(data, self.path)


class Prompter:
    """Reads non-empty answers from the user."""

    def __init__(
        self,
        cache: AnswerCache,
        input_func: Callable[[str], str] | None = None,
    ) -> None:
        self.cache = cache
        self._input = input_func or input

    def read_line(self, prompt: str, cache: bool = False) -> str:
        """Ask until a non-empty value is given.

        Args:
            prompt: Text shown to the user (also the cache key).
            cache: Offer the previous answer as default and store the new one.

        Returns:
            The stripped answer.
        """
        default = (self.cache.get(prompt) or "") if cache else ""

        value = ""
        while value == "":
            shown = f"{prompt} [{default}]: " if default else f"{prompt}: "
            value = self._input(shown).strip()
            if value == "":
                value = default

        if cache:
            self.cache.set(prompt, value)

        return value
