"""Error types raised by the scaffolding engine.

The CLI layer catches ``DevToolError`` and reports it as a single
error line; anything else is a bug and propagates.
"""


class DevToolError(Exception):
    """Base class for all handled dokudev errors."""


class ConfigurationError(DevToolError):
    """Directory, extension kind or component type does not fit the command."""


class FetchFailedError(DevToolError):
    """A remote skeleton could not be downloaded."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch skeleton {url}: {reason}")
        self.url = url
        self.reason = reason


class ExternalToolError(DevToolError):
    """An external program (git) could not be run or exited non-zero."""


class WriteFailedError(DevToolError):
    """A generated file could not be written."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
        self.reason = reason
