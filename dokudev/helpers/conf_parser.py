"""Parser for DokuWiki's flat ``key value`` configuration files.

Used for ``plugin.info.txt`` / ``template.info.txt``::

    base   example
    author Jane Doe
    email  jane@example.com
    desc   Does things \\# with a literal hash
"""

import re
from pathlib import Path

from dokudev.core.errors import ConfigurationError

_BOM = "\ufeff"
# A '#' starts a comment unless escaped with a backslash or part of an entity (&#..;)
_COMMENT_RE = re.compile(r"(?<![&\\])#.*$")


def conf_lines_to_hash(lines: list[str]) -> dict[str, str]:
    """Turn ``key value`` lines into a dict.

    Args:
        lines: Raw lines, with or without trailing newlines.

    Returns:
        Mapping of key to stripped value. A key without a value maps to ``""``.
        Later duplicates override earlier ones.
    """
    conf: dict[str, str] = {}
    if lines and lines[0].startswith(_BOM):
        lines = [lines[0][len(_BOM):], *lines[1:]]

    for raw in lines:
        line = _COMMENT_RE.sub("", raw)
        line = line.replace("\\#", "#").strip()
        if not line:
            continue
        parts = line.split(None, 1)
        key = parts[0]
        value = parts[1].strip() if len(parts) > 1 else ""
        conf[key] = value

    return conf


def conf_to_hash(file_path: Path) -> dict[str, str]:
    """Parse a configuration file; a missing file yields an empty dict.

    Raises:
        ConfigurationError: If the file is not valid UTF-8.
    """
    if not file_path.is_file():
        return {}
    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"{file_path} is not valid UTF-8: {e.reason}") from e
    return conf_lines_to_hash(text.splitlines())
