"""Download skeleton files, fill in their tokens and write them once.

Skeletons live in the dokuwiki-plugin-wizard repository and are addressed
by a path relative to its ``skel/`` directory, e.g. ``conf/default.skel``.
An existing target file is never touched.
"""

from __future__ import annotations

import contextlib
import os
import re
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import httpx

from dokudev.core.errors import FetchFailedError, WriteFailedError
from dokudev.helpers.helpers_logging import print_error, print_success
from dokudev.helpers.settings import DEFAULT_HTTP_TIMEOUT, DEFAULT_SKELETON_BASE_URL


class SkeletonStatus(Enum):
    CREATED = "created"
    EXISTS = "exists"


@dataclass(frozen=True)
class SkeletonRequest:
    """One skeleton to materialize.

    Attributes:
        source_path: Skeleton identifier relative to the skeleton base URL.
        target_path: Destination relative to the extension directory.
        context: Token -> replacement mapping.
    """

    source_path: str
    target_path: str
    context: Mapping[str, str]


class SkeletonSource:
    """Fetches raw skeleton content over HTTP(S)."""

    def __init__(
        self,
        base_url: str = DEFAULT_SKELETON_BASE_URL,
        *,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._client = client

    def url_for(self, skeleton: str) -> str:
        return self.base_url + skeleton

    def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return self._client.get(url)
        with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
            return client.get(url)

    def fetch(self, skeleton: str) -> str:
        """Return the skeleton's text.

        Raises:
            FetchFailedError: On transport errors or a non-2xx response.
        """
        url = self.url_for(skeleton)
        try:
            response = self._get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchFailedError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchFailedError(url, str(e) or type(e).__name__) from e
        return response.text


def apply_replacements(content: str, context: Mapping[str, str]) -> str:
    """Replace every token occurrence in a single pass.

    Tokens are escaped into one alternation, longest first, so they only ever
    match as plain text. Replacement values are not scanned again, so a value
    that itself looks like a token stays as written. Unknown tokens are kept.
    """
    tokens = sorted((t for t in context if t), key=len, reverse=True)
    if not tokens:
        return content
    pattern = re.compile("|".join(re.escape(t) for t in tokens))
    return pattern.sub(lambda m: context[m.group(0)], content)


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_atomically(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temp file and rename.

    Readers see either no file or the complete file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.chmod(tmp_name, 0o666 & ~_current_umask())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise


def materialize(request: SkeletonRequest, source: SkeletonSource, root: Path) -> SkeletonStatus:
    """Download a skeleton file, apply the replacements and write it.

    Args:
        request: What to fetch, where to write it, and the tokens to fill in.
        source: Where skeletons are downloaded from.
        root: Extension directory ``request.target_path`` is relative to.

    Returns:
        ``CREATED`` when written, ``EXISTS`` when the target was already there.

    Raises:
        FetchFailedError: If the skeleton could not be downloaded.
        WriteFailedError: If the target could not be written.
    """
    target = root / request.target_path
    if target.exists():
        print_error(f"{request.target_path} already exists")
        return SkeletonStatus.EXISTS

    content = source.fetch(request.source_path)
    content = apply_replacements(content, request.context)

    try:
        write_atomically(target, content)
    except OSError as e:
        raise WriteFailedError(request.target_path, e.strerror or str(e)) from e
    print_success(f"Added {request.target_path}")
    return SkeletonStatus.CREATED
