"""Shared fixtures for the dokudev test suite.

Provides a throwaway DokuWiki installation in ``tmp_path`` and a
``make_workspace`` factory whose skeleton downloads are served from a dict
through ``httpx.MockTransport``, so no test touches the network.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from datetime import date
from pathlib import Path

import httpx
import pytest

from dokudev.core.skeleton import SkeletonSource
from dokudev.scaffolding import Workspace

BASE_URL = "https://skel.test/skel/"
TODAY = date(2024, 5, 1)

# Type alias for the workspace factory fixture.
MakeWorkspace = Callable[..., Workspace]


class FakeHistory:
    """History provider returning canned deletion events."""

    def __init__(self, paths: list[str]) -> None:
        self.paths = paths

    def deleted_paths(self) -> list[str]:
        return list(self.paths)


class FakeInitializer:
    """Repository initializer that records calls and can fail."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls = 0

    def init_repository(self) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error


class SkeletonServer:
    """In-memory skeleton store behind an httpx mock transport."""

    def __init__(self, skeletons: dict[str, str]) -> None:
        self.skeletons = skeletons
        self.requested: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        name = url.removeprefix(BASE_URL)
        if name not in self.skeletons:
            return httpx.Response(404, text="Not Found")
        return httpx.Response(200, text=self.skeletons[name])

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's real config and answer cache out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for name in (
        "DOKUDEV_CONFIG",
        "DOKUWIKI_ROOT",
        "DOKUDEV_PLUGIN_ROOT",
        "DOKUDEV_TEMPLATE_ROOT",
        "DOKUDEV_SKELETON_URL",
        "DOKUDEV_CACHE_DIR",
        "DOKUDEV_HTTP_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def dokuwiki_root(tmp_path: Path) -> Path:
    """Minimal DokuWiki tree: doku.php, lib/plugins, lib/tpl."""
    root = tmp_path / "dokuwiki"
    (root / "lib" / "plugins").mkdir(parents=True)
    (root / "lib" / "tpl").mkdir(parents=True)
    (root / "doku.php").write_text("<?php\n", encoding="utf-8")
    return root.resolve()


@pytest.fixture
def plugin_dir(dokuwiki_root: Path) -> Path:
    path = dokuwiki_root / "lib" / "plugins" / "example"
    path.mkdir()
    return path


@pytest.fixture
def template_dir(dokuwiki_root: Path) -> Path:
    path = dokuwiki_root / "lib" / "tpl" / "sprintdoc"
    path.mkdir()
    return path


@pytest.fixture
def skeleton_server() -> SkeletonServer:
    return SkeletonServer({})


@pytest.fixture
def make_workspace(
    dokuwiki_root: Path,
    skeleton_server: SkeletonServer,
) -> Iterator[MakeWorkspace]:
    """Factory building a Workspace for a directory of the test DokuWiki."""
    clients: list[httpx.Client] = []

    def _make(directory: Path, skeletons: dict[str, str] | None = None) -> Workspace:
        skeleton_server.skeletons.update(skeletons or {})
        client = skeleton_server.client()
        clients.append(client)
        return Workspace(
            directory=directory,
            plugin_root=dokuwiki_root / "lib" / "plugins",
            template_root=dokuwiki_root / "lib" / "tpl",
            source=SkeletonSource(BASE_URL, client=client),
            today=TODAY,
        )

    yield _make

    for client in clients:
        client.close()
