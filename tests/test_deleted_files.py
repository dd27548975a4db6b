"""Tests for the deleted.files reconciliation."""

from __future__ import annotations

from pathlib import Path

import pytest

from dokudev.core.deleted_files import (
    MANIFEST_HEADER,
    reconcile,
    render_manifest,
    write_deleted_files,
)
from dokudev.core.errors import ConfigurationError, WriteFailedError

from tests.conftest import FakeHistory


class TestReconcile:
    def test_existing_and_duplicate_paths(self) -> None:
        history = FakeHistory(["a.php", "b.php", "a.php"])

        assert reconcile(history, lambda path: path == "a.php") == ("b.php",)

    def test_trims_and_drops_empty_lines(self) -> None:
        history = FakeHistory(["", "  lang/de/lang.php  ", "\t", "conf/old.php"])

        assert reconcile(history, lambda _path: False) == ("conf/old.php", "lang/de/lang.php")

    def test_output_is_sorted(self) -> None:
        history = FakeHistory(["z.php", "a/b.php", "m.php"])

        assert reconcile(history, lambda _path: False) == ("a/b.php", "m.php", "z.php")

    def test_empty_history(self) -> None:
        assert reconcile(FakeHistory([]), lambda _path: False) == ()


def test_render_manifest() -> None:
    assert render_manifest(("a.php", "b.php")) == MANIFEST_HEADER + "a.php\nb.php\n"


class TestWriteDeletedFiles:
    def test_requires_git_checkout(self, plugin_dir: Path) -> None:
        with pytest.raises(ConfigurationError, match="not to be managed by git"):
            write_deleted_files(plugin_dir, FakeHistory(["a.php"]))

        assert not (plugin_dir / "deleted.files").exists()

    def test_writes_manifest(
        self,
        plugin_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (plugin_dir / ".git").mkdir()
        (plugin_dir / "a.php").write_text("<?php\n", encoding="utf-8")
        history = FakeHistory(["a.php", "b.php", "a.php", "", "lang/x.php"])

        manifest = write_deleted_files(plugin_dir, history)

        assert manifest == plugin_dir / "deleted.files"
        assert manifest.read_text(encoding="utf-8") == (
            "# This is a list of files that were present in previous releases\n"
            "# but were removed later. They should not exist in your installation.\n"
            "b.php\n"
            "lang/x.php\n"
        )
        assert "written deleted.files" in capsys.readouterr().out

    def test_nothing_deleted_keeps_existing_manifest(
        self,
        plugin_dir: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (plugin_dir / ".git").mkdir()
        (plugin_dir / "deleted.files").write_text("old\n", encoding="utf-8")

        assert write_deleted_files(plugin_dir, FakeHistory([])) is None

        assert (plugin_dir / "deleted.files").read_text(encoding="utf-8") == "old\n"
        assert "No deleted files found" in capsys.readouterr().out

    def test_unwritable_manifest(self, plugin_dir: Path) -> None:
        (plugin_dir / ".git").mkdir()
        (plugin_dir / "deleted.files").mkdir()

        with pytest.raises(WriteFailedError, match="Failed to write deleted.files"):
            write_deleted_files(plugin_dir, FakeHistory(["gone.php"]))
