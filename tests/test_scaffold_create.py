"""Tests for ``init_extension``."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from dokudev.core.errors import ConfigurationError, ExternalToolError
from dokudev.helpers.prompt import MemoryAnswerCache, Prompter
from dokudev.scaffolding import init_extension
from dokudev.scaffolding.create import PROMPT_MAIL, PROMPT_NAME

from tests.conftest import FakeInitializer, MakeWorkspace, SkeletonServer

INIT_SKELETONS = {
    "info.skel": (
        "base   @@PLUGIN_NAME@@\n"
        "author @@AUTHOR_NAME@@\n"
        "email  @@AUTHOR_MAIL@@\n"
        "date   @@DATE@@\n"
        "desc   @@PLUGIN_DESC@@\n"
        "url    @@PLUGIN_URL@@\n"
    ),
    "README.skel": "@@PLUGIN_NAME@@ @@PLUGIN_TYPE@@ lib/@@INSTALL_DIR@@/@@PLUGIN_NAME@@\n",
    "LICENSE.skel": "Copyright @@AUTHOR_NAME@@\n",
}


def _answers(*values: str) -> Callable[[str], str]:
    remaining = list(values)

    def _input(_prompt: str) -> str:
        return remaining.pop(0)

    return _input


class TestInitExtension:
    def test_creates_plugin_files(
        self,
        plugin_dir: Path,
        make_workspace: MakeWorkspace,
    ) -> None:
        workspace = make_workspace(plugin_dir, INIT_SKELETONS)
        cache = MemoryAnswerCache()
        prompter = Prompter(cache, _answers("Jane Doe", "jane@example.com", "Does things"))
        initializer = FakeInitializer()

        result = init_extension(workspace, prompter, initializer)

        assert result == 0
        assert (plugin_dir / "plugin.info.txt").read_text(encoding="utf-8") == (
            "base   example\n"
            "author Jane Doe\n"
            "email  jane@example.com\n"
            "date   2024-05-01\n"
            "desc   Does things\n"
            "url    https://www.dokuwiki.org/plugin:example\n"
        )
        assert (plugin_dir / "README").read_text(encoding="utf-8") == (
            "example plugin lib/plugins/example\n"
        )
        assert (plugin_dir / "LICENSE").read_text(encoding="utf-8") == "Copyright Jane Doe\n"
        assert initializer.calls == 1
        assert cache.answers == {PROMPT_NAME: "Jane Doe", PROMPT_MAIL: "jane@example.com"}

    def test_creates_template_files(
        self,
        template_dir: Path,
        make_workspace: MakeWorkspace,
    ) -> None:
        workspace = make_workspace(template_dir, INIT_SKELETONS)
        prompter = Prompter(MemoryAnswerCache(), _answers("Jane", "jane@example.com", "Theme"))

        init_extension(workspace, prompter, FakeInitializer())

        assert (template_dir / "template.info.txt").is_file()
        assert not (template_dir / "plugin.info.txt").exists()
        assert (template_dir / "README").read_text(encoding="utf-8") == (
            "sprintdoc template lib/tpl/sprintdoc\n"
        )

    def test_cached_answers_are_defaults(
        self,
        plugin_dir: Path,
        make_workspace: MakeWorkspace,
    ) -> None:
        workspace = make_workspace(plugin_dir, INIT_SKELETONS)
        cache = MemoryAnswerCache({PROMPT_NAME: "Jane", PROMPT_MAIL: "jane@example.com"})
        prompts: list[str] = []
        answers = ["", "", "Does things"]

        def _input(prompt: str) -> str:
            prompts.append(prompt)
            return answers.pop(0)

        init_extension(workspace, Prompter(cache, _input), FakeInitializer())

        assert prompts == [
            "Your Name [Jane]: ",
            "Your E-Mail [jane@example.com]: ",
            "Short description: ",
        ]
        assert (plugin_dir / "LICENSE").read_text(encoding="utf-8") == "Copyright Jane\n"

    def test_non_empty_directory_is_rejected(
        self,
        plugin_dir: Path,
        make_workspace: MakeWorkspace,
        skeleton_server: SkeletonServer,
    ) -> None:
        (plugin_dir / "existing.php").write_text("<?php\n", encoding="utf-8")
        workspace = make_workspace(plugin_dir, INIT_SKELETONS)
        initializer = FakeInitializer()

        def _no_input(_prompt: str) -> str:
            raise AssertionError("must not prompt")

        with pytest.raises(ConfigurationError, match="needs to be empty"):
            init_extension(workspace, Prompter(MemoryAnswerCache(), _no_input), initializer)

        assert sorted(p.name for p in plugin_dir.iterdir()) == ["existing.php"]
        assert skeleton_server.requested == []
        assert initializer.calls == 0

    def test_directory_outside_dokuwiki_is_rejected_before_prompting(
        self,
        tmp_path: Path,
        make_workspace: MakeWorkspace,
    ) -> None:
        directory = tmp_path / "standalone"
        directory.mkdir()
        workspace = make_workspace(directory, INIT_SKELETONS)

        def _no_input(_prompt: str) -> str:
            raise AssertionError("must not prompt")

        with pytest.raises(ConfigurationError, match="plugin or template directory"):
            init_extension(workspace, Prompter(MemoryAnswerCache(), _no_input), FakeInitializer())

    def test_git_failure_is_only_a_warning(
        self,
        plugin_dir: Path,
        make_workspace: MakeWorkspace,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        workspace = make_workspace(plugin_dir, INIT_SKELETONS)
        prompter = Prompter(MemoryAnswerCache(), _answers("Jane", "jane@example.com", "x"))
        initializer = FakeInitializer(ExternalToolError("Running git failed: boom"))

        result = init_extension(workspace, prompter, initializer)

        assert result == 0
        assert (plugin_dir / "LICENSE").is_file()
        assert "Running git failed: boom" in capsys.readouterr().out
