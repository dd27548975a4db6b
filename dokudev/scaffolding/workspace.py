"""The extension directory a command operates on."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from pathlib import Path

import httpx

from dokudev.core.locator import ExtensionIdentity, classify
from dokudev.core.replacements import (
    MetadataLoader,
    ReplacementContext,
    build_context,
    load_info_file,
)
from dokudev.core.skeleton import SkeletonRequest, SkeletonSource, SkeletonStatus, materialize
from dokudev.helpers.settings import DevSettings


@dataclass
class Workspace:
    """Extension directory plus everything needed to scaffold into it.

    Attributes:
        directory: Absolute extension directory (normally the cwd).
        plugin_root: Directory holding plugins, None if unknown.
        template_root: Directory holding templates, None if unknown.
        source: Where skeletons are downloaded from.
        metadata_loader: Reads an existing ``<kind>.info.txt``.
        today: Fixed date for ``@@DATE@@``; None means today.
    """

    directory: Path
    plugin_root: Path | None
    template_root: Path | None
    source: SkeletonSource
    metadata_loader: MetadataLoader = load_info_file
    today: date | None = None

    @classmethod
    def from_settings(
        cls,
        settings: DevSettings,
        directory: Path | None = None,
        client: httpx.Client | None = None,
    ) -> Workspace:
        source = SkeletonSource(
            settings.skeleton_base_url,
            timeout=settings.http_timeout,
            client=client,
        )
        return cls(
            directory=(directory or Path.cwd()).resolve(),
            plugin_root=settings.plugin_root,
            template_root=settings.template_root,
            source=source,
        )

    def identity(self) -> ExtensionIdentity:
        return classify(self.directory, self.plugin_root, self.template_root)

    def has_dir(self, name: str) -> bool:
        return (self.directory / name).is_dir()

    def replacements(self, overrides: Mapping[str, str] | None = None) -> ReplacementContext:
        """Build the replacements for this extension, see ``build_context``."""
        return build_context(
            self.identity(),
            self.directory,
            overrides,
            metadata_loader=self.metadata_loader,
            today=self.today,
        )

    def load_skeleton(
        self,
        skeleton: str,
        target: str,
        replacements: Mapping[str, str],
    ) -> SkeletonStatus:
        request = SkeletonRequest(source_path=skeleton, target_path=target, context=replacements)
        return materialize(request, self.source, self.directory)
