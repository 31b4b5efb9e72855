"""Collaborator interfaces.

foldericon does not extract icons from the OS, draw pixels or talk to the
shell. Those capabilities are supplied by the embedding application through
these protocols.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from foldericon.icon_engine.bounds import ContentBoundsLookup
from foldericon.icon_engine.models import IconSet, RenderIconImage, SystemIconImage

Profile = Any


class IconProvider(Protocol):
    """Source of the platform's default folder icon."""

    def dump_default_icon_set(self) -> IconSet[SystemIconImage]:
        """Return every size of the default folder icon, in a stable order."""
        ...


class CustomizerHandle(Protocol):
    """Stateful renderer holding an unrendered base set and the current profile."""

    def apply_profile(self, profile: Profile) -> None: ...

    def render_all(self) -> IconSet[RenderIconImage]: ...

    def export_profile(self) -> Profile: ...

    def base_icons(self) -> IconSet[RenderIconImage]: ...


class RendererFactory(Protocol):
    """Creates a fresh customizer for a base icon set (typically the handle class itself)."""

    def __call__(self, base: IconSet[RenderIconImage]) -> CustomizerHandle: ...


class TargetIconApplier(Protocol):
    """Assigns or removes a custom icon on one folder."""

    def set_icon(self, target: Path, icons: IconSet[SystemIconImage]) -> None:
        """Raise on failure."""
        ...

    def reset_icon(self, target: Path) -> None:
        """Raise on failure."""
        ...


__all__ = [
    "ContentBoundsLookup",
    "CustomizerHandle",
    "IconProvider",
    "Profile",
    "RendererFactory",
    "TargetIconApplier",
]
