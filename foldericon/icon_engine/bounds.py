"""Per-platform content bounds of the default folder icon.

The default folder icon does not fill its canvas; the renderer needs the
sub-rectangle holding the folder artwork. Only Windows has a measured table.
macOS and Linux are explicit "unmapped" lookups that raise
``ContentBoundsError`` for every size rather than guessing.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import Protocol

from foldericon.errors import ContentBoundsError
from foldericon.icon_engine.models import RectPx


class ContentBoundsLookup(Protocol):
    def __call__(self, width: int, height: int) -> RectPx: ...


class TableContentBounds:
    """Lookup backed by an explicit ``(width, height) -> RectPx`` table."""

    def __init__(self, table: Mapping[tuple[int, int], RectPx], platform: str | None = None):
        self._table = dict(table)
        self.platform = platform

    def __call__(self, width: int, height: int) -> RectPx:
        try:
            return self._table[(int(width), int(height))]
        except KeyError:
            raise ContentBoundsError(width, height, self.platform) from None

    def supported_sizes(self) -> list[tuple[int, int]]:
        return sorted(self._table)

    def __repr__(self) -> str:
        return f"TableContentBounds(platform={self.platform!r}, sizes={len(self._table)})"


class UnmappedContentBounds:
    """Lookup for a platform whose folder icon has not been measured."""

    def __init__(self, platform: str):
        self.platform = platform

    def __call__(self, width: int, height: int) -> RectPx:
        raise ContentBoundsError(width, height, self.platform)

    def __repr__(self) -> str:
        return f"UnmappedContentBounds(platform={self.platform!r})"


# Folder artwork inside the shell32 folder icon, per square icon size.
WINDOWS_FOLDER_BOUNDS = TableContentBounds(
    {
        (16, 16): RectPx(0, 4, 16, 9),
        (20, 20): RectPx(1, 6, 18, 10),
        (24, 24): RectPx(1, 6, 22, 13),
        (32, 32): RectPx(2, 8, 28, 17),
        (40, 40): RectPx(2, 10, 38, 22),
        (48, 48): RectPx(3, 11, 42, 27),
        (64, 64): RectPx(4, 16, 56, 36),
        (256, 256): RectPx(16, 62, 224, 144),
    },
    platform="windows",
)


def bounds_for_platform(platform: str | None = None) -> ContentBoundsLookup:
    """Pick the content-bounds lookup for ``platform`` (defaults to ``sys.platform``)."""
    name = (platform or sys.platform).lower()
    if name.startswith(("win", "cygwin")):
        return WINDOWS_FOLDER_BOUNDS
    if name == "darwin" or name.startswith("mac"):
        return UnmappedContentBounds("macos")
    return UnmappedContentBounds("linux")
