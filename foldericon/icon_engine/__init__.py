"""Icon engine: icon types, representation conversion, content bounds and PNG codec.

Usage:
    from foldericon.icon_engine import to_render_format, bounds_for_platform

    render_set = to_render_format(system_set, bounds_for_platform())
"""

from foldericon.icon_engine.bounds import (
    WINDOWS_FOLDER_BOUNDS,
    ContentBoundsLookup,
    TableContentBounds,
    UnmappedContentBounds,
    bounds_for_platform,
)
from foldericon.icon_engine.convert import to_render_format, to_rgba8, to_system_format
from foldericon.icon_engine.models import IconSet, RectPx, RenderIconImage, SystemIconImage

__all__ = [
    "WINDOWS_FOLDER_BOUNDS",
    "ContentBoundsLookup",
    "IconSet",
    "RectPx",
    "RenderIconImage",
    "SystemIconImage",
    "TableContentBounds",
    "UnmappedContentBounds",
    "bounds_for_platform",
    "to_render_format",
    "to_rgba8",
    "to_system_format",
]
