"""Conversion between system and render icon representations.

Both directions keep image count, order and per-image pixel dimensions.
"""

from __future__ import annotations

import numpy as np

from foldericon.icon_engine.bounds import ContentBoundsLookup
from foldericon.icon_engine.models import (
    RGBA_CHANNELS,
    IconSet,
    RenderIconImage,
    SystemIconImage,
)
from foldericon.logger import get_logger

_logger = get_logger("convert")

_GRAY_DIMS = 2
_COLOR_DIMS = 3
_GRAY = 1
_GRAY_ALPHA = 2
_RGB = 3

# System-sourced icons are unscaled references.
SYSTEM_ICON_SCALE = 1.0


def to_rgba8(array: np.ndarray) -> np.ndarray:
    """Normalize a decoded pixel array to a contiguous (h, w, 4) uint8 array."""
    arr = np.asarray(array)
    if arr.ndim == _GRAY_DIMS:
        arr = arr[..., np.newaxis]
    if arr.ndim != _COLOR_DIMS:
        raise ValueError(f"expected an image array with 2 or 3 dimensions, got shape {arr.shape}")

    if arr.dtype == np.uint16:
        arr = (arr >> 8).astype(np.uint8)
    elif arr.dtype != np.uint8:
        arr = np.clip(arr, 0, 255).astype(np.uint8)

    h, w, bands = arr.shape
    if bands == RGBA_CHANNELS:
        return np.ascontiguousarray(arr)

    out = np.empty((h, w, RGBA_CHANNELS), dtype=np.uint8)
    if bands == _GRAY:
        out[..., :3] = arr
        out[..., 3] = 255
    elif bands == _GRAY_ALPHA:
        out[..., :3] = arr[..., :1]
        out[..., 3] = arr[..., 1]
    elif bands == _RGB:
        out[..., :3] = arr
        out[..., 3] = 255
    else:
        raise ValueError(f"unsupported band count: {bands}")
    return out


def to_render_format(
    system_set: IconSet[SystemIconImage], bounds: ContentBoundsLookup
) -> IconSet[RenderIconImage]:
    """Convert a system icon set into the renderer's representation.

    Raises ``ContentBoundsError`` if ``bounds`` has no entry for one of the sizes.
    """
    images: list[RenderIconImage] = []
    for image in system_set:
        rgba = to_rgba8(image.data)
        h, w = rgba.shape[:2]
        images.append(RenderIconImage(rgba, SYSTEM_ICON_SCALE, bounds(w, h)))
    _logger.debug("converted %d icons to render format", len(images))
    return IconSet.from_images(images)


def to_system_format(render_set: IconSet[RenderIconImage]) -> IconSet[SystemIconImage]:
    """Drop scale and bounds, keeping only the pixels."""
    return IconSet.from_images(SystemIconImage(image.data.copy()) for image in render_set)
