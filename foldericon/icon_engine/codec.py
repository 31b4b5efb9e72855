"""PNG decode/encode for cached icon images using pyvips."""

from __future__ import annotations

import contextlib
from pathlib import Path
from typing import Any

import numpy as np

from foldericon.errors import CacheIOError, DecodeError
from foldericon.icon_engine.convert import to_rgba8
from foldericon.icon_engine.models import RGBA_CHANNELS, SystemIconImage
from foldericon.logger import get_logger

_logger = get_logger("codec")

_pyvips: Any | None = None


def _get_pyvips_module() -> Any:
    global _pyvips  # noqa: PLW0603
    if _pyvips is None:
        import pyvips  # type: ignore

        _pyvips = pyvips
    return _pyvips


def decode_icon_file(path: str | Path) -> SystemIconImage:
    """Decode an image file into a ``SystemIconImage`` (alpha preserved).

    Raises ``DecodeError`` if the file cannot be read as an image.
    """
    try:
        pyvips = _get_pyvips_module()
        image = pyvips.Image.new_from_file(str(path), access="sequential")
        with contextlib.suppress(Exception):
            image = image.colourspace("srgb")
        if image.format != "uchar":
            image = image.cast("uchar")
        mem = image.write_to_memory()
        array = np.frombuffer(mem, dtype=np.uint8).reshape(image.height, image.width, image.bands)
    except Exception as e:
        _logger.debug("decode failed: %s: %s", path, e)
        raise DecodeError(path, str(e)) from e
    return SystemIconImage(array.copy())


def encode_png(image: SystemIconImage) -> bytes:
    """Encode an icon image as an RGBA PNG.

    Raises ``CacheIOError`` if encoding fails.
    """
    try:
        rgba = to_rgba8(image.data)
        h, w, _ = rgba.shape
        pyvips = _get_pyvips_module()
        img: Any = pyvips.Image.new_from_memory(rgba.tobytes(), w, h, RGBA_CHANNELS, "uchar")
        with contextlib.suppress(Exception):
            img = img.copy(interpretation="srgb")
        out = img.write_to_buffer(".png")
    except Exception as e:
        raise CacheIOError(f"failed to encode PNG: {e}") from e
    # Normalize to bytes in case pyvips returns a memoryview-like object
    if isinstance(out, bytes):
        return out
    return bytes(out)
