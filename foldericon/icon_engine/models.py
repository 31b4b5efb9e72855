"""Icon image and icon set types.

Two representations of the same pixels:

- ``SystemIconImage``: whatever the platform (or a decoded cache file) handed
  us, any channel layout, no metadata.
- ``RenderIconImage``: RGBA8 pixels plus the scale factor and the content
  bounds the renderer needs to place customizations.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

import numpy as np

RGBA_CHANNELS = 4


@dataclass(frozen=True)
class RectPx:
    """Pixel rectangle: left/top offset plus size."""

    x: int
    y: int
    width: int
    height: int

    def contains_within(self, width: int, height: int) -> bool:
        return self.x >= 0 and self.y >= 0 and self.x + self.width <= width and self.y + self.height <= height


@dataclass
class SystemIconImage:
    data: np.ndarray

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])


@dataclass
class RenderIconImage:
    data: np.ndarray  # (h, w, 4) uint8
    scale: float
    content_bounds: RectPx

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])


ImageT = TypeVar("ImageT", SystemIconImage, RenderIconImage)


@dataclass
class IconSet(Generic[ImageT]):
    """Ordered images of one logical icon; order matters across conversions and cache indices."""

    images: list[ImageT] = field(default_factory=list)

    @classmethod
    def from_images(cls, images: Iterable[ImageT]) -> IconSet[ImageT]:
        return cls(list(images))

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[ImageT]:
        return iter(self.images)

    def __getitem__(self, index: int) -> ImageT:
        return self.images[index]

    def sizes(self) -> list[tuple[int, int]]:
        return [(img.width, img.height) for img in self.images]
