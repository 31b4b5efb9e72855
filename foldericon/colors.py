"""Named folder color presets.

Each ``FolderColor`` maps to a target HSL color. The renderer computes the
deltas from the base icon's surface color, so the presets only carry targets.

    >>> FolderColor.parse("deep purple")
    <FolderColor.DEEP_PURPLE: 'deep-purple'>

``all_metadata_json()`` serializes the whole table for a color picker:

    {"id": "red", "displayName": "Red", "targetHue": 4.11,
     "targetSaturation": 0.8962, "targetLightness": 0.5843}
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class HslMutationSettings:
    target_hue: float
    target_saturation: float
    target_lightness: float
    enabled: bool = True


class FolderColor(Enum):
    RED = "red"
    PINK = "pink"
    PURPLE = "purple"
    DEEP_PURPLE = "deep-purple"
    INDIGO = "indigo"
    BLUE = "blue"
    LIGHT_BLUE = "light-blue"
    CYAN = "cyan"
    TEAL = "teal"
    GREEN = "green"
    LIGHT_GREEN = "light-green"
    LIME = "lime"
    YELLOW = "yellow"
    AMBER = "amber"
    ORANGE = "orange"
    DEEP_ORANGE = "deep-orange"
    BROWN = "brown"
    GREY = "grey"
    BLUE_GREY = "blue-grey"
    WHITE = "white"
    BLACK = "black"

    @property
    def display_name(self) -> str:
        return self.value.replace("-", " ").title()

    @property
    def target_hsl(self) -> tuple[float, float, float]:
        """(hue in degrees 0-360, saturation 0-1, lightness 0-1)."""
        return _TARGET_HSL[self]

    def to_hsl_mutation_settings(self) -> HslMutationSettings:
        hue, saturation, lightness = self.target_hsl
        return HslMutationSettings(hue, saturation, lightness, enabled=True)

    def metadata(self) -> dict[str, Any]:
        hue, saturation, lightness = self.target_hsl
        return {
            "id": self.value,
            "displayName": self.display_name,
            "targetHue": hue,
            "targetSaturation": saturation,
            "targetLightness": lightness,
        }

    @classmethod
    def parse(cls, text: str) -> FolderColor:
        """Parse a color name, ignoring case, spaces, '-' and '_'. Accepts 'gray'."""
        key = text.strip().lower().replace(" ", "").replace("-", "").replace("_", "").replace("gray", "grey")
        try:
            return _BY_KEY[key]
        except KeyError:
            raise ValueError(f"Unknown folder color: '{text}'") from None

    @classmethod
    def all_with_metadata(cls) -> list[dict[str, Any]]:
        return [color.metadata() for color in cls]

    @classmethod
    def all_metadata_json(cls, pretty: bool = False) -> str:
        return json.dumps(cls.all_with_metadata(), indent=2 if pretty else None)


_TARGET_HSL: dict[FolderColor, tuple[float, float, float]] = {
    #                             hue      sat      light
    FolderColor.RED:           (4.11,   0.8962, 0.5843),
    FolderColor.PINK:          (339.61, 0.8219, 0.5157),
    FolderColor.PURPLE:        (291.24, 0.6372, 0.4216),
    FolderColor.DEEP_PURPLE:   (261.60, 0.5187, 0.4725),
    FolderColor.INDIGO:        (230.85, 0.4836, 0.4784),
    FolderColor.BLUE:          (206.57, 0.8974, 0.5412),
    FolderColor.LIGHT_BLUE:    (198.67, 0.9757, 0.4843),
    FolderColor.CYAN:          (186.79, 1.0000, 0.4157),
    FolderColor.TEAL:          (174.40, 1.0000, 0.2941),
    FolderColor.GREEN:         (122.42, 0.3944, 0.4922),
    FolderColor.LIGHT_GREEN:   (87.77,  0.5021, 0.5275),
    FolderColor.LIME:          (65.52,  0.6996, 0.5431),
    FolderColor.YELLOW:        (53.88,  1.0000, 0.6157),
    FolderColor.AMBER:         (45.00,  1.0000, 0.5137),
    FolderColor.ORANGE:        (35.76,  1.0000, 0.5000),
    FolderColor.DEEP_ORANGE:   (14.39,  1.0000, 0.5667),
    FolderColor.BROWN:         (15.92,  0.2539, 0.3784),
    FolderColor.GREY:          (0.00,   0.0000, 0.6196),
    FolderColor.BLUE_GREY:     (199.53, 0.1830, 0.4608),
    FolderColor.WHITE:         (0.00,   0.0000, 0.9333),
    FolderColor.BLACK:         (0.00,   0.0000, 0.2588),
}  # fmt: skip

_BY_KEY: dict[str, FolderColor] = {color.value.replace("-", ""): color for color in FolderColor}
