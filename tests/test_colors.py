import json

import pytest

from foldericon.colors import FolderColor, HslMutationSettings


def test_every_color_has_target_in_range():
    assert len(FolderColor) == 21
    for color in FolderColor:
        hue, saturation, lightness = color.target_hsl
        assert 0.0 <= hue <= 360.0
        assert 0.0 <= saturation <= 1.0
        assert 0.0 <= lightness <= 1.0


def test_red_mutation_settings():
    assert FolderColor.RED.to_hsl_mutation_settings() == HslMutationSettings(
        target_hue=4.11, target_saturation=0.8962, target_lightness=0.5843, enabled=True
    )


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("red", FolderColor.RED),
        ("RED", FolderColor.RED),
        ("  Deep Purple ", FolderColor.DEEP_PURPLE),
        ("deep_purple", FolderColor.DEEP_PURPLE),
        ("deep-purple", FolderColor.DEEP_PURPLE),
        ("gray", FolderColor.GREY),
        ("Blue Gray", FolderColor.BLUE_GREY),
        ("lightgreen", FolderColor.LIGHT_GREEN),
    ],
)
def test_parse_accepts_name_variants(text, expected):
    assert FolderColor.parse(text) is expected


def test_parse_rejects_unknown_name():
    with pytest.raises(ValueError, match="magenta"):
        FolderColor.parse("magenta")


def test_display_names():
    assert FolderColor.DEEP_ORANGE.display_name == "Deep Orange"
    assert FolderColor.GREY.display_name == "Grey"


def test_metadata_json():
    data = json.loads(FolderColor.all_metadata_json())

    assert len(data) == 21
    assert data[0] == {
        "id": "red",
        "displayName": "Red",
        "targetHue": 4.11,
        "targetSaturation": 0.8962,
        "targetLightness": 0.5843,
    }
    assert {entry["id"] for entry in data} == {c.value for c in FolderColor}
    assert "\n" in FolderColor.all_metadata_json(pretty=True)
