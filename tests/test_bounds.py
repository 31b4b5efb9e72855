import pytest

from foldericon.errors import ContentBoundsError
from foldericon.icon_engine.bounds import (
    WINDOWS_FOLDER_BOUNDS,
    TableContentBounds,
    UnmappedContentBounds,
    bounds_for_platform,
)


def test_windows_table_sizes():
    assert WINDOWS_FOLDER_BOUNDS.supported_sizes() == [
        (16, 16),
        (20, 20),
        (24, 24),
        (32, 32),
        (40, 40),
        (48, 48),
        (64, 64),
        (256, 256),
    ]


def test_windows_bounds_fit_inside_the_icon():
    for w, h in WINDOWS_FOLDER_BOUNDS.supported_sizes():
        assert WINDOWS_FOLDER_BOUNDS(w, h).contains_within(w, h)


@pytest.mark.parametrize(
    ("platform", "expected"),
    [("win32", TableContentBounds), ("darwin", UnmappedContentBounds), ("linux", UnmappedContentBounds)],
)
def test_bounds_for_platform_selects_one_implementation(platform, expected):
    assert isinstance(bounds_for_platform(platform), expected)


def test_unmapped_platform_raises_catchable_error():
    lookup = bounds_for_platform("darwin")

    with pytest.raises(ContentBoundsError) as exc:
        lookup(32, 32)

    assert exc.value.platform == "macos"
