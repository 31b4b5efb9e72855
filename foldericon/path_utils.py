"""Path normalization utilities.

- Cache directories are stored absolute so manifests written from one working
  directory stay valid from another.
- Folder targets keep the caller's spelling; only ``as_path`` is applied so
  progress events report the path the caller asked for.
"""

from __future__ import annotations

from os import PathLike
from pathlib import Path

_DRIVE_PREFIX_LEN = 2


def _normalize_drive_letter(path_str: str) -> str:
    # Normalize drive letter casing on Windows ("c:\\" -> "C:\\").
    if len(path_str) >= _DRIVE_PREFIX_LEN and path_str[1] == ":":
        return path_str[0].upper() + path_str[1:]
    return path_str


def as_path(path: str | PathLike[str]) -> Path:
    return Path(path)


def abs_path(path: str | PathLike[str]) -> Path:
    """Return an absolute path without requiring that it exists."""
    p = Path(path).expanduser()
    try:
        # strict=False avoids exceptions for non-existent paths.
        return p.resolve(strict=False)
    except OSError:
        return p.absolute()


def abs_path_str(path: str | PathLike[str]) -> str:
    """Absolute, OS-native path string (Windows uses backslashes)."""
    return _normalize_drive_letter(str(abs_path(path)))
