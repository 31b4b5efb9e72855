"""Exception hierarchy for foldericon.

Every failure the library reports is a :class:`FolderIconError`. Lower-level
exceptions (``OSError``, ``json.JSONDecodeError``, pyvips errors, collaborator
errors) are chained with ``raise ... from`` so the original cause stays
available on ``__cause__``.
"""

from __future__ import annotations

from pathlib import Path


class FolderIconError(Exception):
    """Base class for all foldericon errors."""


class AppDataDirError(FolderIconError):
    """The application data directory could not be determined."""


class ProviderError(FolderIconError):
    """The icon provider failed to produce the default folder icon set."""


class CacheIOError(FolderIconError):
    """Creating, reading, writing or removing cache files failed."""


class DecodeError(FolderIconError):
    """A cached image file exists but could not be decoded."""

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to decode '{self.path}': {reason}")


class SerializationError(FolderIconError):
    """The cache manifest could not be parsed or written."""


class ContentBoundsError(FolderIconError):
    """No content bounds are defined for an icon of the given size."""

    def __init__(self, width: int, height: int, platform: str | None = None):
        self.width = width
        self.height = height
        self.platform = platform
        where = f" on {platform}" if platform else ""
        super().__init__(f"no folder icon content bounds defined for {width}x{height}{where}")


class _TargetError(FolderIconError):
    verb = "process"

    def __init__(self, path: str | Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to {self.verb} folder '{self.path}': {reason}")


class FolderCustomizationError(_TargetError):
    """Applying a rendered icon set to one folder failed."""

    verb = "customize"


class FolderResetError(_TargetError):
    """Resetting one folder to the default icon failed."""

    verb = "reset"


class RenderError(FolderIconError):
    """The renderer failed to produce the customized icon set."""


class NotInitializedError(FolderIconError):
    """The context (or its builder) is missing something it needs."""


class BatchInvariantError(FolderIconError):
    """A batch operation returned fewer results than it was given targets."""
