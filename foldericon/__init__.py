"""foldericon: cached system folder icons and batch folder icon customization.

Usage:
    from foldericon import CustomizationContextBuilder

    ctx = (
        CustomizationContextBuilder()
        .with_provider(provider)
        .with_renderer(renderer)
        .with_applier(applier)
        .build()
    )
    ctx.customize_many(folders, profile)
    ctx.reset_many(folders)
"""

from foldericon.cache import CachedIconInfo, CacheManifest, IconCache
from foldericon.colors import FolderColor, HslMutationSettings
from foldericon.config import AppInfo, CacheConfig
from foldericon.context import (
    BatchRun,
    CustomizationContext,
    CustomizationContextBuilder,
    FolderResult,
    profile_as_dict,
)
from foldericon.errors import (
    AppDataDirError,
    BatchInvariantError,
    CacheIOError,
    ContentBoundsError,
    DecodeError,
    FolderCustomizationError,
    FolderIconError,
    FolderResetError,
    NotInitializedError,
    ProviderError,
    RenderError,
    SerializationError,
)
from foldericon.icon_engine import IconSet, RectPx, RenderIconImage, SystemIconImage
from foldericon.progress import progress_channel

__version__ = "0.1.0"

__all__ = [
    "AppDataDirError",
    "AppInfo",
    "BatchInvariantError",
    "BatchRun",
    "CacheConfig",
    "CacheIOError",
    "CacheManifest",
    "CachedIconInfo",
    "ContentBoundsError",
    "CustomizationContext",
    "CustomizationContextBuilder",
    "DecodeError",
    "FolderColor",
    "FolderCustomizationError",
    "FolderIconError",
    "FolderResetError",
    "FolderResult",
    "HslMutationSettings",
    "IconCache",
    "IconSet",
    "NotInitializedError",
    "ProviderError",
    "RectPx",
    "RenderError",
    "RenderIconImage",
    "SerializationError",
    "SystemIconImage",
    "__version__",
    "progress_channel",
]
