"""Cache configuration.

The cache location is always an explicit value: either a directory handed to
``CacheConfig`` directly, or one derived from an ``AppInfo`` through
``platformdirs``. Environment overrides only apply when the caller passes an
environment mapping in.

Environment variables (read by ``CacheConfig.from_env``):
    FOLDERICON_CACHE_DIR:      Use this directory instead of the platform data dir.
    FOLDERICON_FORCE_REFRESH:  "1"/"true"/"yes" to ignore an existing cache.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_data_dir

from foldericon.errors import AppDataDirError
from foldericon.path_utils import abs_path

CACHE_SUBDIR = "icon_cache"
_TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class AppInfo:
    """Application identity used to locate the per-user data directory."""

    qualifier: str = "com"
    organization: str = "foldericon"
    application: str = "foldericon"

    def data_dir(self) -> Path:
        if not self.application.strip():
            raise AppDataDirError("application name must not be empty")
        if sys.platform == "darwin":
            # macOS bundles are named by reverse-DNS identifier
            appname = ".".join(p for p in (self.qualifier, self.organization, self.application) if p)
            path = user_data_dir(appname=appname, appauthor=False)
        else:
            path = user_data_dir(appname=self.application, appauthor=self.organization or False)
        if not path:
            raise AppDataDirError(f"failed to determine app data directory for {self.application!r}")
        return Path(path)


def resolve_cache_dir(app_info: AppInfo, env: Mapping[str, str] | None = None) -> Path:
    override = (env or {}).get("FOLDERICON_CACHE_DIR", "").strip()
    if override:
        return abs_path(override)
    return abs_path(app_info.data_dir() / CACHE_SUBDIR)


@dataclass(frozen=True)
class CacheConfig:
    cache_dir: Path
    force_refresh: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "cache_dir", abs_path(self.cache_dir))

    @classmethod
    def from_app_info(cls, app_info: AppInfo) -> CacheConfig:
        return cls(resolve_cache_dir(app_info))

    @classmethod
    def from_env(cls, env: Mapping[str, str], app_info: AppInfo | None = None) -> CacheConfig:
        """Build config from an environment mapping (e.g. ``os.environ``)."""
        force = env.get("FOLDERICON_FORCE_REFRESH", "").strip().lower() in _TRUTHY
        return cls(resolve_cache_dir(app_info or AppInfo(), env), force_refresh=force)

    def with_force_refresh(self, force: bool) -> CacheConfig:
        return replace(self, force_refresh=force)
