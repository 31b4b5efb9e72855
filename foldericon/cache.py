"""IconCache: on-disk cache of the platform's default folder icon set.

Pulling the default folder icon out of system resources is slow (especially on
Windows), so the extracted images are stored as PNGs in a cache directory
together with a ``manifest.json`` index:

    <cache_dir>/manifest.json
    <cache_dir>/folder_icon_{size}_{index}.png

The manifest is the validity marker. It and the icon files of the previous
population are removed before a population starts. The manifest is written
last, via a temporary file and ``os.replace``, so it only ever
describes a complete set of images from a single population.
"""

from __future__ import annotations

import contextlib
import json
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from foldericon.config import CacheConfig
from foldericon.errors import CacheIOError, ProviderError, SerializationError
from foldericon.icon_engine.codec import decode_icon_file, encode_png
from foldericon.icon_engine.models import IconSet, SystemIconImage
from foldericon.logger import get_logger
from foldericon.metrics import metrics
from foldericon.path_utils import abs_path_str
from foldericon.ports import IconProvider

_logger = get_logger("cache")

MANIFEST_NAME = "manifest.json"
MANIFEST_VERSION = 1
ICON_GLOB = "folder_icon_*.png"


@dataclass
class CachedIconInfo:
    size: int
    index: int
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {"size": self.size, "index": self.index, "path": self.path}


@dataclass
class CacheManifest:
    version: int = MANIFEST_VERSION
    icon_count: int = 0
    icons: list[CachedIconInfo] = field(default_factory=list)

    def add(self, info: CachedIconInfo) -> None:
        self.icons.append(info)
        self.icon_count = len(self.icons)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "icon_count": self.icon_count,
            "icons": [info.to_dict() for info in self.icons],
        }

    @classmethod
    def from_dict(cls, data: Any) -> CacheManifest:
        """Validate and build a manifest from parsed JSON.

        Raises ``SerializationError`` on a wrong shape or when ``icon_count``
        disagrees with the number of entries.
        """
        try:
            icons = [
                CachedIconInfo(size=int(item["size"]), index=int(item["index"]), path=str(item["path"]))
                for item in data["icons"]
            ]
            manifest = cls(version=int(data["version"]), icon_count=int(data["icon_count"]), icons=icons)
        except (KeyError, TypeError, ValueError) as e:
            raise SerializationError(f"malformed cache manifest: {e!r}") from e
        if manifest.icon_count != len(manifest.icons):
            raise SerializationError(
                f"cache manifest lists {len(manifest.icons)} icons but icon_count is {manifest.icon_count}"
            )
        return manifest


class IconCache:
    """Manages the cached default folder icon set for one cache directory."""

    def __init__(self, config: CacheConfig, provider: IconProvider):
        self.config = config
        self._provider = provider

    @property
    def cache_dir(self) -> Path:
        return self.config.cache_dir

    @property
    def manifest_path(self) -> Path:
        return self.cache_dir / MANIFEST_NAME

    def icon_path(self, size: int, index: int) -> Path:
        return self.cache_dir / f"folder_icon_{size}_{index}.png"

    def ensure_cache_dir(self) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheIOError(f"failed to create cache directory '{self.cache_dir}': {e}") from e

    def is_cached(self) -> bool:
        if self.config.force_refresh:
            return False
        return self.manifest_path.exists()

    def get(self) -> IconSet[SystemIconImage]:
        """Return the default folder icon set, from cache when possible."""
        if self.is_cached():
            return self.load()
        return self.fetch_and_populate()

    def load(self) -> IconSet[SystemIconImage]:
        """Load the icon set described by the manifest.

        A manifest pointing at missing files (or listing no icons) is stale; the
        cache is repopulated once and the fresh set returned. A file that exists
        but does not decode raises ``DecodeError``.
        """
        manifest = self.read_manifest()
        if manifest.icon_count == 0:
            _logger.warning("cache manifest lists no icons, repopulating: %s", self.manifest_path)
            metrics.inc("cache.self_heals")
            return self.fetch_and_populate()

        paths = [self._entry_path(info) for info in manifest.icons]
        missing = [p for p in paths if not p.exists()]
        if missing:
            _logger.warning("cache is missing %d of %d icon files, repopulating", len(missing), len(paths))
            metrics.inc("cache.self_heals")
            return self.fetch_and_populate()

        images = [decode_icon_file(p) for p in paths]
        metrics.inc("cache.hits")
        _logger.debug("loaded %d icons from cache: %s", len(images), self.cache_dir)
        return IconSet.from_images(images)

    def read_manifest(self) -> CacheManifest:
        try:
            text = self.manifest_path.read_text(encoding="utf-8")
        except OSError as e:
            raise CacheIOError(f"failed to read cache manifest '{self.manifest_path}': {e}") from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"invalid cache manifest JSON: {e}") from e
        return CacheManifest.from_dict(data)

    def fetch_and_populate(self) -> IconSet[SystemIconImage]:
        """Pull the icon set from the provider and rewrite the whole cache."""
        metrics.inc("cache.misses")
        with metrics.timed("cache.populate_duration"):
            self.ensure_cache_dir()

            try:
                icon_set = self._provider.dump_default_icon_set()
            except ProviderError:
                raise
            except Exception as e:
                raise ProviderError(f"failed to dump default folder icon: {e}") from e
            if len(icon_set) == 0:
                raise ProviderError("icon provider returned an empty icon set")

            self._remove_manifest()
            self._remove_icon_files()

            manifest = CacheManifest()
            for index, image in enumerate(icon_set):
                size = image.width
                path = self.icon_path(size, index)
                self._write_atomic(path, encode_png(image))
                manifest.add(CachedIconInfo(size=size, index=index, path=abs_path_str(path)))

            try:
                payload = json.dumps(manifest.to_dict(), indent=2)
            except (TypeError, ValueError) as e:
                raise SerializationError(f"failed to serialize cache manifest: {e}") from e
            self._write_atomic(self.manifest_path, payload.encode("utf-8"))

        _logger.debug("cached %d icons in %s", manifest.icon_count, self.cache_dir)
        return icon_set

    def clear(self) -> None:
        """Remove the cache directory; a no-op if it does not exist."""
        if not self.cache_dir.exists():
            return
        try:
            shutil.rmtree(self.cache_dir)
        except OSError as e:
            raise CacheIOError(f"failed to remove cache directory '{self.cache_dir}': {e}") from e
        _logger.debug("cache cleared: %s", self.cache_dir)

    def refresh(self) -> IconSet[SystemIconImage]:
        self.clear()
        return self.fetch_and_populate()

    def _entry_path(self, info: CachedIconInfo) -> Path:
        path = Path(info.path)
        return path if path.is_absolute() else self.cache_dir / path

    def _remove_manifest(self) -> None:
        try:
            self.manifest_path.unlink(missing_ok=True)
        except OSError as e:
            raise CacheIOError(f"failed to remove stale manifest '{self.manifest_path}': {e}") from e

    def _remove_icon_files(self) -> None:
        for path in self.cache_dir.glob(ICON_GLOB):
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise CacheIOError(f"failed to remove stale icon file '{path}': {e}") from e

    def _write_atomic(self, path: Path, data: bytes) -> None:
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise CacheIOError(f"failed to write '{path}': {e}") from e
