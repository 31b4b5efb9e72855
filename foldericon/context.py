"""CustomizationContext: main entry point for folder icon customization.

Ties together the icon cache, the representation conversion, the external
renderer and the external per-folder icon applier:

    IconCache.get() -> to_render_format() -> renderer(base)
    apply_profile() / render_all() -> to_system_format() -> set_icon() per folder

Batches are fail-soft: every folder is attempted, each gets its own
``FolderResult``, and the icon set is rendered once per batch no matter how
many folders it contains.

Usage:
    ctx = (
        CustomizationContextBuilder()
        .with_provider(provider)
        .with_renderer(IconCustomizer)
        .with_applier(applier)
        .build()
    )
    results = ctx.customize_many(["/path/a", "/path/b"], profile)
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any

from foldericon.cache import IconCache
from foldericon.config import AppInfo, CacheConfig, resolve_cache_dir
from foldericon.errors import (
    BatchInvariantError,
    FolderCustomizationError,
    FolderIconError,
    FolderResetError,
    NotInitializedError,
    RenderError,
)
from foldericon.icon_engine.bounds import ContentBoundsLookup, bounds_for_platform
from foldericon.icon_engine.convert import to_render_format, to_system_format
from foldericon.icon_engine.models import IconSet, RenderIconImage, SystemIconImage
from foldericon.logger import get_logger
from foldericon.metrics import metrics
from foldericon.path_utils import as_path
from foldericon.ports import CustomizerHandle, IconProvider, Profile, RendererFactory, TargetIconApplier
from foldericon.progress import (
    Completed,
    FolderComplete,
    FolderFailed,
    Processing,
    ProgressEvent,
    ProgressSender,
    RenderFailed,
    Rendering,
    Started,
)

_logger = get_logger("context")

Target = str | PathLike[str]


@dataclass
class FolderResult:
    """Outcome for one folder of a batch; ``error`` is None on success."""

    path: Path
    error: FolderIconError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def profile_as_dict(profile: Profile) -> dict[str, Any]:
    """Return a JSON-serializable dict for a dataclass or mapping profile."""
    if dataclasses.is_dataclass(profile) and not isinstance(profile, type):
        return dataclasses.asdict(profile)
    if isinstance(profile, Mapping):
        return dict(profile)
    to_dict = getattr(profile, "to_dict", None)
    if callable(to_dict):
        return dict(to_dict())
    raise TypeError(f"cannot export profile of type {type(profile).__name__}")


class BatchRun:
    """One batch over a list of folders.

    Iterating it does the work: progress events come out as each step happens
    and ``results`` grows by one entry per processed folder.
    """

    def __init__(self, targets: Iterable[Target]):
        self.paths = [as_path(t) for t in targets]
        self.results: list[FolderResult] = []
        self.render_error: RenderError | None = None
        self.events: Iterator[ProgressEvent] = iter(())

    def __iter__(self) -> Iterator[ProgressEvent]:
        return self.events


def _reason(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


class CustomizationContextBuilder:
    """Collects configuration and collaborators, then builds a ready context.

    The cache location comes from ``with_cache_dir`` if set, otherwise from the
    ``AppInfo`` (default ``AppInfo()``) via the platform data directory.
    """

    def __init__(self) -> None:
        self.app_info = AppInfo()
        self.cache_dir: Path | None = None
        self.force_cache_refresh = False
        self.env: Mapping[str, str] | None = None
        self.provider: IconProvider | None = None
        self.renderer: RendererFactory | None = None
        self.applier: TargetIconApplier | None = None
        self.content_bounds: ContentBoundsLookup | None = None

    def with_app_info(self, app_info: AppInfo) -> CustomizationContextBuilder:
        self.app_info = app_info
        return self

    def with_cache_dir(self, cache_dir: Target) -> CustomizationContextBuilder:
        """Use this cache directory; overrides the app info."""
        self.cache_dir = Path(cache_dir)
        return self

    def with_force_cache_refresh(self, force: bool) -> CustomizationContextBuilder:
        self.force_cache_refresh = force
        return self

    def with_env(self, env: Mapping[str, str]) -> CustomizationContextBuilder:
        """Honor FOLDERICON_CACHE_DIR from ``env`` when no cache dir is set."""
        self.env = env
        return self

    def with_provider(self, provider: IconProvider) -> CustomizationContextBuilder:
        self.provider = provider
        return self

    def with_renderer(self, renderer: RendererFactory) -> CustomizationContextBuilder:
        self.renderer = renderer
        return self

    def with_applier(self, applier: TargetIconApplier) -> CustomizationContextBuilder:
        self.applier = applier
        return self

    def with_content_bounds(self, content_bounds: ContentBoundsLookup) -> CustomizationContextBuilder:
        self.content_bounds = content_bounds
        return self

    def cache_config(self) -> CacheConfig:
        if self.cache_dir is not None:
            cache_dir = self.cache_dir
        else:
            cache_dir = resolve_cache_dir(self.app_info, self.env)
        return CacheConfig(cache_dir, force_refresh=self.force_cache_refresh)

    def build(self) -> CustomizationContext:
        """Load (or fetch) the base icons and create the customizer.

        Any failure propagates; no partially initialized context is returned.
        """
        provider, renderer, applier = self.provider, self.renderer, self.applier
        if provider is None or renderer is None or applier is None:
            missing = [
                name
                for name, value in (("provider", provider), ("renderer", renderer), ("applier", applier))
                if value is None
            ]
            raise NotInitializedError(f"builder is missing: {', '.join(missing)}")

        config = self.cache_config()
        ctx = CustomizationContext(
            cache=IconCache(config, provider),
            renderer=renderer,
            applier=applier,
            content_bounds=self.content_bounds or bounds_for_platform(),
        )
        ctx.initialize()
        _logger.debug("context built: cache_dir=%s bounds=%r", config.cache_dir, ctx.content_bounds)
        return ctx


class CustomizationContext:
    """Customize and reset folder icons with a cached base icon set."""

    def __init__(
        self,
        cache: IconCache,
        renderer: RendererFactory,
        applier: TargetIconApplier,
        content_bounds: ContentBoundsLookup,
    ):
        self.cache = cache
        self.content_bounds = content_bounds
        self._renderer = renderer
        self._applier = applier
        self._customizer: CustomizerHandle | None = None

    # -- lifecycle --------------------------------------------------------

    def initialize(self) -> CustomizerHandle:
        """Load the base icon set from the cache and create the customizer."""
        return self._install(self.cache.get())

    def refresh_cache(self) -> CustomizerHandle:
        """Re-fetch the base icons and replace the customizer.

        The returned handle is new: any profile applied to the previous handle
        is gone. If conversion of the new base fails the old handle stays.
        """
        system_set = self.cache.refresh()
        handle = self._install(system_set)
        _logger.info("icon cache refreshed, customizer reset (%d icons)", len(system_set))
        return handle

    def _install(self, system_set: IconSet[SystemIconImage]) -> CustomizerHandle:
        base = to_render_format(system_set, self.content_bounds)
        try:
            handle = self._renderer(base)
        except FolderIconError:
            raise
        except Exception as e:
            raise RenderError(f"failed to create customizer: {e}") from e
        self._customizer = handle
        return handle

    @property
    def initialized(self) -> bool:
        return self._customizer is not None

    @property
    def customizer(self) -> CustomizerHandle:
        if self._customizer is None:
            raise NotInitializedError("customizer has not been created; call initialize() or use the builder")
        return self._customizer

    # -- rendering --------------------------------------------------------

    def base_icons(self) -> IconSet[RenderIconImage]:
        return self.customizer.base_icons()

    def apply_profile(self, profile: Profile) -> None:
        self.customizer.apply_profile(profile)

    def export_profile(self) -> Profile:
        return self.customizer.export_profile()

    def export_profile_dict(self) -> dict[str, Any]:
        return profile_as_dict(self.export_profile())

    def render(self) -> IconSet[RenderIconImage]:
        """Render the base icons with the currently applied profile."""
        customizer = self.customizer
        metrics.inc("context.renders")
        with metrics.timed("context.render_duration"):
            try:
                return customizer.render_all()
            except FolderIconError:
                raise
            except Exception as e:
                raise RenderError(_reason(e)) from e

    def _render_system_set(self, profile: Profile) -> IconSet[SystemIconImage]:
        try:
            self.apply_profile(profile)
        except FolderIconError:
            raise
        except Exception as e:
            raise RenderError(f"failed to apply profile: {_reason(e)}") from e
        return to_system_format(self.render())

    # -- per-folder steps ---------------------------------------------------

    def _set_icon(self, path: Path, icons: IconSet[SystemIconImage]) -> FolderIconError | None:
        try:
            self._applier.set_icon(path, icons)
        except FolderCustomizationError as e:
            return e
        except Exception as e:
            return FolderCustomizationError(path, _reason(e))
        return None

    def _reset_icon(self, path: Path) -> FolderIconError | None:
        try:
            self._applier.reset_icon(path)
        except FolderResetError as e:
            return e
        except Exception as e:
            return FolderResetError(path, _reason(e))
        return None

    # -- batches ------------------------------------------------------------

    def _iter_batch(self, run: BatchRun, profile: Profile, customize: bool) -> Iterator[ProgressEvent]:
        total = len(run.paths)
        yield Started(total)

        icons: IconSet[SystemIconImage] | None = None
        if customize:
            yield Rendering()
            try:
                icons = self._render_system_set(profile)
            except RenderError as e:
                _logger.error("rendering failed, no folders changed: %s", e)
                run.render_error = e
                run.results = [FolderResult(path, e) for path in run.paths]
                yield RenderFailed(str(e))
                yield Completed(succeeded=0, failed=total)
                return

        succeeded = 0
        failed = 0
        for index, path in enumerate(run.paths):
            yield Processing(index, path)
            error = self._set_icon(path, icons) if icons is not None else self._reset_icon(path)
            run.results.append(FolderResult(path, error))
            if error is None:
                succeeded += 1
                yield FolderComplete(index, path)
            else:
                failed += 1
                _logger.warning("%s", error)
                yield FolderFailed(index, path, str(error))

        metrics.inc("context.folders_succeeded", succeeded)
        metrics.inc("context.folders_failed", failed)
        _logger.info("%s: %d succeeded, %d failed", "customize" if customize else "reset", succeeded, failed)
        yield Completed(succeeded=succeeded, failed=failed)

    def iter_customize(self, targets: Iterable[Target], profile: Profile) -> BatchRun:
        """Prepare a customize batch; iterate the returned run to execute it step by step."""
        run = BatchRun(targets)
        run.events = self._iter_batch(run, profile, customize=True)
        return run

    def iter_reset(self, targets: Iterable[Target]) -> BatchRun:
        """Prepare a reset batch; iterate the returned run to execute it step by step."""
        run = BatchRun(targets)
        run.events = self._iter_batch(run, None, customize=False)
        return run

    def customize_many(self, targets: Iterable[Target], profile: Profile) -> list[FolderResult]:
        """Apply ``profile``, render once and set the icon on every target.

        Returns one result per target in input order. Raises ``RenderError``
        (before any folder is touched) if rendering fails.
        """
        run = self.iter_customize(targets, profile)
        for _event in run:
            pass
        if run.render_error is not None:
            raise run.render_error
        return run.results

    def reset_many(self, targets: Iterable[Target]) -> list[FolderResult]:
        run = self.iter_reset(targets)
        for _event in run:
            pass
        return run.results

    def customize_one(self, target: Target, profile: Profile) -> None:
        """Customize a single folder; raises its ``FolderCustomizationError`` on failure."""
        self._sole_result(self.customize_many([target], profile))

    def reset_one(self, target: Target) -> None:
        """Reset a single folder; raises its ``FolderResetError`` on failure."""
        self._sole_result(self.reset_many([target]))

    @staticmethod
    def _sole_result(results: list[FolderResult]) -> None:
        if not results:
            raise BatchInvariantError("batch returned no result for a single target")
        error = results[0].error
        if error is not None:
            raise error

    async def customize_many_async(
        self, targets: Iterable[Target], profile: Profile, progress: ProgressSender
    ) -> list[FolderResult]:
        """``customize_many`` reporting progress events; closes ``progress`` when done.

        A render failure is reported as ``RenderFailed`` and every target's
        result carries the ``RenderError``.
        """
        run = self.iter_customize(targets, profile)
        await self._send_all(run, progress)
        return run.results

    async def reset_many_async(self, targets: Iterable[Target], progress: ProgressSender) -> list[FolderResult]:
        """``reset_many`` reporting progress events; closes ``progress`` when done."""
        run = self.iter_reset(targets)
        await self._send_all(run, progress)
        return run.results

    @staticmethod
    async def _send_all(run: BatchRun, progress: ProgressSender) -> None:
        try:
            for event in run:
                await progress.send(event)
        finally:
            progress.close()
