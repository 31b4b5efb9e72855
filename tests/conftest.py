"""Pytest configuration.

The Qt batch worker tests need a ``QApplication``. One is created for the
whole session as early as possible and shut down at the end; environments
without PySide6 simply skip that part.
"""

from __future__ import annotations

from typing import Any

import pytest

from foldericon.context import CustomizationContext
from foldericon.icon_engine.bounds import WINDOWS_FOLDER_BOUNDS
from foldericon.metrics import metrics
from tests.helpers.fakes import FakeApplier, FakeCustomizer, FakeProvider, MemoryCache

_APP: Any | None = None


def pytest_configure(config) -> None:  # noqa: ARG001
    """Ensure a QApplication exists before collecting/running tests."""

    # Import lazily so non-Qt environments can still import this conftest.
    try:
        from PySide6.QtCore import QCoreApplication
    except ImportError:
        return

    global _APP  # noqa: PLW0603

    app = QCoreApplication.instance()
    # Keep a strong ref so it isn't GC'd mid-session.
    _APP = app if app is not None else QCoreApplication([])


def pytest_sessionfinish(session, exitstatus) -> None:  # noqa: ARG001
    try:
        from PySide6.QtCore import QCoreApplication
    except ImportError:
        return

    app = QCoreApplication.instance()
    if app is None:
        return
    app.quit()
    app.processEvents()


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    FakeCustomizer.created = 0
    yield


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider(sizes=(16, 32, 256))


@pytest.fixture
def make_context(provider):
    """Build an initialized context over an in-memory cache; ``failing`` folders always fail."""

    def _make(failing=()) -> tuple[CustomizationContext, FakeApplier]:
        applier = FakeApplier(failing=failing)
        ctx = CustomizationContext(
            cache=MemoryCache(provider),  # type: ignore[arg-type]
            renderer=FakeCustomizer,
            applier=applier,
            content_bounds=WINDOWS_FOLDER_BOUNDS,
        )
        ctx.initialize()
        return ctx, applier

    return _make
