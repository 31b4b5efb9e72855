from __future__ import annotations

from collections.abc import Iterable

from PySide6.QtCore import QObject, Signal

from foldericon.context import BatchRun, CustomizationContext, FolderResult, Target
from foldericon.logger import get_logger
from foldericon.ports import Profile

_logger = get_logger("workers")


class FolderBatchWorker(QObject):
    """Runs a customize batch (profile given) or reset batch (profile None) off the UI thread.

    Move it to a QThread and connect ``QThread.started`` to ``run``. Each
    progress event is re-emitted through ``progress``; ``finished`` always
    fires last with the per-folder results collected so far.
    """

    progress = Signal(object)  # ProgressEvent
    failed = Signal(str)
    finished = Signal(object)  # list[FolderResult]

    def __init__(self, context: CustomizationContext, targets: Iterable[Target], profile: Profile | None = None):
        super().__init__()
        self.context = context
        self.targets = list(targets)
        self.profile = profile
        self.results: list[FolderResult] = []

    def _start(self) -> BatchRun:
        if self.profile is None:
            return self.context.iter_reset(self.targets)
        return self.context.iter_customize(self.targets, self.profile)

    def run(self) -> None:
        run: BatchRun | None = None
        try:
            run = self._start()
            for event in run:
                self.progress.emit(event)
        except Exception as ex:  # keep worker resilient
            _logger.error("folder batch aborted: %s", ex)
            self.failed.emit(str(ex))
        finally:
            self.results = list(run.results) if run is not None else []
            self.finished.emit(self.results)
