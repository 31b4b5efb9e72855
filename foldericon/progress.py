"""Progress events and a bounded, best-effort event channel.

For a batch of N folders the async operations emit, in order::

    Started(total=N)
    Rendering()                         # customize only, once
    Processing(0, path0)
    FolderComplete(0, path0) | FolderFailed(0, path0, error)
    ...
    Completed(succeeded, failed)        # succeeded + failed == N

Sends never block: if the channel is full or closed the event is dropped.
A batch over N folders sends 2N + 3 events (customize) or 2N + 2 (reset).
Size the channel to that, or drain it while the batch runs, if every event
must arrive.

Usage:
    sender, receiver = progress_channel(32)
    task = asyncio.create_task(ctx.customize_many_async(folders, profile, sender))
    async for event in receiver:
        ...
    results = await task
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from pathlib import Path

from foldericon.logger import get_logger
from foldericon.metrics import metrics

_logger = get_logger("progress")

DEFAULT_BUFFER = 32


@dataclass(frozen=True)
class Started:
    total: int


@dataclass(frozen=True)
class Rendering:
    pass


@dataclass(frozen=True)
class RenderFailed:
    error: str


@dataclass(frozen=True)
class Processing:
    current: int
    path: Path


@dataclass(frozen=True)
class FolderComplete:
    index: int
    path: Path


@dataclass(frozen=True)
class FolderFailed:
    index: int
    path: Path
    error: str


@dataclass(frozen=True)
class Completed:
    succeeded: int
    failed: int

    @property
    def total(self) -> int:
        return self.succeeded + self.failed


ProgressEvent = Started | Rendering | RenderFailed | Processing | FolderComplete | FolderFailed | Completed

_CLOSED = object()


class _ChannelState:
    def __init__(self, buffer: int):
        if buffer < 1:
            raise ValueError("progress channel buffer must be at least 1")
        self.queue: asyncio.Queue[object] = asyncio.Queue(maxsize=buffer)
        self.sender_closed = False
        self.receiver_closed = False


class ProgressSender:
    def __init__(self, state: _ChannelState):
        self._state = state

    @property
    def closed(self) -> bool:
        return self._state.sender_closed or self._state.receiver_closed

    async def send(self, event: ProgressEvent) -> bool:
        """Queue ``event`` without waiting for room. Returns False if it was dropped."""
        delivered = False
        if self.closed:
            _logger.debug("progress channel closed, dropping %s", type(event).__name__)
        else:
            try:
                self._state.queue.put_nowait(event)
                delivered = True
            except asyncio.QueueFull:
                _logger.debug("progress channel full, dropping %s", type(event).__name__)
        if not delivered:
            metrics.inc("progress.dropped")
        # Give the receiver a chance to run between events.
        await asyncio.sleep(0)
        return delivered

    def close(self) -> None:
        if self._state.sender_closed:
            return
        self._state.sender_closed = True
        # Wake a receiver blocked on an empty queue; a non-empty queue is drained first anyway.
        with contextlib.suppress(asyncio.QueueFull):
            self._state.queue.put_nowait(_CLOSED)


class ProgressReceiver:
    def __init__(self, state: _ChannelState):
        self._state = state

    async def recv(self) -> ProgressEvent | None:
        """Next event, or None once the sender is closed and the queue is drained."""
        state = self._state
        if state.receiver_closed:
            return None
        if state.sender_closed and state.queue.empty():
            return None
        item = await state.queue.get()
        if item is _CLOSED:
            return None
        return item  # type: ignore[return-value]

    def close(self) -> None:
        """Stop receiving; later sends are dropped."""
        self._state.receiver_closed = True

    def __aiter__(self) -> ProgressReceiver:
        return self

    async def __anext__(self) -> ProgressEvent:
        event = await self.recv()
        if event is None:
            raise StopAsyncIteration
        return event


def progress_channel(buffer: int = DEFAULT_BUFFER) -> tuple[ProgressSender, ProgressReceiver]:
    """Create a bounded progress channel holding at most ``buffer`` events."""
    state = _ChannelState(buffer)
    return ProgressSender(state), ProgressReceiver(state)
