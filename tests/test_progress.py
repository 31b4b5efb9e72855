from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from foldericon.errors import FolderCustomizationError, RenderError
from foldericon.metrics import metrics
from foldericon.progress import (
    Completed,
    FolderComplete,
    FolderFailed,
    Processing,
    RenderFailed,
    Rendering,
    Started,
    progress_channel,
)

RED = {"color": (255, 0, 0)}


async def _collect(receiver) -> list:
    return [event async for event in receiver]


async def _run_and_collect(coro_factory, buffer: int = 64):
    sender, receiver = progress_channel(buffer)
    task = asyncio.create_task(coro_factory(sender))
    events = await _collect(receiver)
    results = await task
    return results, events


def test_customize_async_event_sequence(make_context):
    ctx, _ = make_context(failing=["/b"])

    results, events = asyncio.run(
        _run_and_collect(lambda sender: ctx.customize_many_async(["/a", "/b"], RED, sender))
    )

    assert events[:5] == [
        Started(total=2),
        Rendering(),
        Processing(0, Path("/a")),
        FolderComplete(0, Path("/a")),
        Processing(1, Path("/b")),
    ]
    assert isinstance(events[5], FolderFailed)
    assert events[5].index == 1
    assert "access denied" in events[5].error
    assert events[6] == Completed(succeeded=1, failed=1)
    assert len(events) == 7
    assert results[0].ok
    assert isinstance(results[1].error, FolderCustomizationError)


@pytest.mark.parametrize("count", [0, 1, 3])
def test_completed_counts_add_up(make_context, count):
    ctx, _ = make_context(failing=["/t/0"])
    targets = [f"/t/{i}" for i in range(count)]

    results, events = asyncio.run(_run_and_collect(lambda sender: ctx.customize_many_async(targets, RED, sender)))

    done = events[-1]
    assert isinstance(done, Completed)
    assert done.total == count
    assert done.failed == (1 if count else 0)
    assert len(results) == count
    assert sum(isinstance(e, Processing) for e in events) == count


def test_reset_async_has_no_rendering(make_context):
    ctx, _ = make_context()

    results, events = asyncio.run(_run_and_collect(lambda sender: ctx.reset_many_async(["/a"], sender)))

    assert events == [
        Started(1),
        Processing(0, Path("/a")),
        FolderComplete(0, Path("/a")),
        Completed(succeeded=1, failed=0),
    ]
    assert [r.ok for r in results] == [True]


def test_render_failure_is_reported_not_raised(make_context):
    ctx, applier = make_context()

    results, events = asyncio.run(
        _run_and_collect(lambda sender: ctx.customize_many_async(["/a", "/b"], {"fail": True}, sender))
    )

    assert events[:2] == [Started(2), Rendering()]
    assert isinstance(events[2], RenderFailed)
    assert "invalid decal source" in events[2].error
    assert events[3] == Completed(succeeded=0, failed=2)
    assert all(isinstance(r.error, RenderError) for r in results)
    assert applier.attempts == []


def test_full_channel_drops_events_without_blocking(make_context):
    ctx, _ = make_context()
    targets = [f"/t/{i}" for i in range(5)]

    async def main():
        sender, receiver = progress_channel(2)
        # Nobody drains the channel while the batch runs.
        results = await asyncio.wait_for(ctx.customize_many_async(targets, RED, sender), timeout=5)
        return results, await _collect(receiver)

    results, events = asyncio.run(main())

    assert len(results) == 5
    assert all(r.ok for r in results)
    assert events == [Started(5), Rendering()]
    # 5 targets: Started + Rendering + 10 per-folder + Completed = 13 events
    assert metrics.count("progress.dropped") == 11


@pytest.mark.parametrize(("customize", "extra"), [(True, 3), (False, 2)])
def test_channel_sized_for_batch_keeps_every_event(make_context, customize, extra):
    ctx, _ = make_context(failing=["/t/1"])
    targets = [f"/t/{i}" for i in range(3)]

    async def main():
        sender, receiver = progress_channel(2 * len(targets) + extra)
        if customize:
            results = await ctx.customize_many_async(targets, RED, sender)
        else:
            results = await ctx.reset_many_async(targets, sender)
        return results, await _collect(receiver)

    results, events = asyncio.run(main())

    assert len(results) == 3
    assert len(events) == 2 * len(targets) + extra
    assert events[-1] == Completed(succeeded=2, failed=1)
    assert metrics.count("progress.dropped") == 0


def test_closed_receiver_drops_events(make_context):
    ctx, _ = make_context()

    async def main():
        sender, receiver = progress_channel(8)
        receiver.close()
        results = await ctx.reset_many_async(["/a", "/b"], sender)
        return results, await receiver.recv()

    results, event = asyncio.run(main())

    assert len(results) == 2
    assert event is None
    assert metrics.count("progress.dropped") == 6


def test_send_reports_delivery():
    async def main():
        sender, receiver = progress_channel(1)
        first = await sender.send(Started(0))
        second = await sender.send(Completed(0, 0))
        sender.close()
        return first, second, await _collect(receiver), sender.closed

    first, second, events, closed = asyncio.run(main())

    assert (first, second) == (True, False)
    assert events == [Started(0)]
    assert closed


def test_receiver_stops_after_sender_closes():
    async def main():
        sender, receiver = progress_channel(4)
        await sender.send(Started(1))
        sender.close()
        sender.close()
        assert await sender.send(Completed(1, 0)) is False
        return await _collect(receiver), await receiver.recv()

    events, after = asyncio.run(main())

    assert events == [Started(1)]
    assert after is None


def test_receiver_waiting_on_empty_channel_wakes_on_close():
    async def main():
        sender, receiver = progress_channel(4)
        waiter = asyncio.create_task(receiver.recv())
        await asyncio.sleep(0)
        sender.close()
        return await asyncio.wait_for(waiter, timeout=1)

    assert asyncio.run(main()) is None


@pytest.mark.parametrize("buffer", [0, -1])
def test_buffer_must_be_positive(buffer):
    with pytest.raises(ValueError):
        progress_channel(buffer)
