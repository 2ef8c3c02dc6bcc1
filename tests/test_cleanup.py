"""Cleanup registry tests."""

import asyncio

from imagebot.cleanup import CleanupRegistry


def test_file_removed_after_delay(tmp_path):
    target = tmp_path / "image.png"
    target.write_bytes(b"data")
    registry = CleanupRegistry()

    async def scenario():
        registry.schedule(target, 0.01)
        assert len(registry) == 1
        assert target.exists()
        await asyncio.sleep(0.1)

    asyncio.run(scenario())

    assert not target.exists()
    assert len(registry) == 0


def test_missing_file_is_not_an_error(tmp_path):
    registry = CleanupRegistry()

    async def scenario():
        task = registry.schedule(tmp_path / "gone.png", 0)
        await task

    asyncio.run(scenario())
    assert len(registry) == 0


def test_cancel_all_removes_files_immediately(tmp_path):
    first = tmp_path / "a.png"
    second = tmp_path / "b.png"
    first.write_bytes(b"a")
    second.write_bytes(b"b")
    registry = CleanupRegistry()

    async def scenario():
        tasks = [registry.schedule(first, 60), registry.schedule(second, 60)]
        await registry.cancel_all()
        return tasks

    tasks = asyncio.run(scenario())

    assert all(task.cancelled() for task in tasks)
    assert not first.exists()
    assert not second.exists()
    assert len(registry) == 0


def test_cancel_all_without_pending_work():
    asyncio.run(CleanupRegistry().cancel_all())
