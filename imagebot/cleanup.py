"""
Delayed removal of transient image files.
Every scheduled removal is a tracked asyncio task so shutdown can cancel
them and remove the files right away.
"""

import asyncio
from pathlib import Path
from typing import Dict, Union
from .logger import logger


def remove_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed transient file {path}")
    except OSError as e:
        logger.warning(f"Failed to remove transient file {path}: {e}")


class CleanupRegistry:
    def __init__(self):
        self._pending: Dict[asyncio.Task, Path] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def schedule(self, path: Union[str, Path], delay: float) -> asyncio.Task:
        """Remove `path` after `delay` seconds; must be called from a running loop"""
        path = Path(path)
        task = asyncio.get_running_loop().create_task(self._remove_later(path, delay))
        self._pending[task] = path
        task.add_done_callback(self._forget)
        return task

    def _forget(self, task: asyncio.Task) -> None:
        self._pending.pop(task, None)

    async def _remove_later(self, path: Path, delay: float) -> None:
        await asyncio.sleep(delay)
        remove_file(path)

    async def cancel_all(self) -> None:
        """Cancel pending removals and delete their files immediately"""
        pending = dict(self._pending)
        if not pending:
            return
        logger.info(f"Cancelling {len(pending)} pending file cleanups")
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for path in pending.values():
            remove_file(path)
