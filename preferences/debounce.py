import asyncio
from typing import Callable, Optional

from loguru import logger

from preferences.models import SettingsSnapshot, SyncStatus

# (snapshot, access token of the session it belongs to)
SaveFn = Callable[[SettingsSnapshot, Optional[str]], None]


class DebouncedSaver:
    """
    Coalesces rapid edits into a single settings write.

    Every schedule() cancels the pending write and starts a fresh timer,
    so only the latest snapshot reaches the store. A failed write is
    reported through `status` and not retried.
    """

    def __init__(self, save: SaveFn, delay: float):
        self._save = save
        self.delay = delay
        self.status = SyncStatus.IDLE
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, snapshot: SettingsSnapshot, access_token: Optional[str] = None) -> None:
        # Needs a running loop: called from async request handlers
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(snapshot, access_token))

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done():
            return

        # Sync routes run in a worker thread; cancel on the task's own loop
        loop = task.get_loop()
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            task.cancel()
        else:
            loop.call_soon_threadsafe(task.cancel)

    async def wait(self) -> None:
        """Block until the pending write (if any) has finished."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self, snapshot: SettingsSnapshot, access_token: Optional[str]) -> None:
        await asyncio.sleep(self.delay)

        self.status = SyncStatus.SAVING
        try:
            await asyncio.to_thread(self._save, snapshot, access_token)
        except Exception as e:
            logger.error(f"Settings save failed for user {snapshot.user_id}: {e}")
            self.status = SyncStatus.ERROR
            return

        self.status = SyncStatus.SAVED
