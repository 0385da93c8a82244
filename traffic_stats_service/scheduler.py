"""Periodic task module.

Cancellable interval task running on the asyncio event loop, used by the
cache sweep and the memory monitor.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Call ``callback`` every ``interval`` seconds until stopped."""

    def __init__(self, name: str, interval: float, callback: Callable[[], object]):
        self.name = name
        self.interval = interval
        self.callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the loop on the running event loop."""
        if self.running:
            return
        if self.interval <= 0:
            logger.info(f"周期任务 {self.name} 间隔为 0，不启动")
            return
        self._task = asyncio.create_task(self._run(), name=self.name)
        logger.debug(f"周期任务 {self.name} 已启动，间隔 {self.interval}s")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.debug(f"周期任务 {self.name} 已停止")

    async def _run(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.interval)
                self.callback()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"周期任务 {self.name} 执行错误: {e}", exc_info=True)
