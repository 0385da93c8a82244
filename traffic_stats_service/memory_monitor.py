#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
内存监控模块

提供进程内存快照，并按固定间隔把进程内存、缓存内存和缓存命中率写入日志。
"""

import gc
import logging
from typing import Any, Dict

import psutil

from .cache_manager import CacheManager
from .cache_manager.cache_stats import format_mb
from .scheduler import PeriodicTask

logger = logging.getLogger(__name__)


class MemoryMonitor:
    """内存监控器"""

    def __init__(self, cache_manager: CacheManager, check_interval: float = 300.0):
        self.cache_manager = cache_manager
        self.check_interval = check_interval
        self.process = psutil.Process()
        self._task = PeriodicTask("memory-monitor", check_interval, self.log_memory_usage)

    def get_memory_snapshot(self) -> Dict[str, Any]:
        """进程内存与缓存内存快照"""
        mem_info = self.process.memory_info()
        return {
            "rss": format_mb(mem_info.rss),
            "vms": format_mb(mem_info.vms),
            "gcObjects": len(gc.get_objects()),
            "cacheMemory": self.cache_manager.stats()["memoryUsage"],
        }

    def log_memory_usage(self) -> None:
        mem_info = self.process.memory_info()
        cache_stats = self.cache_manager.stats()
        logger.info(
            f"内存使用: RSS={format_mb(mem_info.rss)}, "
            f"缓存={cache_stats['memoryUsage']}, 命中率={cache_stats['hitRate']}"
        )

    def start_monitoring(self) -> None:
        self._task.start()
        logger.info("内存监控已启动")

    async def stop_monitoring(self) -> None:
        await self._task.stop()
        logger.info("内存监控已停止")
