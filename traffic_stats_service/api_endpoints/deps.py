"""
依赖注入
组件由 app_factory 创建并挂在 ``app.state`` 上，端点通过 Depends 获取
"""

from fastapi import Request

from ..cache_manager import CacheManager
from ..memory_monitor import MemoryMonitor
from ..stats_service import StatsService


def get_cache_manager(request: Request) -> CacheManager:
    return request.app.state.cache_manager


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats_service


def get_memory_monitor(request: Request) -> MemoryMonitor:
    return request.app.state.memory_monitor
