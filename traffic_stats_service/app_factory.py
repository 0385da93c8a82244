"""
FastAPI应用工厂模块
负责创建和配置FastAPI应用实例，组装缓存、vnstat 执行器与统计服务
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api_endpoints import basic_router, cache_router, stats_router, system_router
from .cache_manager import CacheManager
from .config import Config
from .exception_handler import register_exception_handlers
from .memory_monitor import MemoryMonitor
from .middleware import RequestTrackingMiddleware
from .processors.stats_pipeline import StatsPipeline
from .stats_service import StatsService
from .vnstat_runner import VnstatRunner

logger = logging.getLogger(__name__)


def create_cache_manager(config: Config) -> CacheManager:
    return CacheManager(
        max_size=config.cache.max_size,
        max_memory_bytes=config.cache.max_memory_bytes,
        cleanup_interval=config.cache.cleanup_interval,
    )


def create_app(
    config: Optional[Config] = None,
    runner: Optional[VnstatRunner] = None,
    cache_manager: Optional[CacheManager] = None,
) -> FastAPI:
    """创建FastAPI应用实例

    ``runner`` 与 ``cache_manager`` 可由调用方注入（测试中替换 vnstat）。
    """
    if config is None:
        config = Config.load_from_env()
    # 空的 CacheManager 为假值
    if cache_manager is None:
        cache_manager = create_cache_manager(config)
    if runner is None:
        runner = VnstatRunner(binary=config.vnstat.binary, timeout=config.vnstat.timeout)
    memory_monitor = MemoryMonitor(cache_manager, config.monitoring.memory_monitor_interval)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("服务启动中...")
        app.state.start_time = time.time()
        await cache_manager.start()
        memory_monitor.start_monitoring()
        logger.info(
            f"缓存配置: 最大条目={config.cache.max_size}, 最大内存={config.cache.max_memory_mb}MB"
        )
        try:
            yield
        finally:
            logger.info("服务关闭中...")
            await memory_monitor.stop_monitoring()
            await cache_manager.stop()

    app = FastAPI(
        title="Traffic Stats API",
        description="基于 vnstat 的网络流量统计服务API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.cache_manager = cache_manager
    app.state.memory_monitor = memory_monitor
    app.state.stats_service = StatsService(cache_manager, runner, StatsPipeline())
    app.state.start_time = time.time()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTrackingMiddleware)

    register_exception_handlers(app)

    app.include_router(basic_router)
    app.include_router(stats_router)
    app.include_router(cache_router)
    app.include_router(system_router)

    return app
