"""
流量统计服务

请求级编排：先查缓存（实时数据不缓存），未命中时调用 vnstat，
经流水线处理后写回缓存。vnstat 失败不写缓存，也不重试。

同一键的并发未命中不做合并，每个请求都会各自调用 vnstat，
后写入的结果覆盖先写入的结果。
"""

import logging
from typing import Any, Dict, List, Optional

from .cache_manager import CacheManager
from .exceptions import ValidationError
from .processors.stats_pipeline import StatsPipeline
from .vnstat_runner import LIVE_PERIOD, VnstatRunner, validate_date, validate_interface, validate_period

logger = logging.getLogger(__name__)

# 各周期缓存时间(秒)
PERIOD_CACHE_TTL: Dict[str, float] = {
    "5": 30,  # 30秒
    "h": 60,  # 1分钟
    "d": 2 * 60,  # 2分钟
    "m": 5 * 60,  # 5分钟
    "y": 10 * 60,  # 10分钟
}
DEFAULT_CACHE_TTL = 60
INTERFACES_CACHE_TTL = 5 * 60
RANGE_CACHE_TTL = 10 * 60

DEFAULT_INTERFACE = "eth0"


def get_cache_time_for_period(period: str) -> float:
    return PERIOD_CACHE_TTL.get(period, DEFAULT_CACHE_TTL)


class StatsService:
    """缓存 + vnstat + 处理流水线"""

    def __init__(
        self,
        cache_manager: CacheManager,
        runner: VnstatRunner,
        pipeline: Optional[StatsPipeline] = None,
    ):
        self.cache_manager = cache_manager
        self.runner = runner
        self.pipeline = pipeline if pipeline is not None else StatsPipeline()

    async def list_interfaces(self) -> Dict[str, List[str]]:
        """获取可用网络接口列表"""
        cache_key = self.cache_manager.generate_key("interfaces")
        cached = self.cache_manager.get(cache_key)
        if cached:
            return cached

        all_interfaces = await self.runner.list_interfaces()

        valid_interfaces: List[str] = []
        for name in all_interfaces:
            try:
                validate_interface(name)
            except ValidationError:
                logger.debug(f"跳过无效接口名: {name}")
                continue
            if await self.runner.probe_interface(name):
                valid_interfaces.append(name)

        # 没有可用接口时默认返回 eth0
        if not valid_interfaces:
            valid_interfaces.append(DEFAULT_INTERFACE)

        result = {"interfaces": valid_interfaces}
        self.cache_manager.set(cache_key, result, INTERFACES_CACHE_TTL)
        return result

    async def get_stats(self, interface: str, period: str) -> Dict[str, Any]:
        """获取指定周期的统计数据"""
        validate_interface(interface)
        validate_period(period)

        if period == LIVE_PERIOD:
            return await self._fetch_stats(interface, period)

        cache_key = self.cache_manager.generate_key("stats", interface, period)
        cached = self.cache_manager.get(cache_key)
        if cached:
            logger.debug(f"缓存命中: {cache_key}")
            return cached

        result = await self._fetch_stats(interface, period)
        self.cache_manager.set(cache_key, result, get_cache_time_for_period(period))
        return result

    async def get_range_stats(self, interface: str, start_date: str, end_date: str) -> Dict[str, Any]:
        """获取日期范围内的每日统计"""
        validate_interface(interface)
        validate_date(start_date, "start_date")
        validate_date(end_date, "end_date")

        cache_key = self.cache_manager.generate_key("range", interface, start_date, end_date)
        cached = self.cache_manager.get(cache_key)
        if cached:
            return cached

        raw = await self.runner.get_range(interface, start_date, end_date)
        result = {"data": self.pipeline.translate_only(raw)}
        self.cache_manager.set(cache_key, result, RANGE_CACHE_TTL)
        return result

    async def _fetch_stats(self, interface: str, period: str) -> Dict[str, Any]:
        raw = await self.runner.get_stats(interface, period)
        return {"data": self.pipeline.process(raw, period)}
