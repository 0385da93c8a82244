"""
API端点模块
包含所有API端点的定义
"""

from .basic_endpoints import router as basic_router
from .stats_endpoints import router as stats_router
from .cache_endpoints import router as cache_router
from .system_endpoints import router as system_router

__all__ = ['basic_router', 'stats_router', 'cache_router', 'system_router']
