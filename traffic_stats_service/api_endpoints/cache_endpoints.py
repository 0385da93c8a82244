"""
缓存管理端点
提供缓存统计查询和清理功能
"""

import logging

from fastapi import APIRouter, Depends

from ..cache_manager import CacheManager
from ..models import CacheStatsResponse, MessageResponse
from .deps import get_cache_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cache", tags=["缓存管理"])


@router.get("/stats", response_model=CacheStatsResponse)
async def get_cache_stats(cache_manager: CacheManager = Depends(get_cache_manager)):
    """获取缓存统计信息"""
    return cache_manager.stats()


@router.post("/clear", response_model=MessageResponse)
async def clear_cache(cache_manager: CacheManager = Depends(get_cache_manager)):
    """清空所有缓存"""
    cache_manager.clear()
    return {"message": "缓存已清空"}
