"""
基础API端点
根路由与健康检查
"""

import time

from fastapi import APIRouter, Depends, Request

from ..cache_manager import CacheManager
from ..models import HealthResponse
from .deps import get_cache_manager

router = APIRouter()


@router.get("/")
async def root():
    """根端点"""
    return {"message": "Traffic Stats Service is running"}


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, cache_manager: CacheManager = Depends(get_cache_manager)):
    """健康检查端点"""
    start_time = getattr(request.app.state, "start_time", time.time())
    return {
        "status": "healthy",
        "uptime": round(time.time() - start_time, 2),
        "cacheEntries": len(cache_manager),
    }
