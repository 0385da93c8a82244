"""
系统端点
版本号与内存使用监控
"""

from fastapi import APIRouter, Depends

from .. import __version__
from ..memory_monitor import MemoryMonitor
from ..models import MemoryResponse, VersionResponse
from .deps import get_memory_monitor

router = APIRouter(prefix="/api", tags=["系统"])


@router.get("/version", response_model=VersionResponse)
async def get_version():
    return {"version": __version__}


@router.get("/system/memory", response_model=MemoryResponse)
async def get_memory_usage(memory_monitor: MemoryMonitor = Depends(get_memory_monitor)):
    """进程内存与缓存内存"""
    return memory_monitor.get_memory_snapshot()
