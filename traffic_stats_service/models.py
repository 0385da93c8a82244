"""API 响应模型"""

from typing import List

from pydantic import BaseModel


class StatsResponse(BaseModel):
    """统计数据响应"""
    data: List[str]


class InterfacesResponse(BaseModel):
    """接口列表响应"""
    interfaces: List[str]


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str


class VersionResponse(BaseModel):
    version: str


class CacheStatsResponse(BaseModel):
    """缓存统计响应"""
    hits: int
    misses: int
    sets: int
    deletes: int
    hitRate: str
    size: int
    maxSize: int
    memoryUsage: str
    maxMemory: str


class MemoryResponse(BaseModel):
    """进程内存响应"""
    rss: str
    vms: str
    gcObjects: int
    cacheMemory: str


class HealthResponse(BaseModel):
    status: str
    uptime: float
    cacheEntries: int
