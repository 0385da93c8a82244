"""
流量统计端点
接口列表、按周期统计、按日期范围统计
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..exceptions import ExternalToolError
from ..models import ErrorResponse, InterfacesResponse, StatsResponse
from ..stats_service import StatsService
from .deps import get_stats_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["流量统计"])

_error_responses = {400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


@router.get("/interfaces", response_model=InterfacesResponse, responses=_error_responses)
async def get_interfaces(service: StatsService = Depends(get_stats_service)):
    """获取网络接口列表"""
    try:
        return await service.list_interfaces()
    except ExternalToolError as e:
        logger.error(f"获取网络接口列表失败: {e.message}")
        return JSONResponse(status_code=500, content={"error": f"获取网络接口列表失败: {e.message}"})


@router.get(
    "/stats/{interface}/range/{start_date}/{end_date}",
    response_model=StatsResponse,
    responses=_error_responses,
)
async def get_range_stats(
    interface: str,
    start_date: str,
    end_date: str,
    service: StatsService = Depends(get_stats_service),
):
    """获取日期范围内的每日统计"""
    return await service.get_range_stats(interface, start_date, end_date)


@router.get("/stats/{interface}/{period}", response_model=StatsResponse, responses=_error_responses)
async def get_stats(
    interface: str,
    period: str,
    service: StatsService = Depends(get_stats_service),
):
    """获取统计数据，period: l(实时) 5 h d m y"""
    return await service.get_stats(interface, period)
