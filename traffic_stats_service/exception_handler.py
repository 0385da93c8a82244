#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
异常处理模块

把服务异常统一转换为 ``{"error": ...}`` 响应：
- 参数校验错误 -> 400，返回具体原因
- vnstat 执行错误 -> 500，返回原始错误信息
- 其他未捕获异常 -> 500，只返回通用信息，详情写入日志
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .exceptions import ExternalToolError, TrafficStatsException, ValidationError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "服务器内部错误"


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info(
        f"请求参数无效: {request.method} {request.url.path} - {exc.message}",
        extra={"error_info": exc.to_dict()},
    )
    return error_response(exc.message, exc.status_code)


async def external_tool_exception_handler(request: Request, exc: ExternalToolError) -> JSONResponse:
    logger.error(
        f"vnstat 执行失败: {request.method} {request.url.path} - {exc.message}",
        extra={"error_info": exc.to_dict()},
    )
    return error_response(exc.message, exc.status_code)


async def service_exception_handler(request: Request, exc: TrafficStatsException) -> JSONResponse:
    logger.error(
        f"服务错误: {request.method} {request.url.path} - {exc.message}",
        extra={"error_info": exc.to_dict()},
    )
    return error_response(exc.message, exc.status_code)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"服务器错误: {request.method} {request.url.path}", exc_info=exc)

    # 缓存相关错误附带缓存状态
    if "cache" in str(exc).lower():
        cache_manager = getattr(request.app.state, "cache_manager", None)
        logger.error(
            "缓存错误详情",
            extra={
                "url": str(request.url),
                "method": request.method,
                "cache_stats": cache_manager.stats() if cache_manager else None,
            },
        )

    return error_response(INTERNAL_ERROR_MESSAGE, 500)


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(ExternalToolError, external_tool_exception_handler)
    app.add_exception_handler(TrafficStatsException, service_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
