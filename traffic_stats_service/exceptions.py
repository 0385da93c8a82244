"""
异常定义模块

定义流量统计服务的异常类，由 exception_handler 统一转换为 HTTP 响应
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ErrorCategory(Enum):
    """错误分类枚举"""
    VALIDATION_ERROR = "validation_error"      # 参数校验错误
    EXTERNAL_TOOL_ERROR = "external_tool_error"  # vnstat 执行错误
    TIMEOUT_ERROR = "timeout_error"            # vnstat 超时
    UNKNOWN_ERROR = "unknown_error"            # 未知错误


class TrafficStatsException(Exception):
    """流量统计服务基础异常类"""

    status_code = 500

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class ValidationError(TrafficStatsException):
    """请求参数错误，在调用 vnstat 之前抛出"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION_ERROR,
            details={"field": field, "value": value},
        )
        self.field = field


class ExternalToolError(TrafficStatsException):
    """vnstat 退出码非零、无法启动或超时"""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        returncode: Optional[int] = None,
        timed_out: bool = False,
    ):
        super().__init__(
            message,
            category=ErrorCategory.TIMEOUT_ERROR if timed_out else ErrorCategory.EXTERNAL_TOOL_ERROR,
            details={"command": command, "returncode": returncode},
        )
        self.command = command
        self.returncode = returncode
        self.timed_out = timed_out
