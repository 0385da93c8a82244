"""Traffic Stats Service - vnstat 网络流量统计 HTTP 服务

调用 vnstat 命令行工具获取流量统计，翻译为中文并归一化为统一单位的表格行，
通过 FastAPI 对外提供接口。
"""

__version__ = "1.3.0"
__author__ = "Traffic Stats Team"
