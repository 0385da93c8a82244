#!/usr/bin/env python3
"""Traffic Stats Service - Main entry point.

Starts the HTTP service with configuration read from the environment.

Environment Variables:
  PORT                      Listening port (default: 10089)
  CACHE_MAX_SIZE            Max cache entries (default: 100)
  CACHE_MAX_MEMORY_MB       Max cache memory in MB (default: 50)
  CACHE_CLEANUP_INTERVAL    Expiry sweep interval in ms (default: 60000)
  MEMORY_MONITOR_INTERVAL   Memory log interval in ms (default: 300000)
  LOG_LEVEL                 Log level (default: INFO)
"""

import errno
import logging
import socket
import sys

import uvicorn

from .app_factory import create_app
from .config import Config, LoggingConfig

logger = logging.getLogger(__name__)


def setup_logging(config: LoggingConfig) -> None:
    """设置日志配置"""
    logging.basicConfig(
        level=getattr(logging, config.level, logging.INFO),
        format=config.format,
        handlers=[
            logging.StreamHandler(sys.stdout),
            *([logging.FileHandler(config.file_path, encoding="utf-8")] if config.file_path else []),
        ],
    )

    # 访问日志由 RequestTrackingMiddleware 记录
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def check_port(host: str, port: int) -> bool:
    """端口可用返回 True"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError as e:
            if e.errno == errno.EADDRINUSE:
                return False
            raise
    return True


def main() -> None:
    config = Config.load_from_env()
    setup_logging(config.logging)

    try:
        port_free = check_port(config.server.host, config.server.port)
    except OSError as e:
        logger.error(f"启动服务器时发生错误: {e}", exc_info=True)
        sys.exit(1)
    if not port_free:
        logger.error(f"端口 {config.server.port} 已被占用，请尝试使用其他端口")
        logger.error("你可以通过设置环境变量 PORT 来指定其他端口，例如：PORT=8080")
        sys.exit(1)

    app = create_app(config)
    logger.info(f"服务器运行在 http://localhost:{config.server.port}")
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
