"""
服务配置
启动时从环境变量读取一次，定义所有配置参数
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_int(name: str, default: int) -> int:
    """读取整数环境变量，无效值回退到默认值"""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value or default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass
class ServerConfig:
    """服务器配置"""
    host: str = "0.0.0.0"
    port: int = 10089


@dataclass
class CacheConfig:
    """缓存配置"""
    max_size: int = 100  # 最大条目数
    max_memory_mb: int = 50  # 最大内存(MB)
    cleanup_interval_ms: int = 60000  # 过期清理间隔(毫秒)

    @property
    def max_memory_bytes(self) -> int:
        return self.max_memory_mb * 1024 * 1024

    @property
    def cleanup_interval(self) -> float:
        """清理间隔(秒)"""
        return self.cleanup_interval_ms / 1000.0


@dataclass
class MonitoringConfig:
    """监控配置"""
    memory_monitor_interval_ms: int = 300000  # 5分钟

    @property
    def memory_monitor_interval(self) -> float:
        return self.memory_monitor_interval_ms / 1000.0


@dataclass
class VnstatConfig:
    """vnstat 命令配置"""
    binary: str = "vnstat"
    timeout: float = 30.0  # 子进程超时(秒)


@dataclass
class LoggingConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None


@dataclass
class Config:
    """主配置类"""
    server: ServerConfig = field(default_factory=ServerConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    vnstat: VnstatConfig = field(default_factory=VnstatConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load_from_env(cls) -> "Config":
        """从环境变量加载配置"""
        config = cls()

        # 服务器配置
        config.server.host = os.getenv("HOST", config.server.host)
        config.server.port = _env_int("PORT", config.server.port)

        # 缓存配置
        config.cache.max_size = _env_int("CACHE_MAX_SIZE", config.cache.max_size)
        config.cache.max_memory_mb = _env_int("CACHE_MAX_MEMORY_MB", config.cache.max_memory_mb)
        config.cache.cleanup_interval_ms = _env_int("CACHE_CLEANUP_INTERVAL", config.cache.cleanup_interval_ms)

        # 监控配置
        config.monitoring.memory_monitor_interval_ms = _env_int(
            "MEMORY_MONITOR_INTERVAL", config.monitoring.memory_monitor_interval_ms
        )

        # vnstat 配置
        config.vnstat.binary = os.getenv("VNSTAT_BIN", config.vnstat.binary)
        config.vnstat.timeout = _env_float("VNSTAT_TIMEOUT", config.vnstat.timeout)

        # 日志配置
        config.logging.level = os.getenv("LOG_LEVEL", config.logging.level).upper()
        config.logging.file_path = os.getenv("LOG_FILE_PATH", config.logging.file_path)

        return config
