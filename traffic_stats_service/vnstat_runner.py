"""
vnstat 命令执行模块

负责参数校验、按周期构造命令行以及以异步子进程方式执行 vnstat。
命令以参数列表形式执行，不经过 shell。
"""

import asyncio
import logging
import re
from typing import List, Optional, Sequence

from .exceptions import ExternalToolError, ValidationError

logger = logging.getLogger(__name__)

INTERFACE_PATTERN = re.compile(r"^[a-zA-Z0-9]+[a-zA-Z0-9:._-]*$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

LIVE_PERIOD = "l"
VALID_PERIODS = ("l", "5", "h", "d", "m", "y")

INVALID_INTERFACE_MESSAGE = "无效的接口名称"
INVALID_PERIOD_MESSAGE = "无效的时间周期"
INVALID_DATE_MESSAGE = "无效的日期格式"

IFLIST_MARKER = "Available interfaces:"


def validate_interface(interface: str) -> str:
    if not interface or not INTERFACE_PATTERN.match(interface):
        raise ValidationError(INVALID_INTERFACE_MESSAGE, field="interface", value=interface)
    return interface


def validate_period(period: str) -> str:
    if period not in VALID_PERIODS:
        raise ValidationError(INVALID_PERIOD_MESSAGE, field="period", value=period)
    return period


def validate_date(value: str, field: str = "date") -> str:
    if not value or not DATE_PATTERN.match(value):
        raise ValidationError(INVALID_DATE_MESSAGE, field=field, value=value)
    return value


def parse_interface_list(output: str) -> List[str]:
    """解析 ``vnstat --iflist`` 输出中的接口名"""
    for line in output.split("\n"):
        if IFLIST_MARKER in line:
            return line.replace(IFLIST_MARKER, "").strip().split()
    return []


class VnstatRunner:
    """vnstat 命令执行器"""

    def __init__(self, binary: str = "vnstat", timeout: Optional[float] = 30.0):
        self.binary = binary
        self.timeout = timeout

    def stats_command(self, interface: str, period: str) -> List[str]:
        """按周期构造统计命令"""
        validate_interface(interface)
        validate_period(period)
        if period == LIVE_PERIOD:
            return [self.binary, "-tr", "-i", interface]
        return [self.binary, f"-{period}", "-i", interface]

    def range_command(self, interface: str, start_date: str, end_date: str) -> List[str]:
        validate_interface(interface)
        validate_date(start_date, "start_date")
        validate_date(end_date, "end_date")
        return [self.binary, "-i", interface, "--begin", start_date, "--end", end_date, "-d"]

    def iflist_command(self) -> List[str]:
        return [self.binary, "--iflist"]

    def probe_command(self, interface: str) -> List[str]:
        validate_interface(interface)
        return [self.binary, "-i", interface, "--oneline"]

    async def get_stats(self, interface: str, period: str) -> str:
        return await self.run(self.stats_command(interface, period))

    async def get_range(self, interface: str, start_date: str, end_date: str) -> str:
        return await self.run(self.range_command(interface, start_date, end_date))

    async def list_interfaces(self) -> List[str]:
        return parse_interface_list(await self.run(self.iflist_command()))

    async def probe_interface(self, interface: str) -> bool:
        """接口有数据时 ``--oneline`` 输出非空且退出码为0"""
        try:
            output = await self.run(self.probe_command(interface))
        except (ExternalToolError, ValidationError) as e:
            logger.debug(f"接口 {interface} 不可用: {e}")
            return False
        return bool(output.strip())

    async def run(self, argv: Sequence[str]) -> str:
        """执行命令并返回标准输出，失败抛出 ExternalToolError"""
        command = " ".join(argv)
        logger.debug(f"执行命令: {command}")

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"命令启动失败: {command}: {e}")
            raise ExternalToolError(str(e), command=command) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"命令执行超时({self.timeout}s): {command}")
            raise ExternalToolError(
                f"Command timed out after {self.timeout}s: {command}",
                command=command,
                timed_out=True,
            ) from e
        finally:
            # 超时或任务被取消时子进程仍在运行
            if process.returncode is None:
                await self._terminate(process, command)

        if process.returncode != 0:
            error_text = stderr.decode("utf-8", errors="replace").strip()
            message = f"Command failed: {command}"
            if error_text:
                message = f"{message}\n{error_text}"
            logger.warning(f"命令返回非零退出码 {process.returncode}: {command}")
            raise ExternalToolError(message, command=command, returncode=process.returncode)

        return stdout.decode("utf-8", errors="replace")

    @staticmethod
    async def _terminate(process: asyncio.subprocess.Process, command: str) -> None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
        await process.wait()
        logger.warning(f"已终止子进程 pid={process.pid}: {command}")
