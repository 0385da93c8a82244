import asyncio
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from traffic_stats_service.app_factory import create_app
from traffic_stats_service.cache_manager import CacheManager
from traffic_stats_service.config import Config
from traffic_stats_service.exceptions import ExternalToolError
from traffic_stats_service.vnstat_runner import VnstatRunner


class FakeClock:
    """可手动推进的时钟，替代 time.monotonic"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeVnstatRunner(VnstatRunner):
    """不启动子进程的 vnstat 执行器，按命令行返回预设输出"""

    def __init__(self, outputs=None, failures=None, delay: float = 0.0):
        super().__init__(binary="vnstat", timeout=5)
        self.outputs = dict(outputs or {})
        self.failures = dict(failures or {})
        self.delay = delay
        self.calls = []

    async def run(self, argv):
        command = " ".join(argv)
        self.calls.append(command)
        if self.delay:
            await asyncio.sleep(self.delay)
        if command in self.failures:
            raise ExternalToolError(self.failures[command], command=command, returncode=1)
        return self.outputs.get(command, "")


def build_daily_output(today: date) -> str:
    """vnstat -d 输出：20天前、昨天、今天三行"""
    old = today - timedelta(days=20)
    yesterday = today - timedelta(days=1)
    return "\n".join([
        " eth0  /  daily",
        "",
        "          day        rx      |     tx      |    total    |   avg. rate",
        "     ------------------------+-------------+-------------+---------------",
        f"     {old:%Y-%m-%d}      1.00 GiB |  512.00 MiB |    1.50 GiB |  145.63 kbit/s",
        f"     {yesterday:%Y-%m-%d}   2048.00 MiB |    1.00 GiB |    3.00 GiB |  291.27 kbit/s",
        f"     {today:%Y-%m-%d}    100.00 MiB |   50.00 MiB |  150.00 MiB |   14.22 kbit/s",
        "     ------------------------+-------------+-------------+---------------",
        "     estimated    200.00 MiB |  100.00 MiB |  300.00 MiB |",
        "",
    ])


MONTHLY_OUTPUT = "\n".join([
    " eth0  /  monthly",
    "",
    "       month        rx      |     tx      |    total    |   avg. rate",
    "     ------------------------+-------------+-------------+---------------",
    "       2024-01     10.00 GiB |    5.00 GiB |   15.00 GiB |   48.03 kbit/s",
    "       2024-02      1.00 TiB |  512.00 GiB |    1.50 TiB |    5.02 Mbit/s",
    "     ------------------------+-------------+-------------+---------------",
    "     estimated     12.00 GiB |    6.00 GiB |   18.00 GiB |",
    "",
])

LIVE_OUTPUT = "\n".join([
    "15 packets sampled in 5 seconds",
    "Traffic average for eth0",
    "",
    "      rx         1.23 kbit/s             2 packets/s",
    "      tx         4.56 kbit/s             3 packets/s",
    "",
])

IFLIST_OUTPUT = "Available interfaces: eth0 wlan0 docker0\n"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def daily_output():
    return build_daily_output(date.today())


@pytest.fixture
def fake_runner(daily_output):
    return FakeVnstatRunner(outputs={
        "vnstat -d -i eth0": daily_output,
        "vnstat -m -i eth0": MONTHLY_OUTPUT,
        "vnstat -tr -i eth0": LIVE_OUTPUT,
        "vnstat --iflist": IFLIST_OUTPUT,
        "vnstat -i eth0 --oneline": "1;eth0;2024-01-01;1 GiB\n",
        "vnstat -i wlan0 --oneline": "1;wlan0;2024-01-01;2 GiB\n",
        "vnstat -i eth0 --begin 2024-01-01 --end 2024-01-31 -d": "          day        rx      |     tx\n",
    })


@pytest.fixture
def cache_manager():
    # 间隔为0时不启动后台清理任务
    return CacheManager(max_size=10, max_memory_bytes=1024 * 1024, cleanup_interval=0)


@pytest.fixture
def app(fake_runner, cache_manager):
    config = Config()
    config.monitoring.memory_monitor_interval_ms = 0
    return create_app(config, runner=fake_runner, cache_manager=cache_manager)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
