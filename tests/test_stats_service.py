import asyncio

import pytest

from traffic_stats_service.exceptions import ExternalToolError, ValidationError
from traffic_stats_service.stats_service import StatsService, get_cache_time_for_period

from conftest import FakeVnstatRunner, MONTHLY_OUTPUT


@pytest.fixture
def service(cache_manager, fake_runner):
    return StatsService(cache_manager, fake_runner)


@pytest.mark.parametrize("period, ttl", [
    ("5", 30),
    ("h", 60),
    ("d", 120),
    ("m", 300),
    ("y", 600),
    ("x", 60),
])
def test_cache_time_for_period(period, ttl):
    assert get_cache_time_for_period(period) == ttl


def test_second_request_is_served_from_cache(service, fake_runner, cache_manager):
    first = asyncio.run(service.get_stats("eth0", "m"))
    second = asyncio.run(service.get_stats("eth0", "m"))

    assert first == second
    assert fake_runner.calls == ["vnstat -m -i eth0"]
    assert "stats:eth0:m" in cache_manager
    assert cache_manager.stats()["hits"] == 1


def test_live_period_bypasses_cache(service, fake_runner, cache_manager):
    asyncio.run(service.get_stats("eth0", "l"))
    asyncio.run(service.get_stats("eth0", "l"))

    assert fake_runner.calls == ["vnstat -tr -i eth0", "vnstat -tr -i eth0"]
    assert len(cache_manager) == 0
    assert cache_manager.stats()["misses"] == 0


def test_failure_is_not_cached(cache_manager):
    runner = FakeVnstatRunner(failures={"vnstat -d -i eth0": "Command failed: vnstat -d -i eth0"})
    service = StatsService(cache_manager, runner)

    for _ in range(2):
        with pytest.raises(ExternalToolError):
            asyncio.run(service.get_stats("eth0", "d"))

    assert len(runner.calls) == 2
    assert len(cache_manager) == 0


def test_validation_happens_before_running_vnstat(service, fake_runner):
    with pytest.raises(ValidationError):
        asyncio.run(service.get_stats("-eth0", "d"))
    with pytest.raises(ValidationError):
        asyncio.run(service.get_stats("eth0", "w"))
    with pytest.raises(ValidationError):
        asyncio.run(service.get_range_stats("eth0", "2024-01-01", "2024/01/31"))
    assert fake_runner.calls == []


def test_concurrent_misses_both_run_vnstat(cache_manager):
    runner = FakeVnstatRunner(outputs={"vnstat -m -i eth0": MONTHLY_OUTPUT}, delay=0.01)
    service = StatsService(cache_manager, runner)

    async def scenario():
        return await asyncio.gather(
            service.get_stats("eth0", "m"),
            service.get_stats("eth0", "m"),
        )

    first, second = asyncio.run(scenario())
    assert first == second
    assert runner.calls == ["vnstat -m -i eth0", "vnstat -m -i eth0"]
    assert len(cache_manager) == 1


def test_range_stats_are_translated_and_cached(service, fake_runner, cache_manager):
    result = asyncio.run(service.get_range_stats("eth0", "2024-01-01", "2024-01-31"))
    asyncio.run(service.get_range_stats("eth0", "2024-01-01", "2024-01-31"))

    assert result == {"data": ["          日期        接收      |     发送", ""]}
    assert fake_runner.calls == ["vnstat -i eth0 --begin 2024-01-01 --end 2024-01-31 -d"]
    assert "range:eth0:2024-01-01:2024-01-31" in cache_manager


def test_list_interfaces_keeps_probed_interfaces(service, fake_runner, cache_manager):
    result = asyncio.run(service.list_interfaces())
    assert result == {"interfaces": ["eth0", "wlan0"]}

    asyncio.run(service.list_interfaces())
    assert fake_runner.calls.count("vnstat --iflist") == 1
    assert "interfaces:" in cache_manager


def test_list_interfaces_defaults_to_eth0(cache_manager):
    runner = FakeVnstatRunner(outputs={"vnstat --iflist": "Available interfaces: lo\n"})
    service = StatsService(cache_manager, runner)
    assert asyncio.run(service.list_interfaces()) == {"interfaces": ["eth0"]}


def test_list_interfaces_skips_invalid_names(cache_manager):
    runner = FakeVnstatRunner(outputs={
        "vnstat --iflist": "Available interfaces: (bad) eth1\n",
        "vnstat -i eth1 --oneline": "1;eth1\n",
    })
    service = StatsService(cache_manager, runner)
    assert asyncio.run(service.list_interfaces()) == {"interfaces": ["eth1"]}
    assert "vnstat -i (bad) --oneline" not in runner.calls
