import pytest

from traffic_stats_service.processors.unit_normalizer import (
    normalize_line,
    normalize_value,
    target_unit_for,
    to_mib,
)


@pytest.mark.parametrize("period, unit", [
    ("5", "MiB"),
    ("h", "MiB"),
    ("d", "GiB"),
    ("m", "GiB"),
    ("y", "TiB"),
    ("l", "MiB"),
])
def test_target_unit_for(period, unit):
    assert target_unit_for(period) == unit


def test_normalize_value_scales_between_units():
    assert normalize_value("2048.00 MiB", "GiB") == "2.00 GiB"
    assert normalize_value("2048.00 MiB", "MiB") == "2048.00 MiB"
    assert normalize_value("1.50 TiB", "GiB") == "1536.00 GiB"
    assert normalize_value("512.00 GiB", "TiB") == "0.50 TiB"
    assert normalize_value("512.00 KiB", "MiB") == "0.50 MiB"


def test_normalize_value_without_unit_is_mib():
    assert normalize_value("1024", "GiB") == "1.00 GiB"


def test_normalize_value_unit_case_insensitive():
    assert normalize_value("1 gib", "MiB") == "1024.00 MiB"


def test_unparseable_value_is_returned_unchanged():
    assert normalize_value("n/a", "GiB") == "n/a"
    assert normalize_value("", "GiB") == ""
    assert normalize_value("...", "GiB") == "..."


def test_to_mib():
    assert to_mib(1, "TiB") == 1024 * 1024
    assert to_mib(3, None) == 3


def test_normalize_line():
    line = "     2025-03-09 |   2048.00 MiB |    1.00 GiB |    3.00 GiB |  291.27 kb/秒"
    assert normalize_line(line, "GiB") == "     2025-03-09 | 2.00 GiB| 1.00 GiB| 3.00 GiB|  291.27 kb/秒"


def test_short_line_is_unchanged():
    line = "  接收  1.00 MiB | 2.00 MiB"
    assert normalize_line(line, "GiB") == line
