from traffic_stats_service.processors.output_formatter import (
    StatsRow,
    build_header,
    force_header,
    header_label,
    insert_column_delimiter,
    is_header_line,
)


def test_build_header():
    assert build_header("日期", "GiB") == "日期\t| 接收(GiB)\t| 发送(GiB)\t| 总计(GiB)\t| 平均速率"


def test_header_label_priority():
    assert header_label("  时间  接收 | 发送") == "时间"
    assert header_label("  月份  接收 | 发送") == "月份"
    # 缺少接收列不算表头
    assert header_label("  日期  2025-03-10") is None
    assert not is_header_line("流量平均值 - eth0")


def test_force_header_replaces_line():
    line = "       年份        接收      |     发送      |    总计    |   平均速率"
    assert force_header(line, "TiB") == "年份\t| 接收(TiB)\t| 发送(TiB)\t| 总计(TiB)\t| 平均速率"
    assert force_header("plain", "TiB") == "plain"


def test_insert_delimiter_time_of_day():
    assert insert_column_delimiter("    13:45     2.00 MiB |") == "    13:45 |     2.00 MiB |"


def test_insert_delimiter_dates():
    assert insert_column_delimiter("  2025-03-10   1.00 GiB |") == "  2025-03-10 |   1.00 GiB |"
    assert insert_column_delimiter("  2024-01   1.00 GiB |") == "  2024-01 |   1.00 GiB |"
    assert insert_column_delimiter("  2024   1.00 TiB |") == "  2024 |   1.00 TiB |"


def test_insert_delimiter_is_not_repeated():
    line = "  2025-03-10 |   1.00 GiB |"
    assert insert_column_delimiter(line) == line


def test_insert_delimiter_ignores_other_lines():
    assert insert_column_delimiter("      接收   1.23 kb/秒") == "      接收   1.23 kb/秒"


def test_stats_row_round_trip_keeps_extra_columns():
    row = StatsRow.from_line("  2024 |  1.00 TiB |  2.00 TiB |  3.00 TiB |  5 Mb/秒 | x")
    assert row.received == "1.00 TiB"
    assert row.total == "3.00 TiB"
    assert row.average_rate == "5 Mb/秒"
    assert row.to_line() == "  2024 | 1.00 TiB| 2.00 TiB| 3.00 TiB|  5 Mb/秒 | x"


def test_stats_row_requires_five_columns():
    assert StatsRow.from_line("a | b | c | d") is None
