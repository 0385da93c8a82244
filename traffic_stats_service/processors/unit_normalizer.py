"""
单位归一化

把接收/发送/总计三列的流量值统一换算为周期对应的目标单位。
"""

import re
from typing import Dict, Optional

from .output_formatter import StatsRow

MIB = "MiB"
GIB = "GiB"
TIB = "TiB"

# 周期代码 -> 目标显示单位
PERIOD_UNIT_MAP: Dict[str, str] = {
    "5": MIB,  # 5分钟
    "h": MIB,  # 小时
    "d": GIB,  # 天
    "m": GIB,  # 月
    "y": TIB,  # 年
}

DEFAULT_UNIT = MIB

# 各单位对应的 MiB 数
UNIT_IN_MIB: Dict[str, float] = {
    "B": 1 / (1024 * 1024),
    "KIB": 1 / 1024,
    "MIB": 1.0,
    "GIB": 1024.0,
    "TIB": 1024.0 * 1024,
}

TARGET_UNITS = {MIB: 1.0, GIB: 1024.0, TIB: 1024.0 * 1024}

VALUE_PATTERN = re.compile(r"([\d.]+)\s*(KiB|MiB|GiB|TiB|B\b)?", re.IGNORECASE)


def target_unit_for(period: str) -> str:
    return PERIOD_UNIT_MAP.get(period, DEFAULT_UNIT)


def to_mib(value: float, unit: Optional[str]) -> float:
    """未带单位的数值按 MiB 处理"""
    return value * UNIT_IN_MIB[(unit or MIB).upper()]


def normalize_value(raw: str, target_unit: str) -> str:
    """``"2048.00 MiB"`` + ``GiB`` -> ``"2.00 GiB"``，无法解析时原样返回"""
    if not raw:
        return raw
    match = VALUE_PATTERN.search(raw)
    if not match:
        return raw
    try:
        number = float(match.group(1))
    except ValueError:
        return raw

    mib = to_mib(number, match.group(2))
    if target_unit not in TARGET_UNITS:
        target_unit = DEFAULT_UNIT
    return f"{mib / TARGET_UNITS[target_unit]:.2f} {target_unit}"


def normalize_row(row: StatsRow, target_unit: str) -> StatsRow:
    row.received = normalize_value(row.received, target_unit)
    row.transmitted = normalize_value(row.transmitted, target_unit)
    row.total = normalize_value(row.total, target_unit)
    return row


def normalize_line(line: str, target_unit: str) -> str:
    """少于5列的行视为非数据行，原样返回"""
    row = StatsRow.from_line(line)
    if row is None:
        return line
    return normalize_row(row, target_unit).to_line()
