"""
时间窗口过滤

按周期只保留最近时间窗口内的数据行：
- minutes: 最近60分钟（5分钟统计）
- hours:   最近12小时（小时统计）
- days:    最近12天且不晚于当前时间（每日统计）
分隔线之前的表头行、空行原样保留。
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence

logger = logging.getLogger(__name__)

DIVIDER_MARKER = "---"

MINUTES = "minutes"
HOURS = "hours"
DAYS = "days"

# 周期代码 -> 过滤类型，其余周期(l/m/y)不过滤
PERIOD_RECENCY_CLASS: Dict[str, str] = {
    "5": MINUTES,
    "h": HOURS,
    "d": DAYS,
}

RECENCY_WINDOWS: Dict[str, timedelta] = {
    MINUTES: timedelta(minutes=60),
    HOURS: timedelta(hours=12),
    DAYS: timedelta(days=12),
}

TIME_OF_DAY_PATTERN = re.compile(r"(\d{2}):(\d{2})")
US_DATE_PATTERN = re.compile(r"(\d{2})/(\d{2})/(\d{2})")
ISO_DATE_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


def _time_today(now: datetime, hour: int, minute: int) -> Optional[datetime]:
    """今天的 hour:minute，晚于当前时间则视为昨天"""
    try:
        line_time = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    except ValueError:
        return None
    if line_time > now:
        line_time -= timedelta(days=1)
    return line_time


def _parse_minutes(line: str, now: datetime) -> Optional[datetime]:
    match = TIME_OF_DAY_PATTERN.search(line)
    if not match:
        return None
    return _time_today(now, int(match.group(1)), int(match.group(2)))


def _parse_hours(line: str, now: datetime) -> Optional[datetime]:
    match = TIME_OF_DAY_PATTERN.search(line)
    if not match:
        return None
    return _time_today(now, int(match.group(1)), 0)


def _parse_days(line: str, now: datetime) -> Optional[datetime]:
    match = US_DATE_PATTERN.search(line)
    try:
        if match:
            month, day, year = (int(g) for g in match.groups())
            return datetime(2000 + year, month, day)
        match = ISO_DATE_PATTERN.search(line)
        if match:
            year, month, day = (int(g) for g in match.groups())
            return datetime(year, month, day)
    except ValueError:
        return None
    return None


_PARSERS: Dict[str, Callable[[str, datetime], Optional[datetime]]] = {
    MINUTES: _parse_minutes,
    HOURS: _parse_hours,
    DAYS: _parse_days,
}


def is_recent(line: str, recency_class: str, now: Optional[datetime] = None) -> bool:
    """判断单条数据行是否落在时间窗口内，无法解析时间的行视为不在窗口内"""
    now = now or datetime.now()
    parser = _PARSERS.get(recency_class)
    if parser is None:
        return False

    line_time = parser(line, now)
    if line_time is None:
        return False

    elapsed = now - line_time
    if recency_class == DAYS and elapsed < timedelta(0):
        return False
    return elapsed <= RECENCY_WINDOWS[recency_class]


def filter_stats_by_time(
    lines: Sequence[str],
    recency_class: str,
    now: Optional[datetime] = None,
) -> List[str]:
    """按时间窗口过滤行

    第一条分隔线（含 ``---``）及其之前的行全部保留。
    """
    now = now or datetime.now()
    result: List[str] = []
    in_header = True

    for line in lines:
        if in_header:
            result.append(line)
            if DIVIDER_MARKER in line:
                in_header = False
            continue

        if not line.strip():
            result.append(line)
            continue

        if is_recent(line, recency_class, now):
            result.append(line)

    logger.debug(f"时间过滤({recency_class}): {len(lines)} -> {len(result)} 行")
    return result
