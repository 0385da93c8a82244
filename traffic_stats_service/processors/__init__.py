"""vnstat 输出处理：时间过滤、格式化、单位归一化与流水线编排"""

from .output_formatter import StatsRow, build_header, force_header, insert_column_delimiter
from .recency_filter import PERIOD_RECENCY_CLASS, filter_stats_by_time, is_recent
from .stats_pipeline import StatsPipeline, process_stats
from .unit_normalizer import PERIOD_UNIT_MAP, normalize_line, normalize_value, target_unit_for

__all__ = [
    "StatsRow",
    "build_header",
    "force_header",
    "insert_column_delimiter",
    "PERIOD_RECENCY_CLASS",
    "filter_stats_by_time",
    "is_recent",
    "StatsPipeline",
    "process_stats",
    "PERIOD_UNIT_MAP",
    "normalize_line",
    "normalize_value",
    "target_unit_for",
]
