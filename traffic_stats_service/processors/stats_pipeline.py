"""
统计数据处理流水线

vnstat 原始输出 -> 翻译 -> 时间窗口过滤 -> 表头/分列格式化 -> 单位归一化 -> 预计行剔除
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..translation import ESTIMATED_LABEL, Translator, default_translator
from .output_formatter import force_header, insert_column_delimiter, is_header_line
from .recency_filter import DIVIDER_MARKER, PERIOD_RECENCY_CLASS, filter_stats_by_time
from .unit_normalizer import PERIOD_UNIT_MAP, normalize_line, target_unit_for

logger = logging.getLogger(__name__)

# 月/年统计去掉"预计"行
SUPPRESS_ESTIMATED_PERIODS = frozenset({"m", "y"})
# 实时数据不是表格，不插入列分隔符
UNDELIMITED_PERIODS = frozenset({"l"})


class StatsPipeline:
    """把一段 vnstat 输出转换为展示用的表格行"""

    def __init__(self, translator: Optional[Translator] = None):
        self.translator = translator or default_translator

    def process(self, raw_text: str, period: str, now: Optional[datetime] = None) -> List[str]:
        lines = self.translator.translate_lines(raw_text.split("\n"))

        recency_class = PERIOD_RECENCY_CLASS.get(period)
        if recency_class is not None:
            lines = filter_stats_by_time(lines, recency_class, now=now)

        target_unit = target_unit_for(period)
        result: List[str] = []
        for line in lines:
            formatted = self._format_line(line, period, target_unit)
            if formatted is not None:
                result.append(formatted)

        logger.debug(f"周期 {period} 处理完成: {len(result)} 行")
        return result

    def translate_only(self, raw_text: str) -> List[str]:
        """日期范围查询只做翻译"""
        return self.translator.translate_lines(raw_text.split("\n"))

    @staticmethod
    def _format_line(line: str, period: str, target_unit: str) -> Optional[str]:
        """返回 None 表示该行被剔除"""
        if DIVIDER_MARKER in line or not line.strip():
            return line
        if period in SUPPRESS_ESTIMATED_PERIODS and ESTIMATED_LABEL in line:
            return None
        if is_header_line(line):
            return force_header(line, target_unit)

        if period not in UNDELIMITED_PERIODS:
            line = insert_column_delimiter(line)
        if period in PERIOD_UNIT_MAP:
            line = normalize_line(line, target_unit)
        return line


def process_stats(raw_text: str, period: str, now: Optional[datetime] = None) -> List[str]:
    return StatsPipeline().process(raw_text, period, now=now)
