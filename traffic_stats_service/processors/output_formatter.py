"""
输出格式化

- 强制生成标准五列表头（接收/发送/总计带目标单位）
- 在行首时间/日期标签后插入列分隔符 ``|``
- 数据行与 StatsRow 之间的互相转换
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..translation import (
    AVERAGE_RATE_LABEL,
    RECEIVED_LABEL,
    TEMPORAL_LABELS,
    TOTAL_LABEL,
    TRANSMITTED_LABEL,
)

COLUMN_DELIMITER = "|"
MIN_DATA_COLUMNS = 5

# 行首标签格式，依次尝试；已有分隔符的行不再插入
_LEADING_TOKEN_PATTERNS = (
    re.compile(r"^(\s*\d{2}(?::\d{2})?)(\s+)(?=[^\s|])"),  # HH:MM / HH
    re.compile(r"^(\s*\d{4}-\d{2}-\d{2})(\s+)(?=[^\s|])"),  # YYYY-MM-DD
    re.compile(r"^(\s*\d{4}-\d{2})(\s+)(?=[^\s|])"),  # YYYY-MM
    re.compile(r"^(\s*\d{4})(\s+)(?=[^\s|])"),  # YYYY
)


def build_header(label: str, unit: str) -> str:
    """标准表头，平均速率列不带单位"""
    return (
        f"{label}\t| {RECEIVED_LABEL}({unit})\t| {TRANSMITTED_LABEL}({unit})"
        f"\t| {TOTAL_LABEL}({unit})\t| {AVERAGE_RATE_LABEL}"
    )


def header_label(line: str) -> Optional[str]:
    """表头行返回其时间列标签，否则返回 None"""
    if RECEIVED_LABEL not in line:
        return None
    for label in TEMPORAL_LABELS:
        if label in line:
            return label
    return None


def is_header_line(line: str) -> bool:
    return header_label(line) is not None


def force_header(line: str, unit: str) -> str:
    label = header_label(line)
    if label is None:
        return line
    return build_header(label, unit)


def insert_column_delimiter(line: str) -> str:
    """在行首时间/日期标签后插入 `` |``"""
    for pattern in _LEADING_TOKEN_PATTERNS:
        line = pattern.sub(r"\1 |\2", line, count=1)
    return line


@dataclass
class StatsRow:
    """一条已分列的数据行

    ``extra`` 保存平均速率列及其后的所有列，序列化时原样拼回。
    """
    label: str
    received: str
    transmitted: str
    total: str
    extra: List[str] = field(default_factory=list)

    @property
    def average_rate(self) -> str:
        return self.extra[0].strip() if self.extra else ""

    @classmethod
    def from_line(cls, line: str) -> Optional["StatsRow"]:
        """列数不足的行（非数据行）返回 None"""
        parts = line.split(COLUMN_DELIMITER)
        if len(parts) < MIN_DATA_COLUMNS:
            return None
        return cls(
            label=parts[0],
            received=parts[1].strip(),
            transmitted=parts[2].strip(),
            total=parts[3].strip(),
            extra=parts[4:],
        )

    def to_line(self) -> str:
        columns = [
            self.label,
            f" {self.received}",
            f" {self.transmitted}",
            f" {self.total}",
            *self.extra,
        ]
        return COLUMN_DELIMITER.join(columns)
