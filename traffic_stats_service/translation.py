"""
翻译模块

把 vnstat 的英文输出翻译为中文显示文本。翻译由有序规则表驱动：
先匹配三条特殊格式规则（采样说明、采样包数、流量平均值），
其余行依次应用短语表中的每一条规则。
"""

import re
from typing import Iterable, List, Optional, Sequence, Tuple

# 短语翻译表，顺序即应用顺序
TRANSLATIONS: Tuple[Tuple[str, str], ...] = (
    ("month", "月份"),
    ("day", "日期"),
    ("hour", "小时"),
    ("rx", "接收"),
    ("tx", "发送"),
    ("total", "总计"),
    ("avg. rate", "平均速率"),
    ("estimated", "预计"),
    ("daily", "每日"),
    ("monthly", "每月"),
    ("hourly", "每小时"),
    ("yearly", "每年"),
    ("year", "年份"),
    ("time", "时间"),
    ("Available interfaces", "可用接口"),
    ("received", "接收"),
    ("transmitted", "发送"),
    ("Sampling", "正在采样"),
    ("seconds average", "秒平均值"),
    ("packets sampled in", "个数据包采样于"),
    ("seconds", "秒"),
    ("Traffic average for", "流量平均值 -"),
    ("current rate", "当前速率"),
    ("bytes", "字节"),
    ("packets", "数据包"),
    ("packets/s", "包/秒"),
    ("bits/s", "b/秒"),
    ("kbit/s", "kb/秒"),
    ("Mbit/s", "Mb/秒"),
    ("Gbit/s", "Gb/秒"),
    ("KiB/s", "KB/秒"),
    ("MiB/s", "MB/秒"),
    ("GiB/s", "GB/秒"),
    ("yesterday", "昨天"),
    ("today", "今天"),
    ("last 5 minutes", "最近5分钟"),
    ("last hour", "最近1小时"),
    ("last day", "最近24小时"),
    ("last month", "最近30天"),
)

# 翻译后的标签，供后续处理阶段识别
ESTIMATED_LABEL = "预计"
RECEIVED_LABEL = "接收"
TRANSMITTED_LABEL = "发送"
TOTAL_LABEL = "总计"
AVERAGE_RATE_LABEL = "平均速率"
# 表头时间列标签，按识别优先级排列
TEMPORAL_LABELS: Tuple[str, ...] = ("时间", "小时", "日期", "月份", "年份")


class TranslationRule:
    """整词、忽略大小写的短语替换规则

    整词边界按 ASCII 判定，与中文字符相邻也视为边界。
    """

    def __init__(self, source: str, target: str):
        self.source = source
        self.target = target
        self.pattern = re.compile(
            r"\b" + re.escape(source) + r"\b",
            re.IGNORECASE | re.ASCII,
        )

    def apply(self, line: str) -> str:
        # 函数替换避免目标文本中的反斜杠被当作分组引用
        return self.pattern.sub(lambda _m: self.target, line)

    def __repr__(self) -> str:
        return f"TranslationRule({self.source!r} -> {self.target!r})"


class PatternRule:
    """固定格式的正则替换规则，只替换第一次出现"""

    def __init__(self, name: str, pattern: str, template: str, trigger: Optional[str] = None):
        self.name = name
        self.pattern = re.compile(pattern)
        self.template = template
        self.trigger = trigger

    def matches(self, line: str) -> bool:
        if self.trigger is not None:
            return self.trigger in line
        return self.pattern.search(line) is not None

    def apply(self, line: str) -> str:
        return self.pattern.sub(self.template, line, count=1)


SAMPLING_RULE = PatternRule(
    "sampling",
    r"Sampling ([^ ]+) \((\d+) seconds average\)",
    r"正在采样 \1 (\2秒平均值)",
    trigger="Sampling",
)
PACKETS_SAMPLED_RULE = PatternRule(
    "packets_sampled",
    r"(\d+) packets sampled in (\d+) seconds",
    r"\1 个数据包采样于 \2 秒",
)
TRAFFIC_AVERAGE_RULE = PatternRule(
    "traffic_average",
    r"Traffic average for (.+)",
    r"流量平均值 - \1",
    trigger="Traffic average for",
)


class Translator:
    """按规则表翻译 vnstat 输出"""

    def __init__(
        self,
        table: Sequence[Tuple[str, str]] = TRANSLATIONS,
    ):
        self.rules: List[TranslationRule] = [TranslationRule(src, dst) for src, dst in table]

    def translate_line(self, line: str) -> str:
        # 采样说明行同时可能包含采样包数
        if SAMPLING_RULE.matches(line):
            return PACKETS_SAMPLED_RULE.apply(SAMPLING_RULE.apply(line))
        if PACKETS_SAMPLED_RULE.matches(line):
            return PACKETS_SAMPLED_RULE.apply(line)
        if TRAFFIC_AVERAGE_RULE.matches(line):
            return TRAFFIC_AVERAGE_RULE.apply(line)

        for rule in self.rules:
            line = rule.apply(line)
        return line

    def translate_lines(self, lines: Iterable[str]) -> List[str]:
        return [self.translate_line(line) for line in lines]

    def translate(self, text: str) -> str:
        return "\n".join(self.translate_lines(text.split("\n")))


default_translator = Translator()


def translate_output(text: str) -> str:
    """翻译整段 vnstat 输出"""
    return default_translator.translate(text)
