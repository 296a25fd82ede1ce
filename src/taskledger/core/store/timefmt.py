"""时间戳存储格式

统一为 UTC + 微秒精度的 ISO-8601 文本，保证字典序即时间序，
报表查询可以直接用字符串比较做时间下界过滤。
"""

from datetime import UTC, datetime


def format_ts(value: datetime) -> str:
    """datetime -> 存储文本（naive 时间按 UTC 处理）"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def parse_ts(value: str) -> datetime:
    return datetime.fromisoformat(value)
