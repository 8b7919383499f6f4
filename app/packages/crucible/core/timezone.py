"""时间工具方法：统一时间戳的生成与格式化。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from zoneinfo import ZoneInfo

from app.packages.crucible.core.config import get_settings


def get_timezone() -> ZoneInfo:
    """返回配置指定的时区信息。"""
    return get_settings().timezone_info


def now() -> datetime:
    """返回当前时区的时间。"""
    return datetime.now(get_timezone())


def timestamp_to_rfc3339(value: Optional[float]) -> Optional[str]:
    """将 ``st_mtime`` 之类的 POSIX 时间戳转换为 UTC 的 RFC 3339 字符串。"""
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return None
