import math
from datetime import datetime
from typing import Optional

import pytz


def format_timestamp(dt: Optional[datetime] = None) -> str:
    """格式化时间戳（UTC，ISO 8601）"""
    if not dt:
        dt = datetime.now(pytz.utc)
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc).isoformat().replace("+00:00", "Z")


def round_half_up(value: float) -> int:
    """四舍五入取整（与前端 Math.round 一致，不使用银行家舍入）"""
    return int(math.floor(value + 0.5))


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """数据库（如 SQLite）读出的时间不带时区，统一视为 UTC"""
    if dt is None or dt.tzinfo is not None:
        return dt
    return pytz.utc.localize(dt)
