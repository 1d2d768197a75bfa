# -*- coding: utf-8 -*-
"""
最近已读重排

公开接口：
- `stabilize_recently_read`

说明：
- 只在已抓取的一页内按已读时间重排，不保证跨页的全局已读时间顺序。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence

from ..schemas import ItemSchema, SortOrder
from ..utils import _normalize_datetime_utc

_MISSING = datetime.min.replace(tzinfo=timezone.utc)


def _read_time_key(item: ItemSchema) -> tuple[bool, datetime]:
    read_time = _normalize_datetime_utc(item.marked_read_time)
    return (read_time is not None, read_time or _MISSING)


def stabilize_recently_read(
    items: Sequence[ItemSchema],
    sort: SortOrder,
) -> List[ItemSchema]:
    """Latest 按已读时间倒序，Oldest 正序；其他排序保持抓取顺序。返回新列表。"""
    if sort is SortOrder.LATEST:
        return sorted(items, key=_read_time_key, reverse=True)
    if sort is SortOrder.OLDEST:
        return sorted(items, key=_read_time_key)
    return list(items)
