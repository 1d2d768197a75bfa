# -*- coding: utf-8 -*-
"""
订阅起点过滤

公开接口：
- `filter_by_subscription_window`
"""

from __future__ import annotations

from typing import List, Mapping, Sequence

from ..models import Item, UserFeed
from ..utils import _normalize_datetime_utc


def filter_by_subscription_window(
    items: Sequence[Item],
    subscriptions: Mapping[int, UserFeed],
) -> List[Item]:
    """丢弃早于用户订阅起点的条目，避免订阅时把整个历史积压灌入未读列表。"""
    kept: List[Item] = []
    for item in items:
        subscription = subscriptions.get(item.feed_id)
        start = (
            _normalize_datetime_utc(subscription.pagination_start_timestamp)
            if subscription
            else None
        )
        if start is None or start <= _normalize_datetime_utc(item.created_at):
            kept.append(item)
    return kept
