# -*- coding: utf-8 -*-
"""
条目投影

功能：
- 将条目、订阅源信息与用户条目状态合并为扁平的 `ItemSchema`

公开接口：
- `ItemRecord`
- `project_item`
- `project_items`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from ..models import Feed, Item, UserItem
from ..schemas import ItemSchema
from ..utils import _normalize_datetime_utc


@dataclass(frozen=True)
class ItemRecord:
    """条目及其关联数据；`state` 为该用户的唯一状态行，可能不存在。"""

    item: Item
    feed: Optional[Feed]
    state: Optional[UserItem] = None


def project_item(record: ItemRecord) -> ItemSchema:
    item, feed, state = record.item, record.feed, record.state
    return ItemSchema(
        id=item.id,
        feed_id=item.feed_id,
        url=item.url,
        title=item.title,
        content=item.website_content,
        feed_title=feed.title if feed else None,
        feed_logo_url=feed.logo_url if feed else None,
        marked_read=bool(state.marked_read) if state else False,
        in_read_later=bool(state.in_read_later) if state else False,
        note=state.note if state else None,
        bookmark_folders=[folder.name for folder in state.bookmark_folders]
        if state
        else [],
        created_at=_normalize_datetime_utc(item.created_at),
        marked_read_time=_normalize_datetime_utc(state.marked_read_time)
        if state
        else None,
    )


def project_items(
    items: Sequence[Item],
    states: Mapping[int, UserItem],
) -> List[ItemSchema]:
    """按原顺序投影一页条目。"""
    return [
        project_item(ItemRecord(item=item, feed=item.feed, state=states.get(item.id)))
        for item in items
    ]
