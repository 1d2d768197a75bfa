# -*- coding: utf-8 -*-
"""
重复条目折叠

功能：
- 每个重复组只保留一个代表条目（抓取顺序中最先出现者）

公开接口：
- `DuplicateLookup`
- `DuplicateSuppressor`

说明：
- 分组由 `DuplicateLookup` 提供，默认实现为 `ItemDuplicateDAO`，测试中可替换为内存实现。
- 查找失败时返回未折叠的原始页面，折叠只是体验优化，不影响主查询结果。
"""

from __future__ import annotations

from typing import List, Optional, Protocol, Sequence

from loguru import logger

from ..schemas import ItemSchema


class DuplicateLookup(Protocol):
    def find_duplicates(
        self,
        user_id: int,
        item_ids: Sequence[int],
        cross_feed: bool,
    ) -> List[List[int]]: ...


class DuplicateSuppressor:
    """重复条目折叠器"""

    def __init__(self, lookup: DuplicateLookup) -> None:
        self.lookup = lookup

    def suppress(
        self,
        items: Sequence[ItemSchema],
        user_id: int,
        cross_feed: bool,
        fetch_order: Optional[Sequence[int]] = None,
    ) -> List[ItemSchema]:
        """折叠重复条目。

        `fetch_order` 为抓取时的条目 ID 顺序；页面在抓取后被重排过时用它挑选代表条目，
        缺省时以 `items` 当前顺序为准。
        """
        if len(items) < 2:
            return list(items)

        order = list(fetch_order) if fetch_order is not None else [item.id for item in items]
        try:
            groups = self.lookup.find_duplicates(user_id, order, cross_feed)
        except Exception as exc:
            logger.warning(
                "重复条目查找失败，返回未折叠结果：user_id={}, error={}",
                user_id,
                exc,
            )
            return list(items)

        page_ids = {item.id for item in items}
        dropped: set[int] = set()
        for group in groups:
            members = set(group)
            present = [item_id for item_id in order if item_id in members and item_id in page_ids]
            dropped.update(present[1:])

        if dropped:
            logger.debug(
                "折叠重复条目：user_id={}, cross_feed={}, dropped={}",
                user_id,
                cross_feed,
                sorted(dropped),
            )
        return [item for item in items if item.id not in dropped]
