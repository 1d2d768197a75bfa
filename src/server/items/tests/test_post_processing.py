# -*- coding: utf-8 -*-
"""
页内后处理测试：最近已读重排、订阅起点过滤、条目投影、重复折叠
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Sequence

import pytest

from src.server.items.models import BookmarkFolder, Feed, Item, UserFeed, UserItem
from src.server.items.schemas import ItemSchema, SortOrder
from src.server.items.service.dedup import DuplicateSuppressor
from src.server.items.service.post_sort import stabilize_recently_read
from src.server.items.service.projector import ItemRecord, project_item
from src.server.items.service.subscription_window import filter_by_subscription_window
from .helpers import NOW, days_ago


def _schema(item_id: int, read_at: datetime | None = None) -> ItemSchema:
    return ItemSchema(
        id=item_id,
        feed_id=1,
        title=f"条目 {item_id}",
        created_at=NOW,
        marked_read=read_at is not None,
        marked_read_time=read_at,
    )


class StaticLookup:
    """返回固定分组的查找实现"""

    def __init__(self, groups: List[List[int]]) -> None:
        self.groups = groups
        self.calls: list[tuple[int, list[int], bool]] = []

    def find_duplicates(
        self, user_id: int, item_ids: Sequence[int], cross_feed: bool
    ) -> List[List[int]]:
        self.calls.append((user_id, list(item_ids), cross_feed))
        return self.groups


class BrokenLookup:
    def find_duplicates(
        self, user_id: int, item_ids: Sequence[int], cross_feed: bool
    ) -> List[List[int]]:
        raise RuntimeError("lookup down")


def test_recently_read_oldest_reorders_page() -> None:
    """按 ID 倒序抓取的 [D(t3), E(t1)] 在 Oldest 下应变为 [E, D]。"""
    d = _schema(2, days_ago(1))
    e = _schema(1, days_ago(3))

    result = stabilize_recently_read([d, e], SortOrder.OLDEST)

    assert [item.id for item in result] == [1, 2]


def test_recently_read_latest_orders_by_read_time_desc() -> None:
    page = [_schema(9, days_ago(5)), _schema(8, days_ago(1)), _schema(7, days_ago(3))]

    result = stabilize_recently_read(page, SortOrder.LATEST)

    assert [item.id for item in result] == [8, 7, 9]
    assert [item.id for item in page] == [9, 8, 7]


def test_recently_read_other_sorts_keep_fetch_order() -> None:
    page = [_schema(3, days_ago(5)), _schema(2, days_ago(1))]

    result = stabilize_recently_read(page, SortOrder.READABILITY_ASC)

    assert [item.id for item in result] == [3, 2]


def test_recently_read_missing_read_time_sorts_last_for_latest() -> None:
    page = [_schema(3), _schema(2, days_ago(1))]

    assert [i.id for i in stabilize_recently_read(page, SortOrder.LATEST)] == [2, 3]
    assert [i.id for i in stabilize_recently_read(page, SortOrder.OLDEST)] == [3, 2]


def test_subscription_window_drops_items_before_start() -> None:
    subscriptions = {
        1: UserFeed(user_id=1, feed_id=1, pagination_start_timestamp=days_ago(3)),
        2: UserFeed(user_id=1, feed_id=2, pagination_start_timestamp=None),
    }
    items = [
        Item(id=1, feed_id=1, title="旧", created_at=days_ago(5)),
        Item(id=2, feed_id=1, title="新", created_at=days_ago(1)),
        Item(id=3, feed_id=1, title="边界", created_at=days_ago(3)),
        Item(id=4, feed_id=2, title="无起点", created_at=days_ago(10)),
        Item(id=5, feed_id=3, title="无订阅", created_at=days_ago(10)),
    ]

    kept = filter_by_subscription_window(items, subscriptions)

    assert [item.id for item in kept] == [2, 3, 4, 5]


def test_subscription_window_handles_naive_timestamps() -> None:
    """SQLite 读回的时间不带时区，应按 UTC 比较。"""
    start = days_ago(3).replace(tzinfo=None)
    subscriptions = {1: UserFeed(user_id=1, feed_id=1, pagination_start_timestamp=start)}
    items = [Item(id=1, feed_id=1, title="新", created_at=days_ago(1))]

    assert filter_by_subscription_window(items, subscriptions) == items


def test_project_item_without_state_defaults_to_unread() -> None:
    feed = Feed(id=1, title="示例订阅源", logo_url="https://example.com/logo.png")
    item = Item(
        id=10,
        feed_id=1,
        title="标题",
        url="https://example.com/a",
        website_content="<p>正文</p>",
        created_at=datetime(2024, 5, 1, 8, 0),
    )

    projected = project_item(ItemRecord(item=item, feed=feed))

    assert projected.feed_title == "示例订阅源"
    assert projected.feed_logo_url == "https://example.com/logo.png"
    assert projected.content == "<p>正文</p>"
    assert projected.marked_read is False
    assert projected.in_read_later is False
    assert projected.note is None
    assert projected.bookmark_folders == []
    assert projected.marked_read_time is None
    assert projected.created_at == datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


def test_project_item_flattens_state() -> None:
    item = Item(id=10, feed_id=1, title="标题", created_at=NOW)
    state = UserItem(
        user_id=1,
        item_id=10,
        marked_read=True,
        marked_read_time=days_ago(1),
        in_read_later=True,
        note="值得再读",
    )
    state.bookmark_folders = [
        BookmarkFolder(user_id=1, name="稍后研究"),
        BookmarkFolder(user_id=1, name="收藏"),
    ]

    projected = project_item(ItemRecord(item=item, feed=None, state=state))

    assert projected.feed_title is None
    assert projected.marked_read is True
    assert projected.in_read_later is True
    assert projected.note == "值得再读"
    assert projected.bookmark_folders == ["稍后研究", "收藏"]
    assert projected.marked_read_time == days_ago(1)


def test_suppressor_keeps_first_member_of_each_group() -> None:
    page = [_schema(5), _schema(4), _schema(3), _schema(2)]
    lookup = StaticLookup([[3, 5], [2, 4]])

    result = DuplicateSuppressor(lookup).suppress(page, user_id=1, cross_feed=True)

    assert [item.id for item in result] == [5, 4]
    assert lookup.calls == [(1, [5, 4, 3, 2], True)]


def test_suppressor_uses_fetch_order_after_reordering() -> None:
    """页面被重排后仍保留抓取顺序中最先出现的条目。"""
    page = [_schema(1), _schema(2)]
    lookup = StaticLookup([[1, 2]])

    result = DuplicateSuppressor(lookup).suppress(
        page, user_id=1, cross_feed=False, fetch_order=[2, 1]
    )

    assert [item.id for item in result] == [2]


def test_suppressor_never_removes_whole_group() -> None:
    """分组成员只有部分在页内时，页内成员至少保留一个。"""
    page = [_schema(7), _schema(6)]
    lookup = StaticLookup([[99, 7], [98, 97]])

    result = DuplicateSuppressor(lookup).suppress(page, user_id=1, cross_feed=True)

    assert [item.id for item in result] == [7, 6]


def test_suppressor_fails_open_when_lookup_breaks() -> None:
    page = [_schema(2), _schema(1)]

    result = DuplicateSuppressor(BrokenLookup()).suppress(
        page, user_id=1, cross_feed=True
    )

    assert [item.id for item in result] == [2, 1]


@pytest.mark.parametrize("size", [0, 1])
def test_suppressor_skips_lookup_for_tiny_pages(size: int) -> None:
    lookup = StaticLookup([])
    page = [_schema(i) for i in range(size)]

    assert DuplicateSuppressor(lookup).suppress(page, 1, True) == page
    assert lookup.calls == []
