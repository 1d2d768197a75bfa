# -*- coding: utf-8 -*-
"""
阅读视图过滤条件

功能：
- 将（视图类型，参数）映射为与数据库无关的过滤条件结构

公开接口：
- `ViewFilter`
- `build_view_filter`
- `resolve_direction`
- `recency_boundary`

内部方法：
- `_coerce_view`
- `_build_subscribed`
- `_build_discover`
- `_build_bookmarks`
- `_build_recently_read`
- `_build_newsletters`

说明：
- 本模块不访问数据库，过滤条件由 `ItemDAO` 编译为 SQL。
- 订阅源新鲜度约束作用于整个订阅源：只要订阅源存在早于窗口的条目，该源的全部条目都被排除。
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Literal, Optional, Sequence, Tuple

from ..config import items_config
from ..exceptions import ItemsValidationError, UnsupportedViewTypeError
from ..schemas import SortOrder, ViewType

Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class ViewFilter:
    """一次分页查询的完整过滤与排序描述。"""

    view: ViewType
    user_id: int
    direction: Direction
    boundary: datetime
    sort: SortOrder = SortOrder.LATEST
    feed_id: Optional[int] = None
    feed_ids: Optional[Tuple[int, ...]] = None
    require_subscription: bool = False
    recency_guard: bool = False
    exclude_read: bool = False
    bookmarked_only: bool = False
    read_since: Optional[datetime] = None
    newsletters_only: bool = False
    apply_subscription_window: bool = False
    # None 表示该视图不做重复折叠
    dedup_cross_feed: Optional[bool] = None
    sort_by_read_time: bool = False


def recency_boundary(now: datetime | None = None, days: int | None = None) -> datetime:
    """返回近期窗口的起点。"""
    now = now or datetime.now(timezone.utc)
    if days is None:
        days = items_config.items_recency_window_days
    return now - timedelta(days=days)


def resolve_direction(view: ViewType, sort: SortOrder) -> Direction:
    """最近已读视图固定按 ID 倒序抓取，其余视图按请求排序。"""
    if view is ViewType.RECENTLY_READ:
        return "desc"
    if sort is SortOrder.LATEST:
        return "desc"
    # Oldest 以及暂无定义的可读性/正文长度排序都按 ID 正序抓取
    return "asc"


def _coerce_view(view: ViewType | str) -> ViewType:
    if isinstance(view, ViewType):
        return view
    try:
        return ViewType(view)
    except ValueError:
        raise UnsupportedViewTypeError(view) from None


def _build_subscribed(base: ViewFilter) -> ViewFilter:
    """all / one / multiple：已订阅、订阅源新鲜、未读。"""
    if base.view is ViewType.ONE and base.feed_id is None:
        raise ItemsValidationError("one 视图缺少 feed_id")
    if base.view is ViewType.MULTIPLE and base.feed_ids is None:
        raise ItemsValidationError("multiple 视图缺少分组订阅源")
    window_everywhere = items_config.items_enforce_subscription_window_everywhere
    return replace(
        base,
        feed_id=base.feed_id if base.view is ViewType.ONE else None,
        feed_ids=base.feed_ids if base.view is ViewType.MULTIPLE else None,
        require_subscription=True,
        recency_guard=True,
        exclude_read=True,
        apply_subscription_window=base.view is ViewType.ALL or window_everywhere,
        dedup_cross_feed=True,
    )


def _build_discover(base: ViewFilter) -> ViewFilter:
    if base.feed_id is None:
        raise ItemsValidationError("discover 视图缺少 feed_id")
    return replace(
        base,
        feed_ids=None,
        recency_guard=True,
        exclude_read=True,
        apply_subscription_window=items_config.items_enforce_subscription_window_everywhere,
        dedup_cross_feed=False,
    )


def _build_bookmarks(base: ViewFilter) -> ViewFilter:
    return replace(
        base,
        feed_id=None,
        feed_ids=None,
        bookmarked_only=True,
        dedup_cross_feed=False,
    )


def _build_recently_read(base: ViewFilter) -> ViewFilter:
    return replace(
        base,
        feed_id=None,
        feed_ids=None,
        read_since=base.boundary,
        dedup_cross_feed=False,
        sort_by_read_time=True,
    )


def _build_newsletters(base: ViewFilter) -> ViewFilter:
    return replace(
        base,
        feed_id=None,
        feed_ids=None,
        newsletters_only=True,
        require_subscription=items_config.items_scope_newsletters_to_subscriptions,
    )


_VIEW_BUILDERS: Dict[ViewType, Callable[[ViewFilter], ViewFilter]] = {
    ViewType.ALL: _build_subscribed,
    ViewType.ONE: _build_subscribed,
    ViewType.MULTIPLE: _build_subscribed,
    ViewType.DISCOVER: _build_discover,
    ViewType.BOOKMARKS: _build_bookmarks,
    ViewType.RECENTLY_READ: _build_recently_read,
    ViewType.NEWSLETTERS: _build_newsletters,
}


def build_view_filter(
    view: ViewType | str,
    *,
    user_id: int,
    sort: SortOrder = SortOrder.LATEST,
    feed_id: int | None = None,
    feed_ids: Sequence[int] | None = None,
    now: datetime | None = None,
) -> ViewFilter:
    """根据视图类型构建过滤条件。

    `feed_ids` 为 multiple 视图已解析出的分组订阅源；未知视图抛出
    `UnsupportedViewTypeError`，缺少必填参数抛出 `ItemsValidationError`。
    """
    view_type = _coerce_view(view)
    builder = _VIEW_BUILDERS.get(view_type)
    if builder is None:
        raise UnsupportedViewTypeError(view)

    base = ViewFilter(
        view=view_type,
        user_id=user_id,
        sort=sort,
        direction=resolve_direction(view_type, sort),
        boundary=recency_boundary(now),
        feed_id=feed_id,
        feed_ids=tuple(feed_ids) if feed_ids is not None else None,
    )
    return builder(base)
