# -*- coding: utf-8 -*-
"""
未读条目服务

功能：
- 串联视图过滤、游标分页、订阅起点过滤、投影、最近已读重排与重复折叠，产出一页条目

公开接口：
- `get_unread_items`

内部方法：
- `_validate_query`
- `_resolve_folder_feed_ids`
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.server.auth.models import User
from ..config import items_config
from ..dao import FolderDAO, ItemDuplicateDAO, UserFeedDAO, UserItemDAO
from ..exceptions import (
    FolderResolutionError,
    ItemsValidationError,
    StoreUnavailableError,
)
from ..schemas import UnreadItemsQuery, UnreadItemsResponse, ViewType
from .dedup import DuplicateLookup, DuplicateSuppressor
from .pagination import (
    KeysetPaginator,
    parse_cursor,
    plan_item_limit,
    resolve_user_plan,
)
from .post_sort import stabilize_recently_read
from .projector import project_items
from .subscription_window import filter_by_subscription_window
from .view_filter import build_view_filter


def _validate_query(query: UnreadItemsQuery) -> None:
    """在访问数据库前校验视图必填参数。"""
    if query.amount <= 0:
        raise ItemsValidationError("amount 必须为正整数")
    if query.amount > items_config.items_max_page_size:
        raise ItemsValidationError(
            f"amount 不能超过 {items_config.items_max_page_size}"
        )
    if query.type in (ViewType.ONE, ViewType.DISCOVER) and query.feed_id is None:
        raise ItemsValidationError(f"{query.type.value} 视图缺少 feed_id")
    if query.type is ViewType.MULTIPLE and query.folder is None:
        raise ItemsValidationError("multiple 视图缺少 folder")
    parse_cursor(query.cursor)


def _resolve_folder_feed_ids(db: Session, folder_id: int, user_id: int) -> List[int]:
    feed_ids = FolderDAO(db).resolve_folder_feed_ids(folder_id, user_id)
    if feed_ids is None:
        raise FolderResolutionError(folder_id)
    return feed_ids


def get_unread_items(
    db: Session,
    user: User,
    query: UnreadItemsQuery,
    *,
    now: datetime | None = None,
    duplicate_lookup: Optional[DuplicateLookup] = None,
) -> UnreadItemsResponse:
    """按视图返回一页条目及下一页游标。"""
    _validate_query(query)

    try:
        feed_ids = (
            _resolve_folder_feed_ids(db, query.folder, user.id)  # type: ignore[arg-type]
            if query.type is ViewType.MULTIPLE
            else None
        )
        view_filter = build_view_filter(
            query.type,
            user_id=user.id,
            sort=query.sort,
            feed_id=query.feed_id,
            feed_ids=feed_ids,
            now=now,
        )

        paginator = KeysetPaginator(db, plan_limit=plan_item_limit(resolve_user_plan(user)))
        page = paginator.fetch_page(view_filter, query.amount, query.cursor)

        items = page.items
        if view_filter.apply_subscription_window:
            subscriptions = UserFeedDAO(db).get_for_feeds(
                user.id, [item.feed_id for item in items]
            )
            items = filter_by_subscription_window(items, subscriptions)

        states = UserItemDAO(db).get_for_items(user.id, [item.id for item in items])
    except SQLAlchemyError as exc:
        logger.error(
            "条目查询失败：user_id={}, view={}, error={}",
            user.id,
            query.type.value,
            exc,
        )
        raise StoreUnavailableError() from exc

    projected = project_items(items, states)

    if view_filter.sort_by_read_time:
        projected = stabilize_recently_read(projected, view_filter.sort)

    if view_filter.dedup_cross_feed is not None and items_config.items_dedup_enabled:
        suppressor = DuplicateSuppressor(duplicate_lookup or ItemDuplicateDAO(db))
        projected = suppressor.suppress(
            projected,
            user.id,
            view_filter.dedup_cross_feed,
            fetch_order=[item.id for item in items],
        )

    logger.info(
        "条目分页完成：user_id={}, view={}, 抓取={}, 返回={}, next_cursor={}",
        user.id,
        query.type.value,
        len(page.items),
        len(projected),
        page.next_cursor,
    )
    return UnreadItemsResponse(items=projected, next_cursor=page.next_cursor)
