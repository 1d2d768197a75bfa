# -*- coding: utf-8 -*-
"""
条目 DAO

- 公开接口：
    - `ItemDAO`
    - `UserFeedDAO`
    - `UserItemDAO`
    - `FolderDAO`
    - `ItemDuplicateDAO`

内部方法：
- `_compile_conditions`
- `_subscribed_feed_ids`

文件功能：
- 为条目模块提供面向数据库的只读访问层：把视图过滤条件编译为 SQL、按游标分页抓取条目、加载用户订阅与条目状态、解析分组以及查找重复条目。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.orm import aliased, selectinload
from sqlalchemy.sql.elements import ColumnElement

from src.server.dao.dao_base import BaseDAO
from .models import BookmarkFolder, Folder, Item, UserFeed, UserItem

if TYPE_CHECKING:  # pragma: no cover
    from .service.view_filter import ViewFilter


def _subscribed_feed_ids(user_id: int):
    """当前用户已订阅订阅源 ID 的子查询。"""
    return select(UserFeed.feed_id).where(UserFeed.user_id == user_id)


def _compile_conditions(view_filter: ViewFilter) -> List[ColumnElement[bool]]:
    """将 `ViewFilter` 编译为 SQLAlchemy 条件列表。"""
    user_id = view_filter.user_id
    conditions: List[ColumnElement[bool]] = []

    if view_filter.feed_id is not None:
        conditions.append(Item.feed_id == view_filter.feed_id)
    if view_filter.feed_ids is not None:
        conditions.append(Item.feed_id.in_(view_filter.feed_ids))
    if view_filter.require_subscription:
        conditions.append(Item.feed_id.in_(_subscribed_feed_ids(user_id)))
    if view_filter.recency_guard:
        older = aliased(Item)
        conditions.append(
            ~select(older.id)
            .where(
                older.feed_id == Item.feed_id,
                older.created_at < view_filter.boundary,
            )
            .exists()
        )
    if view_filter.exclude_read:
        conditions.append(
            ~select(UserItem.id)
            .where(
                UserItem.item_id == Item.id,
                UserItem.user_id == user_id,
                UserItem.marked_read.is_(True),
            )
            .exists()
        )
    if view_filter.bookmarked_only:
        conditions.append(
            select(UserItem.id)
            .where(
                UserItem.item_id == Item.id,
                UserItem.user_id == user_id,
                or_(
                    UserItem.in_read_later.is_(True),
                    UserItem.bookmark_folders.any(BookmarkFolder.user_id == user_id),
                ),
            )
            .exists()
        )
    if view_filter.read_since is not None:
        conditions.append(
            select(UserItem.id)
            .where(
                UserItem.item_id == Item.id,
                UserItem.user_id == user_id,
                UserItem.marked_read.is_(True),
                UserItem.marked_read_time >= view_filter.read_since,
            )
            .exists()
        )
    if view_filter.newsletters_only:
        conditions.append(Item.from_newsletter.is_(True))

    return conditions


class ItemDAO(BaseDAO):
    """条目 DAO"""

    def exists_id(self, item_id: int) -> bool:
        stmt = select(func.count()).select_from(Item).where(Item.id == item_id)
        return bool(self.db_session.execute(stmt).scalar() or 0)

    def list_page(
        self,
        view_filter: ViewFilter,
        *,
        limit: int,
        after_id: int | None = None,
    ) -> List[Item]:
        """按视图条件与游标抓取一页条目，严格位于游标之后。"""
        stmt = select(Item).where(*_compile_conditions(view_filter))
        if view_filter.direction == "desc":
            if after_id is not None:
                stmt = stmt.where(Item.id < after_id)
            stmt = stmt.order_by(Item.id.desc())
        else:
            if after_id is not None:
                stmt = stmt.where(Item.id > after_id)
            stmt = stmt.order_by(Item.id.asc())
        stmt = stmt.limit(limit).options(selectinload(Item.feed))
        return list(self.db_session.scalars(stmt))

    def count_through(self, view_filter: ViewFilter, anchor_id: int) -> int:
        """统计排序中位于游标之前（含游标本身）的符合条件条目数。"""
        stmt = (
            select(func.count())
            .select_from(Item)
            .where(*_compile_conditions(view_filter))
        )
        if view_filter.direction == "desc":
            stmt = stmt.where(Item.id >= anchor_id)
        else:
            stmt = stmt.where(Item.id <= anchor_id)
        return int(self.db_session.execute(stmt).scalar() or 0)

    def search(
        self,
        *,
        user_id: int,
        query: str | None,
        include_content: bool,
        limit: int,
    ) -> List[Item]:
        """在已订阅源中按标题（可选正文）做不区分大小写的子串匹配。"""
        stmt = select(Item).where(Item.feed_id.in_(_subscribed_feed_ids(user_id)))
        if query:
            title_match = Item.title.icontains(query, autoescape=True)
            if include_content:
                stmt = stmt.where(
                    or_(
                        title_match,
                        Item.website_content.icontains(query, autoescape=True),
                    )
                )
            else:
                stmt = stmt.where(title_match)
        stmt = (
            stmt.order_by(Item.id.desc())
            .limit(limit)
            .options(selectinload(Item.feed))
        )
        return list(self.db_session.scalars(stmt))


class UserFeedDAO(BaseDAO):
    """用户订阅 DAO"""

    def get_for_feeds(self, user_id: int, feed_ids: Sequence[int]) -> Dict[int, UserFeed]:
        if not feed_ids:
            return {}
        stmt = select(UserFeed).where(
            UserFeed.user_id == user_id,
            UserFeed.feed_id.in_(list(feed_ids)),
        )
        return {row.feed_id: row for row in self.db_session.scalars(stmt)}


class UserItemDAO(BaseDAO):
    """用户条目状态 DAO"""

    def get_for_items(self, user_id: int, item_ids: Sequence[int]) -> Dict[int, UserItem]:
        """返回 item_id -> 状态；(user_id, item_id) 唯一，每个条目至多一行。"""
        if not item_ids:
            return {}
        stmt = (
            select(UserItem)
            .where(
                UserItem.user_id == user_id,
                UserItem.item_id.in_(list(item_ids)),
            )
            .options(selectinload(UserItem.bookmark_folders))
        )
        return {row.item_id: row for row in self.db_session.scalars(stmt)}


class FolderDAO(BaseDAO):
    """订阅源分组 DAO"""

    def resolve_folder_feed_ids(self, folder_id: int, user_id: int) -> List[int] | None:
        """返回分组下的订阅源 ID；分组不存在或不属于该用户时返回 None。"""
        stmt = (
            select(Folder)
            .where(Folder.id == folder_id, Folder.user_id == user_id)
            .options(selectinload(Folder.feeds))
        )
        folder = self.db_session.scalars(stmt).first()
        if folder is None:
            return None
        return sorted(feed.id for feed in folder.feeds)


class ItemDuplicateDAO(BaseDAO):
    """重复条目查找 DAO"""

    def find_duplicates(
        self,
        user_id: int,
        item_ids: Sequence[int],
        cross_feed: bool,
    ) -> List[List[int]]:
        """按指纹对给定条目分组，只返回包含两个及以上成员的组。

        `cross_feed` 为 False 时，仅当该指纹已经以其他条目的形式出现在用户的阅读状态中，
        页内的同指纹条目才会被视为重复。
        """
        if not item_ids:
            return []
        rows = self.db_session.execute(
            select(Item.id, Item.fingerprint).where(Item.id.in_(list(item_ids)))
        ).all()
        fingerprints = {row.id: row.fingerprint for row in rows}

        if cross_feed:
            eligible = set(fingerprints.values())
        else:
            stmt = (
                select(Item.fingerprint)
                .join(UserItem, UserItem.item_id == Item.id)
                .where(
                    UserItem.user_id == user_id,
                    Item.fingerprint.in_(list(set(fingerprints.values()))),
                    Item.id.not_in(list(item_ids)),
                )
                .distinct()
            )
            eligible = set(self.db_session.scalars(stmt))

        groups: Dict[str, List[int]] = {}
        for item_id in item_ids:
            fingerprint = fingerprints.get(item_id)
            if fingerprint is not None and fingerprint in eligible:
                groups.setdefault(fingerprint, []).append(item_id)
        return [members for members in groups.values() if len(members) > 1]
