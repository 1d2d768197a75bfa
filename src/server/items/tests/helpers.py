# -*- coding: utf-8 -*-
"""
条目测试数据构造工具
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Sequence

from sqlalchemy.orm import Session

from src.server.auth.models import User
from src.server.items.models import (
    BookmarkFolder,
    Feed,
    Folder,
    Item,
    UserFeed,
    UserItem,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float, now: datetime = NOW) -> datetime:
    return now - timedelta(days=days)


def _save(db: Session, obj):
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def make_user(db: Session, email: str = "reader@example.com", plan: str = "free") -> User:
    return _save(db, User(email=email, plan=plan))


def make_feed(db: Session, title: str = "示例订阅源", logo_url: str | None = None) -> Feed:
    return _save(
        db,
        Feed(
            title=title,
            url=f"https://example.com/{title}.xml",
            logo_url=logo_url,
        ),
    )


def make_item(
    db: Session,
    feed: Feed,
    *,
    title: str,
    created_at: datetime | None = None,
    url: str | None = None,
    content: str | None = None,
    from_newsletter: bool = False,
) -> Item:
    return _save(
        db,
        Item(
            feed_id=feed.id,
            title=title,
            url=url,
            website_content=content,
            from_newsletter=from_newsletter,
            created_at=created_at or days_ago(1),
        ),
    )


def subscribe(
    db: Session,
    user: User,
    feed: Feed,
    *,
    pagination_start: datetime | None = None,
) -> UserFeed:
    return _save(
        db,
        UserFeed(
            user_id=user.id,
            feed_id=feed.id,
            date_added=pagination_start or days_ago(20),
            pagination_start_timestamp=pagination_start,
        ),
    )


def set_state(
    db: Session,
    user: User,
    item: Item,
    *,
    marked_read: bool = False,
    marked_read_time: datetime | None = None,
    in_read_later: bool = False,
    note: str | None = None,
    folders: Sequence[BookmarkFolder] = (),
) -> UserItem:
    state = UserItem(
        user_id=user.id,
        item_id=item.id,
        marked_read=marked_read,
        marked_read_time=marked_read_time,
        in_read_later=in_read_later,
        note=note,
    )
    state.bookmark_folders = list(folders)
    return _save(db, state)


def make_bookmark_folder(db: Session, user: User, name: str = "稍后研究") -> BookmarkFolder:
    return _save(db, BookmarkFolder(user_id=user.id, name=name))


def make_folder(db: Session, user: User, feeds: Sequence[Feed], name: str = "技术") -> Folder:
    folder = Folder(user_id=user.id, name=name)
    folder.feeds = list(feeds)
    return _save(db, folder)
