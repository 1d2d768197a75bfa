# -*- coding: utf-8 -*-
"""
条目数据模型

公开接口：
- `Feed`
- `Item`
- `UserFeed`
- `UserItem`
- `BookmarkFolder`
- `Folder`

内部方法：
- `_default_fingerprint`

文件功能：
- 定义条目聚合使用的 SQLAlchemy ORM 模型：订阅源、条目、用户订阅关系、用户条目状态、书签夹以及订阅源分组。

说明：
- 所有时间字段统一使用 UTC。
- `UserFeed` 与 `UserItem` 分别在 (user_id, feed_id) 与 (user_id, item_id) 上唯一。
- 条目的 `fingerprint` 在写入时根据链接或标题生成，用于识别跨订阅源的重复内容。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.server.database import Base
from .utils import build_item_fingerprint


def _default_fingerprint(context) -> str:
    """根据插入参数中的链接与标题生成指纹。"""
    params = context.get_current_parameters()
    return build_item_fingerprint(params.get("url"), params.get("title"))


user_item_bookmark_folders = Table(
    "user_item_bookmark_folders",
    Base.metadata,
    Column(
        "user_item_id",
        Integer,
        ForeignKey("user_items.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "bookmark_folder_id",
        Integer,
        ForeignKey("bookmark_folders.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

folder_feeds = Table(
    "folder_feeds",
    Base.metadata,
    Column(
        "folder_id",
        Integer,
        ForeignKey("folders.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "feed_id",
        Integer,
        ForeignKey("feeds.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Feed(Base):
    __tablename__ = "feeds"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    url: Mapped[Optional[str]] = mapped_column(String(512), default=None)
    logo_url: Mapped[Optional[str]] = mapped_column(String(512), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    items: Mapped[List["Item"]] = relationship(
        "Item",
        back_populates="feed",
        cascade="all, delete-orphan",
    )
    subscriptions: Mapped[List["UserFeed"]] = relationship(
        "UserFeed",
        back_populates="feed",
        cascade="all, delete-orphan",
    )


class Item(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    feed_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("feeds.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    url: Mapped[Optional[str]] = mapped_column(String(1024), default=None)
    website_content: Mapped[Optional[str]] = mapped_column(Text, default=None)
    from_newsletter: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    fingerprint: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        default=_default_fingerprint,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    feed: Mapped["Feed"] = relationship("Feed", back_populates="items")
    user_items: Mapped[List["UserItem"]] = relationship(
        "UserItem",
        back_populates="item",
        cascade="all, delete-orphan",
    )


class UserFeed(Base):
    __tablename__ = "user_feeds"
    __table_args__ = (
        UniqueConstraint("user_id", "feed_id", name="uq_user_feeds_user_feed"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    feed_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("feeds.id", ondelete="CASCADE"),
        nullable=False,
    )
    date_added: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    pagination_start_timestamp: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=None
    )

    feed: Mapped["Feed"] = relationship("Feed", back_populates="subscriptions")


class UserItem(Base):
    __tablename__ = "user_items"
    __table_args__ = (
        UniqueConstraint("user_id", "item_id", name="uq_user_items_user_item"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    marked_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    marked_read_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=None
    )
    in_read_later: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    note: Mapped[Optional[str]] = mapped_column(Text, default=None)
    temp_added_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), default=None
    )

    item: Mapped["Item"] = relationship("Item", back_populates="user_items")
    bookmark_folders: Mapped[List["BookmarkFolder"]] = relationship(
        "BookmarkFolder",
        secondary=user_item_bookmark_folders,
        back_populates="user_items",
    )


class BookmarkFolder(Base):
    __tablename__ = "bookmark_folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)

    user_items: Mapped[List["UserItem"]] = relationship(
        "UserItem",
        secondary=user_item_bookmark_folders,
        back_populates="bookmark_folders",
    )


class Folder(Base):
    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)

    feeds: Mapped[List["Feed"]] = relationship("Feed", secondary=folder_feeds)
