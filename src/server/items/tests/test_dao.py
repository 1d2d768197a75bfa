# -*- coding: utf-8 -*-
"""
条目 DAO 测试
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from src.server.items.dao import FolderDAO, ItemDuplicateDAO, UserItemDAO
from src.server.items.utils import build_item_fingerprint
from .helpers import (
    days_ago,
    make_feed,
    make_folder,
    make_item,
    make_user,
    set_state,
)


def test_item_fingerprint_filled_on_insert(test_db_session: Session) -> None:
    feed = make_feed(test_db_session)
    with_url = make_item(test_db_session, feed, title="标题", url="https://example.com/a/")
    without_url = make_item(test_db_session, feed, title="  Hello   World ")

    assert with_url.fingerprint == build_item_fingerprint("https://example.com/a", None)
    assert without_url.fingerprint == build_item_fingerprint(None, "hello world")


def test_cross_feed_duplicates_grouped_by_fingerprint(test_db_session: Session) -> None:
    user = make_user(test_db_session)
    first = make_feed(test_db_session, "甲")
    second = make_feed(test_db_session, "乙")
    a = make_item(test_db_session, first, title="A", url="https://example.com/story")
    b = make_item(test_db_session, second, title="B", url="https://example.com/story#top")
    c = make_item(test_db_session, second, title="C", url="https://example.com/other")

    groups = ItemDuplicateDAO(test_db_session).find_duplicates(
        user.id, [c.id, b.id, a.id], cross_feed=True
    )

    assert groups == [[b.id, a.id]]


def test_surfaced_duplicates_require_prior_user_state(test_db_session: Session) -> None:
    """cross_feed=False 时只有用户已经见过的内容才参与分组。"""
    user = make_user(test_db_session)
    other = make_user(test_db_session, email="other@example.com")
    feed = make_feed(test_db_session)
    seen = make_item(test_db_session, feed, title="见过", url="https://example.com/seen")
    copy_one = make_item(test_db_session, feed, title="副本一", url="https://example.com/seen")
    copy_two = make_item(test_db_session, feed, title="副本二", url="https://example.com/seen")
    fresh_one = make_item(test_db_session, feed, title="新一", url="https://example.com/new")
    fresh_two = make_item(test_db_session, feed, title="新二", url="https://example.com/new")
    other_seen = make_item(test_db_session, feed, title="他人", url="https://example.com/new")
    set_state(test_db_session, user, seen, marked_read=True, marked_read_time=days_ago(2))
    set_state(test_db_session, other, other_seen, marked_read=True, marked_read_time=days_ago(2))

    dao = ItemDuplicateDAO(test_db_session)
    page = [copy_two.id, copy_one.id, fresh_two.id, fresh_one.id]

    assert dao.find_duplicates(user.id, page, cross_feed=False) == [[copy_two.id, copy_one.id]]
    assert dao.find_duplicates(user.id, [], cross_feed=False) == []


def test_resolve_folder_feed_ids_checks_owner(test_db_session: Session) -> None:
    owner = make_user(test_db_session)
    stranger = make_user(test_db_session, email="stranger@example.com")
    first = make_feed(test_db_session, "甲")
    second = make_feed(test_db_session, "乙")
    folder = make_folder(test_db_session, owner, [second, first])
    empty = make_folder(test_db_session, owner, [], name="空分组")

    dao = FolderDAO(test_db_session)

    assert dao.resolve_folder_feed_ids(folder.id, owner.id) == [first.id, second.id]
    assert dao.resolve_folder_feed_ids(empty.id, owner.id) == []
    assert dao.resolve_folder_feed_ids(folder.id, stranger.id) is None
    assert dao.resolve_folder_feed_ids(12345, owner.id) is None


def test_user_item_states_are_scoped_to_user(test_db_session: Session) -> None:
    user = make_user(test_db_session)
    other = make_user(test_db_session, email="other@example.com")
    feed = make_feed(test_db_session)
    item = make_item(test_db_session, feed, title="共享条目")
    set_state(test_db_session, user, item, note="我的笔记")
    set_state(test_db_session, other, item, note="别人的笔记")

    states = UserItemDAO(test_db_session).get_for_items(user.id, [item.id])

    assert list(states) == [item.id]
    assert states[item.id].note == "我的笔记"
