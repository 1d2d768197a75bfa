# -*- coding: utf-8 -*-
"""
条目搜索服务

功能：
- 在当前用户已订阅的订阅源中按标题（专业套餐同时按正文）做不区分大小写的子串搜索

公开接口：
- `search_items`
- `search_items_formatted`
- `plan_allows_content_search`

内部方法：
- `_effective_plan`
- `_resolve_take`
- `_html_to_markdown`
"""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup  # type: ignore
from loguru import logger
from markdownify import markdownify as md  # type: ignore
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.server.auth.models import User
from ..config import items_config
from ..dao import ItemDAO
from ..exceptions import ItemsValidationError, StoreUnavailableError
from ..models import Item
from ..schemas import FormattedSearchItemSchema, Plan, SearchItemSchema
from ..utils import _normalize_datetime_utc
from .pagination import plan_item_limit, resolve_user_plan

_STRIPPED_TAGS = ("script", "style", "iframe", "form", "object", "embed", "noscript")


def plan_allows_content_search(plan: Plan | str) -> bool:
    """免费套餐只搜索标题。"""
    return Plan(plan) is Plan.PRO


def _effective_plan(requested: Plan | str, user: User) -> Plan:
    """请求的套餐不能高于用户实际套餐。"""
    granted = resolve_user_plan(user)
    if Plan(requested) is Plan.PRO and granted is Plan.PRO:
        return Plan.PRO
    return Plan.FREE


def _resolve_take(take: int, plan: Plan | str) -> int:
    if take <= 0:
        raise ItemsValidationError("take 必须为正整数")
    limit = min(take, items_config.items_max_search_results)
    plan_limit = plan_item_limit(plan)
    if plan_limit is not None:
        limit = min(limit, plan_limit)
    return limit


def _html_to_markdown(html: str | None) -> str:
    """清理正文 HTML 并转换为 Markdown。"""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(list(_STRIPPED_TAGS)):
        tag.decompose()
    return md(str(soup), heading_style="ATX").strip()


def _run_search(
    db: Session,
    *,
    user_id: int,
    query: str | None,
    include_content: bool,
    limit: int,
) -> List[Item]:
    try:
        return ItemDAO(db).search(
            user_id=user_id,
            query=query,
            include_content=include_content,
            limit=limit,
        )
    except SQLAlchemyError as exc:
        logger.error("条目搜索失败：user_id={}, error={}", user_id, exc)
        raise StoreUnavailableError() from exc


def search_items(
    db: Session,
    user: User,
    query: str | None,
    plan: Plan | str,
    take: int,
) -> List[SearchItemSchema]:
    """搜索条目，正文转换为 Markdown 并附带订阅源标题。"""
    plan = _effective_plan(plan, user)
    limit = _resolve_take(take, plan)
    items = _run_search(
        db,
        user_id=user.id,
        query=query,
        include_content=plan_allows_content_search(plan),
        limit=limit,
    )
    logger.info(
        "条目搜索完成：user_id={}, plan={}, 命中={}",
        user.id,
        plan.value,
        len(items),
    )
    return [
        SearchItemSchema(
            id=item.id,
            feed_id=item.feed_id,
            url=item.url,
            title=item.title,
            website_content=_html_to_markdown(item.website_content),
            feed_title=item.feed.title if item.feed else None,
            from_newsletter=bool(item.from_newsletter),
            created_at=_normalize_datetime_utc(item.created_at),
        )
        for item in items
    ]


def search_items_formatted(
    db: Session,
    user: User,
    query: str | None,
    take: int,
) -> List[FormattedSearchItemSchema]:
    """只按标题搜索，字段与分页视图保持一致，正文不做转换。"""
    limit = _resolve_take(take, resolve_user_plan(user))
    items = _run_search(
        db,
        user_id=user.id,
        query=query,
        include_content=False,
        limit=limit,
    )
    return [
        FormattedSearchItemSchema(
            id=item.id,
            feed_id=item.feed_id,
            url=item.url,
            title=item.title,
            website_content=item.website_content,
            feed_title=item.feed.title if item.feed else None,
            from_newsletter=bool(item.from_newsletter),
            created_at=_normalize_datetime_utc(item.created_at),
        )
        for item in items
    ]
