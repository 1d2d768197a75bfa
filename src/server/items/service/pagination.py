# -*- coding: utf-8 -*-
"""
游标分页

功能：
- 按视图过滤条件与游标抓取有界的一页条目，并给出下一页游标

公开接口：
- `Page`
- `KeysetPaginator`
- `parse_cursor`
- `plan_item_limit`
- `resolve_user_plan`

内部方法：
- 无

说明：
- 游标即上一页最后一个条目的 ID，只与抓取排序相关，与之后的展示重排无关。
- 下一页游标基于抓取结果计算，内存中的二次过滤不会让分页提前结束。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

from src.server.auth.models import User
from ..config import items_config
from ..dao import ItemDAO
from ..exceptions import ItemsValidationError, StaleCursorError
from ..models import Item
from ..schemas import Plan
from .view_filter import ViewFilter


@dataclass
class Page:
    """一页抓取结果"""

    items: List[Item] = field(default_factory=list)
    next_cursor: Optional[str] = None


def parse_cursor(cursor: str | None) -> int | None:
    """解析游标，格式错误时抛出 `ItemsValidationError`。"""
    if cursor is None or cursor == "":
        return None
    try:
        return int(cursor)
    except (TypeError, ValueError):
        raise ItemsValidationError(f"分页游标格式不正确：{cursor}") from None


def plan_item_limit(plan: Plan | str) -> int | None:
    """返回套餐可翻页到的条目上限，功能未开启时返回 None。"""
    if not items_config.items_plan_limits_enabled:
        return None
    if Plan(plan) is Plan.PRO:
        return items_config.items_pro_plan_limit
    return items_config.items_free_plan_limit


def resolve_user_plan(user: User) -> Plan:
    """读取用户套餐，未知取值按免费套餐处理。"""
    try:
        return Plan(user.plan)
    except ValueError:
        logger.warning("未知的用户套餐，按免费套餐处理：user_id={}, plan={}", user.id, user.plan)
        return Plan.FREE


class KeysetPaginator:
    """基于条目 ID 的游标分页器"""

    def __init__(self, db: Session, plan_limit: int | None = None) -> None:
        self.item_dao = ItemDAO(db)
        self.plan_limit = plan_limit

    def fetch_page(
        self,
        view_filter: ViewFilter,
        amount: int,
        cursor: str | None = None,
    ) -> Page:
        if amount <= 0:
            raise ItemsValidationError("amount 必须为正整数")
        anchor_id = parse_cursor(cursor)
        if anchor_id is not None and not self.item_dao.exists_id(anchor_id):
            raise StaleCursorError(cursor or "")

        limit = amount
        capped = False
        if self.plan_limit is not None:
            consumed = (
                self.item_dao.count_through(view_filter, anchor_id)
                if anchor_id is not None
                else 0
            )
            remaining = self.plan_limit - consumed
            if remaining <= 0:
                logger.info(
                    "已达到套餐条目上限：user_id={}, view={}, limit={}",
                    view_filter.user_id,
                    view_filter.view.value,
                    self.plan_limit,
                )
                return Page()
            if remaining <= amount:
                limit = remaining
                capped = True

        items = self.item_dao.list_page(view_filter, limit=limit, after_id=anchor_id)

        next_cursor: str | None = None
        if len(items) == amount and not capped:
            next_cursor = str(items[-1].id)
        return Page(items=items, next_cursor=next_cursor)
