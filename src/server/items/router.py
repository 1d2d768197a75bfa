# -*- coding: utf-8 -*-
"""
条目路由

公开接口：
- GET /api/items/unread
- GET /api/items/search
- GET /api/items/search/formatted

内部方法：
- 无

文件功能：
- 暴露条目模块的 REST API，使前端能够按视图分页读取条目并搜索已订阅源中的条目。
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from src.server.auth.dependencies import get_current_user
from src.server.auth.models import User
from src.server.database import get_db
from .config import items_config
from .schemas import (
    FormattedSearchItemSchema,
    Plan,
    SearchItemSchema,
    SortOrder,
    UnreadItemsQuery,
    UnreadItemsResponse,
    ViewType,
)
from .service import get_unread_items, search_items, search_items_formatted

router = APIRouter(prefix="/api/items", tags=["Items"])


@router.get(
    "/unread",
    response_model=UnreadItemsResponse,
    summary="按视图分页获取条目",
    response_description="返回一页条目与下一页游标",
)
def get_unread_items_api(
    view: ViewType = Query(..., alias="type", description="阅读视图"),
    amount: int = Query(
        default=items_config.items_default_page_size,
        ge=1,
        description="单页条目数量",
    ),
    sort: SortOrder = Query(default=SortOrder.LATEST, description="排序方式"),
    folder: Optional[int] = Query(default=None, description="订阅源分组 ID"),
    feed_id: Optional[int] = Query(default=None, description="订阅源 ID"),
    cursor: Optional[str] = Query(default=None, description="上一页返回的游标"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadItemsResponse:
    """按视图返回一页条目。"""
    query = UnreadItemsQuery(
        amount=amount,
        sort=sort,
        type=view,
        folder=folder,
        feed_id=feed_id,
        cursor=cursor,
    )
    return get_unread_items(db, current_user, query)


@router.get(
    "/search",
    response_model=list[SearchItemSchema],
    summary="搜索条目",
    response_description="返回正文已转换为 Markdown 的搜索结果",
)
def search_items_api(
    query: Optional[str] = Query(default=None, description="搜索关键词"),
    plan: Plan = Query(default=Plan.FREE, description="请求的套餐，不会高于用户实际套餐"),
    take: int = Query(default=20, ge=1, description="返回的最大条目数量"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[SearchItemSchema]:
    """在已订阅源中搜索条目。"""
    return search_items(db, current_user, query, plan, take)


@router.get(
    "/search/formatted",
    response_model=list[FormattedSearchItemSchema],
    summary="搜索条目（分页视图格式）",
    response_description="返回字段与分页视图一致的搜索结果",
)
def search_items_formatted_api(
    query: Optional[str] = Query(default=None, description="搜索关键词"),
    take: int = Query(default=20, ge=1, description="返回的最大条目数量"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[FormattedSearchItemSchema]:
    """按标题搜索条目，字段与分页视图保持一致。"""
    return search_items_formatted(db, current_user, query, take)
