# -*- coding: utf-8 -*-
"""
条目 Pydantic 模型

- 公开接口：
    - `ViewType`
    - `SortOrder`
    - `Plan`
    - `UnreadItemsQuery`
    - `ItemSchema`
    - `UnreadItemsResponse`
    - `SearchItemSchema`
    - `FormattedSearchItemSchema`

内部方法：
- 无

文件功能：
- 提供条目模块在 API 层使用的枚举、查询参数与返回模型，保证序列化字段与业务语义一致。
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ViewType(str, Enum):
    """阅读视图"""

    ALL = "all"
    ONE = "one"
    RECENTLY_READ = "recentlyread"
    BOOKMARKS = "bookmarks"
    MULTIPLE = "multiple"
    DISCOVER = "discover"
    NEWSLETTERS = "newsletters"


class SortOrder(str, Enum):
    """排序方式"""

    LATEST = "Latest"
    OLDEST = "Oldest"
    READABILITY_ASC = "Readability Ascending"
    READABILITY_DESC = "Readability Descending"
    CONTENT_LENGTH_ASC = "Content Length Ascending"
    CONTENT_LENGTH_DESC = "Content Length Descending"


class Plan(str, Enum):
    """用户套餐"""

    FREE = "free"
    PRO = "pro"


class UnreadItemsQuery(BaseModel):
    """未读条目查询参数"""

    amount: int = Field(..., gt=0, description="单页条目数量")
    sort: SortOrder = Field(default=SortOrder.LATEST, description="排序方式")
    type: ViewType = Field(..., description="阅读视图")
    folder: Optional[int] = Field(default=None, description="订阅源分组 ID，multiple 视图必填")
    feed_id: Optional[int] = Field(default=None, description="订阅源 ID，one / discover 视图必填")
    cursor: Optional[str] = Field(default=None, description="上一页最后一个条目的 ID")


class ItemSchema(BaseModel):
    """扁平化后的条目信息"""

    id: int
    feed_id: int
    url: Optional[str] = None
    title: str
    content: Optional[str] = None
    feed_title: Optional[str] = None
    feed_logo_url: Optional[str] = None
    marked_read: bool = False
    in_read_later: bool = False
    note: Optional[str] = None
    bookmark_folders: List[str] = Field(default_factory=list)
    created_at: datetime
    marked_read_time: Optional[datetime] = None


class UnreadItemsResponse(BaseModel):
    """分页条目响应"""

    items: List[ItemSchema]
    next_cursor: Optional[str] = None


class SearchItemSchema(BaseModel):
    """搜索结果，正文已转换为 Markdown"""

    id: int
    feed_id: int
    url: Optional[str] = None
    title: str
    website_content: str = ""
    feed_title: Optional[str] = None
    from_newsletter: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}


class FormattedSearchItemSchema(BaseModel):
    """与分页视图字段保持一致的搜索结果"""

    id: int
    feed_id: int
    url: Optional[str] = None
    title: str
    website_content: Optional[str] = None
    feed_title: Optional[str] = None
    from_newsletter: bool = False
    created_at: datetime

    model_config = {"from_attributes": True}
