# -*- coding: utf-8 -*-
"""
条目模块配置

公开接口：
- `items_config`
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ItemsConfig(BaseSettings):
    """条目模块配置"""

    # 分页配置
    items_default_page_size: int = Field(
        default=20,
        title="默认分页大小",
        description="未指定 amount 时单页返回的条目数量",
    )

    items_max_page_size: int = Field(
        default=200,
        title="最大分页大小",
        description="单页允许请求的最大条目数量",
    )

    items_recency_window_days: int = Field(
        default=30,
        title="近期窗口天数",
        description="订阅源新鲜度约束与最近已读视图使用的时间窗口（天）",
    )

    # 搜索配置
    items_max_search_results: int = Field(
        default=100,
        title="搜索结果上限",
        description="单次搜索允许返回的最大条目数量",
    )

    # 去重配置
    items_dedup_enabled: bool = Field(
        default=True,
        title="启用重复条目折叠",
        description="是否在返回前折叠跨订阅源的重复条目",
    )

    # 功能开关
    items_enforce_subscription_window_everywhere: bool = Field(
        default=False,
        title="全视图启用订阅起点过滤",
        description="开启后 one / multiple / discover 视图同样过滤订阅起点之前的条目",
    )

    items_scope_newsletters_to_subscriptions: bool = Field(
        default=False,
        title="邮件简报按订阅过滤",
        description="开启后 newsletters 视图只返回当前用户已订阅源中的条目",
    )

    items_plan_limits_enabled: bool = Field(
        default=False,
        title="启用套餐条目上限",
        description="开启后单个视图可翻页到的条目总数受套餐限制",
    )

    items_free_plan_limit: int = Field(
        default=1000,
        title="免费套餐条目上限",
        description="免费套餐单个视图可访问的最大条目数量",
    )

    items_pro_plan_limit: int = Field(
        default=5000,
        title="专业套餐条目上限",
        description="专业套餐单个视图可访问的最大条目数量",
    )


items_config = ItemsConfig()
