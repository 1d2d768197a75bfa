# -*- coding: utf-8 -*-
"""
条目服务模块

此模块提供条目聚合相关的所有业务逻辑。
"""

from .item_service import get_unread_items
from .search_service import search_items, search_items_formatted

__all__ = [
    "get_unread_items",
    "search_items",
    "search_items_formatted",
]
