# -*- coding: utf-8 -*-
"""
条目模块入口

公开接口：
- `items_config`
- `router`
- `get_unread_items`
- `search_items`
- `search_items_formatted`

内部方法：
- 无

文件功能：
- 暴露条目聚合模块的主要能力，供 FastAPI 应用加载并在其他模块复用服务层接口。
"""

from typing import Any

from .config import items_config

__all__ = [
    "items_config",
    "router",
    "get_unread_items",
    "search_items",
    "search_items_formatted",
]


def __getattr__(name: str) -> Any:
    """按需加载子模块，避免导入时出现循环依赖。"""
    if name == "router":
        from .router import router as value
    elif name in {
        "get_unread_items",
        "search_items",
        "search_items_formatted",
    }:
        from . import service as service_module

        value = getattr(service_module, name)
    else:
        raise AttributeError(f"module 'src.server.items' has no attribute '{name}'")
    return value


def __dir__() -> list[str]:
    return sorted(__all__)
