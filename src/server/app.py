# -*- coding: utf-8 -*-
"""
FastAPI 应用入口

公开接口：
- `create_app`
- `app`

文件功能：
- 创建 FastAPI 应用并挂载条目模块路由。
"""

from __future__ import annotations

from fastapi import FastAPI
from loguru import logger

from src.server.items.router import router as items_router


def create_app() -> FastAPI:
    """创建应用实例。"""
    application = FastAPI(title="Refeed Items")
    application.include_router(items_router)
    logger.info("条目模块路由已挂载")
    return application


app = create_app()
