# -*- coding: utf-8 -*-
"""
数据库基础设施

公开接口：
- `Base`
- `engine`
- `SessionLocal`
- `get_db`
- `database_config`

内部方法：
- `_build_engine`

文件功能：
- 提供 SQLAlchemy 声明式基类、全局引擎与会话工厂，并以 FastAPI 依赖的形式按请求分配会话。
"""

from __future__ import annotations

from typing import Iterator

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class DatabaseConfig(BaseSettings):
    """数据库配置"""

    database_url: str = Field(
        default="sqlite:///./refeed.db",
        title="数据库连接地址",
        description="SQLAlchemy 可识别的数据库 URL",
    )

    database_echo: bool = Field(
        default=False,
        title="输出 SQL",
        description="是否在日志中打印执行的 SQL 语句",
    )


database_config = DatabaseConfig()


class Base(DeclarativeBase):
    pass


def _build_engine(url: str, echo: bool = False) -> Engine:
    """根据连接地址创建引擎，SQLite 需要关闭线程检查。"""
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=echo, connect_args=connect_args)


engine = _build_engine(database_config.database_url, database_config.database_echo)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    """为每个请求分配独立会话，请求结束后关闭。"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
