# -*- coding: utf-8 -*-
"""
DAO 基类

公开接口：
- `BaseDAO`

文件功能：
- 为各模块的数据访问对象提供统一的会话持有方式。
"""

from __future__ import annotations

from sqlalchemy.orm import Session


class BaseDAO:
    """所有 DAO 的基类，仅持有数据库会话。"""

    def __init__(self, db_session: Session) -> None:
        self.db_session = db_session
