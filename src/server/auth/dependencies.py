# -*- coding: utf-8 -*-
"""
认证依赖

公开接口：
- `get_current_user`

文件功能：
- 从请求头解析当前用户。会话签发与校验由上游网关负责，这里只做用户查找。
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from src.server.database import get_db
from .models import User


def get_current_user(
    x_user_id: int | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """根据 `X-User-Id` 请求头返回当前用户。"""
    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="未登录。",
        )
    user = db.get(User, x_user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="用户不存在。",
        )
    return user
