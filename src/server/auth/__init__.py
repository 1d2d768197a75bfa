# -*- coding: utf-8 -*-
"""
认证模块

公开接口：
- `User`
- `get_current_user`
"""

from .models import User
from .dependencies import get_current_user

__all__ = ["User", "get_current_user"]
