# -*- coding: utf-8 -*-
"""
条目模块异常

公开接口：
- `UnsupportedViewTypeError`
- `ItemsValidationError`
- `FolderResolutionError`
- `StaleCursorError`
- `StoreUnavailableError`

文件功能：
- 将条目聚合中可预期的失败定义为带状态码的 `HTTPException` 子类，服务层直接抛出，路由层无需再转换。
"""

from __future__ import annotations

from fastapi import HTTPException, status


class UnsupportedViewTypeError(HTTPException):
    """不支持的阅读视图"""

    def __init__(self, view: object) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"不支持的阅读视图：{view}",
        )
        self.view = view


class ItemsValidationError(HTTPException):
    """请求参数不完整或不合法"""

    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class FolderResolutionError(ItemsValidationError):
    """分组不存在或不属于当前用户"""

    def __init__(self, folder_id: int) -> None:
        super().__init__(f"分组不存在或无权访问：folder_id={folder_id}")
        self.folder_id = folder_id


class StaleCursorError(HTTPException):
    """游标指向的条目已不存在"""

    def __init__(self, cursor: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="分页游标已失效，请从第一页重新加载",
        )
        self.cursor = cursor


class StoreUnavailableError(HTTPException):
    """数据库暂不可用，可重试"""

    def __init__(self, detail: str = "数据库暂时不可用，请稍后再试") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
        )
