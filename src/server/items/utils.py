# -*- coding: utf-8 -*-
"""
条目模块工具函数

公开接口：
- `build_item_fingerprint`
- `normalize_item_url`

内部方法：
- `_normalize_datetime_utc`
- `_normalize_title`

文件功能：
- 提供条目指纹计算与时间归一化等被模型层与服务层共享的底层工具。
"""

from __future__ import annotations

import hashlib
import re
from datetime import datetime, timezone
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_WHITESPACE_RX = re.compile(r"\s+")


def _normalize_datetime_utc(value: datetime | None) -> datetime | None:
    """统一将时间转换为 UTC 时区。"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _normalize_title(title: str | None) -> str:
    """标题转小写并折叠空白。"""
    return _WHITESPACE_RX.sub(" ", (title or "").casefold()).strip()


def normalize_item_url(url: str | None) -> str | None:
    """归一化条目链接：忽略协议大小写、`www.` 前缀、锚点、`utm_*` 参数与末尾斜杠。"""
    if not url or not url.strip():
        return None
    parts = urlsplit(url.strip())
    host = parts.netloc.lower()
    if host.startswith("www."):
        host = host[4:]
    query = urlencode(
        [
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if not key.lower().startswith("utm_")
        ]
    )
    path = parts.path.rstrip("/")
    return urlunsplit((parts.scheme.lower(), host, path, query, ""))


def build_item_fingerprint(url: str | None, title: str | None) -> str:
    """根据链接（缺失时退回标题）构建条目指纹，用于识别重复内容。"""
    normalized_url = normalize_item_url(url)
    if normalized_url:
        raw = f"url||{normalized_url}"
    else:
        raw = f"title||{_normalize_title(title)}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
