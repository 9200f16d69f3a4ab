"""
Locale 中间件：为每个请求选择消息目录语言，供错误码 label 的本地化解析使用
"""
from __future__ import annotations

from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import settings
from core.i18n import resolve_locale, set_locale

_ALIASES = {
    "zh": "zh_Hans",
    "zh-cn": "zh_Hans",
    "zh-hans": "zh_Hans",
    "zh-sg": "zh_Hans",
}


def pick_from_accept_language(header: str) -> Optional[str]:
    """Return the highest-weighted tag of an Accept-Language header.

    'zh-CN,zh;q=0.9,en-US;q=0.8' -> 'zh-CN'; entries with q=0 are ignored,
    equal weights keep header order.
    """
    weighted: list[tuple[str, float]] = []
    for raw in header.split(","):
        tag, _, param = raw.strip().partition(";")
        tag = tag.strip()
        if not tag:
            continue
        weight = 1.0
        param = param.strip()
        if param.startswith("q="):
            try:
                weight = float(param[2:])
            except ValueError:
                pass
        if weight > 0:
            weighted.append((tag, weight))
    if not weighted:
        return None
    return max(weighted, key=lambda item: item[1])[0]


def normalize_locale(tag: Optional[str]) -> str:
    """Map a browser language tag onto a shipped catalog name, else the default."""
    if not tag:
        return settings.DEFAULT_LOCALE
    key = tag.replace("_", "-").lower()
    if key in _ALIASES:
        return _ALIASES[key]
    if key == "en" or key.startswith("en-"):
        return "en"
    return resolve_locale(tag)


class LocaleMiddleware(BaseHTTPMiddleware):
    """Priority: ?lang=xx > X-Lang > Accept-Language > DEFAULT_LOCALE."""

    async def dispatch(self, request: Request, call_next):
        tag = request.query_params.get("lang") or request.headers.get("X-Lang")
        if not tag:
            tag = pick_from_accept_language(request.headers.get("Accept-Language", ""))
        locale = normalize_locale(tag)
        set_locale(locale)
        request.state.locale = locale
        return await call_next(request)
