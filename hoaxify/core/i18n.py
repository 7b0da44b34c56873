"""国际化消息

消息目录位于 hoaxify/locales/<locale>.json，语言由调用方显式传入。
"""

import json
from functools import lru_cache
from importlib import resources
from typing import Annotated

from fastapi import Depends, Request

DEFAULT_LOCALE = "en"


@lru_cache
def load_catalog(locale: str) -> dict[str, str]:
    """加载某个语言的消息目录"""
    path = resources.files("hoaxify") / "locales" / f"{locale}.json"
    return json.loads(path.read_text(encoding="utf-8"))


def translate(key: str, locale: str, **params: str) -> str:
    """按语言解析消息 key，找不到时回退到默认语言，再回退到 key 本身"""
    message = load_catalog(locale).get(key)
    if message is None and locale != DEFAULT_LOCALE:
        message = load_catalog(DEFAULT_LOCALE).get(key)
    if message is None:
        return key
    return message.format(**params) if params else message


def negotiate_locale(
    header: str | None,
    supported: list[str],
    default: str = DEFAULT_LOCALE,
) -> str:
    """
    从 Accept-Language 请求头选择语言

    例如 "bg-BG,bg;q=0.9,en;q=0.8" -> "bg"；无法识别时返回 default。
    """
    if not header:
        return default
    for part in header.split(","):
        tag = part.split(";")[0].strip().lower()
        if not tag:
            continue
        if tag in supported:
            return tag
        primary = tag.split("-")[0]
        if primary in supported:
            return primary
    return default


def request_locale(request: Request) -> str:
    """请求语言（也供异常处理器使用）"""
    settings = request.app.state.settings
    return negotiate_locale(
        request.headers.get("Accept-Language"),
        settings.supported_locales,
        settings.default_locale,
    )


Locale = Annotated[str, Depends(request_locale)]
