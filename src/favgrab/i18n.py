"""
Message catalogs for fallback markers, errors and presentation labels.
"""

from __future__ import annotations

from typing import Dict, Optional

import structlog

logger = structlog.get_logger(__name__)

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "Favicon & Meta Lookup",
        "subTitle": "Find the icons, title, keywords and description of any website",
        "inputPlaceholder": "Enter a website address, e.g. github.com",
        "fetch": "Fetch",
        "fetching": "Fetching...",
        "tryExamples": "Try an example:",
        "pageTitle": "Page title",
        "favicon": "Icons",
        "keywords": "Keywords",
        "description": "Description",
        "noTitle": "No title found",
        "noKeywords": "No keywords found",
        "noDescription": "No description found",
        "invalidUrl": "Please enter a valid URL",
        "fetchError": "Failed to fetch the website, please check the URL or try again later",
        "inputRequired": "Please enter a website address",
    },
    "zh": {
        "title": "网站图标与元信息查询",
        "subTitle": "获取任意网站的图标、标题、关键词和描述",
        "inputPlaceholder": "输入网址，例如 github.com",
        "fetch": "获取",
        "fetching": "获取中...",
        "tryExamples": "试试这些网站：",
        "pageTitle": "网站标题",
        "favicon": "网站图标",
        "keywords": "关键词",
        "description": "描述",
        "noTitle": "未找到标题",
        "noKeywords": "未找到关键词",
        "noDescription": "未找到描述",
        "invalidUrl": "请输入有效的网址",
        "fetchError": "获取网站信息失败，请检查网址或稍后重试",
        "inputRequired": "请输入网址",
    },
}


class Localizer:
    """Looks up message strings by key for one locale."""

    def __init__(self, locale: str = "en", fallback_locale: str = "en"):
        if fallback_locale not in MESSAGES:
            raise ValueError(f"Unknown fallback locale: {fallback_locale}")
        self.fallback_locale = fallback_locale
        self.locale = locale if locale in MESSAGES else fallback_locale
        if self.locale != locale:
            logger.warning("Unknown locale, using fallback", locale=locale, fallback=fallback_locale)

    @staticmethod
    def available() -> list[str]:
        return sorted(MESSAGES)

    def with_locale(self, locale: Optional[str]) -> Localizer:
        if not locale or locale == self.locale:
            return self
        return Localizer(locale, self.fallback_locale)

    def t(self, key: str) -> str:
        """Translate ``key``; unknown keys are returned unchanged."""
        catalog = MESSAGES[self.locale]
        if key in catalog:
            return catalog[key]
        return MESSAGES[self.fallback_locale].get(key, key)
