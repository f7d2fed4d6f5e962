"""Locale resolution, message catalogue and display configuration."""

import os
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

FALLBACK_LOCALE = "zh-CN"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "yearly_cost": "Yearly cost",
        "server_count": " servers",
        "daily_avg_cost": "Daily cost",
        "monthly_forecast": "Monthly forecast",
        "no_data": "Server data not loaded or empty",
        "invalid_input": "Server data is not a list: {type}",
        "unparsable_expire": 'Server "{name}" has an unparsable expire value: {value}',
    },
    "zh": {
        "yearly_cost": "年度费用",
        "server_count": "台",
        "daily_avg_cost": "日均费用",
        "monthly_forecast": "月度费用预测",
        "no_data": "服务器数据未加载或为空",
        "invalid_input": "服务器数据格式不正确：{type}",
        "unparsable_expire": "服务器“{name}”的 expire 无法解析：{value}",
    },
}

# language -> (group separator, decimal separator)
NUMBER_SEPARATORS: Dict[str, Tuple[str, str]] = {
    "en": (",", "."),
    "zh": (",", "."),
    "ja": (",", "."),
    "de": (".", ","),
    "fr": (" ", ","),
    "ru": (" ", ","),
}

MONTH_ABBREVIATIONS: Dict[str, Tuple[str, ...]] = {
    "en": ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"),
    "de": ("Jan.", "Feb.", "März", "Apr.", "Mai", "Juni", "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez."),
    "fr": ("janv.", "févr.", "mars", "avr.", "mai", "juin", "juil.", "août", "sept.", "oct.", "nov.", "déc."),
}

# Languages that render "2025年6月"
_YEAR_MONTH_CJK = {"zh", "ja"}

Translator = Callable[..., str]


def language_of(locale_tag: Optional[str]) -> str:
    """Primary language subtag, e.g. ``"zh"`` for ``"zh-CN"`` or ``"zh_CN.UTF-8"``."""
    if not locale_tag:
        return language_of(FALLBACK_LOCALE)
    return re.split(r"[-_.@]", str(locale_tag).strip())[0].lower() or language_of(FALLBACK_LOCALE)


def _platform_locale() -> Optional[str]:
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var, "")
        tag = value.split(".")[0].split("@")[0]
        if tag and tag not in ("C", "POSIX"):
            return tag.replace("_", "-")
    return None


def resolve_locale(explicit: Optional[str] = None, configured: Optional[str] = None) -> str:
    """Pick the active locale tag.

    Order: explicit argument, configured value, platform language,
    then ``FALLBACK_LOCALE``.
    """
    return explicit or configured or _platform_locale() or FALLBACK_LOCALE


def translate_for(locale_tag: Optional[str]) -> Translator:
    """Build a ``translate(key, **kwargs)`` callable for a locale.

    Unknown languages fall back to English, unknown keys to the key itself.
    """
    catalogue = MESSAGES.get(language_of(locale_tag), MESSAGES["en"])

    def translate(key: str, **kwargs) -> str:
        template = catalogue.get(key) or MESSAGES["en"].get(key) or key
        return template.format(**kwargs) if kwargs else template

    return translate


def format_month_label(year: int, month: int, locale_tag: Optional[str]) -> str:
    """Short month/year label, e.g. ``Jun 2025`` or ``2025年6月``."""
    language = language_of(locale_tag)
    if language in _YEAR_MONTH_CJK:
        return f"{year}年{month}月"

    names = MONTH_ABBREVIATIONS.get(language, MONTH_ABBREVIATIONS["en"])
    return f"{names[month - 1]} {year}"


@dataclass
class DisplayConfig:
    """Presentation settings injected by the caller."""

    locale: str = field(default_factory=resolve_locale)
    currency_symbol: str = "¥"
    translate: Optional[Translator] = None

    def __post_init__(self):
        if self.translate is None:
            self.translate = translate_for(self.locale)
