"""Canonical taxonomy definitions for wardrobe items.

Category and season are closed enumerations. Their values are the display
labels that get persisted with every record; helpers accept either the label
(``"上装"``) or the member name (``"TOP"``) so classifier output and form input
resolve to the same member.
"""

from enum import Enum
from typing import List, Type, TypeVar


class Category(str, Enum):
    TOP = "上装"
    BOTTOM = "下装"
    SHOES = "鞋履"
    OUTERWEAR = "外套"
    ACCESSORY = "配饰"
    DRESS = "连衣裙"
    OTHER = "其他"


class Season(str, Enum):
    SUMMER = "夏季"
    WINTER = "冬季"
    SPRING_AUTUMN = "春秋"
    ALL_SEASON = "四季通用"


ALL_CATEGORIES = "全部"

LOCATIONS: List[str] = [
    "衣柜 - 挂衣区",
    "衣柜 - 上层",
    "抽屉 - 上层",
    "抽屉 - 下层",
    "鞋架",
    "收纳箱",
    "洗衣房",
    "其他",
]

WEATHER_PRESETS: List[str] = ["晴朗炎热", "凉爽微风", "下雨天", "寒冷冬季"]
OCCASION_PRESETS: List[str] = ["工作/办公", "休闲约会", "健身/运动", "派对聚会"]

DEFAULT_ITEM_NAME = "未命名衣物"
UNKNOWN_LABEL = "未知"
DEFAULT_CATEGORY = Category.TOP
DEFAULT_SEASON = Season.ALL_SEASON

E = TypeVar("E", Category, Season)


def _coerce_member(enum_cls: Type[E], value: object, label: str) -> E:
    if isinstance(value, enum_cls):
        return value
    key = str(value).strip() if value is not None else ""
    for member in enum_cls:
        if key == member.value or key.upper() == member.name:
            return member
    raise ValueError(
        f"Unsupported {label} '{value}'. Allowed: {[member.value for member in enum_cls]}"
    )


def validate_category(value: object) -> Category:
    """Validate and normalise a category label or member name.

    Raises a :class:`ValueError` if the value is outside the enumeration.
    """

    return _coerce_member(Category, value, "category")


def validate_season(value: object) -> Season:
    """Validate and normalise a season label or member name."""

    return _coerce_member(Season, value, "season")


def category_labels() -> List[str]:
    return [category.value for category in Category]


def season_labels() -> List[str]:
    return [season.value for season in Season]


__all__ = [
    "Category",
    "Season",
    "ALL_CATEGORIES",
    "LOCATIONS",
    "WEATHER_PRESETS",
    "OCCASION_PRESETS",
    "DEFAULT_ITEM_NAME",
    "UNKNOWN_LABEL",
    "DEFAULT_CATEGORY",
    "DEFAULT_SEASON",
    "validate_category",
    "validate_season",
    "category_labels",
    "season_labels",
]
