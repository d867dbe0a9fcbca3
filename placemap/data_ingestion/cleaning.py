from __future__ import annotations

import logging
from typing import Iterable

from ..places.models import Place

logger = logging.getLogger(__name__)

UNCATEGORIZED = "未分類"
PLACEHOLDER_CATEGORIES = {"", UNCATEGORIZED, "島國"}

# First matching rule wins, so broader keywords ("店") come last.
CATEGORY_RULES: list[tuple[tuple[str, ...], str]] = [
    (("咖啡", "cafe", "coffee", "roaster", "珈琲"), "咖啡廳"),
    (("茶", "tea", "飲料", "手搖", "飲"), "飲料店"),
    (("書", "book", "閱讀"), "書店"),
    (("酒", "bar", "bistro", "餐酒館", "居酒屋"), "酒吧"),
    (
        (
            "食", "餐", "飯", "麵", "廚房", "kitchen", "食堂", "料理", "早午餐",
            "brunch", "pizza", "披薩", "漢堡", "burger", "火鍋", "燒肉", "小吃",
            "點心", "蛋糕", "cake", "甜點", "dessert", "冰", "ice", "豆花",
        ),
        "美食",
    ),
    (("醫", "診所", "藥局"), "醫療"),
    (("宿", "hotel", "民宿", "旅店"), "住宿"),
    (
        ("藝", "art", "設計", "design", "工作室", "studio", "花", "flower", "照", "photo", "攝影"),
        "藝文/工作室",
    ),
    (("寵物", "pet", "貓", "狗"), "寵物"),
    (("髮", "hair", "美甲", "nail", "美容", "spa"), "美容"),
    (("服飾", "衣", "鞋", "包", "店"), "購物"),
]

# Special municipalities, provincial cities and counties.
VALID_DIVISIONS = frozenset({
    "臺北市", "新北市", "桃園市", "臺中市", "臺南市", "高雄市",
    "基隆市", "新竹市", "嘉義市",
    "新竹縣", "苗栗縣", "彰化縣", "南投縣", "雲林縣", "嘉義縣",
    "屏東縣", "宜蘭縣", "花蓮縣", "臺東縣", "澎湖縣", "金門縣", "連江縣",
})


def infer_category(name: str) -> str:
    """Guess a category from keywords in a place name."""
    lowered = name.lower()
    for keywords, category in CATEGORY_RULES:
        if any(k in lowered for k in keywords):
            return category
    return UNCATEGORIZED


def fill_categories(places: Iterable[Place]) -> list[Place]:
    """Infer categories for places that only carry a placeholder."""
    result: list[Place] = []
    updated = 0
    for place in places:
        if place.category in PLACEHOLDER_CATEGORIES:
            place = place.model_copy(update={"category": infer_category(place.name)})
            updated += 1
        result.append(place)
    if updated:
        logger.info("Inferred categories for %d places", updated)
    return result


def normalize_division(place: Place) -> Place | None:
    """Move the recognised top-level division into ``city``.

    ``county`` is checked first and cleared afterwards. Returns ``None`` when
    neither field names a recognised division.
    """
    if place.county and place.county in VALID_DIVISIONS:
        division = place.county
    elif place.city and place.city in VALID_DIVISIONS:
        division = place.city
    else:
        return None
    return place.model_copy(update={"city": division, "county": ""})


def restrict_to_divisions(places: Iterable[Place]) -> list[Place]:
    kept: list[Place] = []
    dropped = 0
    for place in places:
        normalized = normalize_division(place)
        if normalized is None:
            dropped += 1
            continue
        kept.append(normalized)
    if dropped:
        logger.info("Dropped %d places outside recognised divisions", dropped)
    return kept
