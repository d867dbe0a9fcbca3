from __future__ import annotations

from typing import Iterable, Mapping

from ..places.models import Place
from ..user_status.models import PlaceStatus
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import PreferenceProfile


def index_places(places: Iterable[Place]) -> dict[str, Place]:
    """Map place id -> place, keeping the first place seen for each id."""
    index: dict[str, Place] = {}
    for place in places:
        index.setdefault(place.place_id, place)
    return index


def _add_score(scores: dict[str, float], key: str | None, weight: float) -> None:
    if not key:
        return
    scores[key] = scores.get(key, 0.0) + weight


def build_profile(
    all_places: Iterable[Place],
    status_map: Mapping[str, str],
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> PreferenceProfile:
    """Accumulate category and city affinities from a user's statuses.

    Dislikes add no weight. Statuses pointing at unknown ids are ignored.
    """
    by_id = index_places(all_places)
    profile = PreferenceProfile()

    for place_id, status in status_map.items():
        if status == PlaceStatus.dislike:
            continue
        place = by_id.get(place_id)
        if place is None:
            continue

        profile.has_history = True
        weight = config.weight_for(status)
        _add_score(profile.category_scores, place.category, weight)
        _add_score(profile.city_scores, place.city, weight)

    return profile
