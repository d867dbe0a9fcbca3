"""
Content-based ranking of unseen places.

Scoring for a warm user:

    score = 1.5 × category affinity  +  1.0 × city affinity  +  U[0, 1)

The uniform term is drawn fresh for every candidate on every call. It breaks
ties and rotates which near-equal places get shown, so repeated calls are not
expected to return the same order.

Users without usable history get a cold-start list instead: the most visited
unseen places, shuffled, with a zero score.
"""
from __future__ import annotations

import random
from typing import Iterable, Mapping

from ..places.models import Place, parse_visitors
from ..user_status.models import PlaceStatus
from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import PreferenceProfile, RankedPlace, SimilarPlace
from .profile import build_profile, index_places

_EXPLANATION_EXCLUDED = (PlaceStatus.dislike, PlaceStatus.want)


def _ranked(
    place: Place,
    cf_score: float = 0.0,
    similar_to: list[SimilarPlace] | None = None,
) -> RankedPlace:
    visitors = parse_visitors(place.recent_visitors)
    return RankedPlace(
        **place.model_dump(exclude_unset=True, include=set(Place.model_fields)),
        visitor_count=len(visitors),
        visitors=visitors,
        cf_score=cf_score,
        similar_to=similar_to or [],
    )


def candidate_places(
    all_places: Iterable[Place], status_map: Mapping[str, str]
) -> list[Place]:
    """Places with no status entry at all."""
    return [p for p in all_places if p.place_id not in status_map]


def _similar_places(
    candidate: Place,
    status_map: Mapping[str, str],
    by_id: Mapping[str, Place],
    limit: int,
) -> list[SimilarPlace]:
    if not candidate.category:
        return []
    similar: list[SimilarPlace] = []
    for place_id, status in status_map.items():
        if status in _EXPLANATION_EXCLUDED:
            continue
        seen = by_id.get(place_id)
        if seen is None or seen.category != candidate.category:
            continue
        similar.append(
            SimilarPlace(visited_id=seen.place_id, visited_name=seen.name, similarity=1.0)
        )
        if len(similar) >= limit:
            break
    return similar


def _cold_start(
    candidates: list[Place],
    limit: int,
    rng: random.Random,
    config: RankingConfig,
) -> list[RankedPlace]:
    ranked = [_ranked(p) for p in candidates]
    ranked.sort(key=lambda r: r.visitor_count, reverse=True)
    pool = ranked[: config.cold_start_pool]
    rng.shuffle(pool)
    return pool[:limit]


def recommend(
    all_places: list[Place],
    status_map: Mapping[str, str],
    profile: PreferenceProfile,
    limit: int | None = None,
    rng: random.Random | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedPlace]:
    """Rank places the user has not annotated yet.

    ``limit`` defaults to ``config.default_limit``. ``rng`` only needs
    ``random()`` and ``shuffle()``; pass a seeded ``random.Random`` for
    reproducible output.
    """
    rng = rng or random.Random()
    if limit is None:
        limit = config.default_limit
    candidates = candidate_places(all_places, status_map)

    if not profile.has_history:
        return _cold_start(candidates, limit, rng, config)

    by_id = index_places(all_places)
    scored: list[RankedPlace] = []
    for place in candidates:
        cat_score = profile.category_scores.get(place.category, 0.0) if place.category else 0.0
        city_score = profile.city_scores.get(place.city, 0.0) if place.city else 0.0
        score = (
            config.category_weight * cat_score
            + config.city_weight * city_score
            + rng.random()
        )
        similar = _similar_places(place, status_map, by_id, config.max_similar)
        scored.append(_ranked(place, score, similar))

    scored.sort(key=lambda r: r.cf_score, reverse=True)
    return scored[:limit]


def get_recommendations(
    all_places: list[Place],
    status_map: Mapping[str, str],
    limit: int | None = None,
    rng: random.Random | None = None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[RankedPlace]:
    """Build the preference profile and rank in one call."""
    profile = build_profile(all_places, status_map, config)
    return recommend(all_places, status_map, profile, limit, rng, config)
