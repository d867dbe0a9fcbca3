from __future__ import annotations

from pydantic import BaseModel, Field

from ..places.models import Place
from .config import DEFAULT_RANKING_CONFIG


class PreferenceProfile(BaseModel):
    category_scores: dict[str, float] = Field(default_factory=dict)
    city_scores: dict[str, float] = Field(default_factory=dict)
    has_history: bool = False


class SimilarPlace(BaseModel):
    visited_id: str
    visited_name: str
    similarity: float = 1.0


class RankedPlace(Place):
    visitor_count: int = 0
    visitors: list[str] = Field(default_factory=list)
    cf_score: float = 0.0
    similar_to: list[SimilarPlace] = Field(default_factory=list)


class RecommendationRequest(BaseModel):
    limit: int = Field(default=DEFAULT_RANKING_CONFIG.default_limit, ge=1, le=50)


class RecommendationResponse(BaseModel):
    recommendations: list[RankedPlace]
    total_candidates: int
    cold_start: bool
