from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RankingConfig:
    """
    Weights and limits for content-based ranking.
    """

    category_weight: float = 1.5
    city_weight: float = 1.0
    cold_start_pool: int = 50
    max_similar: int = 3
    default_limit: int = 10
    status_weights: dict[str, float] = field(
        default_factory=lambda: {"like": 3.0, "want": 0.5}
    )
    default_status_weight: float = 1.0

    def weight_for(self, status: str) -> float:
        return self.status_weights.get(status, self.default_status_weight)


DEFAULT_RANKING_CONFIG = RankingConfig()
