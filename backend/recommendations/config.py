from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RecommendationConfig:
    max_results: int = 5
    max_route_seconds: int = 1800
    reward_min: int = 10
    reward_max: int = 100
    precipitation_categories: frozenset[str] = frozenset(
        {"rain", "drizzle", "thunderstorm", "snow"}
    )


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
