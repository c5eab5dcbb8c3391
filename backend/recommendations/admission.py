from __future__ import annotations

from ..conditions.models import TrafficSnapshot, WeatherSnapshot
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig


def is_weather_favorable(
    weather: WeatherSnapshot,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> bool:
    """Favorable unless the primary category is missing or is precipitation."""
    if not weather.category:
        return False
    return weather.category.strip().lower() not in config.precipitation_categories


def is_traffic_favorable(
    traffic: TrafficSnapshot,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> bool:
    """Favorable when at least one route exists and the best one is under the threshold."""
    best = traffic.best_duration
    return best is not None and best < config.max_route_seconds


def is_favorable(
    weather: WeatherSnapshot,
    traffic: TrafficSnapshot,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> bool:
    return is_weather_favorable(weather, config) and is_traffic_favorable(traffic, config)
