from __future__ import annotations

import logging
from typing import Any

import requests

from .config import DEFAULT_CONDITIONS_CONFIG, ConditionsConfig
from .models import WeatherSnapshot

logger = logging.getLogger(__name__)


def _parse_weather(location: str, payload: Any) -> WeatherSnapshot | None:
    if not isinstance(payload, dict):
        return None

    conditions = payload.get("weather") or []
    if not isinstance(conditions, list):
        return None
    if conditions and not isinstance(conditions[0], dict):
        return None
    primary = conditions[0] if conditions else {}
    main = payload.get("main") if isinstance(payload.get("main"), dict) else {}
    temperature = main.get("temp")

    return WeatherSnapshot(
        location=location,
        category=primary.get("main") or None,
        description=primary.get("description"),
        temperature=float(temperature) if isinstance(temperature, (int, float)) else None,
    )


def fetch_weather(
    location: str,
    config: ConditionsConfig = DEFAULT_CONDITIONS_CONFIG,
) -> WeatherSnapshot | None:
    """
    Fetch the current weather at ``location``.

    Returns ``None`` when the provider cannot be evaluated: missing API key,
    transport error or timeout, non-2xx response, or a body that is not a
    JSON object. A body without a weather category still yields a snapshot
    with ``category=None``.
    """
    if not location or not location.strip():
        raise ValueError("location must be non-empty")

    if not config.weather_api_key:
        logger.warning("WEATHER_API_KEY is not set, weather unavailable for %r", location)
        return None

    try:
        response = requests.get(
            config.weather_url,
            params={
                "q": location,
                "appid": config.weather_api_key,
                "units": config.weather_units,
            },
            timeout=config.timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError):
        logger.warning("Weather lookup failed for %r", location, exc_info=True)
        return None

    snapshot = _parse_weather(location, payload)
    if snapshot is None:
        logger.warning("Malformed weather payload for %r", location)
    return snapshot
