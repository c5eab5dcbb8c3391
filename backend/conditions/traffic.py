from __future__ import annotations

import logging
from typing import Any

import requests

from .config import DEFAULT_CONDITIONS_CONFIG, ConditionsConfig
from .models import TrafficSnapshot

logger = logging.getLogger(__name__)

_USABLE_STATUSES = {"OK", "ZERO_RESULTS"}


def _route_duration(route: Any) -> int | None:
    """First-leg duration in seconds, or ``None`` when the route is unreadable."""
    if not isinstance(route, dict):
        return None
    legs = route.get("legs")
    if not isinstance(legs, list) or not legs or not isinstance(legs[0], dict):
        return None
    leg = legs[0]
    duration = leg.get("duration_in_traffic") or leg.get("duration")
    if not isinstance(duration, dict):
        return None
    value = duration.get("value")
    return int(value) if isinstance(value, (int, float)) else None


def _parse_directions(location: str, payload: Any) -> TrafficSnapshot | None:
    if not isinstance(payload, dict):
        return None
    if payload.get("status", "OK") not in _USABLE_STATUSES:
        return None

    routes = payload.get("routes")
    if not isinstance(routes, list):
        return None

    durations = [_route_duration(r) for r in routes]
    if any(d is None for d in durations):
        return None
    return TrafficSnapshot(location=location, route_durations=durations)


def fetch_traffic(
    location: str,
    config: ConditionsConfig = DEFAULT_CONDITIONS_CONFIG,
) -> TrafficSnapshot | None:
    """
    Fetch current driving route durations to ``location``.

    A ``ZERO_RESULTS`` answer is a snapshot with no routes. Any transport
    error, non-2xx response, provider error status, or a missing or unreadable
    ``routes`` list returns ``None``.
    """
    if not location or not location.strip():
        raise ValueError("location must be non-empty")

    if not config.maps_api_key:
        logger.warning("GOOGLE_MAPS_API_KEY is not set, traffic unavailable for %r", location)
        return None

    try:
        response = requests.get(
            config.directions_url,
            params={
                "origin": config.traffic_origin or location,
                "destination": location,
                "departure_time": "now",
                "key": config.maps_api_key,
            },
            timeout=config.timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError):
        logger.warning("Traffic lookup failed for %r", location, exc_info=True)
        return None

    snapshot = _parse_directions(location, payload)
    if snapshot is None:
        status = payload.get("status") if isinstance(payload, dict) else None
        logger.warning("Unusable directions payload for %r (status=%s)", location, status)
    return snapshot
