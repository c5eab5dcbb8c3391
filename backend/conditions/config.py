from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class ConditionsConfig:
    weather_api_key: str = os.getenv("WEATHER_API_KEY", "")
    weather_url: str = os.getenv(
        "WEATHER_API_URL", "https://api.openweathermap.org/data/2.5/weather"
    )
    weather_units: str = "metric"
    maps_api_key: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    directions_url: str = os.getenv(
        "DIRECTIONS_API_URL", "https://maps.googleapis.com/maps/api/directions/json"
    )
    # Empty means "route from the place to itself".
    traffic_origin: str = os.getenv("TRAFFIC_ORIGIN", "")
    timeout: float = float(os.getenv("CONDITIONS_TIMEOUT", "10"))


DEFAULT_CONDITIONS_CONFIG = ConditionsConfig()
