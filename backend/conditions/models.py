from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WeatherSnapshot:
    location: str
    category: str | None
    description: str | None = None
    temperature: float | None = None


@dataclass(frozen=True)
class TrafficSnapshot:
    location: str
    route_durations: list[int] = field(default_factory=list)

    @property
    def best_duration(self) -> int | None:
        """Shortest route duration in seconds, or ``None`` with no routes."""
        return min(self.route_durations) if self.route_durations else None
