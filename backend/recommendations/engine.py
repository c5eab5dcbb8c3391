from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from itertools import islice

from ..conditions.models import TrafficSnapshot, WeatherSnapshot
from ..conditions.traffic import fetch_traffic
from ..conditions.weather import fetch_weather
from ..llm.location import resolve_location
from ..storage.models import Task, User
from ..storage.repository import find_tasks_by_categories, get_user
from .admission import is_favorable
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .errors import NoMatchingTasksError, NoPreferencesError, NoSuitableTasksError
from .models import RecommendedTask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationDeps:
    """External capabilities one recommendation run talks to."""

    find_user: Callable[[str], User | None]
    find_tasks_by_categories: Callable[[Iterable[str]], list[Task]]
    resolve_location: Callable[[str], str | None]
    fetch_weather: Callable[[str], WeatherSnapshot | None]
    fetch_traffic: Callable[[str], TrafficSnapshot | None]
    rng: random.Random = field(default_factory=random.Random)


@dataclass
class Candidate:
    task: Task
    location: str | None = None
    weather: WeatherSnapshot | None = None
    traffic: TrafficSnapshot | None = None


def default_deps() -> RecommendationDeps:
    # Resolved at call time so module-level adapters can be patched in tests.
    return RecommendationDeps(
        find_user=get_user,
        find_tasks_by_categories=find_tasks_by_categories,
        resolve_location=resolve_location,
        fetch_weather=fetch_weather,
        fetch_traffic=fetch_traffic,
    )


def _evaluate(
    candidate: Candidate,
    deps: RecommendationDeps,
    config: RecommendationConfig,
) -> bool:
    """Enrich one candidate in place and decide whether it is admitted."""
    candidate.location = deps.resolve_location(candidate.task.detail or "")
    if not candidate.location:
        logger.debug("Task %s skipped: no location", candidate.task.id)
        return False

    candidate.weather = deps.fetch_weather(candidate.location)
    candidate.traffic = deps.fetch_traffic(candidate.location)
    if candidate.weather is None or candidate.traffic is None:
        logger.debug("Task %s skipped: conditions unavailable at %s", candidate.task.id, candidate.location)
        return False

    return is_favorable(candidate.weather, candidate.traffic, config)


def _admitted(
    tasks: Iterable[Task],
    deps: RecommendationDeps,
    config: RecommendationConfig,
    stats: dict[str, int],
) -> Iterator[Candidate]:
    """Lazily yield admitted candidates in store order."""
    seen: set[str] = set()
    for task in tasks:
        if task.id in seen:
            continue
        seen.add(task.id)
        stats["scanned"] += 1

        candidate = Candidate(task=task)
        try:
            admitted = _evaluate(candidate, deps, config)
        except Exception:
            logger.warning("Task %s skipped: evaluation failed", task.id, exc_info=True)
            continue

        if admitted:
            yield candidate


def _to_recommended(candidate: Candidate, rng: random.Random, config: RecommendationConfig) -> RecommendedTask:
    task = candidate.task
    return RecommendedTask(
        id=task.id,
        type=task.type,
        detail=task.detail,
        exp=rng.randint(config.reward_min, config.reward_max),
        completion_criteria=task.completion_criteria,
        task_completed=False,
    )


def recommend_tasks(
    user_id: str,
    deps: RecommendationDeps | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[RecommendedTask]:
    """
    Recommend up to ``config.max_results`` tasks for a user.

    Candidates are the user's preferred-category tasks in store order. Each
    is checked in turn (location, then weather and traffic, then the
    admission predicate); the scan stops as soon as enough are admitted.
    A candidate whose lookups fail is skipped, never fatal.

    Raises NoPreferencesError, NoMatchingTasksError or NoSuitableTasksError.
    """
    deps = deps or default_deps()

    user = deps.find_user(user_id)
    if user is None or not user.preferences:
        raise NoPreferencesError()

    tasks = deps.find_tasks_by_categories({p.value for p in user.preferences})
    if not tasks:
        raise NoMatchingTasksError()

    stats = {"scanned": 0}
    admitted = islice(_admitted(tasks, deps, config, stats), config.max_results)
    results = [_to_recommended(c, deps.rng, config) for c in admitted]

    logger.info(
        "Recommendation for user %s: %d distinct candidates, %d scanned, %d admitted",
        user_id, len({t.id for t in tasks}), stats["scanned"], len(results),
    )

    if not results:
        raise NoSuitableTasksError()
    return results
