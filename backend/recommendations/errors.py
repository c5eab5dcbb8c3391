from __future__ import annotations


class RecommendationNotFound(Exception):
    """Raised when a recommendation run has nothing to return (HTTP 404)."""

    message = "no recommendations found"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NoPreferencesError(RecommendationNotFound):
    message = "user preferences not found"


class NoMatchingTasksError(RecommendationNotFound):
    message = "no tasks found matching preferences"


class NoSuitableTasksError(RecommendationNotFound):
    message = "no suitable tasks found"
