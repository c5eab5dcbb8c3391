from __future__ import annotations

from pydantic import BaseModel, Field

from ..storage.models import TaskType


class RecommendedTask(BaseModel):
    id: str
    type: TaskType
    detail: str | None = None
    exp: int = Field(..., gt=0, description="Reward points assigned at recommendation time")
    completion_criteria: str | None = None
    task_completed: bool = False


class ErrorResponse(BaseModel):
    error: str
