from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class TaskType(str, Enum):
    explore = "explore"
    food = "food"
    shop = "shop"
    cultural = "cultural"
    adventure = "adventure"
    social = "social"


class RewardTier(str, Enum):
    bronze = "bronze"
    silver = "silver"
    gold = "gold"
    platinum = "platinum"
    diamond = "diamond"


# ── Stored records ───────────────────────────────────────────────────────


class Task(BaseModel):
    id: str
    type: TaskType
    detail: str | None = None
    reward_type: RewardTier
    completion_criteria: str | None = None
    task_completed: bool = False


class Reward(BaseModel):
    id: str
    code: str
    name: str
    description: str
    redeemed: bool = False


class TaskAssignment(BaseModel):
    task_id: str
    completed: bool = False


class User(BaseModel):
    id: str
    username: str
    google_id: str
    email: str | None = None
    profile_picture: str | None = None
    exp: int = 0
    preferences: list[TaskType] = Field(default_factory=list)
    rewards_earned: list[str] = Field(default_factory=list)
    tasks: list[TaskAssignment] = Field(default_factory=list)


# ── Request bodies ───────────────────────────────────────────────────────


class TaskCreate(BaseModel):
    type: TaskType
    detail: str | None = None
    reward_type: RewardTier
    completion_criteria: str | None = None
    task_completed: bool = False


class TaskUpdate(BaseModel):
    type: TaskType | None = None
    detail: str | None = None
    reward_type: RewardTier | None = None
    completion_criteria: str | None = None
    task_completed: bool | None = None


class RewardCreate(BaseModel):
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    redeemed: bool = False


class RewardUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    redeemed: bool | None = None


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    google_id: str = Field(..., min_length=1)
    email: str | None = None
    profile_picture: str | None = None
    preferences: list[TaskType] = Field(default_factory=list)


class UserUpdate(BaseModel):
    username: str | None = None
    email: str | None = None
    profile_picture: str | None = None
    exp: int | None = Field(default=None, ge=0)
    preferences: list[TaskType] | None = None
