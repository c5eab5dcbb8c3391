from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import TypeVar

from pydantic import BaseModel

from .models import (
    Reward,
    RewardCreate,
    RewardUpdate,
    Task,
    TaskAssignment,
    TaskCreate,
    TaskUpdate,
    User,
    UserCreate,
    UserUpdate,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Insertion-ordered; store order is what the recommendation scan walks.
_users: dict[str, User] = {}
_tasks: dict[str, Task] = {}
_rewards: dict[str, Reward] = {}


class StoreError(Exception):
    """Base class for repository failures the API layer turns into 4xx."""


class RecordNotFound(StoreError):
    pass


class DuplicateError(StoreError):
    pass


def _new_id() -> str:
    return uuid.uuid4().hex


def _apply_update(record: ModelT, data: BaseModel) -> ModelT:
    """Merge the fields set on ``data`` into ``record`` and revalidate.

    Raises pydantic.ValidationError when the merged record is invalid,
    e.g. an explicit null for a required field.
    """
    changes = data.model_dump(exclude_unset=True)
    return type(record).model_validate({**record.model_dump(), **changes})


# ── Tasks ────────────────────────────────────────────────────────────────


def create_task(data: TaskCreate) -> Task:
    task = Task(id=_new_id(), **data.model_dump())
    _tasks[task.id] = task
    return task


def get_task(task_id: str) -> Task | None:
    return _tasks.get(task_id)


def list_tasks() -> list[Task]:
    return list(_tasks.values())


def update_task(task_id: str, data: TaskUpdate) -> Task | None:
    task = _tasks.get(task_id)
    if task is None:
        return None
    updated = _apply_update(task, data)
    _tasks[task_id] = updated
    return updated


def delete_task(task_id: str) -> bool:
    return _tasks.pop(task_id, None) is not None


def find_tasks_by_categories(categories: Iterable[str]) -> list[Task]:
    """Return tasks whose type is one of ``categories``, in store order."""
    wanted = {str(getattr(c, "value", c)) for c in categories}
    return [t for t in _tasks.values() if t.type.value in wanted]


# ── Rewards ──────────────────────────────────────────────────────────────


def create_reward(data: RewardCreate) -> Reward:
    if get_reward_by_code(data.code) is not None:
        raise DuplicateError("Reward with this code already exists")
    reward = Reward(id=_new_id(), **data.model_dump())
    _rewards[reward.id] = reward
    return reward


def get_reward(reward_id: str) -> Reward | None:
    return _rewards.get(reward_id)


def get_reward_by_code(code: str) -> Reward | None:
    for reward in _rewards.values():
        if reward.code == code:
            return reward
    return None


def list_rewards() -> list[Reward]:
    return list(_rewards.values())


def update_reward_by_code(code: str, data: RewardUpdate) -> Reward | None:
    reward = get_reward_by_code(code)
    if reward is None:
        return None
    updated = _apply_update(reward, data)
    _rewards[reward.id] = updated
    return updated


def delete_reward_by_code(code: str) -> bool:
    reward = get_reward_by_code(code)
    if reward is None:
        return False
    del _rewards[reward.id]
    return True


# ── Users ────────────────────────────────────────────────────────────────


def create_user(data: UserCreate) -> User:
    if find_user_by_google_id(data.google_id) is not None:
        raise DuplicateError("User already exists")
    user = User(id=_new_id(), **data.model_dump())
    _users[user.id] = user
    return user


def get_user(user_id: str) -> User | None:
    return _users.get(user_id)


def find_user_by_google_id(google_id: str) -> User | None:
    for user in _users.values():
        if user.google_id == google_id:
            return user
    return None


def list_users() -> list[User]:
    return list(_users.values())


def update_user(user_id: str, data: UserUpdate) -> User | None:
    user = _users.get(user_id)
    if user is None:
        return None
    updated = _apply_update(user, data)
    _users[user_id] = updated
    return updated


def delete_user(user_id: str) -> bool:
    return _users.pop(user_id, None) is not None


def _require_user(user_id: str) -> User:
    user = _users.get(user_id)
    if user is None:
        raise RecordNotFound("User not found")
    return user


def assign_reward(user_id: str, reward_id: str) -> User:
    user = _require_user(user_id)
    if reward_id not in _rewards:
        raise RecordNotFound("Reward not found")
    if reward_id in user.rewards_earned:
        raise DuplicateError("Reward already assigned")
    user.rewards_earned.append(reward_id)
    return user


def remove_reward(user_id: str, reward_id: str) -> User:
    user = _require_user(user_id)
    user.rewards_earned = [r for r in user.rewards_earned if r != reward_id]
    return user


def assign_task(user_id: str, task_id: str) -> User:
    user = _require_user(user_id)
    if task_id not in _tasks:
        raise RecordNotFound("Task not found")
    if any(a.task_id == task_id for a in user.tasks):
        raise DuplicateError("Task already assigned")
    user.tasks.append(TaskAssignment(task_id=task_id))
    return user


def remove_task(user_id: str, task_id: str) -> User:
    user = _require_user(user_id)
    user.tasks = [a for a in user.tasks if a.task_id != task_id]
    return user


def complete_task(user_id: str, task_id: str) -> User:
    user = _require_user(user_id)
    for assignment in user.tasks:
        if assignment.task_id == task_id:
            assignment.completed = True
            return user
    raise RecordNotFound("Task not assigned to user")


def clear_store() -> None:
    _users.clear()
    _tasks.clear()
    _rewards.clear()
