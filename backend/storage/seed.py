"""
Populate the in-memory store with Melbourne demo tasks and rewards.

Usage:
    python -m backend.storage.seed
"""
from __future__ import annotations

import random

from .models import RewardCreate, RewardTier, TaskCreate, TaskType
from .repository import create_reward, create_task

_RESTAURANTS = ["The Pancake Parlour", "Chin Chin", "Hakata Gensuke", "Movida", "Gami Chicken", "400 Gradi"]
_SHOPS = ["Myer", "David Jones", "Nike Store", "Apple Store", "Uniqlo", "JB Hi-Fi"]
_DISCOUNTS = ["10% Cashback", "20% Off", "$5 Gift Card", "$10 Voucher", "Free Dessert", "Buy 1 Get 1 Free"]

_LOCATIONS = [
    "Queen Victoria Market",
    "Federation Square",
    "Royal Botanic Gardens",
    "Chadstone Shopping Centre",
    "Hosier Lane",
    "St Kilda Beach",
    "Southbank Promenade",
    "Great Ocean Road",
    "Dandenong Ranges",
    "NGV",
]
_ACTIVITIES = [
    "Try a new dish at",
    "Take a photo at",
    "Attend a free event at",
    "Explore",
    "Walk along",
    "Buy a souvenir from",
    "Join a guided tour at",
    "Go cycling near",
    "Have a picnic at",
    "Watch the sunset at",
]


def _build_reward(index: int, rng: random.Random) -> RewardCreate:
    if rng.random() < 0.5:
        place = rng.choice(_RESTAURANTS)
    else:
        place = rng.choice(_SHOPS)
    return RewardCreate(
        code=f"REWARD{index + 1:03d}",
        name=f"{rng.choice(_DISCOUNTS)} at {place}",
        description=f"Enjoy {rng.choice(_DISCOUNTS)} when you visit {place} in Melbourne.",
    )


def _build_task(rng: random.Random) -> TaskCreate:
    location = rng.choice(_LOCATIONS)
    return TaskCreate(
        type=rng.choice(list(TaskType)),
        detail=f"{rng.choice(_ACTIVITIES)} {location}",
        reward_type=rng.choice(list(RewardTier)),
        completion_criteria=f"Complete this activity and check-in with a photo at {location}",
    )


def seed_demo_data(
    rng: random.Random | None = None,
    tasks: int = 50,
    rewards: int = 50,
) -> dict[str, int]:
    """Create ``tasks`` tasks and ``rewards`` rewards; returns the counts."""
    rng = rng or random.Random()
    for i in range(rewards):
        create_reward(_build_reward(i, rng))
    for _ in range(tasks):
        create_task(_build_task(rng))
    return {"tasks": tasks, "rewards": rewards}


if __name__ == "__main__":
    counts = seed_demo_data()
    print(f"Seeded {counts['tasks']} tasks and {counts['rewards']} rewards")
