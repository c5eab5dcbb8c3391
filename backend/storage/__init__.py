"""
Storage layer.

Responsibilities:
- Define the user, task and reward domain models.
- Keep the in-process repository of users, tasks and rewards.
- Answer the lookups the recommendation engine needs (user by id,
  tasks by category).
- Seed demo data for local development.
"""
