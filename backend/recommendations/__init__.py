"""
Task recommendation engine.

Responsibilities:
- Resolve a user's preferred task categories into candidate tasks.
- Infer where each candidate happens and check live weather and traffic there.
- Admit candidates whose conditions are favorable, up to a fixed bound.
- Return recommended tasks with a freshly assigned reward value.
"""
