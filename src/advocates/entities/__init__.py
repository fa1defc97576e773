"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .advocate import Advocate, AdvocateRepository, AdvocateTable

__all__ = [
    "Advocate",
    "AdvocateRepository",
    "AdvocateTable",
]
