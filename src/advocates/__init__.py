"""Advocate directory service.

A FastAPI + SQLModel service listing advocate records, with an async client
layer and debounced search state for front ends.
"""

__version__ = "0.1.0"
