"""
Adapters for persisting booking rows.
"""

from .json_store import JsonFileScheduleStore
from .memory_store import InMemoryScheduleStore

__all__ = ["InMemoryScheduleStore", "JsonFileScheduleStore"]
