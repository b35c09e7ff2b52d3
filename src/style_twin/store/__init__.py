"""
Profile Storage

The persistence boundary for profiles, samples and generation history.
"""

from .base import StyleProfileStore
from .memory import MemoryProfileStore
from .json_store import JsonProfileStore

__all__ = [
    "StyleProfileStore",
    "MemoryProfileStore",
    "JsonProfileStore",
]
