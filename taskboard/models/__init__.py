"""Models package."""
from .task import Task, utc_now_iso
from .tag import Tag

__all__ = ["Task", "Tag", "utc_now_iso"]
