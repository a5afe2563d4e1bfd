"""Taskboard: a task and tag management REST backend."""

__version__ = "0.1.0"
