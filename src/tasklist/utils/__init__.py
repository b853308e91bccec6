"""Utility modules."""

from .logger import ActivityLogger

__all__ = ["ActivityLogger"]
