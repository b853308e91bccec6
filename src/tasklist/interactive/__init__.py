"""Interactive (Textual) mode."""

from .app import TasklistApp, run_tui

__all__ = ["TasklistApp", "run_tui"]
