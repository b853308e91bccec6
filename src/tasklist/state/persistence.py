"""Helpers for atomic text file operations."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List


class Persistence:
    """Handles atomic text file operations."""

    @staticmethod
    def load_lines(file_path: Path) -> List[str]:
        """Load lines from file without trailing newlines, [] if not found."""
        if not file_path.exists():
            return []

        with file_path.open("r", encoding="utf-8") as fp:
            return [line.rstrip("\r\n") for line in fp]

    @staticmethod
    def save_lines(file_path: Path, lines: Iterable[str]) -> None:
        """Atomically save lines to file, one per line."""
        Persistence.ensure_dir(file_path.parent)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=file_path.parent, suffix=".tmp")
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8", newline="\n") as fp:
                for line in lines:
                    fp.write(line + "\n")
                fp.flush()
                os.fsync(fp.fileno())
            shutil.move(tmp_path, file_path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    @staticmethod
    def ensure_dir(dir_path: Path) -> None:
        """Create directory if it doesn't exist."""
        dir_path.mkdir(parents=True, exist_ok=True)
