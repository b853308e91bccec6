"""Configuration loader for Tasklist (global + project with TOML-based defaults)."""

from __future__ import annotations

import copy
import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for Python <3.11
    import tomli as tomllib  # type: ignore

ENV_PREFIX = "TASKLIST_"

_TRUTHY = {"1", "true", "yes", "y", "on"}

DEFAULT_CONFIG: Dict[str, Any] = {
    "general": {
        "version": "0.1.0",
        "log_dir": "",
        "activity_log": True,
    },
    "storage": {
        "tasks_file": "tasks.txt",
        "report_file": "output.txt",
        "autosave": True,
    },
    "console": {
        "color": True,
        "seed_examples": False,
    },
}


class ConfigLoader:
    """
    Handles configuration loading from multiple sources with priority resolution.

    Priority (highest → lowest):
    1. Command-line arguments (not handled here)
    2. Environment variables (TASKLIST_<SECTION>_<KEY>)
    3. Project config (.tasklist/config.toml)
    4. Global config (~/.config/tasklist/config.toml)
    5. Built-in defaults
    """

    def __init__(
        self,
        global_dir: Optional[Path] = None,
        project_dir: Optional[Path] = None,
    ) -> None:
        self.global_dir = global_dir or self.get_global_config_dir()
        self.project_dir = project_dir or self.get_project_config_dir()

        self.config: Dict[str, Any] = {}

        self._load_all()

    # ------------------------------------------------------------------ #
    # Public getters
    # ------------------------------------------------------------------ #
    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-separated key."""
        keys = key.split(".")
        value: Any = self.config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in _TRUTHY
        return bool(value)

    def get_path(self, key: str, default: Optional[str] = None) -> Optional[Path]:
        """Get a config value as an expanded Path (None if unset)."""
        value = self.get(key, default)
        if value is None or value == "":
            return None
        return Path(str(value)).expanduser()

    # ------------------------------------------------------------------ #
    # Load/merge helpers
    # ------------------------------------------------------------------ #
    def _load_all(self) -> None:
        """Load all configuration files with proper priority."""
        self._load_global_config()

        if self.project_dir:
            self._load_project_config()

        self._apply_env_overrides()

    def _load_global_config(self) -> None:
        """Load global configuration, creating it on first run."""
        self.config = copy.deepcopy(DEFAULT_CONFIG)
        config_file = self.global_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                self._deep_merge(self.config, tomllib.load(f))
        else:
            self._create_default_config()

    def _load_project_config(self) -> None:
        """Load project-specific config and merge with global."""
        config_file = self.project_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                project_config = tomllib.load(f)
                self._deep_merge(self.config, project_config)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides (TASKLIST_SECTION_KEY)."""
        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            section, _, name = key[len(ENV_PREFIX) :].lower().partition("_")
            if not section or not name:
                continue
            default = DEFAULT_CONFIG.get(section, {}).get(name)
            self._set_nested(self.config, f"{section}.{name}", self._coerce(value, default))

    # ------------------------------------------------------------------ #
    # Static paths/helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def get_global_config_dir() -> Path:
        """Get platform-specific global config directory following XDG spec."""
        system = platform.system()
        if system == "Windows":
            base = Path(os.environ.get("APPDATA", "~\\AppData\\Roaming")).expanduser()
        elif system == "Darwin":
            xdg = os.environ.get("XDG_CONFIG_HOME")
            base = Path(xdg) if xdg else Path.home() / ".config"
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
        return base / "tasklist"

    @staticmethod
    def get_project_config_dir() -> Path | None:
        """Find .tasklist directory in current or parent directories."""
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_dir = parent / ".tasklist"
            if config_dir.is_dir():
                return config_dir
        return None

    # ------------------------------------------------------------------ #
    # Persistence helpers
    # ------------------------------------------------------------------ #
    def _create_default_config(self) -> None:
        self.global_dir.mkdir(parents=True, exist_ok=True)
        config_file = self.global_dir / "config.toml"
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(self._get_default_config_toml())

    @staticmethod
    def _get_default_config_toml() -> str:
        """Default config TOML text for first-run creation."""
        lines: list[str] = []
        for section, values in DEFAULT_CONFIG.items():
            lines.append(f"[{section}]")
            for key, value in values.items():
                if isinstance(value, bool):
                    lines.append(f"{key} = {'true' if value else 'false'}")
                elif isinstance(value, int):
                    lines.append(f"{key} = {value}")
                else:
                    lines.append(f'{key} = "{value}"')
            lines.append("")
        return "\n".join(lines)

    # ------------------------------------------------------------------ #
    # Utility helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _coerce(raw: str, default: Any) -> Any:
        """Convert an env string to the type of the matching default."""
        if isinstance(default, bool):
            return raw.strip().lower() in _TRUTHY
        if isinstance(default, int):
            try:
                return int(raw)
            except ValueError:
                return default
        return raw

    def _deep_merge(self, base: dict, override: dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, d: dict, path: str, value: Any) -> None:
        keys = path.split(".")
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value


Config = ConfigLoader

__all__ = ["ConfigLoader", "Config", "DEFAULT_CONFIG"]
