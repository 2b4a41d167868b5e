from __future__ import annotations

"""Configuration loading and access helpers.

This module centralises the declarative toolbar settings (contributor
priorities, disabled built-ins, render ids, brand links) and the logging
setup. It loads YAML files packaged with *admin_toolbar* and merges them
with user overrides.

Override directory, in order of precedence:
``$ADMIN_TOOLBAR_CONFIG_DIR``, then on Windows
``%LOCALAPPDATA%\\AdminToolbar\\config``, on Unix ``~/.admin_toolbar``.
"""

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager"]


def _get_user_config_dir() -> Path:
    """Get the user configuration directory."""
    override = os.environ.get("ADMIN_TOOLBAR_CONFIG_DIR")
    if override:
        return Path(override)
    if os.name == 'nt':  # Windows
        local_appdata = os.environ.get('LOCALAPPDATA')
        if local_appdata:
            return Path(local_appdata) / "AdminToolbar" / "config"
        return Path.home() / "AppData" / "Local" / "AdminToolbar" / "config"
    return Path.home() / ".admin_toolbar"


def _read_packaged(filename: str) -> str:
    return pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "logging": "logging.yml",
        "toolbar": "toolbar.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    @classmethod
    def reset(cls) -> None:
        """Drop the cached instance so the next call reloads from disk."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    def get_toolbar_config(self) -> Dict[str, Any]:
        return self._data.get("toolbar", {})

    def get_contributor_priorities(self) -> Dict[str, int]:
        priorities = self.get_toolbar_config().get("priorities") or {}
        return {str(k): int(v) for k, v in priorities.items()}

    def get_disabled_contributors(self) -> List[str]:
        return list(self.get_toolbar_config().get("disabled_contributors") or [])

    def get_render_settings(self) -> Dict[str, Any]:
        return dict(self.get_toolbar_config().get("render") or {})

    def get_brand(self) -> Dict[str, Any]:
        return dict(self.get_toolbar_config().get("brand") or {})

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return  # already loaded

        startup_summary = []
        user_config_dir = _get_user_config_dir()

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                packaged_data = yaml.safe_load(_read_packaged(filename)) or {}
                merged_cfg.update(packaged_data)
                status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
            except Exception as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. shallow-merge user overrides
            user_path = user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    merged_cfg.update(user_data)
                    if status == "loaded":
                        status = "loaded+overrides"
                except Exception as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.info("Config startup: %s", " | ".join(startup_summary))

