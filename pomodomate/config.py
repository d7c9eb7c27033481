"""
App configuration — optional JSON file merged over built-in defaults.

Lives at config/pomodomate.json. Only presentation knobs and the database
location live here; timer durations are user settings stored in the DB.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "pomodomate.json"

DEFAULT_CONFIG = {
    "db_path": None,
    "sound_enabled": True,
    "volume": 0.5,
    "celebration_ms": 3000,
}


def load_config(path: Optional[Path] = None) -> dict:
    path = path or CONFIG_PATH
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                cfg = json.load(f)
            if not isinstance(cfg, dict):
                raise ValueError("config root must be an object")
            merged = DEFAULT_CONFIG.copy()
            merged.update({k: v for k, v in cfg.items() if k in DEFAULT_CONFIG})
            return merged
        except (json.JSONDecodeError, ValueError, OSError):
            logger.warning("Bad app config at %s, using defaults.", path)
    return DEFAULT_CONFIG.copy()


def save_config(config: dict, path: Optional[Path] = None) -> None:
    path = path or CONFIG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError:
        logger.exception("Could not write app config to %s", path)
