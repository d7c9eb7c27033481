"""Unit tests for the app config loader."""

import json
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from pomodomate.config import DEFAULT_CONFIG, load_config, save_config


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "nope.json") == DEFAULT_CONFIG


def test_file_merged_over_defaults(tmp_path):
    path = tmp_path / "pomodomate.json"
    path.write_text(json.dumps({"volume": 0.2, "unknown": 1}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg["volume"] == 0.2
    assert cfg["sound_enabled"] is True
    assert "unknown" not in cfg


def test_bad_file_gives_defaults(tmp_path):
    path = tmp_path / "pomodomate.json"
    path.write_text("{broken", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG
    path.write_text("[1]", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "pomodomate.json"
    cfg = dict(DEFAULT_CONFIG, sound_enabled=False)
    save_config(cfg, path)
    assert load_config(path)["sound_enabled"] is False
