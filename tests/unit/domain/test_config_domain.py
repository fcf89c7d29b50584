from __future__ import annotations

"""
Unit tests for configuration defaults and JSON loading.
"""

import json

from contextmaker.domain.config import get_default_config, load_config


def test_defaults_are_fresh_copies() -> None:
    a = get_default_config()
    a["extra_ignored_dirs"].append("tmp")
    assert get_default_config()["extra_ignored_dirs"] == []


def test_load_without_path_returns_defaults() -> None:
    assert load_config(None) == get_default_config()


def test_load_missing_file_returns_defaults(tmp_path) -> None:
    assert load_config(str(tmp_path / "nope.json")) == get_default_config()


def test_load_malformed_file_returns_defaults(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_load_merges_known_keys_only(tmp_path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "extra_ignored_dirs": ["tmp"],
        "max_workers": 2,
        "unknown_key": True,
    }), encoding="utf-8")

    cfg = load_config(str(path))

    assert cfg["extra_ignored_dirs"] == ["tmp"]
    assert cfg["max_workers"] == 2
    assert "unknown_key" not in cfg


def test_load_non_object_returns_defaults(tmp_path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(str(path)) == get_default_config()
