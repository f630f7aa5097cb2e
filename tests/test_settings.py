"""Tests for settings persistence."""

import json

from settings import load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    s = load_settings(str(tmp_path / "none.json"))
    assert s == {
        "view": "scroll",
        "window_width": None,
        "window_height": None,
        "holidays": {},
        "log_level": "INFO",
    }


def test_round_trip(tmp_path):
    path = str(tmp_path / "s.json")
    s = load_settings(path)
    s["view"] = "paged"
    s["window_width"] = 640
    s["holidays"] = {"2025-10-01": "国庆节"}
    save_settings(s, path)
    loaded = load_settings(path)
    assert loaded["view"] == "paged"
    assert loaded["window_width"] == 640
    assert loaded["holidays"] == {"2025-10-01": "国庆节"}


def test_bad_values_are_ignored(tmp_path):
    path = tmp_path / "s.json"
    path.write_text(json.dumps({
        "view": "sideways",
        "window_width": "wide",
        "window_height": True,
        "holidays": {"2025-01-01": 5},
        "log_level": "debug",
    }), encoding="utf-8")
    s = load_settings(str(path))
    assert s["view"] == "scroll"
    assert s["window_width"] is None
    assert s["window_height"] is None
    assert s["holidays"] == {}
    assert s["log_level"] == "DEBUG"


def test_malformed_json_falls_back(tmp_path, caplog):
    path = tmp_path / "s.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level("WARNING", logger="settings"):
        s = load_settings(str(path))
    assert s["view"] == "scroll"
    assert "Could not read settings" in caplog.text


def test_defaults_are_not_shared(tmp_path):
    a = load_settings(str(tmp_path / "none.json"))
    a["holidays"]["2025-01-01"] = "x"
    b = load_settings(str(tmp_path / "none.json"))
    assert b["holidays"] == {}
