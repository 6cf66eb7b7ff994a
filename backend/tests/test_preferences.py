import logging

import pytest

from app.core.constants import TABS, THEME_COLORS
from app.schemas.preferences import Tab, Theme
from app.services.preferences import Preferences
from app.services.store import InMemoryKeyValueStore


def test_defaults():
    prefs = Preferences(InMemoryKeyValueStore())
    assert prefs.theme == "navy"
    assert prefs.theme_color == "#1e3a5f"
    assert prefs.tab == "compass"


def test_theme_and_tab_are_persisted():
    kv = InMemoryKeyValueStore()
    Preferences(kv).set_theme("forest")
    Preferences(kv).set_tab("tracking")

    prefs = Preferences(kv)
    assert prefs.theme == "forest"
    assert prefs.theme_color == "#2d5016"
    assert prefs.tab == "tracking"
    assert kv.get("hiking-theme") == "forest"


def test_unknown_values_are_rejected():
    prefs = Preferences(InMemoryKeyValueStore())
    with pytest.raises(ValueError):
        prefs.set_theme("neon")
    with pytest.raises(ValueError):
        prefs.set_tab("maps")
    with pytest.raises(ValueError):
        Preferences(InMemoryKeyValueStore(), default_theme="neon")


def test_garbage_saved_value_falls_back_to_default():
    kv = InMemoryKeyValueStore()
    kv.set("hiking-theme", "sepia")
    assert Preferences(kv, default_theme="dark").theme == "dark"


def test_api_enums_follow_constants():
    assert {t.value for t in Theme} == set(THEME_COLORS)
    assert [t.value for t in Tab] == TABS
    assert Theme("forest") == "forest"


def test_changes_are_logged(caplog):
    prefs = Preferences(InMemoryKeyValueStore())
    with caplog.at_level(logging.INFO, logger="app.services.preferences"):
        prefs.set_theme("light")
        prefs.set_tab("weather")
    messages = [r.getMessage() for r in caplog.records]
    assert "Theme set to light" in messages
    assert "Current tab set to weather" in messages
