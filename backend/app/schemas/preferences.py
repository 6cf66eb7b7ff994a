from enum import Enum

from pydantic import BaseModel

from app.core.constants import TABS, THEME_COLORS

# Built from the constants so the API accepts exactly what Preferences stores
Theme = Enum("Theme", {name: name for name in THEME_COLORS}, type=str)
Tab = Enum("Tab", {name: name for name in TABS}, type=str)


class PreferencesRead(BaseModel):
    theme: Theme
    theme_color: str
    tab: Tab


class ThemeUpdate(BaseModel):
    theme: Theme


class TabUpdate(BaseModel):
    tab: Tab
