from fastapi import APIRouter, Depends

from app.deps import get_preferences
from app.schemas.preferences import PreferencesRead, TabUpdate, ThemeUpdate
from app.services.preferences import Preferences

router = APIRouter(prefix="/preferences", tags=["preferences"])


def _read(prefs: Preferences) -> PreferencesRead:
    return PreferencesRead(theme=prefs.theme, theme_color=prefs.theme_color, tab=prefs.tab)


@router.get("", response_model=PreferencesRead)
def get_preferences_view(prefs: Preferences = Depends(get_preferences)):
    return _read(prefs)


@router.put("/theme", response_model=PreferencesRead)
def set_theme(payload: ThemeUpdate, prefs: Preferences = Depends(get_preferences)):
    prefs.set_theme(payload.theme.value)
    return _read(prefs)


@router.put("/tab", response_model=PreferencesRead)
def set_tab(payload: TabUpdate, prefs: Preferences = Depends(get_preferences)):
    prefs.set_tab(payload.tab.value)
    return _read(prefs)
