import logging

from app.core.constants import TAB_KEY, TABS, THEME_COLORS, THEME_KEY

logger = logging.getLogger(__name__)


class Preferences:
    """Theme and current tab, persisted in a key-value store.

    Owned by whoever builds the views; nothing reads it from module state.
    """

    def __init__(self, kv, default_theme: str = "navy", default_tab: str = "compass"):
        if default_theme not in THEME_COLORS:
            raise ValueError(f"Unknown theme: {default_theme}")
        if default_tab not in TABS:
            raise ValueError(f"Unknown tab: {default_tab}")
        self._kv = kv
        self._default_theme = default_theme
        self._default_tab = default_tab

    @property
    def theme(self) -> str:
        saved = self._kv.get(THEME_KEY)
        return saved if saved in THEME_COLORS else self._default_theme

    @property
    def theme_color(self) -> str:
        return THEME_COLORS[self.theme]

    def set_theme(self, theme: str) -> str:
        if theme not in THEME_COLORS:
            raise ValueError(f"Unknown theme: {theme}")
        self._kv.set(THEME_KEY, theme)
        logger.info(f"Theme set to {theme}")
        return theme

    @property
    def tab(self) -> str:
        saved = self._kv.get(TAB_KEY)
        return saved if saved in TABS else self._default_tab

    def set_tab(self, tab: str) -> str:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self._kv.set(TAB_KEY, tab)
        logger.info(f"Current tab set to {tab}")
        return tab
