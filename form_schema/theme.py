"""
theme.py - the process-wide light/dark preference.

The stored value is read once when the store is created; :meth:`ThemeStore.toggle`
is the only mutation point and writes the new value straight back.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

THEMES = ("light", "dark")
SETTINGS_ENV = "FORM_SCHEMA_SETTINGS"


def default_settings_path() -> Path:
    env = os.getenv(SETTINGS_ENV)
    if env:
        return Path(env)
    return Path.home() / ".form_schema" / "settings.json"


class ThemeStore:
    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else default_settings_path()
        self._theme = self._read()

    def _read(self) -> str:
        try:
            saved = json.loads(self.path.read_text(encoding="utf-8")).get("theme")
        except FileNotFoundError:
            return "light"
        except (ValueError, AttributeError, OSError) as exc:
            log.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return "light"
        return saved if saved in THEMES else "light"

    @property
    def theme(self) -> str:
        return self._theme

    @property
    def editor_theme(self) -> str:
        return "vs-light" if self._theme == "light" else "vs-dark"

    def toggle(self) -> str:
        """Flip between light and dark and persist the choice."""
        self._theme = "dark" if self._theme == "light" else "light"
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"theme": self._theme}), encoding="utf-8")
        log.info("Theme set to %s", self._theme)
        return self._theme
