"""Shared helpers for the form-schema test-suite (std-lib only)."""
from __future__ import annotations

import contextlib
import copy
import json
import tempfile
from pathlib import Path
from typing import Any, Callable

from form_schema import loader

# ------------------------------------------------------------------ #
# Sample schemas                                                     #
# ------------------------------------------------------------------ #
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
EMAIL_MESSAGE = "Please enter a valid email address"

SAMPLE = loader.load_schema(loader.SAMPLE_FORM)

MINIMAL = {
    "formTitle": "T",
    "formDescription": "D",
    "fields": [
        {
            "id": "email",
            "type": "email",
            "label": "Email",
            "required": True,
            "validation": {"pattern": EMAIL_PATTERN, "message": EMAIL_MESSAGE},
        },
    ],
}

def sample(**overrides: Any) -> dict[str, Any]:
    """Deep copy of the bundled sample form with top-level *overrides*."""
    out = copy.deepcopy(SAMPLE)
    out.update(copy.deepcopy(overrides))
    return out

def text(obj: Any) -> str:
    return json.dumps(obj, indent=2)

# ------------------------------------------------------------------ #
# Tiny helpers                                                       #
# ------------------------------------------------------------------ #
def tmp_json(obj: Any) -> Path:
    """Write *obj* to a temp file and return its Path (caller must unlink)."""
    fh = tempfile.NamedTemporaryFile(delete=False, suffix=".json")
    Path(fh.name).write_text(json.dumps(obj), encoding="utf-8")
    fh.close()
    return Path(fh.name)

@contextlib.contextmanager
def tmp_dir():
    """Yield a temporary directory Path that auto-cleans on exit."""
    td = tempfile.TemporaryDirectory()
    try:
        yield Path(td.name)
    finally:
        td.cleanup()

# ------------------------------------------------------------------ #
# Manual scheduler                                                   #
# ------------------------------------------------------------------ #
class ManualHandle:
    def __init__(self, delay: float, callback: Callable[[], object]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Collects delayed callbacks; tests fire them explicitly."""

    def __init__(self) -> None:
        self.handles: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], object]) -> ManualHandle:
        handle = ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    def fire(self, handle: ManualHandle) -> None:
        """Run *handle* the way a timer that lost the race to cancel() would."""
        handle.callback()

    def fire_pending(self) -> None:
        for handle in list(self.handles):
            if not handle.cancelled:
                handle.cancelled = True
                handle.callback()
