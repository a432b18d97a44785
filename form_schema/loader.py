"""
loader.py - single source-of-truth for the packaged JSON contracts.

Public API
----------
load_schema() : function helper to obtain a fresh copy
load_text()   : raw text of a schema file (on disk or bundled)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from importlib import resources

log = logging.getLogger(__name__)

FORM_CONTRACT = "form_contract.json"
SAMPLE_FORM = "contact_form.json"

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _parse(text: str, origin: str) -> dict:
    """Parse JSON text, raising crisp errors on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {origin}: {exc}") from exc


# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def load_text(path: str | Path) -> str:
    """Return the raw text of *path*, trying disk first, then package data."""
    p = Path(path)

    # 1) direct file on disk ------------------------------------------------
    if p.is_file():
        with p.open(encoding="utf-8", newline="") as fd:
            return fd.read()

    # 2) bundled resource (exact string or basename) -----------------------
    pkg = resources.files("form_schema.schemas")
    candidates = (p.name, str(path))   # basename first, as given second
    for name in candidates:
        try:
            text = pkg.joinpath(name).read_text(encoding="utf-8")
            log.debug("Loaded bundled schema %s", name)
            return text
        except (FileNotFoundError, IsADirectoryError):
            pass   # try the next candidate

    # 3) give up -----------------------------------------------------------
    raise FileNotFoundError(
        f"Schema '{path}' not found on disk or in package data"
    )


def load_schema(path: str | Path) -> dict:
    """Load and parse a JSON schema, returning a fresh mapping."""
    return _parse(load_text(path), str(path))
