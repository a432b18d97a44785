"""
export.py - serialise schema text and submission history for copy/download.

Sinks
-----
ExportSink
    Protocol with ``copy_text(text)`` and
    ``download_file(filename, content, mime_type)``.
DirectorySink
    Writes downloads under a directory and "copies" by writing to a stream.
MemorySink
    Records every call; handy for embedding and tests.

Formats
-------
submissions_json(submissions)
    Pretty-printed JSON array, one object per submission.
submissions_frame(submissions)
    :class:`pandas.DataFrame` with a column per field id and ``submittedAt``
    last.
"""

from __future__ import annotations

import datetime as _dt
import json
import logging
import sys
from pathlib import Path
from typing import IO, Any, Mapping, Protocol, Sequence

import pandas as pd

from . import utils

log = logging.getLogger(__name__)

SCHEMA_FILENAME = "schema.json"
JSON_MIME = "application/json"
CSV_MIME = "text/csv"

# --------------------------------------------------------------------------- #
# Sinks                                                                       #
# --------------------------------------------------------------------------- #

class ExportSink(Protocol):
    def copy_text(self, text: str) -> None: ...

    def download_file(self, filename: str, content: str, mime_type: str) -> None: ...


class DirectorySink:
    """Write downloads as UTF-8 files under *directory*."""

    def __init__(self, directory: str | Path = ".", stream: IO[str] | None = None):
        self.directory = Path(directory)
        self.stream = stream

    def copy_text(self, text: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(text)
        if not text.endswith("\n"):
            stream.write("\n")

    def download_file(self, filename: str, content: str, mime_type: str) -> None:
        path = self.directory / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the text byte-for-byte
        with path.open("w", encoding="utf-8", newline="") as fd:
            fd.write(content)
        log.info("Wrote %s (%s)", path, mime_type)


class MemorySink:
    """Keep copied text and downloaded files in memory."""

    def __init__(self) -> None:
        self.copied: list[str] = []
        self.files: list[tuple[str, str, str]] = []

    def copy_text(self, text: str) -> None:
        self.copied.append(text)

    def download_file(self, filename: str, content: str, mime_type: str) -> None:
        self.files.append((filename, content, mime_type))

    @property
    def calls(self) -> int:
        return len(self.copied) + len(self.files)


# --------------------------------------------------------------------------- #
# Formats                                                                     #
# --------------------------------------------------------------------------- #

def submissions_filename(now: _dt.datetime | None = None, *, suffix: str = "json") -> str:
    """``form-submissions-<ISO8601 timestamp>.<suffix>``."""
    return f"form-submissions-{utils._iso(now or utils._now())}.{suffix}"


def submissions_json(submissions: Sequence[Mapping[str, Any]], *, indent: int = 2) -> str:
    return json.dumps(utils._json_safe(list(submissions)), indent=indent, ensure_ascii=False)


def submissions_frame(submissions: Sequence[Mapping[str, Any]]) -> pd.DataFrame:
    """One row per submission; field columns in first-seen order, timestamp last."""
    records = [dict(s) for s in submissions]
    columns: list[str] = []
    for rec in records:
        for key in rec:
            if key != "submittedAt" and key not in columns:
                columns.append(key)
    columns.append("submittedAt")
    return pd.DataFrame.from_records(records, columns=columns)


def submissions_csv(submissions: Sequence[Mapping[str, Any]]) -> str:
    return submissions_frame(submissions).to_csv(index=False)
