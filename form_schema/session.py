"""
session.py - one live editing/filling session.

:class:`FormSession` owns every piece of mutable state: the editor text, the
active :class:`~form_schema.document.SchemaDocument`, the blocking error
text, the form values, the per-field errors, the append-only submission
history and the transient success notice.  Each public handler is one
reaction to one user event; all of them run under the same lock, and none
lets an exception escape.
"""

from __future__ import annotations

import functools
import logging
import threading
from types import MappingProxyType
from typing import Any, Callable, Mapping, NamedTuple

from . import card
from . import export
from . import fields
from . import renderer
from .contract import Contract, ValidationResult, default_contract
from .document import FieldDescriptor, FieldErrors, FieldValue, FormState, SchemaDocument, Submission
from .timers import Handle, Scheduler, ThreadingScheduler
from .validator import Violation

log = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Form submitted successfully!"
SUCCESS_DELAY = 3.0

NOTICE_SUBMIT_INVALID = "Cannot submit invalid JSON!"
NOTICE_COPY_INVALID = "Cannot copy invalid JSON!"
NOTICE_DOWNLOAD_INVALID = "Cannot download invalid JSON!"
NOTICE_NO_SUBMISSIONS = "No submissions to download!"
NOTICE_COPIED = "Copied to clipboard!"


class SubmitOutcome(NamedTuple):
    accepted: bool
    errors: Mapping[str, str]
    notice: str = ""


def _guarded(event: str, fallback: Callable[["FormSession"], Any] = lambda self: None):
    """Serialise a handler through the session lock and contain its failures.

    An unexpected exception is logged and surfaced as a violation-shaped
    ``error`` string; the handler then returns ``fallback(self)``.
    """
    def decorator(method):
        @functools.wraps(method)
        def wrapper(self: "FormSession", *args, **kwargs):
            with self._lock:
                try:
                    return method(self, *args, **kwargs)
                except Exception as exc:
                    log.exception("Unhandled error while handling %s", event)
                    self.error = str(Violation((event,), str(exc) or type(exc).__name__))
                    return fallback(self)
        return wrapper
    return decorator


def _rejected(self: "FormSession") -> SubmitOutcome:
    return SubmitOutcome(False, MappingProxyType({}), self.error or "")


class FormSession:
    """Editor text in, live form and submission history out."""

    def __init__(
        self,
        text: str | None = None,
        *,
        contract: Contract | None = None,
        sink: export.ExportSink | None = None,
        scheduler: Scheduler | None = None,
        notify: Callable[[str], Any] | None = None,
    ):
        self._lock = threading.RLock()
        self.contract = contract or default_contract()
        self.sink = sink or export.DirectorySink()
        self.scheduler = scheduler or ThreadingScheduler()
        self._notify = notify

        self.text = ""
        self.document: SchemaDocument | None = None
        self.error: str | None = None
        self.form_state: FormState = {}
        self.field_errors: FieldErrors = {}
        self.success_message: str | None = None
        self.last_notice: str | None = None
        self._submissions: list[Submission] = []
        self._last_valid: SchemaDocument | None = None
        self._generation = 0
        self._pending: Handle | None = None

        if text is not None:
            self.on_text_change(text)

    # ------------------------------------------------------------------ #
    # Read-only views                                                    #
    # ------------------------------------------------------------------ #
    @property
    def submissions(self) -> tuple[Submission, ...]:
        return tuple(self._submissions)

    @property
    def valid(self) -> bool:
        return self.document is not None and not self.error

    def controls(self) -> list[renderer.Control]:
        """Controls for the active document; empty while the schema is invalid."""
        with self._lock:
            if not self.valid:
                return []
            return renderer.render_form(
                self.document, self.form_state, self.field_errors, self.on_field_change
            )

    def preview(self, *, heading_level: int = 2) -> str:
        """The form as Markdown, or the error text when there is no valid form."""
        with self._lock:
            if not self.valid:
                return self.error or ""
            text = card.to_markdown_card(self.document, self.controls(), heading_level=heading_level)
            if self.success_message:
                text += f"\n\n{self.success_message}"
            return text

    def submissions_frame(self):
        return export.submissions_frame(self._submissions)

    # ------------------------------------------------------------------ #
    # Event handlers                                                     #
    # ------------------------------------------------------------------ #
    @_guarded("schema")
    def on_text_change(self, text: str) -> ValidationResult:
        """Re-validate the editor text and swap in the new document."""
        self.text = text
        result = self.contract.validate(text)
        if result.ok:
            if result.document != self._last_valid:
                self._reset_form()
            self._last_valid = result.document
            self.document = result.document
            self.error = None
        else:
            self.document = None
            self.error = result.error_text
        return result

    @_guarded("field")
    def on_field_change(self, field: FieldDescriptor, value: FieldValue) -> None:
        """The one writer of form values."""
        self.form_state[field.id] = value
        if fields.validates_eagerly(field):
            fields.apply_check(field, value, self.field_errors)

    @_guarded("submit", fallback=_rejected)
    def submit(self) -> SubmitOutcome:
        if not self.valid:
            self._tell(NOTICE_SUBMIT_INVALID)
            return SubmitOutcome(False, MappingProxyType({}), NOTICE_SUBMIT_INVALID)

        errors: FieldErrors = {}
        for f in self.document.rule_fields():
            value = self.form_state.get(f.id)
            if not value:
                continue  # empty required fields are not pattern failures
            outcome = fields.check_field(f, value)
            if not outcome.valid:
                errors[f.id] = outcome.message

        self.field_errors = dict(errors)
        if errors:
            log.info("Submission rejected: %s", sorted(errors))
            return SubmitOutcome(False, MappingProxyType(errors))

        submission = Submission(self.form_state)
        self._submissions.append(submission)
        log.info("Form data submitted: %s", dict(submission))
        self._reset_form()
        self._show_success()
        return SubmitOutcome(True, MappingProxyType({}), SUCCESS_MESSAGE)

    @_guarded("copy", fallback=lambda self: False)
    def copy_schema(self) -> bool:
        if not self.valid:
            self._tell(NOTICE_COPY_INVALID)
            return False
        self.sink.copy_text(self.text)
        self._tell(NOTICE_COPIED)
        return True

    @_guarded("download", fallback=lambda self: False)
    def download_schema(self) -> bool:
        if not self.valid:
            self._tell(NOTICE_DOWNLOAD_INVALID)
            return False
        self.sink.download_file(export.SCHEMA_FILENAME, self.text, export.JSON_MIME)
        return True

    @_guarded("download", fallback=lambda self: False)
    def download_submissions(self) -> bool:
        if not self._submissions:
            self._tell(NOTICE_NO_SUBMISSIONS)
            return False
        self.sink.download_file(
            export.submissions_filename(),
            export.submissions_json(self._submissions),
            export.JSON_MIME,
        )
        return True

    @_guarded("download", fallback=lambda self: False)
    def download_submissions_csv(self) -> bool:
        if not self._submissions:
            self._tell(NOTICE_NO_SUBMISSIONS)
            return False
        self.sink.download_file(
            export.submissions_filename(suffix="csv"),
            export.submissions_csv(self._submissions),
            export.CSV_MIME,
        )
        return True

    def close(self) -> None:
        """Cancel the pending success-notice timer, if any."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None

    # ------------------------------------------------------------------ #
    # Internals                                                          #
    # ------------------------------------------------------------------ #
    def _reset_form(self) -> None:
        self.form_state = {}
        self.field_errors = {}

    def _tell(self, notice: str) -> None:
        self.last_notice = notice
        log.info("Notice: %s", notice)
        if self._notify is not None:
            self._notify(notice)

    def _show_success(self) -> None:
        self._generation += 1
        generation = self._generation
        if self._pending is not None:
            self._pending.cancel()
        self.success_message = SUCCESS_MESSAGE
        self._pending = self.scheduler.call_later(
            SUCCESS_DELAY, lambda: self._clear_success(generation)
        )

    def _clear_success(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return  # a newer submission owns the message
            self.success_message = None
            self._pending = None
