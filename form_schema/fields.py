"""
fields.py - per-field pattern checks.

A field without a ``validation`` rule accepts every value.  A rule's pattern
is applied with :func:`re.search`, so authored patterns anchor themselves
with ``^``/``$`` when they mean the whole value.
"""
from __future__ import annotations

import functools
import logging
import re
from typing import MutableMapping, NamedTuple

from .document import FieldDescriptor, FieldKind, FieldValue

__all__ = ["ValidationOutcome", "check_field", "apply_check", "validates_eagerly"]

log = logging.getLogger(__name__)


class ValidationOutcome(NamedTuple):
    valid: bool
    message: str = ""


VALID = ValidationOutcome(True)


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def check_field(field: FieldDescriptor, value: FieldValue) -> ValidationOutcome:
    """Check *value* against *field*'s optional rule."""
    rule = field.validation
    if rule is None or isinstance(value, bool):
        return VALID
    if _compile(rule.pattern).search(str(value)):
        return VALID
    log.debug("Field %r rejected %r", field.id, value)
    return ValidationOutcome(False, rule.message)


def apply_check(
    field: FieldDescriptor, value: FieldValue, errors: MutableMapping[str, str]
) -> ValidationOutcome:
    """Run :func:`check_field` and record the result for this field only."""
    outcome = check_field(field, value)
    if field.validation is not None:
        errors[field.id] = outcome.message
    return outcome


def validates_eagerly(field: FieldDescriptor) -> bool:
    """Email fields are checked on every change; the rest wait for submit."""
    return field.type is FieldKind.EMAIL
