"""
renderer.py - map field descriptions onto interactive controls.

A :class:`Control` is toolkit-neutral: it carries everything a front end
needs to draw the input (widget, label, required marker, current value,
choices, inline error) and a ``change`` hook.  Every hook funnels into the
single ``on_change(field, value)`` callback supplied by the caller, which is
the only place form state gets written.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field as _field
from typing import Any, Callable, Mapping, Sequence, assert_never

from .document import FieldDescriptor, FieldKind, FieldValue, SchemaDocument

__all__ = [
    "Choice",
    "Control",
    "OnChange",
    "SENTINEL_LABEL",
    "default_value",
    "render",
    "render_form",
]

log = logging.getLogger(__name__)

OnChange = Callable[[FieldDescriptor, FieldValue], Any]

SENTINEL_LABEL = "Select an option"
REQUIRED_MARKER = "*"


@dataclass(frozen=True)
class Choice:
    value: str
    label: str
    selected: bool = False
    group: str | None = None
    element_id: str | None = None


@dataclass
class Control:
    field: FieldDescriptor
    widget: str
    value: FieldValue
    on_change: OnChange = _field(repr=False)
    choices: Sequence[Choice] = ()
    error: str = ""
    input_type: str | None = None

    @property
    def field_id(self) -> str:
        return self.field.id

    @property
    def kind(self) -> FieldKind:
        return self.field.type

    @property
    def label(self) -> str:
        return self.field.label

    @property
    def required_marker(self) -> str:
        return REQUIRED_MARKER if self.field.required else ""

    @property
    def placeholder(self) -> str | None:
        return self.field.placeholder

    def change(self, new_value: FieldValue) -> Any:
        """Forward a user edit to the shared change callback."""
        return self.on_change(self.field, new_value)


def default_value(field: FieldDescriptor) -> FieldValue:
    """The value shown for a field the user has not touched yet."""
    return False if field.type is FieldKind.CHECKBOX else ""


def render(
    field: FieldDescriptor,
    value: FieldValue | None,
    error: str | None,
    on_change: OnChange,
) -> Control | None:
    """Build the control for *field*; unknown kinds render nothing."""
    kind = field.type
    if not isinstance(kind, FieldKind):
        log.warning("Skipping field %r with unknown type %r", field.id, kind)
        return None

    if value is None:
        value = default_value(field)
    error = error or ""

    if kind is FieldKind.TEXT or kind is FieldKind.EMAIL:
        return Control(field, "input", value, on_change, error=error, input_type=kind.value)
    elif kind is FieldKind.TEXTAREA:
        return Control(field, "textarea", value, on_change, error=error)
    elif kind is FieldKind.SELECT:
        choices = [Choice("", SENTINEL_LABEL, selected=value == "")]
        choices += [Choice(o.value, o.label, selected=value == o.value) for o in field.choices]
        return Control(field, "select", value, on_change, choices=choices, error=error)
    elif kind is FieldKind.RADIO:
        choices = [
            Choice(o.value, o.label, selected=value == o.value,
                   group=field.id, element_id=f"{field.id}-{o.value}")
            for o in field.choices
        ]
        return Control(field, "radio", value, on_change, choices=choices, error=error)
    elif kind is FieldKind.CHECKBOX:
        return Control(field, "checkbox", bool(value), on_change, error=error,
                       input_type="checkbox")
    else:
        assert_never(kind)


def render_form(
    document: SchemaDocument,
    state: Mapping[str, FieldValue],
    errors: Mapping[str, str],
    on_change: OnChange,
) -> list[Control]:
    """Render every field of *document*, in display order."""
    controls = []
    for f in document.fields:
        control = render(f, state.get(f.id), errors.get(f.id), on_change)
        if control is not None:
            controls.append(control)
    return controls
