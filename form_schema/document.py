"""
document.py - the typed form description produced by a successful validation.
"""
from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field as _field
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Union

from . import utils

__all__ = [
    "FieldKind",
    "Option",
    "ValidationRule",
    "FieldDescriptor",
    "SchemaDocument",
    "Submission",
    "FormState",
    "FieldErrors",
]

FieldValue = Union[str, bool]
FormState = dict[str, FieldValue]
FieldErrors = dict[str, str]


class FieldKind(str, enum.Enum):
    """The six supported input archetypes."""
    TEXT = "text"
    EMAIL = "email"
    SELECT = "select"
    RADIO = "radio"
    TEXTAREA = "textarea"
    CHECKBOX = "checkbox"


@dataclass(frozen=True)
class Option:
    value: str
    label: str


@dataclass(frozen=True)
class ValidationRule:
    pattern: str
    message: str


@dataclass(frozen=True)
class FieldDescriptor:
    id: str
    type: FieldKind
    label: str
    required: bool
    placeholder: str | None = None
    validation: ValidationRule | None = None
    options: tuple[Option, ...] | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FieldDescriptor":
        rule = data.get("validation")
        options = data.get("options")
        return cls(
            id=data["id"],
            type=FieldKind(data["type"]),
            label=data["label"],
            required=data["required"],
            placeholder=data.get("placeholder"),
            validation=ValidationRule(rule["pattern"], rule["message"]) if rule else None,
            options=tuple(Option(o["value"], o["label"]) for o in options)
            if options is not None else None,
        )

    def to_mapping(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "required": self.required,
        }
        if self.placeholder is not None:
            out["placeholder"] = self.placeholder
        if self.validation is not None:
            out["validation"] = {
                "pattern": self.validation.pattern,
                "message": self.validation.message,
            }
        if self.options is not None:
            out["options"] = [{"value": o.value, "label": o.label} for o in self.options]
        return out

    @property
    def choices(self) -> tuple[Option, ...]:
        """Options for select/radio; an absent list is an empty choice set."""
        return self.options or ()


@dataclass(frozen=True)
class SchemaDocument:
    """A validated form description.  Field order is display order."""

    form_title: str
    form_description: str
    fields: tuple[FieldDescriptor, ...]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SchemaDocument":
        """Build from a mapping that has already passed the form contract."""
        return cls(
            form_title=data["formTitle"],
            form_description=data["formDescription"],
            fields=tuple(FieldDescriptor.from_mapping(f) for f in data["fields"]),
        )

    def to_mapping(self) -> dict[str, Any]:
        return {
            "formTitle": self.form_title,
            "formDescription": self.form_description,
            "fields": [f.to_mapping() for f in self.fields],
        }

    def to_json(self, *, indent: int = 2) -> str:
        """Canonical serialization; validating it yields an equal document."""
        return json.dumps(self.to_mapping(), indent=indent, ensure_ascii=False)

    def field(self, field_id: str) -> FieldDescriptor:
        for f in self.fields:
            if f.id == field_id:
                return f
        raise KeyError(field_id)

    def rule_fields(self) -> Iterator[FieldDescriptor]:
        """Fields carrying a validation rule, in display order."""
        return (f for f in self.fields if f.validation is not None)


@dataclass(frozen=True)
class Submission(Mapping[str, Any]):
    """One timestamped, read-only snapshot of the form values."""

    values: Mapping[str, FieldValue]
    submitted_at: str = _field(default_factory=utils._now_iso)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def _as_dict(self) -> dict[str, Any]:
        return {**self.values, "submittedAt": self.submitted_at}

    def __getitem__(self, key: str) -> Any:
        return self._as_dict()[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._as_dict())

    def __len__(self) -> int:
        return len(self._as_dict())
