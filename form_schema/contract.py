"""
contract.py - High-level API for checking form descriptions against a contract.
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from . import loader
from . import validator
from .document import SchemaDocument
from .validator import Violation

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Either a valid :class:`SchemaDocument` or the violations that block it."""

    document: SchemaDocument | None = None
    violations: tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return self.document is not None

    @property
    def error_text(self) -> str:
        """All violations, one ``path: message`` per line."""
        return "\n".join(str(v) for v in self.violations)


class Contract:
    """A high-level interface for a loaded form contract."""

    def __init__(self, title: str, description: str, version: str, schema: Mapping[str, Any]):
        """Initializes the Contract with its parsed definition."""
        self.title = title
        self.description = description
        self.version = version
        self.schema = schema

    @classmethod
    def load(cls, path: str | Path = loader.FORM_CONTRACT) -> "Contract":
        """Loads a contract from a JSON file (or package data) and returns a Contract."""
        schema_data = loader.load_schema(path)

        missing = [k for k in ("title", "description", "version", "fields") if k not in schema_data]
        if missing:
            raise ValueError(f"Schema at '{path}' is not a valid contract. Missing keys: {missing}.")
        return cls(
            title=schema_data["title"],
            description=schema_data["description"],
            version=schema_data["version"],
            schema=schema_data,
        )

    def check(self, data: Any) -> list[Violation]:
        """Every structural violation of already-parsed *data*."""
        return list(validator.iter_violations(data, schema=self.schema))

    def validate(self, raw_text: str) -> ValidationResult:
        """
        Parse *raw_text* and check it against this contract.
        1. Any parse failure yields exactly one violation with the parser's message.
        2. Otherwise all structural violations are collected together.
        3. A clean document comes back as a :class:`SchemaDocument`.
        """
        try:
            data = json.loads(raw_text)
        except (ValueError, RecursionError) as exc:
            # JSONDecodeError, oversized integer literals, runaway nesting
            log.debug("Schema text is not valid JSON: %s", exc)
            return ValidationResult(violations=(Violation((), str(exc)),))

        violations = self.check(data)
        if violations:
            log.debug("Schema text has %d violation(s)", len(violations))
            return ValidationResult(violations=tuple(violations))
        return ValidationResult(document=SchemaDocument.from_mapping(data))


_DEFAULT: Contract | None = None

def default_contract() -> Contract:
    """The bundled form contract, loaded once."""
    global _DEFAULT
    if _DEFAULT is None:
        _DEFAULT = Contract.load()
    return _DEFAULT


def validate(raw_text: str) -> ValidationResult:
    """Validate *raw_text* against the bundled form contract."""
    return default_contract().validate(raw_text)
