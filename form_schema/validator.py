"""
validator.py - schema-agnostic, collect-everything validation utilities
=======================================================================

A single engine that you can point at **any** contract that follows the
compact JSON-Schema-lite conventions used by the bundled form contract.

Public API
----------
Violation
    One contract failure: a key/index trail plus a human-readable message.

SchemaError
    Exception raised for a document that violates its contract; carries the
    complete ``violations`` list.

iter_violations(value, *, schema, path=())
    Depth-first walk yielding **every** violation (type, enum, minLength,
    minItems, format, required fields, additionalProperties, list items,
    unique keys).  A type mismatch stops descent into that node only.

validate(value, *, schema)
    Raise :class:`SchemaError` if :func:`iter_violations` yields anything.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, NamedTuple, Sequence

from . import utils

__all__ = [
    "Violation",
    "SchemaError",
    "iter_violations",
    "validate",
]

PATH_SEPARATOR = " -> "

# --------------------------------------------------------------------------- #
# Result types                                                                #
# --------------------------------------------------------------------------- #

class Violation(NamedTuple):
    path: tuple
    message: str

    @property
    def location(self) -> str:
        return PATH_SEPARATOR.join(str(p) for p in self.path)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.location}: {self.message}"


class SchemaError(ValueError):
    """Raised when a document violates the supplied contract."""

    def __init__(self, violations: Sequence[Violation]):
        self.violations = list(violations)
        super().__init__("\n".join(str(v) for v in self.violations))


# --------------------------------------------------------------------------- #
# Core recursive validator                                                    #
# --------------------------------------------------------------------------- #

def _message(schema: Mapping[str, Any], keyword: str, default: str) -> str:
    return schema.get("messages", {}).get(keyword, default)


def iter_violations(
    value: Any, *, schema: Mapping[str, Any], path: tuple = ()
) -> Iterator[Violation]:
    """Yield every way in which *value* fails to satisfy *schema*.

    Supported keywords:

    * ``type`` (list or scalar)
    * ``enum``
    * ``minLength`` (strings) / ``minItems`` (lists)
    * ``format``: ``regex`` (the value must compile)
    * object validation via ``fields`` / ``required`` / ``additionalProperties``
    * list validation via ``items`` and ``unique`` (key that must not repeat)

    ``messages`` maps a keyword to the text reported when it fails.
    """

    stype = schema.get("type")
    if stype is None and "fields" in schema:
        stype = ["object"]  # implicit object when only `fields` is present

    # 1) type check ---------------------------------------------------------
    if stype:
        allowed = list(stype) if isinstance(stype, (list, tuple)) else [stype]
        if not any(utils._matches_type(value, t) for t in allowed):
            expected = " or ".join(allowed)
            yield Violation(path, _message(
                schema, "type",
                f"Expected {expected}, received {utils._type_name(value)}",
            ))
            return

    # 2) enum --------------------------------------------------------------
    if "enum" in schema and value not in schema["enum"]:
        options = " | ".join(f"'{o}'" for o in schema["enum"])
        yield Violation(path, _message(
            schema, "enum", f"Invalid enum value. Expected {options}, received '{value}'",
        ))

    # 3) length bounds ------------------------------------------------------
    if isinstance(value, str) and len(value) < schema.get("minLength", 0):
        n = schema["minLength"]
        yield Violation(path, _message(
            schema, "minLength", f"String must contain at least {n} character(s)",
        ))

    if isinstance(value, list) and len(value) < schema.get("minItems", 0):
        n = schema["minItems"]
        yield Violation(path, _message(
            schema, "minItems", f"Array must contain at least {n} element(s)",
        ))

    # 4) format ------------------------------------------------------------
    if schema.get("format") == "regex" and isinstance(value, str) and value:
        err = utils._regex_error(value)
        if err is not None:
            yield Violation(path, _message(
                schema, "format", f"Invalid regular expression: {err}",
            ))

    # 5) object recursion ---------------------------------------------------
    if isinstance(value, dict):
        fields = schema.get("fields")
        if fields is not None:  # only validate known object schemas
            for k, meta in fields.items():
                if k in value:
                    yield from iter_violations(value[k], schema=meta, path=path + (k,))
                elif meta.get("required"):
                    yield Violation(path + (k,), "Required")

            extras = set(value) - set(fields)
            if schema.get("additionalProperties", True) is False and extras:
                yield Violation(path, f"Unrecognized key(s) in object: {sorted(extras)}")

    # 6) list recursion -----------------------------------------------------
    if isinstance(value, list):
        item_schema = schema.get("items")
        if item_schema is not None:
            for idx, item in enumerate(value):
                yield from iter_violations(item, schema=item_schema, path=path + (idx,))

        key = schema.get("unique")
        if key:
            seen: set = set()
            for idx, item in enumerate(value):
                ident = item.get(key) if isinstance(item, dict) else None
                if not isinstance(ident, str) or not ident:
                    continue  # empty/missing ids are already reported above
                if ident in seen:
                    yield Violation(path + (idx, key), _message(
                        schema, "unique", f"Duplicate {key} '{ident}'",
                    ))
                seen.add(ident)


def validate(value: Any, *, schema: Mapping[str, Any]) -> None:
    """Assert that *value* satisfies *schema*, reporting all violations at once."""
    violations = list(iter_violations(value, schema=schema))
    if violations:
        raise SchemaError(violations)
