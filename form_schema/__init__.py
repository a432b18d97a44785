"""
form_schema – A toolkit for schema-driven form rendering, validation and submission.
"""
from .contract import Contract, ValidationResult, validate
from .document import FieldDescriptor, FieldKind, Option, SchemaDocument, Submission, ValidationRule
from .validator import SchemaError, Violation
from .fields import ValidationOutcome, check_field
from .renderer import Control, render, render_form
from .session import FormSession, SubmitOutcome
from .parser import parse_input
from .card import to_markdown_card

__all__ = [
    "Contract",
    "ValidationResult",
    "validate",
    "FieldDescriptor",
    "FieldKind",
    "Option",
    "SchemaDocument",
    "Submission",
    "ValidationRule",
    "SchemaError",
    "Violation",
    "ValidationOutcome",
    "check_field",
    "Control",
    "render",
    "render_form",
    "FormSession",
    "SubmitOutcome",
    "parse_input",
    "to_markdown_card",
]
