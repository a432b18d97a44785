# form_schema/card.py
from __future__ import annotations
from typing import Any, Sequence

from .document import SchemaDocument
from .renderer import Control

__all__ = ["to_markdown_card"]

def _format_scalar(v: Any) -> str:
    """Return a Markdown-safe scalar string."""
    if v is True:   return "[x]"
    if v is False:  return "[ ]"
    if v is None or v == "":  return "_(empty)_"
    return str(v)

def _format_list(v: Sequence[str]) -> str:
    """Return a bulleted Markdown list (no surrounding blank lines)."""
    return "\n".join(f"- {item}" for item in v)

def _format_control(c: Control, h: str) -> list[str]:
    lines = [f"{h}# {c.label}{' ' + c.required_marker if c.required_marker else ''}"]
    if c.choices:
        bullets = []
        for choice in c.choices:
            mark = "(x)" if choice.selected else "( )"
            bullets.append(f"{mark} {choice.label}" + (f" `{choice.value}`" if choice.value else ""))
        lines.append(_format_list(bullets))
    elif c.widget == "checkbox":
        lines.append(_format_scalar(bool(c.value)))
    else:
        lines.append(_format_scalar(c.value))
        if c.placeholder and not c.value:
            lines.append(f"> {c.placeholder}")
    if c.error:
        lines.append(f"**Error:** {c.error}")
    return lines

def to_markdown_card(
    document: SchemaDocument, controls: Sequence[Control], *, heading_level: int = 2
) -> str:
    """
    Render a live form preview as a Markdown card.

    Parameters
    ----------
    document : SchemaDocument
        Supplies the title and description.
    controls : Sequence[Control]
        Output of :func:`form_schema.renderer.render_form`.
    heading_level : int, default 2
        Markdown heading level for the form title (##, ###, …); each field
        is one level deeper.

    Returns
    -------
    str
        Markdown document.
    """
    h = "#" * heading_level
    parts: list[str] = [f"{h} {document.form_title}", document.form_description, ""]
    for c in controls:
        parts.extend(_format_control(c, h))
        parts.append("")             # blank line after each section
    return "\n".join(parts).rstrip()
