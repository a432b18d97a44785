"""
parser.py - command-line / JSON / mapping loader for form values
================================================================

Turns a :class:`~form_schema.document.SchemaDocument` into an
:mod:`argparse` parser so a form can be filled without a GUI.

Public API
----------
`build_arg_parser(document) -> argparse.ArgumentParser`
    Construct an `argparse` instance with one ``--<field-id>`` flag per field.

`parse_input(source, *, document) -> dict`
    Convert user-supplied *source* (CLI string / Path / JSON literal / Mapping)
    into a plain `dict` keyed by field id.
"""

from __future__ import annotations

import argparse
import json
import shlex
from pathlib import Path
from typing import Any, Mapping, Sequence

from .document import FieldKind, SchemaDocument

# option names the parser itself owns
RESERVED_FLAGS = frozenset({"help", "config"})

# --------------------------------------------------------------------------- #
# Parser builder                                                              #
# --------------------------------------------------------------------------- #

def build_arg_parser(document: SchemaDocument, *, prog: str | None = None) -> argparse.ArgumentParser:
    """Return an :pyclass:`argparse.ArgumentParser` for *document*.

    Every field becomes a ``--<field-id>`` flag: checkboxes are
    ``store_true``, select/radio fields restrict ``choices`` to their option
    values, everything else takes a string.  A field whose id is one of
    :data:`RESERVED_FLAGS` raises :class:`ValueError`.
    """

    clashes = [f.id for f in document.fields if f.id in RESERVED_FLAGS]
    if clashes:
        raise ValueError(
            f"Field id(s) {clashes} clash with the reserved --help/--config flags"
        )

    p = argparse.ArgumentParser(
        prog=prog,
        description=document.form_description,
        fromfile_prefix_chars="@",
        add_help=False,
        allow_abbrev=False,
    )

    # standard meta flags ----------------------------------------------------
    p.add_argument("-h", "--help", action="help", help="Show this help message and exit.")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="JSON file containing all field values; overrides all other flags.",
    )

    for f in document.fields:
        label = f.label + (" (required)" if f.required else "")
        if f.placeholder:
            label += f"; e.g. {f.placeholder}"
        kwargs: dict[str, Any] = {
            "dest": f.id,
            "help": label.replace("%", "%%"),
            "default": argparse.SUPPRESS,
        }

        if f.type is FieldKind.CHECKBOX:
            kwargs["action"] = "store_true"
        else:
            kwargs["type"] = str
            if f.type in (FieldKind.SELECT, FieldKind.RADIO):
                kwargs["choices"] = [o.value for o in f.choices]
                kwargs["metavar"] = "CHOICE"
                kwargs["help"] += " [" + ", ".join(kwargs["choices"]).replace("%", "%%") + "]"

        p.add_argument(f"--{f.id}", **kwargs)

    return p

# --------------------------------------------------------------------------- #
# Input parsing utility                                                       #
# --------------------------------------------------------------------------- #

def parse_input(
    source: str | Path | Sequence[str] | Mapping[str, Any],
    *,
    document: SchemaDocument,
) -> dict[str, Any]:
    """Convert *source* to a *raw* ``dict`` of field values (no validation).

    Parameters
    ----------
    source
        Supported variants:
        * ``Mapping`` - copied directly.
        * ``Path`` - JSON file on disk.
        * ``str``  - interpreted as: existing file path → load; else JSON literal → load; else CLI string.
        * ``Sequence[str]`` - treated as CLI tokens.
    document
        The form driving CLI flag generation when *source* is CLI-style.

    Returns
    -------
    dict
        Raw key-value mapping with only the values provided by the user.  If
        ``--config`` is used the returned dict is exactly that file’s content.
    """

    # Mapping - already dict-like ------------------------------------------
    if isinstance(source, Mapping):
        return dict(source)

    # Path - read JSON file -------------------------------------------------
    if isinstance(source, Path):
        return _load_object(source.read_text(encoding="utf-8"))

    # Decide how to treat *source* -----------------------------------------
    argv: list[str]
    if isinstance(source, str):
        p = Path(source)
        if p.is_file():
            return _load_object(p.read_text(encoding="utf-8"))
        try:
            return _load_object(source)
        except json.JSONDecodeError:
            argv = shlex.split(source)
    elif isinstance(source, Sequence) and not isinstance(source, (str, bytes)):
        argv = list(source)
    else:
        raise TypeError(f"Unsupported type for parse_input: {type(source)}")

    # CLI style - use argparse ---------------------------------------------
    parser = build_arg_parser(document)
    namespace, unknown = parser.parse_known_args(argv)
    if unknown:
        raise ValueError(f"Unknown argument(s): {unknown}. Use --help.")
    ns_dict = vars(namespace)

    # --config overrides everything else -----------------------------------
    if config_file := ns_dict.pop("config", None):
        cfg_path = Path(config_file)
        if not cfg_path.is_file():
            raise FileNotFoundError(cfg_path)
        return _load_object(cfg_path.read_text(encoding="utf-8"))

    return ns_dict


def _load_object(text: str) -> dict[str, Any]:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object of field values, got {type(data).__name__}")
    return data
