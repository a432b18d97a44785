"""
cli.py - command-line front end.

    form-schema validate SCHEMA
    form-schema preview  SCHEMA [--values JSON]
    form-schema submit   SCHEMA [--out DIR] [--csv] [--values JSON] [--<field-id> VALUE ...]
    form-schema fill     SCHEMA [--out DIR] [--csv]
    form-schema theme    [--toggle] [--settings FILE]

Exit status is 0 on success, 1 for an invalid schema or a rejected
submission and 2 for usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Any, Callable, Mapping, Sequence

from . import loader
from . import parser as value_parser
from .document import FieldKind
from .export import DirectorySink
from .renderer import Control
from .session import FormSession
from .theme import ThemeStore

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
REQUIRED_NOTICE = "This field is required."


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _open_session(path: str, out: str, stdout: IO[str]) -> FormSession:
    text = loader.load_text(path)
    return FormSession(
        text,
        sink=DirectorySink(out, stream=stdout),
        notify=lambda notice: print(notice, file=stdout),
    )


def _fill_values(session: FormSession, values: Mapping[str, Any]) -> None:
    """Route every value through the session's change handler."""
    for field_id, value in values.items():
        try:
            field = session.document.field(field_id)
        except KeyError:
            raise ValueError(f"Unknown field '{field_id}'") from None
        if field.type is FieldKind.CHECKBOX:
            value = bool(value)
        elif not isinstance(value, str):
            value = str(value)
        session.on_field_change(field, value)


def _download(session: FormSession, *, csv: bool) -> None:
    if csv:
        session.download_submissions_csv()
    else:
        session.download_submissions()


def _print_errors(errors: Mapping[str, str], stdout: IO[str]) -> None:
    for field_id, message in errors.items():
        print(f"{field_id}: {message}", file=stdout)


def _missing_required(session: FormSession) -> list[str]:
    """Required fields still empty (unchecked, for checkboxes)."""
    return [
        f.id for f in session.document.fields
        if f.required and not session.form_state.get(f.id)
    ]


def _ask_value(c: Control, ask: Callable[[str], str], stdout: IO[str]) -> Any:
    title = f"{c.label}{' ' + c.required_marker if c.required_marker else ''}"
    if c.widget == "checkbox":
        return ask(f"{title} [y/N]: ").strip().lower() in ("y", "yes")
    if c.widget in ("select", "radio"):
        choices = [ch for ch in c.choices if ch.value]
        for i, ch in enumerate(choices, 1):
            print(f"  {i}) {ch.label}", file=stdout)
        answer = ask(f"{title}: ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            answer = choices[int(answer) - 1].value
        return answer
    hint = f" ({c.placeholder})" if c.placeholder else ""
    return ask(f"{title}{hint}: ")


def _prompt_control(
    session: FormSession, c: Control, ask: Callable[[str], str], stdout: IO[str]
) -> None:
    """Ask for one value on the terminal and hand it to the control."""
    while True:
        value = _ask_value(c, ask, stdout)
        if c.field.required and not value:
            print(f"  {REQUIRED_NOTICE}", file=stdout)
            continue
        c.change(value)
        error = session.field_errors.get(c.field_id)
        if error:
            print(f"  {error}", file=stdout)
        return


# --------------------------------------------------------------------------- #
# Commands                                                                    #
# --------------------------------------------------------------------------- #

def cmd_validate(args: argparse.Namespace, stdout: IO[str]) -> int:
    session = FormSession(loader.load_text(args.schema))
    if not session.valid:
        print(session.error, file=stdout)
        return 1
    doc = session.document
    print(f"ok: {doc.form_title} ({len(doc.fields)} field(s))", file=stdout)
    return 0


def cmd_preview(args: argparse.Namespace, stdout: IO[str]) -> int:
    session = FormSession(loader.load_text(args.schema))
    if session.valid and args.values:
        _fill_values(session, value_parser.parse_input(args.values, document=session.document))
    print(session.preview(), file=stdout)
    return 0 if session.valid else 1


def cmd_submit(args: argparse.Namespace, stdout: IO[str]) -> int:
    session = _open_session(args.schema, args.out, stdout)
    if not session.valid:
        print(session.error, file=stdout)
        return 1
    if args.values:
        _fill_values(session, value_parser.parse_input(args.values, document=session.document))
    if args.fields:
        _fill_values(session, value_parser.parse_input(list(args.fields), document=session.document))
    missing = _missing_required(session)
    if missing:
        _print_errors({field_id: REQUIRED_NOTICE for field_id in missing}, stdout)
        return 1
    outcome = session.submit()
    if not outcome.accepted:
        _print_errors(outcome.errors, stdout)
        return 1
    print(outcome.notice, file=stdout)
    _download(session, csv=args.csv)
    session.close()
    return 0


def cmd_fill(
    args: argparse.Namespace, stdout: IO[str], ask: Callable[[str], str] | None = None
) -> int:
    ask = ask or input
    session = _open_session(args.schema, args.out, stdout)
    if not session.valid:
        print(session.error, file=stdout)
        return 1
    doc = session.document
    print(f"{doc.form_title}\n{doc.form_description}\n", file=stdout)

    status = 0
    pending = {f.id for f in doc.fields}
    while True:
        for c in session.controls():
            if c.field_id in pending:
                _prompt_control(session, c, ask, stdout)
        outcome = session.submit()
        if outcome.accepted:
            print(outcome.notice, file=stdout)
            if ask("Submit another response? [y/N]: ").strip().lower() not in ("y", "yes"):
                break
            pending = {f.id for f in doc.fields}
        elif not outcome.errors:
            # nothing to re-ask; the session refused outright
            print(outcome.notice or session.error, file=stdout)
            status = 1
            break
        else:
            _print_errors(outcome.errors, stdout)
            # keep the accepted answers, ask again for the rejected ones
            pending = set(outcome.errors)

    _download(session, csv=args.csv)
    session.close()
    return status


def cmd_theme(args: argparse.Namespace, stdout: IO[str]) -> int:
    store = ThemeStore(args.settings)
    if args.toggle:
        store.toggle()
    print(store.theme, file=stdout)
    return 0


# --------------------------------------------------------------------------- #
# Entry point                                                                 #
# --------------------------------------------------------------------------- #

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="form-schema",
        description="Validate declarative form schemas, preview them and collect submissions.",
    )
    p.add_argument(
        "--verbosity",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING).",
    )
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("validate", help="Check a schema file against the form contract.")
    sp.add_argument("schema", help="Schema file (or bundled name, e.g. contact_form.json).")
    sp.set_defaults(func=cmd_validate)

    sp = sub.add_parser("preview", help="Render a schema as a Markdown form preview.")
    sp.add_argument("schema")
    sp.add_argument("--values", help="JSON object (or file) of field values to show.")
    sp.set_defaults(func=cmd_preview)

    for name, func, help_text in (
        ("submit", cmd_submit, "Submit one response given as --<field-id> flags."),
        ("fill", cmd_fill, "Fill the form interactively on the terminal."),
    ):
        sp = sub.add_parser(name, help=help_text, allow_abbrev=False, add_help=name != "submit")
        if name == "submit":
            # --help goes to the per-field parser, which lists every field flag
            sp.add_argument("-h", action="help", help="Show this help message and exit.")
        sp.add_argument("schema")
        sp.add_argument("--out", default=".", help="Directory for the submissions file.")
        sp.add_argument("--csv", action="store_true", help="Write submissions as CSV instead of JSON.")
        if name == "submit":
            sp.add_argument("--values", help="JSON object (or file) of field values.")
        sp.set_defaults(func=func)

    sp = sub.add_parser("theme", help="Show or toggle the stored light/dark theme.")
    sp.add_argument("--toggle", action="store_true")
    sp.add_argument("--settings", default=None, help="Settings file (default: $FORM_SCHEMA_SETTINGS).")
    sp.set_defaults(func=cmd_theme)
    return p


def main(argv: Sequence[str] | None = None, stdout: IO[str] | None = None) -> int:
    p = build_parser()
    args, extra = p.parse_known_args(argv)
    if extra and args.command != "submit":
        p.error(f"unrecognized arguments: {' '.join(extra)}")
    args.fields = extra
    logging.basicConfig(level=args.verbosity, format=LOG_FORMAT)
    stdout = stdout or sys.stdout
    try:
        return args.func(args, stdout)
    except EOFError:
        print("aborted", file=stdout)
        return 1
    except (FileNotFoundError, ValueError) as exc:
        log.error("%s", exc)
        print(f"error: {exc}", file=stdout)
        return 2


if __name__ == "__main__":
    sys.exit(main())
