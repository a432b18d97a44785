import json
import tempfile
import unittest
from pathlib import Path

from form_schema import parser
from form_schema.document import SchemaDocument
from tests._util import sample


class ParserTests(unittest.TestCase):
    def setUp(self):
        self.doc = SchemaDocument.from_mapping(sample())
        self.base = {"name": "Ada", "email": "ada@example.com", "industry": "tech"}

    def test_parse_mapping(self):
        out = parser.parse_input(self.base, document=self.doc)
        self.assertEqual(out, self.base)

    def test_parse_path(self):
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            json.dump(self.base, tmp)
            tmp.flush()
            p = Path(tmp.name)
        try:
            out = parser.parse_input(p, document=self.doc)
            self.assertEqual(out, self.base)
        finally:
            p.unlink(missing_ok=True)

    def test_parse_json_literal(self):
        literal = json.dumps(self.base)
        out = parser.parse_input(literal, document=self.doc)
        self.assertEqual(out, self.base)

    def test_parse_cli_string(self):
        out = parser.parse_input('--name "Ada L" --industry tech --newsletter', document=self.doc)
        self.assertEqual(out, {"name": "Ada L", "industry": "tech", "newsletter": True})

    def test_parse_cli_tokens_only_returns_given_flags(self):
        out = parser.parse_input(["--zip", "12345"], document=self.doc)
        self.assertEqual(out, {"zip": "12345"})

    def test_choice_fields_restrict_values(self):
        with self.assertRaises(SystemExit):
            parser.parse_input(["--industry", "mining"], document=self.doc)

    def test_unknown_argument_raises(self):
        with self.assertRaises(ValueError):
            parser.parse_input(["--bogus", "x"], document=self.doc)

    def test_config_overrides_flags(self):
        with tempfile.NamedTemporaryFile("w+", suffix=".json", delete=False) as tmp:
            json.dump({"name": "From file"}, tmp)
            tmp.flush()
            p = Path(tmp.name)
        try:
            out = parser.parse_input(["--name", "flag", "--config", str(p)], document=self.doc)
            self.assertEqual(out, {"name": "From file"})
        finally:
            p.unlink(missing_ok=True)

    def test_missing_config_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            parser.parse_input(["--config", "/nope/values.json"], document=self.doc)

    def test_non_object_json_is_rejected(self):
        with self.assertRaises(ValueError):
            parser.parse_input("[1, 2]", document=self.doc)

    def test_unsupported_source_type(self):
        with self.assertRaises(TypeError):
            parser.parse_input(42, document=self.doc)

    def test_help_lists_every_field(self):
        text = parser.build_arg_parser(self.doc, prog="form").format_help()
        for f in self.doc.fields:
            self.assertIn(f"--{f.id}", text)
        self.assertIn("Full Name (required)", text)

    def test_reserved_field_ids_raise(self):
        for field_id in sorted(parser.RESERVED_FLAGS):
            raw = sample()
            raw["fields"][0]["id"] = field_id
            doc = SchemaDocument.from_mapping(raw)
            with self.subTest(field_id=field_id):
                with self.assertRaisesRegex(ValueError, "reserved"):
                    parser.build_arg_parser(doc)
                with self.assertRaisesRegex(ValueError, "reserved"):
                    parser.parse_input([f"--{field_id}", "x"], document=doc)
                # mappings never touch the flag namespace
                self.assertEqual(parser.parse_input({field_id: "x"}, document=doc), {field_id: "x"})
