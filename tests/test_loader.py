import json
import tempfile
import unittest
from pathlib import Path

from form_schema import loader

class LoaderTests(unittest.TestCase):
    def test_load_schema_from_file(self):
        data = {"formTitle": "T", "formDescription": "D", "fields": []}
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            json.dump(data, tmp)
            tmp.flush()
            path = Path(tmp.name)

        try:
            loaded = loader.load_schema(path)
            self.assertEqual(loaded, data)
        finally:
            path.unlink(missing_ok=True)

    def test_load_schema_from_package_resource(self):
        schema = loader.load_schema(loader.FORM_CONTRACT)
        self.assertEqual(schema["title"], "Form Schema")
        sample = loader.load_schema(loader.SAMPLE_FORM)
        self.assertEqual(len(sample["fields"]), 7)

    def test_load_text_is_verbatim(self):
        with tempfile.NamedTemporaryFile("wb", delete=False) as tmp:
            tmp.write(b'{ "a" : 1 }\n')
            path = Path(tmp.name)
        try:
            self.assertEqual(loader.load_text(path), '{ "a" : 1 }\n')
        finally:
            path.unlink(missing_ok=True)

    def test_load_schema_not_found(self):
        with self.assertRaises(FileNotFoundError):
            loader.load_schema("does_not_exist.json")

    def test_invalid_json_raises_value_error(self):
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            tmp.write("{not json")  # malformed
            tmp.flush()
            p = Path(tmp.name)

        try:
            with self.assertRaises(ValueError):
                loader.load_schema(p)
        finally:
            p.unlink(missing_ok=True)

    def test_empty_file_raises_value_error(self):
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            p = Path(tmp.name) # File is created but empty

        try:
            with self.assertRaises(ValueError):
                loader.load_schema(p)
        finally:
            p.unlink(missing_ok=True)
