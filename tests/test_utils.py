import unittest
from datetime import datetime, timedelta, timezone

from form_schema import utils


class UtilsTests(unittest.TestCase):
    def test_now_iso_is_millisecond_utc(self):
        stamp = utils._now_iso()
        self.assertRegex(stamp, r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")
        parsed = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
        self.assertEqual(parsed.utcoffset(), timedelta(0))

    def test_iso_converts_to_utc(self):
        local = datetime(2025, 1, 1, 5, 0, tzinfo=timezone(timedelta(hours=5)))
        self.assertEqual(utils._iso(local), "2025-01-01T00:00:00.000Z")

    def test_type_names(self):
        cases = [(None, "null"), (True, "boolean"), (1, "integer"), (1.5, "number"),
                 ("s", "string"), ((), "tuple")]
        for value, name in cases:
            self.assertEqual(utils._type_name(value), name)
        self.assertEqual(utils._type_name([]), "list")
        self.assertEqual(utils._type_name({}), "object")

    def test_matches_type_keeps_bools_out_of_numbers(self):
        self.assertTrue(utils._matches_type(True, "boolean"))
        self.assertFalse(utils._matches_type(True, "integer"))
        self.assertFalse(utils._matches_type(False, "number"))
        self.assertTrue(utils._matches_type(2.0, "number"))

    def test_regex_error(self):
        self.assertIsNone(utils._regex_error(r"^\d+$"))
        self.assertIsInstance(utils._regex_error("(("), str)

    def test_json_safe_unwraps_read_only_views(self):
        from types import MappingProxyType
        data = MappingProxyType({"a": (1, MappingProxyType({"b": 2}))})
        self.assertEqual(utils._json_safe(data), {"a": [1, {"b": 2}]})
