import io
import json
import unittest
from datetime import datetime, timezone

import pandas as pd

from form_schema import export
from form_schema.document import Submission
from tests._util import tmp_dir


class FormatTests(unittest.TestCase):
    def setUp(self):
        self.subs = [
            Submission({"name": "Ada", "newsletter": True}, submitted_at="2025-01-01T00:00:00.000Z"),
            Submission({"name": "Grace", "email": "g@x.io"}, submitted_at="2025-01-02T00:00:00.000Z"),
        ]

    def test_filename_pattern(self):
        now = datetime(2025, 8, 3, 12, 30, 5, 123000, tzinfo=timezone.utc)
        self.assertEqual(
            export.submissions_filename(now), "form-submissions-2025-08-03T12:30:05.123Z.json"
        )
        self.assertTrue(export.submissions_filename(now, suffix="csv").endswith(".csv"))

    def test_json_is_pretty_printed_array(self):
        out = export.submissions_json(self.subs)
        self.assertEqual(json.loads(out), [
            {"name": "Ada", "newsletter": True, "submittedAt": "2025-01-01T00:00:00.000Z"},
            {"name": "Grace", "email": "g@x.io", "submittedAt": "2025-01-02T00:00:00.000Z"},
        ])
        self.assertTrue(out.startswith("[\n  {\n    \"name\""))

    def test_empty_history_serialises_to_empty_array(self):
        self.assertEqual(export.submissions_json([]), "[]")

    def test_frame_columns_union_with_timestamp_last(self):
        frame = export.submissions_frame(self.subs)
        self.assertIsInstance(frame, pd.DataFrame)
        self.assertEqual(list(frame.columns), ["name", "newsletter", "email", "submittedAt"])
        self.assertEqual(frame.loc[1, "name"], "Grace")
        self.assertTrue(pd.isna(frame.loc[0, "email"]))

    def test_csv(self):
        lines = export.submissions_csv(self.subs).splitlines()
        self.assertEqual(lines[0], "name,newsletter,email,submittedAt")
        self.assertEqual(len(lines), 3)


class SinkTests(unittest.TestCase):
    def test_directory_sink_writes_files(self):
        with tmp_dir() as d:
            sink = export.DirectorySink(d / "out")
            sink.download_file("schema.json", "{\r\n}", export.JSON_MIME)
            self.assertEqual((d / "out" / "schema.json").read_bytes(), b"{\r\n}")

    def test_directory_sink_copies_to_stream(self):
        buf = io.StringIO()
        export.DirectorySink(stream=buf).copy_text("{}")
        self.assertEqual(buf.getvalue(), "{}\n")

    def test_memory_sink_records_calls(self):
        sink = export.MemorySink()
        sink.copy_text("a")
        sink.download_file("f", "c", "text/plain")
        self.assertEqual(sink.copied, ["a"])
        self.assertEqual(sink.files, [("f", "c", "text/plain")])
        self.assertEqual(sink.calls, 2)
