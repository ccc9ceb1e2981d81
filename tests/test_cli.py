from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from post_feed.cli import main


_POSTS_JSON = [
    {"title": "Old", "date": "2021-05-01", "content": "first", "tags": ["news"]},
    {
        "title": "New",
        "date": "2023-05-01",
        "content": "second",
        "img": {"src": "new.png", "alt": "New pic"},
        "tags": ["news", "art"],
    },
    {"title": "Undated", "date": "someday", "tags": ["art"]},
]


def _run(argv: list[str]) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        (self.root / "posts.json").write_text(json.dumps(_POSTS_JSON), encoding="utf-8")

    def tearDown(self) -> None:
        self._td.cleanup()

    def test_show_json_uses_config_relative_data_file(self) -> None:
        cfg = self.root / "config.yaml"
        cfg.write_text("data_file: posts.json\n", encoding="utf-8")

        code, out, err = _run(["show", "--config", str(cfg), "--json", "--sort", "date-asc"])
        self.assertEqual(code, 0, msg=err)
        payload = json.loads(out)
        self.assertEqual([p["title"] for p in payload], ["Old", "New", "Undated"])
        self.assertEqual(payload[1]["image"], {"src": "new.png", "alt": "New pic"})
        self.assertIsNone(payload[2]["date"])
        self.assertEqual(payload[2]["date_raw"], "someday")

    def test_show_text_with_tag(self) -> None:
        data_file = str(self.root / "posts.json")
        code, out, _ = _run(["show", "--data-file", data_file, "--tag", "art"])
        self.assertEqual(code, 0)
        self.assertIn("New", out)
        self.assertIn("Invalid Date", out)
        self.assertIn("image: new.png (New pic)", out)
        self.assertNotIn("Old", out)

    def test_show_unknown_tag_prints_empty_message(self) -> None:
        data_file = str(self.root / "posts.json")
        code, out, _ = _run(["show", "--data-file", data_file, "--tag", "nothing"])
        self.assertEqual(code, 0)
        self.assertIn("No posts found with this tag.", out)

    def test_tags_command(self) -> None:
        data_file = str(self.root / "posts.json")
        code, out, _ = _run(["tags", "--data-file", data_file])
        self.assertEqual(code, 0)
        self.assertEqual(out.splitlines(), ["news", "art"])

    def test_load_error_exit_code(self) -> None:
        code, _, err = _run(["show", "--data-file", str(self.root / "missing.xml")])
        self.assertEqual(code, 3)
        self.assertIn("Error:", err)

    def test_failed_load_prints_no_post_list(self) -> None:
        bad = self.root / "broken.xml"
        bad.write_text("<Posts><Post><Title>A", encoding="utf-8")

        for extra in ([], ["--json"]):
            with self.subTest(extra=extra):
                code, out, err = _run(["show", "--data-file", str(bad), *extra])
                self.assertEqual(code, 3)
                self.assertEqual(out, "")
                self.assertIn("Invalid XML", err)

        code, out, _ = _run(["tags", "--data-file", str(bad)])
        self.assertEqual(code, 3)
        self.assertEqual(out, "")

    def test_unsupported_format_exit_code(self) -> None:
        code, _, err = _run(["show", "--data-file", str(self.root / "posts.csv")])
        self.assertEqual(code, 3)
        self.assertIn(".csv", err)

    def test_config_error_exit_code(self) -> None:
        code, _, err = _run(["show", "--config", str(self.root / "nope.yaml")])
        self.assertEqual(code, 2)
        self.assertIn("Config file not found", err)

    def test_log_file_written(self) -> None:
        log_path = self.root / "out" / "events.jsonl"
        data_file = str(self.root / "posts.json")
        code, _, _ = _run(["show", "--data-file", data_file, "--log", str(log_path)])
        self.assertEqual(code, 0)

        events = [
            json.loads(ln)["event"]
            for ln in log_path.read_text(encoding="utf-8").splitlines()
        ]
        self.assertEqual(events[0], "command_started")
        self.assertIn("load_completed", events)


if __name__ == "__main__":
    unittest.main()
