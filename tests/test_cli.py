from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path
import tempfile
import unittest

from chartbox.cli import main


class CliTests(unittest.TestCase):
    def _run(self, argv: list[str]) -> int:
        with contextlib.redirect_stdout(io.StringIO()):
            return main(argv)

    def test_demo_writes_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "bubble.png"
            self.assertEqual(self._run(["demo", "bubble", "-o", str(out)]), 0)
            self.assertTrue(out.read_bytes().startswith(b"\x89PNG"))

    def test_render_config_with_explicit_format(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cfg = Path(tmp) / "bars.json"
            cfg.write_text(
                json.dumps({"type": "stacked_bar", "bars": [{"name": "a", "values": [1, 2]}]}),
                encoding="utf-8",
            )
            out = Path(tmp) / "bars.out"
            self.assertEqual(self._run(["render", str(cfg), "-o", str(out), "--format", "bmp"]), 0)
            self.assertTrue(out.read_bytes().startswith(b"BM"))

    def test_config_error_exits_2_without_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cfg = Path(tmp) / "empty.json"
            cfg.write_text(json.dumps({"type": "bubble", "bubbles": []}), encoding="utf-8")
            out = Path(tmp) / "empty.png"
            with self.assertLogs("chartbox", level="ERROR"):
                self.assertEqual(self._run(["render", str(cfg), "-o", str(out)]), 2)
            self.assertFalse(out.exists())

    def test_non_finite_config_exits_2_without_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            cfg = Path(tmp) / "inf.json"
            cfg.write_text(
                json.dumps({"type": "bubble", "bubbles": [{"value": 1, "x": float("inf"), "y": 1}]}),
                encoding="utf-8",
            )
            out = Path(tmp) / "inf.png"
            with self.assertLogs("chartbox", level="ERROR"):
                self.assertEqual(self._run(["render", str(cfg), "-o", str(out)]), 2)
            self.assertFalse(out.exists())

    def test_missing_config_exits_2(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs("chartbox", level="ERROR"):
                code = self._run(["render", str(Path(tmp) / "nope.json"), "-o", str(Path(tmp) / "x.png")])
            self.assertEqual(code, 2)


if __name__ == "__main__":
    unittest.main()
