from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from PIL import Image

from margin_inspect.boundary import PixelGrid
from margin_inspect.cli import main
from margin_inspect.contracts import RenderFailureError
from margin_inspect.engines.base import RasterEngine, RenderedPage


class _FakeEngine(RasterEngine):
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail

    def backend_id(self) -> str:
        return "fake_backend"

    def open_document(self, *, data: bytes):
        return object()

    def get_page_count(self, *, document) -> int:
        return 2

    def render_page(self, *, document, page_number: int, scale: float) -> RenderedPage:
        if self.fail:
            raise RenderFailureError(f"Failed to render page {page_number}")
        img = Image.new("RGBA", (120, 160), (255, 255, 255, 255))
        img.putpixel((20 + page_number, 30), (0, 0, 0, 255))
        return RenderedPage(page_number=page_number, width_pt=60, height_pt=80, scale=scale, grid=PixelGrid.from_image(img))


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "in").mkdir()
        (self.root / "in" / "brochure.pdf").write_bytes(b"%PDF-FAKE%")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, argv: list[str], engine: RasterEngine) -> tuple[int, str]:
        out = io.StringIO()
        with patch("margin_inspect.module._get_engine", return_value=engine), contextlib.redirect_stdout(out):
            code = main(argv)
        return code, out.getvalue()

    def test_writes_both_exports(self) -> None:
        out_dir = self.root / "out"
        code, stdout = self._run(
            [
                "--data-root", str(self.root / "in"),
                "--pdf-relpath", "brochure.pdf",
                "--out-dir", str(out_dir),
                "--bleed-size", "2",
            ],
            _FakeEngine(),
        )
        self.assertEqual(code, 0)
        self.assertIn("pages=2 uniform=True", stdout)

        payload = json.loads((out_dir / "pdf-margin-analysis.json").read_text(encoding="utf-8"))
        self.assertEqual(payload["metadata"]["totalPages"], 2)
        self.assertEqual(payload["metadata"]["bleedSize"], 2.0)
        csv_lines = (out_dir / "pdf-margin-analysis.csv").read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(csv_lines), 3)

    def test_single_format(self) -> None:
        out_dir = self.root / "out_csv"
        code, _ = self._run(
            ["--data-root", str(self.root / "in"), "--pdf-relpath", "brochure.pdf", "--out-dir", str(out_dir), "--format", "csv"],
            _FakeEngine(),
        )
        self.assertEqual(code, 0)
        self.assertTrue((out_dir / "pdf-margin-analysis.csv").exists())
        self.assertFalse((out_dir / "pdf-margin-analysis.json").exists())

    def test_failed_run_exit_code(self) -> None:
        code, stdout = self._run(
            ["--data-root", str(self.root / "in"), "--pdf-relpath", "brochure.pdf"],
            _FakeEngine(fail=True),
        )
        self.assertEqual(code, 2)
        self.assertIn("INSPECT_RENDER_FAILED", stdout)

    def test_bad_setting_rejected_at_entry(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main(["--data-root", str(self.root / "in"), "--pdf-relpath", "brochure.pdf", "--margin-threshold", "-1"])
        self.assertEqual(ctx.exception.code, 2)

    def test_unknown_log_level_rejected(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main(["--data-root", str(self.root / "in"), "--pdf-relpath", "brochure.pdf", "--log-level", "VERBOSE"])
        self.assertEqual(ctx.exception.code, 2)

    def test_log_level_is_case_insensitive(self) -> None:
        code, _ = self._run(
            ["--data-root", str(self.root / "in"), "--pdf-relpath", "brochure.pdf", "--log-level", "debug"],
            _FakeEngine(),
        )
        self.assertEqual(code, 0)


if __name__ == "__main__":
    unittest.main()
