from __future__ import annotations

import io
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from PIL import Image

from doclayout import config
from doclayout.engine.writer import pdf_bytes, render_pdf
from doclayout.models import (
    ImageOp,
    LineOp,
    RectOp,
    RenderRequest,
    SignatureDescriptor,
    SignatureKind,
    TextOp,
)


def _png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (40, 10), (20, 20, 60)).save(buf, format="PNG")
    return buf.getvalue()


class WriterTests(unittest.TestCase):
    def setUp(self) -> None:
        self._orig_out = config.OUT_DIR
        self._tmp = tempfile.TemporaryDirectory()
        config.set_out_dir(Path(self._tmp.name))

    def tearDown(self) -> None:
        config.set_out_dir(self._orig_out)
        self._tmp.cleanup()

    def test_render_pdf_writes_named_file(self) -> None:
        request = RenderRequest(
            doc_id="0123456789abcdef",
            title="Quarterly Report",
            body="## Summary\n\nAll **good**.",
            created_at=datetime(2024, 1, 5),
            template_id="business_report",
            fields={"period": "Q1 2024"},
            signature=SignatureDescriptor(signer_name="Jane Doe", signed_at=datetime(2024, 1, 5)),
        )
        path = render_pdf(request, fetch=None)
        self.assertEqual(path, Path(self._tmp.name) / "quarterly_report_01234567.pdf")
        self.assertTrue(path.read_bytes().startswith(b"%PDF"))

    def test_render_pdf_honours_base_dir(self) -> None:
        request = RenderRequest(
            doc_id="abc",
            title="",
            body="text",
            created_at=datetime(2024, 1, 5),
        )
        with tempfile.TemporaryDirectory() as other:
            path = render_pdf(request, base_dir=Path(other), fetch=None)
            self.assertEqual(path.parent, Path(other))
            self.assertEqual(path.name, "document_abc.pdf")
            self.assertTrue(path.exists())

    def test_pdf_bytes_replays_every_op_kind(self) -> None:
        ops = [
            RectOp(x=0, y=760, width=595, height=80, fill=(0.1, 0.2, 0.3)),
            RectOp(x=50, y=700, width=495, height=60, border=(0.8, 0.8, 0.8), border_width=1.0),
            LineOp(x1=50, y1=690, x2=545, y2=690, thickness=0.5, color=(0.5, 0.5, 0.5)),
            TextOp(x=50, y=650, text="Hello", font="Helvetica", size=11, color=(0, 0, 0)),
            ImageOp(x=200, y=100, width=112, height=28, data=_png()),
        ]
        data = pdf_bytes(ops)
        self.assertTrue(data.startswith(b"%PDF"))
        self.assertIn(b"%%EOF", data[-16:])
        with self.subTest("empty page"):
            self.assertTrue(pdf_bytes([]).startswith(b"%PDF"))


if __name__ == "__main__":
    unittest.main()
