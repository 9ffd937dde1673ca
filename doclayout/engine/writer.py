from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Tuple, Union

from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from .. import config
from ..models import DrawOp, ImageOp, LineOp, RectOp, RenderRequest, TextOp
from ..storage import artifact_path
from .fetch import ImageFetcher, fetch_image
from .render import render

logger = logging.getLogger(__name__)


def _color(rgb) -> colors.Color:
    return colors.Color(*rgb)


def _draw_op(canv: canvas.Canvas, op: DrawOp) -> None:
    if isinstance(op, TextOp):
        canv.setFillColor(_color(op.color))
        canv.setFont(op.font, op.size)
        canv.drawString(op.x, op.y, op.text)
    elif isinstance(op, RectOp):
        if op.fill is not None:
            canv.setFillColor(_color(op.fill))
        stroke = op.border is not None and op.border_width > 0
        if stroke:
            canv.setStrokeColor(_color(op.border))
            canv.setLineWidth(op.border_width)
        canv.rect(op.x, op.y, op.width, op.height, stroke=1 if stroke else 0, fill=1 if op.fill is not None else 0)
    elif isinstance(op, LineOp):
        canv.setStrokeColor(_color(op.color))
        canv.setLineWidth(op.thickness)
        canv.line(op.x1, op.y1, op.x2, op.y2)
    elif isinstance(op, ImageOp):
        img = ImageReader(io.BytesIO(op.data))
        canv.drawImage(img, op.x, op.y, width=op.width, height=op.height, mask="auto")


def write_ops(
    ops: Iterable[DrawOp],
    target: Union[str, Path, BinaryIO],
    page_size: Tuple[float, float] = config.PAGE_SIZE,
    title: Optional[str] = None,
) -> None:
    """Replay draw ops onto a single ReportLab page, in order (later ops paint over earlier ones)."""
    canv = canvas.Canvas(str(target) if isinstance(target, Path) else target, pagesize=page_size)
    if title:
        canv.setTitle(title)
    for op in ops:
        _draw_op(canv, op)
    canv.showPage()
    canv.save()


def pdf_bytes(ops: Iterable[DrawOp], page_size: Tuple[float, float] = config.PAGE_SIZE) -> bytes:
    buf = io.BytesIO()
    write_ops(ops, buf, page_size=page_size)
    return buf.getvalue()


def write_pdf(
    ops: Iterable[DrawOp],
    output_path: Path,
    page_size: Tuple[float, float] = config.PAGE_SIZE,
    title: Optional[str] = None,
) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    write_ops(ops, output_path, page_size=page_size, title=title)
    return output_path


def render_pdf(
    request: RenderRequest,
    base_dir: Optional[Path] = None,
    fetch: Optional[ImageFetcher] = fetch_image,
) -> Path:
    result = render(request, fetch=fetch)
    path = artifact_path(result.file_name, "pdf", base_dir=base_dir)
    write_pdf(result.ops, path, title=request.title)
    logger.info("Wrote %s (%d ops)", path, len(result.ops))
    return path
