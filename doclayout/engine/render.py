from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from .. import config
from ..models import DrawOp, LineOp, RectOp, RenderRequest, RenderResult, TextOp
from .fetch import ImageFetcher, fetch_image
from .flow import FlowRegion, flow
from .measure import FontSet, load_fonts, width
from .recipes import Box, Cursor, Page, Rule, Step, TemplateRecipe, Text, at, recipe
from .signature import compose_signature

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def default_page() -> Page:
    pw, ph = config.PAGE_SIZE
    return Page(width=float(pw), height=float(ph), margin=config.MARGIN)


def content_floor(signed: bool, page: Page) -> float:
    reserved = config.SIGNATURE_RESERVED_HEIGHT if signed else 0.0
    return page.margin + config.CONTENT_FLOOR_PADDING + reserved


def suggested_file_name(title: str, doc_id: str) -> str:
    safe_title = _UNSAFE_FILENAME.sub("_", title or "").lower() or "document"
    return f"{safe_title}_{(doc_id or '')[:8]}"


def _draw_text(step: Text, cursor: float, request: RenderRequest, page: Page, fonts: FontSet) -> Tuple[List[DrawOp], float]:
    value = step.resolve(request)
    if value is None:
        return [], cursor

    if step.y_signed is not None and request.signature is not None:
        y = at(step.y_signed, page)
    elif step.y is not None:
        y = at(step.y, page)
    else:
        y = cursor

    font = fonts.get(step.font)
    if step.align == "center":
        x = (page.width - width(font, step.size, value)) / 2
    elif step.align == "right":
        x = at(step.x, page) - width(font, step.size, value)
    else:
        x = at(step.x, page)

    op = TextOp(x=x, y=y, text=value, font=font, size=step.size, color=step.color)
    return [op], cursor - step.advance


def run_steps(
    steps: Sequence[Step],
    cursor: float,
    request: RenderRequest,
    page: Page,
    fonts: FontSet,
) -> Tuple[List[DrawOp], float]:
    """Execute recipe steps in declared order, returning the ops and the new cursor."""
    ops: List[DrawOp] = []
    for step in steps:
        if isinstance(step, Cursor):
            cursor = at(step.y, page)
        elif isinstance(step, Box):
            ops.append(
                RectOp(
                    x=at(step.x, page),
                    y=at(step.y, page),
                    width=at(step.width, page),
                    height=at(step.height, page),
                    fill=step.fill,
                    border=step.border,
                    border_width=step.border_width,
                )
            )
        elif isinstance(step, Rule):
            y = cursor if step.y is None else at(step.y, page)
            ops.append(
                LineOp(
                    x1=at(step.x1, page),
                    y1=y,
                    x2=at(step.x2, page),
                    y2=y,
                    thickness=step.thickness,
                    color=step.color,
                )
            )
            cursor -= step.advance
        elif isinstance(step, Text):
            drawn, cursor = _draw_text(step, cursor, request, page, fonts)
            ops.extend(drawn)
    return ops, cursor


def body_region(tpl: TemplateRecipe, page: Page, fonts: FontSet, min_y: float) -> FlowRegion:
    body = tpl.body
    return FlowRegion(
        margin_x=at(body.margin_x, page),
        usable_width=at(body.width, page),
        font=fonts.get(body.font),
        size=body.size,
        line_height=body.line_height,
        min_y=min_y,
        page_width=page.width,
        centered=body.centered,
    )


def _footer(signed: bool, page: Page, fonts: FontSet) -> TextOp:
    text = config.FOOTER_SIGNED_TEXT if signed else config.FOOTER_TEXT
    x = (page.width - width(fonts.italic, config.FOOTER_SIZE, text)) / 2
    return TextOp(x=x, y=config.FOOTER_Y, text=text, font=fonts.italic, size=config.FOOTER_SIZE, color=config.FOOTER_COLOR)


def render(
    request: RenderRequest,
    fetch: Optional[ImageFetcher] = fetch_image,
    fonts: Optional[FontSet] = None,
    page: Optional[Page] = None,
) -> RenderResult:
    """
    Lay out one single-page document.

    Order is fixed: recipe steps (furniture and meta fields), body flow,
    trailing recipe steps, signature block, footer. Only font embedding can
    fail (RenderFailure); everything else degrades.
    """
    tpl = recipe(request.template_id)
    page = page or default_page()
    fonts = fonts or load_fonts()
    signed = request.signature is not None

    logger.info("Rendering %s with template %s (requested %r)", request.doc_id, tpl.key, request.template_id)

    min_y = content_floor(signed, page)
    ops, cursor = run_steps(tpl.steps, at(tpl.start, page), request, page, fonts)

    body_ops, cursor = flow(request.body, cursor, body_region(tpl, page, fonts, min_y))
    ops.extend(body_ops)

    after_ops, cursor = run_steps(tpl.after, cursor, request, page, fonts)
    ops.extend(after_ops)

    if request.signature is not None:
        ops.extend(compose_signature(request.signature, tpl.signature_anchor, page, fonts, fetch=fetch))

    ops.append(_footer(signed, page, fonts))
    return RenderResult(ops=ops, file_name=suggested_file_name(request.title, request.doc_id))
