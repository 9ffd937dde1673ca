from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from .. import config
from ..models import RGB, DrawOp, TextOp
from .measure import width
from .normalize import normalize
from .wrap import wrap

logger = logging.getLogger(__name__)

PARAGRAPH_GAP = 0.3

_PARAGRAPH_SPLIT = re.compile(r"\n\n+")


@dataclass(frozen=True)
class FlowRegion:
    margin_x: float
    usable_width: float
    font: str
    size: float
    line_height: float
    min_y: float
    page_width: float
    centered: bool = False
    color: RGB = config.BODY_COLOR


def flow(body: str, start_y: float, region: FlowRegion) -> Tuple[List[DrawOp], float]:
    """
    Lay out body paragraphs top-down from start_y.

    Once the cursor drops below region.min_y the remaining lines and
    paragraphs are dropped without error. Returns the ops and the final y.
    """
    ops: List[DrawOp] = []
    y = float(start_y)
    paragraphs = _PARAGRAPH_SPLIT.split(body or "")

    for index, para in enumerate(paragraphs):
        if y < region.min_y:
            logger.debug("Body truncated at y=%.1f, %d paragraph(s) dropped", y, len(paragraphs) - index)
            break

        clean = normalize(para).strip()
        if not clean:
            continue

        # second pass: nested emphasis like "**a*b**" only resolves after two rounds
        for line in wrap(normalize(clean), region.usable_width, region.font, region.size):
            if y < region.min_y:
                logger.debug("Body truncated mid-paragraph at y=%.1f", y)
                break

            x = region.margin_x
            if region.centered:
                x = (region.page_width - width(region.font, region.size, line)) / 2

            ops.append(TextOp(x=x, y=y, text=line, font=region.font, size=region.size, color=region.color))
            y -= region.line_height

        y -= region.line_height * PARAGRAPH_GAP

    return ops, y
