from __future__ import annotations

import io
import logging
from typing import List, Optional

from reportlab.lib.utils import ImageReader

from ..models import RGB, DrawOp, ImageOp, LineOp, SignatureDescriptor, SignatureKind, TextOp
from .dates import short_date
from .fetch import ImageFetcher
from .measure import FontSet, width
from .recipes import Page

logger = logging.getLogger(__name__)

BLOCK_WIDTH = 180.0
BLOCK_HEIGHT = 75.0
BLOCK_BOTTOM = 45.0

IMAGE_MAX_WIDTH = BLOCK_WIDTH - 20
IMAGE_MAX_HEIGHT = 28.0

MARK_SIZE = 18.0
NAME_SIZE = 9.0
ROLE_SIZE = 8.0
DATE_SIZE = 7.0

MARK_COLOR: RGB = (0.15, 0.15, 0.25)
RULE_COLOR: RGB = (0.4, 0.4, 0.45)
NAME_COLOR: RGB = (0.2, 0.2, 0.25)
ROLE_COLOR: RGB = (0.45, 0.45, 0.5)
DATE_COLOR: RGB = (0.5, 0.5, 0.55)


def block_x(anchor: str, page: Page) -> float:
    if anchor == "left":
        return page.margin
    if anchor == "center":
        return (page.width - BLOCK_WIDTH) / 2
    return page.width - page.margin - BLOCK_WIDTH


def _signature_image(descriptor: SignatureDescriptor, fetch: Optional[ImageFetcher]) -> Optional[bytes]:
    if descriptor.image_bytes:
        return descriptor.image_bytes
    if not descriptor.image_url or fetch is None:
        return None
    try:
        return fetch(descriptor.image_url)
    except Exception:
        logger.warning("Signature image fetch failed for %s", descriptor.image_url, exc_info=True)
        return None


def _decode_size(data: bytes) -> Optional[tuple]:
    try:
        return ImageReader(io.BytesIO(data)).getSize()
    except Exception:
        logger.warning("Could not decode signature image (%d bytes)", len(data))
        return None


def _centered(text: str, font: str, size: float, x0: float, y: float, color: RGB) -> TextOp:
    x = x0 + (BLOCK_WIDTH - width(font, size, text)) / 2
    return TextOp(x=x, y=y, text=text, font=font, size=size, color=color)


def compose_signature(
    descriptor: SignatureDescriptor,
    anchor: str,
    page: Page,
    fonts: FontSet,
    fetch: Optional[ImageFetcher] = None,
) -> List[DrawOp]:
    """
    Fixed-size signature block anchored to the page bottom: mark (image or
    typed name), rule, name, optional role, date. A missing or broken image
    only drops the mark.
    """
    ops: List[DrawOp] = []
    x0 = block_x(anchor, page)
    y = BLOCK_BOTTOM + BLOCK_HEIGHT - 10

    if descriptor.has_image:
        data = _signature_image(descriptor, fetch)
        size = _decode_size(data) if data else None
        if size:
            iw, ih = float(size[0]), float(size[1])
            if iw > 0 and ih > 0:
                scale = min(IMAGE_MAX_WIDTH / iw, IMAGE_MAX_HEIGHT / ih)
                sw, sh = iw * scale, ih * scale
                ops.append(ImageOp(x=x0 + (BLOCK_WIDTH - sw) / 2, y=y - sh, width=sw, height=sh, data=data))
                y -= sh + 2
    elif descriptor.kind == SignatureKind.TYPED:
        ops.append(_centered(descriptor.signer_name, fonts.italic, MARK_SIZE, x0, y - 15, MARK_COLOR))
        y -= 22

    ops.append(LineOp(x1=x0, y1=y, x2=x0 + BLOCK_WIDTH, y2=y, thickness=0.75, color=RULE_COLOR))
    y -= 12

    ops.append(_centered(descriptor.signer_name, fonts.bold, NAME_SIZE, x0, y, NAME_COLOR))
    y -= 10

    if descriptor.signer_role:
        ops.append(_centered(descriptor.signer_role, fonts.italic, ROLE_SIZE, x0, y, ROLE_COLOR))
        y -= 10

    ops.append(_centered(short_date(descriptor.signed_at), fonts.regular, DATE_SIZE, x0, y, DATE_COLOR))
    return ops
