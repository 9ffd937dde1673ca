from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .. import config
from ..models import RenderFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FontSet:
    regular: str = "Helvetica"
    bold: str = "Helvetica-Bold"
    italic: str = "Helvetica-Oblique"

    def get(self, role: str) -> str:
        if role == "bold":
            return self.bold
        if role == "italic":
            return self.italic
        return self.regular


def width(font: str, size: float, text: str) -> float:
    # measure with the exact (font, size) later used for drawString
    return float(pdfmetrics.stringWidth(text or "", font, size))


def embed(family: str) -> str:
    """
    Resolve a font family to a registered ReportLab font name.

    Standard PDF fonts are returned as-is. A path to a .ttf file is registered
    under its file stem. Anything that cannot be resolved raises RenderFailure.
    """
    name = (family or "").strip()
    if not name:
        raise RenderFailure("font_embed", "Empty font family")

    if name in pdfmetrics.standardFonts:
        return name

    path = Path(name)
    if path.suffix.lower() == ".ttf":
        if not path.exists():
            raise RenderFailure("font_embed", f"Font file not found: {path}")
        try:
            pdfmetrics.registerFont(TTFont(path.stem, str(path)))
        except Exception as exc:
            raise RenderFailure("font_embed", f"Could not embed {path}: {exc}") from exc
        logger.info("Registered TTF font %s from %s", path.stem, path)
        return path.stem

    try:
        pdfmetrics.getFont(name)
    except Exception as exc:
        raise RenderFailure("font_embed", f"Unknown font: {name}") from exc
    return name


def load_fonts(families: Optional[Dict[str, str]] = None) -> FontSet:
    fam = families or config.FONT_FAMILIES
    return FontSet(
        regular=embed(fam.get("regular", "Helvetica")),
        bold=embed(fam.get("bold", "Helvetica-Bold")),
        italic=embed(fam.get("italic", "Helvetica-Oblique")),
    )
