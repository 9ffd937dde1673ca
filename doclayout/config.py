from __future__ import annotations

from pathlib import Path
from typing import Dict, Tuple

from reportlab.lib.pagesizes import A4


BASE_DIR = Path(__file__).resolve().parents[1]
OUT_DIR = BASE_DIR / "out"

PAGE_SIZE: Tuple[float, float] = A4
MARGIN = 50.0

# content floor = MARGIN + CONTENT_FLOOR_PADDING (+ SIGNATURE_RESERVED_HEIGHT when signed)
CONTENT_FLOOR_PADDING = 50.0
SIGNATURE_RESERVED_HEIGHT = 100.0

BODY_COLOR = (0.2, 0.2, 0.3)

FOOTER_TEXT = "Generated with DocVerify"
FOOTER_SIGNED_TEXT = "Generated & Signed with DocVerify"
FOOTER_SIZE = 9.0
FOOTER_Y = 20.0
FOOTER_COLOR = (0.6, 0.62, 0.7)

# role -> standard PDF font name or path to a .ttf file
FONT_FAMILIES: Dict[str, str] = {
    "regular": "Helvetica",
    "bold": "Helvetica-Bold",
    "italic": "Helvetica-Oblique",
}

FETCH_TIMEOUT_S = 10.0


def set_out_dir(path: Path) -> None:
    global OUT_DIR
    OUT_DIR = path
