from __future__ import annotations

from typing import List

from .measure import width


def wrap(text: str, max_width: float, font: str, size: float) -> List[str]:
    """
    Greedy word wrap. A word wider than max_width still gets its own line;
    there is no hyphenation or character splitting.
    """
    words = (text or "").split()
    lines: List[str] = []
    current = ""

    for word in words:
        candidate = f"{current} {word}" if current else word
        if current and width(font, size, candidate) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate

    if current:
        lines.append(current)
    return lines
