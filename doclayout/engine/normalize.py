from __future__ import annotations

import re
from typing import List, Pattern, Tuple


BULLET = "•"

# applied in order, each over the whole string
_SUBSTITUTIONS: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"\*\*([^*]+)\*\*"), r"\1"),
    (re.compile(r"\*([^*]+)\*"), r"\1"),
    (re.compile(r"__([^_]+)__"), r"\1"),
    (re.compile(r"_([^_]+)_"), r"\1"),
    (re.compile(r"^#+\s*", re.MULTILINE), ""),
    (re.compile(r"^[-*]\s+", re.MULTILINE), BULLET + " "),
]


def normalize(text: str) -> str:
    """
    Strip the small markdown dialect the generator emits (emphasis, headings,
    bullets) down to plain text. Numbered list lines ("1. ...") are left alone.
    """
    out = text or ""
    for pattern, repl in _SUBSTITUTIONS:
        out = pattern.sub(repl, out)
    return out
