from __future__ import annotations

import pytest

from doclayout.engine.measure import width
from doclayout.engine.wrap import wrap

FONT = "Helvetica"
SIZE = 11.0

SAMPLES = [
    "The quick brown fox jumps over the lazy dog and keeps running into the distance.",
    "Short",
    "Pneumonoultramicroscopicsilicovolcanoconiosis is a long word in a sentence.",
    "  leading and   irregular    whitespace\tis collapsed  ",
]


def test_empty_input_yields_no_lines() -> None:
    assert wrap("", 100, FONT, SIZE) == []
    assert wrap("   \n\t ", 100, FONT, SIZE) == []


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize("budget", [30.0, 80.0, 150.0, 400.0])
def test_lines_fit_budget_and_keep_every_word(text: str, budget: float) -> None:
    lines = wrap(text, budget, FONT, SIZE)

    for line in lines:
        if width(FONT, SIZE, line) > budget:
            # only an unbreakable single word may overflow
            assert len(line.split()) == 1

    assert " ".join(lines).split() == text.split()


def test_oversized_word_gets_its_own_line() -> None:
    lines = wrap("Supercalifragilistic short", 20, FONT, SIZE)
    assert lines == ["Supercalifragilistic", "short"]


def test_exact_fit_is_not_wrapped() -> None:
    text = "exactly this wide"
    assert wrap(text, width(FONT, SIZE, text), FONT, SIZE) == [text]


def test_measurement_uses_the_given_font_and_size() -> None:
    text = "WWWW WWWW"
    budget = width("Helvetica", 10, text) + 1
    assert wrap(text, budget, "Helvetica", 10) == [text]
    # same budget is too narrow for the bold face at a larger size
    assert wrap(text, budget, "Helvetica-Bold", 14) == ["WWWW", "WWWW"]
