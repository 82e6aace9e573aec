"""Text layout for the 128x64 status display."""

from __future__ import annotations

from dataclasses import dataclass

SCREEN_WIDTH = 128
SCREEN_HEIGHT = 64
SCREEN_ADDRESS = 0x3C
CHAR_WIDTH = 6
LINE_HEIGHT = 8


@dataclass(frozen=True)
class TextLine:
    """A line of text and the pixel position where it is drawn."""

    x: int
    y: int
    text: str


def _half(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    return -(-value // 2) if value < 0 else value // 2


def split_words(text: str) -> list[str]:
    """Words of ``text`` separated by spaces, without empty words."""
    return [word for word in text.split(" ") if word]


def wrap_words(text: str) -> list[str]:
    """Greedy word wrap to the screen width; every word keeps a trailing space."""
    lines = []
    current = ""
    for word in split_words(text):
        if (len(current) + len(word)) * CHAR_WIDTH > SCREEN_WIDTH:
            lines.append(current)
            current = word + " "
        else:
            current += word + " "
    if current:
        lines.append(current)
    return lines


def layout_wrapped(text: str, y: int) -> list[TextLine]:
    """Wrapped lines, each centred horizontally, stacked down from ``y``."""
    return [
        TextLine(
            x=_half(SCREEN_WIDTH - len(line) * CHAR_WIDTH),
            y=y + row * LINE_HEIGHT,
            text=line,
        )
        for row, line in enumerate(wrap_words(text))
    ]


def centered_origin(width: int, height: int) -> tuple[int, int]:
    """Top-left corner that centres a box of the given size on the screen."""
    return _half(SCREEN_WIDTH - width), _half(SCREEN_HEIGHT - height)