"""Monospaced bitmap fonts and pages that show text."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from .display import BinaryColor, FrameBuffer
from .page import DEFAULT_FRAMES_PER_SECOND, Page

Glyph = tuple[tuple[bool, ...], ...]

_MAX_FRAMES_PER_SECOND = 255


@dataclass(frozen=True)
class MonoFont:
    """A monospaced bitmap font.

    Each glyph is a sequence of ``height`` strings of ``width`` characters, in
    which ``#`` marks a lit pixel. ``baseline`` is the row of the baseline,
    counted from the top of the glyph cell.
    """

    width: int
    height: int
    baseline: int
    glyphs: Mapping[str, Sequence[str]] = field(hash=False)
    character_spacing: int = 0
    replacement: str = "?"

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"glyph size must be positive: {self.width}x{self.height}")
        if not 0 <= self.baseline < self.height:
            raise ValueError(f"baseline {self.baseline} is outside the glyph cell")
        if self.character_spacing < 0:
            raise ValueError("character spacing must not be negative")
        normalized: dict[str, Glyph] = {}
        for char, rows in self.glyphs.items():
            if len(char) != 1:
                raise ValueError(f"glyph key must be a single character: {char!r}")
            rows = tuple(rows)
            if len(rows) != self.height or any(len(row) != self.width for row in rows):
                raise ValueError(f"glyph {char!r} does not match the font size")
            normalized[char] = tuple(tuple(cell == "#" for cell in row) for row in rows)
        object.__setattr__(self, "glyphs", MappingProxyType(normalized))

    def glyph(self, char: str) -> Glyph:
        """Pixels of a character; unknown characters use the replacement glyph."""
        if char in self.glyphs:
            return self.glyphs[char]
        if char != " " and self.replacement in self.glyphs:
            return self.glyphs[self.replacement]
        return tuple((False,) * self.width for _ in range(self.height))


def draw_text(
    display: FrameBuffer, text: str, font: MonoFont, x: int, y: int
) -> tuple[int, int]:
    """Draw text with its first baseline starting at ``(x, y)``.

    Only lit glyph pixels are drawn; a newline starts a new line one glyph
    height lower. Returns the position where following text would continue.
    """
    line_start = x
    top = y - font.baseline
    for char in text:
        if char == "\n":
            x = line_start
            top += font.height
            continue
        for row_offset, row in enumerate(font.glyph(char)):
            for column_offset, lit in enumerate(row):
                if lit:
                    display.set_pixel(x + column_offset, top + row_offset, BinaryColor.ON)
        x += font.width + font.character_spacing
    return x, top + font.baseline


class StaticText(Page):
    """A page showing a fixed text in the top-left corner."""

    def __init__(self, text: str, font: MonoFont) -> None:
        self.text = text
        self.font = font
        self.position = (0, font.height)

    def render(self, display: FrameBuffer) -> None:
        draw_text(display, self.text, self.font, *self.position)

    def frames_per_second(self) -> int:
        return 1


class DynamicText(Page):
    """A page showing text fetched anew for every frame."""

    def __init__(
        self,
        query_text: Callable[[], str],
        font: MonoFont,
        max_length: int = 64,
        fps: int = DEFAULT_FRAMES_PER_SECOND,
    ) -> None:
        if max_length < 0:
            raise ValueError(f"maximum length must not be negative: {max_length}")
        if not 0 <= fps <= _MAX_FRAMES_PER_SECOND:
            raise ValueError(f"frame rate must be between 0 and 255: {fps}")
        self.query_text = query_text
        self.font = font
        self.max_length = max_length
        self.fps = fps

    def render(self, display: FrameBuffer) -> None:
        text = self.query_text()
        if len(text.encode("utf-8")) > self.max_length:
            raise ValueError(
                f"text is longer than {self.max_length} bytes: {text!r}"
            )
        draw_text(display, text, self.font, 0, self.font.height)

    def frames_per_second(self) -> int:
        return self.fps