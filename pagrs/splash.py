"""The short start-up logo shown before page rotation begins."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence

from .align import HorizontalAlignment, VerticalAlignment, align
from .display import BinaryColor, FrameBuffer, Rectangle

SPLASH_DURATION = 0.5
"""Seconds the logo stays on the display."""

_SPACING = 1

_BRACKET_LEFT = ((2, 0), (0, 0), (0, 15), (2, 15))
_BRACKET_RIGHT = ((0, 0), (2, 0), (2, 15), (0, 15))

_BOX_SIZE = 18
_BOX_STROKE = 3
# A centred stroke lies half outside the outline (rounded down), the rest inside.
_BOX_OUTSET = _BOX_STROKE // 2


def _draw_line(
    display: FrameBuffer, start: tuple[int, int], end: tuple[int, int]
) -> None:
    x0, y0 = start
    x1, y1 = end
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    step_x = 1 if x0 < x1 else -1
    step_y = 1 if y0 < y1 else -1
    error = dx + dy
    while True:
        display.set_pixel(x0, y0, BinaryColor.ON)
        if (x0, y0) == (x1, y1):
            return
        doubled = 2 * error
        if doubled >= dy:
            error += dy
            x0 += step_x
        if doubled <= dx:
            error += dx
            y0 += step_y


def _polyline_size(points: Sequence[tuple[int, int]]) -> tuple[int, int]:
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    return max(xs) - min(xs) + 1, max(ys) - min(ys) + 1


def _polyline_drawer(
    points: Sequence[tuple[int, int]],
) -> Callable[[FrameBuffer, int, int], None]:
    min_x = min(x for x, _ in points)
    min_y = min(y for _, y in points)

    def draw(display: FrameBuffer, left: int, top: int) -> None:
        shifted = [(left + x - min_x, top + y - min_y) for x, y in points]
        for start, end in zip(shifted, shifted[1:]):
            _draw_line(display, start, end)

    return draw


def _draw_box(display: FrameBuffer, left: int, top: int) -> None:
    outer = _BOX_SIZE + 2 * _BOX_OUTSET
    band = _BOX_STROKE
    for area in (
        Rectangle(left, top, outer, band),
        Rectangle(left, top + outer - band, outer, band),
        Rectangle(left, top, band, outer),
        Rectangle(left + outer - band, top, band, outer),
    ):
        display.fill_solid(area, BinaryColor.ON)


def _elements() -> list[tuple[int, int, Callable[[FrameBuffer, int, int], None]]]:
    box_outer = _BOX_SIZE + 2 * _BOX_OUTSET
    left = (*_polyline_size(_BRACKET_LEFT), _polyline_drawer(_BRACKET_LEFT))
    right = (*_polyline_size(_BRACKET_RIGHT), _polyline_drawer(_BRACKET_RIGHT))
    box = (box_outer, box_outer, _draw_box)
    return [left, left, box, right, right]


def draw_splash(display: FrameBuffer) -> None:
    """Draw the logo centred on the display's buffer."""
    elements = _elements()
    total_width = sum(width for width, _, _ in elements) + _SPACING * (len(elements) - 1)
    total_height = max(height for _, height, _ in elements)
    layout = Rectangle(0, 0, total_width, total_height)

    origin_x, origin_y = align(
        total_width,
        total_height,
        display.bounding_box(),
        HorizontalAlignment.CENTER,
        VerticalAlignment.CENTER,
    )

    x = origin_x
    for width, height, draw in elements:
        _, offset_y = align(
            width, height, layout, HorizontalAlignment.LEFT, VerticalAlignment.CENTER
        )
        draw(display, x, origin_y + offset_y)
        x += width + _SPACING


async def show_splash(display: FrameBuffer, delay: float = SPLASH_DURATION) -> None:
    """Blank the display, show the logo and keep it visible for ``delay`` seconds."""
    display.clear_buffer()
    await display.flush()
    draw_splash(display)
    await display.flush()
    await asyncio.sleep(delay)