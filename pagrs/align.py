"""Placing an object of a given size inside a reference area."""

from __future__ import annotations

from enum import Enum

from .display import Rectangle


class HorizontalAlignment(Enum):
    """Horizontal placement: on the left, centred or on the right."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(Enum):
    """Vertical placement: at the top, centred or at the bottom."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


def _centered(start: int, length: int, size: int) -> int:
    return start + max(length - 1, 0) // 2 - max(size - 1, 0) // 2


def align(
    width: int,
    height: int,
    area: Rectangle,
    horizontal: HorizontalAlignment,
    vertical: VerticalAlignment,
) -> tuple[int, int]:
    """Top-left position of a ``width`` x ``height`` object aligned inside ``area``."""
    if width < 0 or height < 0:
        raise ValueError(f"object size must not be negative: {width}x{height}")

    horizontal = HorizontalAlignment(horizontal)
    vertical = VerticalAlignment(vertical)

    if horizontal is HorizontalAlignment.LEFT:
        x = area.x
    elif horizontal is HorizontalAlignment.RIGHT:
        x = area.right - width
    else:
        x = _centered(area.x, area.width, width)

    if vertical is VerticalAlignment.TOP:
        y = area.y
    elif vertical is VerticalAlignment.BOTTOM:
        y = area.bottom - height
    else:
        y = _centered(area.y, area.height, height)

    return x, y