"""Monochrome display model: colours, rectangles and an in-memory frame buffer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DisplayError(Exception):
    """Raised when the display cannot be driven."""


class BinaryColor(Enum):
    """Colour of a single pixel on a monochrome display."""

    OFF = 0
    ON = 1

    def __bool__(self) -> bool:
        return self is BinaryColor.ON


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle given by its top-left corner and its size."""

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"rectangle size must not be negative: {self.width}x{self.height}"
            )

    @property
    def right(self) -> int:
        """First column to the right of the rectangle."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """First row below the rectangle."""
        return self.y + self.height

    @property
    def center(self) -> tuple[int, int]:
        """Centre point, rounded towards the top-left corner."""
        return (
            self.x + max(self.width - 1, 0) // 2,
            self.y + max(self.height - 1, 0) // 2,
        )

    def contains(self, x: int, y: int) -> bool:
        """Whether the point lies inside the rectangle."""
        return self.x <= x < self.right and self.y <= y < self.bottom

    def intersection(self, other: Rectangle) -> Rectangle:
        """The overlapping part of both rectangles; empty if they do not overlap."""
        left = max(self.x, other.x)
        top = max(self.y, other.y)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right <= left or bottom <= top:
            return Rectangle(left, top, 0, 0)
        return Rectangle(left, top, right - left, bottom - top)


class FrameBuffer:
    """A buffered monochrome display.

    Drawing happens in memory; :meth:`flush` publishes the buffer as the
    visible frame. Drawing outside the display area is clipped silently.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"display size must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self.initialized = False
        self.flush_count = 0
        self.last_frame: bytes | None = None
        self._buffer = bytearray(width * height)

    def bounding_box(self) -> Rectangle:
        """The whole drawable area of the display."""
        return Rectangle(0, 0, self.width, self.height)

    def set_pixel(self, x: int, y: int, color: BinaryColor) -> None:
        """Set one pixel; points outside the display are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._buffer[y * self.width + x] = BinaryColor(color).value

    def get_pixel(self, x: int, y: int) -> BinaryColor:
        """Read one pixel from the buffer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the display")
        return BinaryColor(self._buffer[y * self.width + x])

    def fill_solid(self, area: Rectangle, color: BinaryColor) -> None:
        """Fill a rectangle with one colour, clipped to the display."""
        clipped = area.intersection(self.bounding_box())
        value = BinaryColor(color).value
        row = bytes([value]) * clipped.width
        for y in range(clipped.y, clipped.bottom):
            start = y * self.width + clipped.x
            self._buffer[start:start + clipped.width] = row

    def clear_buffer(self) -> None:
        """Turn every pixel in the buffer off."""
        self._buffer[:] = bytes(len(self._buffer))

    async def init(self) -> None:
        """Prepare the display for use."""
        self.initialized = True

    async def flush(self) -> None:
        """Publish the buffer as the visible frame."""
        if not self.initialized:
            raise DisplayError("display has not been initialised")
        self.last_frame = bytes(self._buffer)
        self.flush_count += 1