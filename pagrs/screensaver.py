"""A page that moves an image from side to side across the display."""

from __future__ import annotations

from .bmp import Bitmap
from .display import FrameBuffer
from .page import Page

_TURNING_POINT = 64


class Screensaver(Page):
    """Shows an image sliding right, then left, bouncing between columns 0 and 64."""

    def __init__(self, data: bytes) -> None:
        self.bitmap = Bitmap.from_bytes(data)
        self._index = 0
        self._left_to_right = True

    @property
    def position(self) -> int:
        """Column at which the image is drawn on the next frame."""
        return self._index

    @property
    def moving_right(self) -> bool:
        """Whether the image currently moves to the right."""
        return self._left_to_right

    def render(self, display: FrameBuffer) -> None:
        self.bitmap.draw(display, self._index, 0)

        if self._index == 0:
            self._left_to_right = True
            self._index = 1
        elif self._index == _TURNING_POINT:
            self._left_to_right = False
            self._index = _TURNING_POINT - 1
        elif self._left_to_right:
            self._index += 1
        else:
            self._index -= 1