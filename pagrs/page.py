"""The page interface that the rotator cycles through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .display import FrameBuffer

DEFAULT_FRAMES_PER_SECOND = 24
"""Frame rate used when a page does not choose its own."""


class Page(ABC):
    """A page that can be rotated onto the display.

    Each time the page is rotated in, :meth:`activated` is called; while it is
    visible, :meth:`render` is called once per frame; when it is rotated out,
    :meth:`deactivated` is called.
    """

    def activated(self) -> None:
        """Called when the page is rotated in."""

    @abstractmethod
    def render(self, display: FrameBuffer) -> None:
        """Draw the page's content onto the display."""

    def deactivated(self) -> None:
        """Called when the page is rotated out."""

    def frames_per_second(self) -> int:
        """How often per second :meth:`render` is called."""
        return DEFAULT_FRAMES_PER_SECOND