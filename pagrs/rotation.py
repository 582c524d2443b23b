"""Rotating through registered pages on one display."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import NoReturn

from .display import FrameBuffer
from .page import DEFAULT_FRAMES_PER_SECOND, Page
from .splash import SPLASH_DURATION, show_splash

DEFAULT_PAGE_DURATION = 5.0
"""Seconds a page stays visible when it has no duration of its own."""

_ITERATION_MODULUS = 255


class _ControlCode(Enum):
    NOTHING = 0
    NEXT = 1
    PREVIOUS = 2


class _Ticker:
    """Wakes at a fixed period, measured from when it was created."""

    def __init__(self, period: float) -> None:
        self._loop = asyncio.get_running_loop()
        self._period = period
        self._deadline = self._loop.time() + period

    async def next(self) -> None:
        await asyncio.sleep(max(self._deadline - self._loop.time(), 0.0))
        self._deadline += self._period


@dataclass
class PageEntry:
    """A registered page together with its optional custom duration in seconds."""

    page: Page
    duration: float | None = None

    async def take_over(self, display: FrameBuffer, cancel: Callable[[], bool]) -> None:
        """Drive the display with this page until ``cancel`` returns true after a frame."""
        fps = self.page.frames_per_second()
        if fps <= 0:
            fps = DEFAULT_FRAMES_PER_SECOND
        ticker = _Ticker((1000 // fps) / 1000)

        self.page.activated()
        while True:
            display.clear_buffer()
            self.page.render(display)
            await display.flush()
            if cancel():
                break
            await ticker.next()
        self.page.deactivated()


@dataclass
class _RotationState:
    cancel_page: bool = False
    iteration: int = 0
    control: _ControlCode = _ControlCode.NOTHING
    channel: asyncio.Queue = field(default_factory=lambda: asyncio.Queue(maxsize=1))


class PageController:
    """Steers a running :class:`PageRotator` to another page."""

    def __init__(self, state: _RotationState) -> None:
        self._state = state

    async def next(self) -> None:
        """Switch to the next page now."""
        await self._send(_ControlCode.NEXT)

    async def previous(self) -> None:
        """Switch to the previous page now."""
        await self._send(_ControlCode.PREVIOUS)

    async def _send(self, code: _ControlCode) -> None:
        self._state.control = code
        await self._state.channel.put(0)


class PageRotator:
    """Owns the display and cycles through the registered pages."""

    def __init__(self, display: FrameBuffer, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"capacity must not be negative: {capacity}")
        self._display = display
        self._capacity = capacity
        self._pages: list[PageEntry] = []
        self._state = _RotationState()
        self.splash_delay = SPLASH_DURATION

    @property
    def pages(self) -> tuple[PageEntry, ...]:
        """The registered pages in rotation order."""
        return tuple(self._pages)

    async def init(self) -> None:
        """Initialise the display and show the start-up logo."""
        await self._display.init()
        await show_splash(self._display, self.splash_delay)

    def add_page(self, page: Page, duration: float | None = None) -> None:
        """Register a page, optionally with its own duration in seconds."""
        if len(self._pages) >= self._capacity:
            raise OverflowError(f"rotator already holds {self._capacity} pages")
        if duration is not None and duration < 0:
            raise ValueError(f"duration must not be negative: {duration}")
        self._pages.append(PageEntry(page, duration))

    def controller(self) -> PageController:
        """A controller that steers this rotator while it runs."""
        return PageController(self._state)

    async def rotate(self) -> NoReturn:
        """Cycle through the pages forever; errors from pages or display propagate."""
        if not self._pages:
            raise ValueError("no pages registered")
        pages = tuple(self._pages)
        count = len(pages)
        state = self._state
        index = 0
        counter: asyncio.Task | None = None

        try:
            while True:
                state.iteration = (state.iteration + 1) % _ITERATION_MODULUS
                state.cancel_page = False

                control, state.control = state.control, _ControlCode.NOTHING
                if control is _ControlCode.PREVIOUS:
                    index = (index + count - 2) % count

                entry = pages[index]
                index = (index + 1) % count

                duration = (
                    entry.duration if entry.duration is not None else DEFAULT_PAGE_DURATION
                )
                counter = asyncio.create_task(
                    self._count_down(duration, state.iteration)
                )
                await entry.take_over(self._display, lambda: state.cancel_page)
        finally:
            if counter is not None:
                counter.cancel()

    async def _count_down(self, duration: float, iteration: int) -> None:
        state = self._state
        try:
            await asyncio.wait_for(state.channel.get(), timeout=duration)
        except asyncio.TimeoutError:
            pass
        if state.iteration == iteration:
            state.cancel_page = True