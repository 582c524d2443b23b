import pytest

from pagrs.display import BinaryColor, FrameBuffer
from pagrs.page import DEFAULT_FRAMES_PER_SECOND, Page


class _Dot(Page):
    def __init__(self):
        self.events = []

    def activated(self):
        self.events.append("activated")

    def render(self, display):
        self.events.append("render")
        display.set_pixel(0, 0, BinaryColor.ON)

    def deactivated(self):
        self.events.append("deactivated")


class _Minimal(Page):
    def render(self, display):
        display.set_pixel(1, 1, BinaryColor.ON)


class _Slow(Page):
    def render(self, display):
        pass

    def frames_per_second(self):
        return 1


def test_page_without_render_cannot_be_created():
    with pytest.raises(TypeError):
        Page()


def test_default_frame_rate():
    page = _Minimal()
    display = FrameBuffer(4, 4)
    page.render(display)
    assert Page.frames_per_second(page) == 24
    assert page.frames_per_second() == DEFAULT_FRAMES_PER_SECOND
    assert display.get_pixel(1, 1) is BinaryColor.ON


def test_frame_rate_can_be_overridden():
    page = _Slow()
    display = FrameBuffer(4, 4)
    page.render(display)
    assert page.frames_per_second() == 1
    assert display.get_pixel(1, 1) is BinaryColor.OFF


def test_default_lifecycle_hooks_do_nothing():
    page = _Minimal()
    display = FrameBuffer(4, 4)
    assert page.activated() is None
    assert page.deactivated() is None
    assert display.get_pixel(1, 1) is BinaryColor.OFF


def test_render_draws_on_display():
    page = _Minimal()
    display = FrameBuffer(4, 4)
    page.render(display)
    assert display.get_pixel(1, 1) is BinaryColor.ON


def test_lifecycle_order():
    page = _Dot()
    display = FrameBuffer(4, 4)
    page.activated()
    page.render(display)
    page.deactivated()
    assert page.events == ["activated", "render", "deactivated"]
    assert display.get_pixel(0, 0) is BinaryColor.ON