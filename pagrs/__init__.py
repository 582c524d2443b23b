"""Page rotation for small monochrome displays: pages, a rotator and an in-memory frame buffer."""

__version__ = "0.1.0"
__all__ = ["align", "bmp", "display", "matrix", "page", "rotation", "screensaver", "splash", "text"]