# pagrs

Page rotation for small monochrome displays, such as 128x64 OLED panels.

You create a set of *pages* and register them with a `PageRotator`. The rotator
first shows a short splash logo. It then cycles through the pages and gives each
one the display for a fixed time. The default is five seconds, and you can set
another duration for each page. While a page is active, the rotator clears the
buffer, renders the page and flushes the display at the frame rate that the page
asks for.

The package uses only the standard library. To run the tests, install the
`test` extra (`pytest`, `pytest-asyncio`) and run `pytest`.

## Modules

| Module | Contents |
|--------|----------|
| `pagrs.display` | `BinaryColor`, `Rectangle`, `DisplayError` and `FrameBuffer`, an in-memory monochrome display |
| `pagrs.page` | The `Page` base class and `DEFAULT_FRAMES_PER_SECOND` (24) |
| `pagrs.align` | `HorizontalAlignment`, `VerticalAlignment` and `align()` |
| `pagrs.splash` | `draw_splash()` and `show_splash()`, the start-up logo |
| `pagrs.rotation` | `PageRotator`, `PageController` and `PageEntry` |
| `pagrs.bmp` | `Bitmap`, a BMP decoder, `BmpError`, and the `StaticImage` page |
| `pagrs.screensaver` | The `Screensaver` page |
| `pagrs.text` | `MonoFont`, `draw_text()`, and the `StaticText` and `DynamicText` pages |
| `pagrs.matrix` | The `DigitalRain` page |

## Pages

A page subclasses `pagrs.page.Page` and implements `render(display)`. These
hooks are optional:

- `activated()` runs each time the page is rotated in.
- `deactivated()` runs each time the page is rotated out.
- `frames_per_second()` gives how often `render` is called. The default is 24.
  A value of 0 or less falls back to 24.

The package provides these pages:

| Page | What it shows |
|------|---------------|
| `StaticText(text, font)` | A fixed text in the top-left corner, at 1 fps |
| `DynamicText(query_text, font, max_length=64, fps=24)` | The string that `query_text()` returns, fetched again on every frame. The text raises `ValueError` if its UTF-8 encoding is longer than `max_length` bytes |
| `StaticImage(data, horizontal=CENTER, vertical=CENTER)` | A BMP image aligned within the display, at 1 fps |
| `Screensaver(data)` | A BMP image that moves one column per frame, back and forth between columns 0 and 64 |
| `DigitalRain(seed, columns=16, rows=7, worker_count=16)` | Glyphs made of two columns of three dots each. They appear down the columns and are then erased, at 8 fps |

`DigitalRain` requires at least 6 rows, at least 6 workers, and no more workers
than columns. `activated()` resets the grid.

## Images

`Bitmap.from_bytes(data)` decodes BMP images with 1, 4, 8, 16, 24 or 32 bits
per pixel. The pixel data must be uncompressed or use bit fields. Both
bottom-up and top-down images are supported. Each pixel is reduced to on or off
by its brightness: it is on when the brightness is 128 or more. Data that cannot
be decoded raises `BmpError`, which is a subclass of `ValueError`.

## Fonts

The package does not include a font. A `MonoFont` has a cell size and a
baseline row, and maps each character to rows of text in which `#` marks a lit
pixel. A character that is not in the font is drawn with the `replacement`
glyph, which defaults to `?`. A space is blank. In `draw_text`, a newline starts
a new line one glyph height lower.

## Example

```python
import asyncio

from pagrs.align import HorizontalAlignment, VerticalAlignment
from pagrs.bmp import StaticImage
from pagrs.display import FrameBuffer
from pagrs.matrix import DigitalRain
from pagrs.rotation import PageRotator
from pagrs.text import DynamicText, MonoFont, StaticText

font = MonoFont(
    width=3,
    height=5,
    baseline=4,
    character_spacing=1,
    glyphs={
        "H": ["#.#", "#.#", "###", "#.#", "#.#"],
        "I": ["###", ".#.", ".#.", ".#.", "###"],
        "?": ["##.", "..#", ".#.", "...", ".#."],
    },
)


async def main():
    display = FrameBuffer(128, 64)

    rotator = PageRotator(display, capacity=4)
    await rotator.init()

    rotator.add_page(StaticText("HI", font))
    rotator.add_page(DynamicText(lambda: "HI\nHI", font, max_length=32, fps=1))
    with open("four_rings.bmp", "rb") as fh:
        rotator.add_page(
            StaticImage(fh.read(), HorizontalAlignment.RIGHT, VerticalAlignment.BOTTOM),
            duration=1.0,
        )
    rotator.add_page(DigitalRain(0xDA7A), duration=10.0)

    controller = rotator.controller()
    task = asyncio.create_task(rotator.rotate())
    await asyncio.sleep(8)
    await controller.previous()
    await task


asyncio.run(main())
```

## Rotator and control

- `PageRotator(display, capacity)` can hold up to `capacity` pages. When the
  rotator is full, `add_page(page, duration=None)` raises `OverflowError`. A
  negative duration raises `ValueError`.
- `await rotator.init()` initialises the display and shows the splash logo for
  `rotator.splash_delay` seconds, which defaults to 0.5.
- `await rotator.rotate()` runs until it is cancelled. It raises `ValueError`
  if no pages are registered. Errors raised by pages or by the display
  propagate out of it.
- `rotator.controller()` returns a `PageController`.
  - `await controller.next()` ends the current page after its current frame and
    moves on to the next page.
  - `await controller.previous()` does the same but moves back to the previous
    page.

## The display

`FrameBuffer(width, height)` keeps the frame in memory. Drawing outside the
display is clipped. `flush()` copies the buffer into `last_frame` and increments
`flush_count`. It raises `DisplayError` until `init()` has been called.

## What it does not do

The package contains no hardware driver and no command-line program. To show
frames on a real panel, subclass `FrameBuffer` and override `init()` and
`flush()` so that they talk to your device. You then start the rotator from your
own asyncio program.