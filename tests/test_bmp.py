import struct

import pytest

from pagrs.align import HorizontalAlignment, VerticalAlignment
from pagrs.bmp import Bitmap, BmpError, StaticImage
from pagrs.display import BinaryColor, FrameBuffer

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
ON = BinaryColor.ON
OFF = BinaryColor.OFF


def _file(info, extra, body):
    offset = 14 + len(info) + len(extra)
    header = struct.pack("<2sIHHI", b"BM", offset + len(body), 0, 0, offset)
    return header + info + extra + body


def _info(width, height, depth, compression, body_size, colors=0):
    return struct.pack(
        "<IiiHHIIiiII", 40, width, height, 1, depth, compression, body_size, 2835, 2835, colors, 0
    )


def make_bmp24(rows, top_down=False):
    height = len(rows)
    width = len(rows[0])
    stride = (width * 3 + 3) // 4 * 4
    ordered = rows if top_down else list(reversed(rows))
    body = b""
    for row in ordered:
        line = b"".join(bytes((b, g, r)) for r, g, b in row)
        body += line + bytes(stride - len(line))
    info = _info(width, -height if top_down else height, 24, 0, len(body))
    return _file(info, b"", body)


def make_bmp1(width, row_bytes):
    palette = bytes((0, 0, 0, 0, 255, 255, 255, 0))
    body = b"".join(bytes((value, 0, 0, 0)) for value in reversed(row_bytes))
    info = _info(width, len(row_bytes), 1, 0, len(body), colors=2)
    return _file(info, palette, body)


def make_bmp16_565(values):
    body = struct.pack("<" + "H" * len(values), *values)
    body += bytes((-len(body)) % 4)
    info = _info(len(values), 1, 16, 3, len(body))
    masks = struct.pack("<III", 0xF800, 0x07E0, 0x001F)
    return _file(info, masks, body)


CHECKER = [[WHITE, BLACK], [BLACK, WHITE]]


def test_bottom_up_24_bit_image_is_decoded_in_order():
    bitmap = Bitmap.from_bytes(make_bmp24(CHECKER))
    assert (bitmap.width, bitmap.height) == (2, 2)
    assert bitmap.rows == ((ON, OFF), (OFF, ON))


def test_top_down_image_matches_bottom_up():
    assert Bitmap.from_bytes(make_bmp24(CHECKER, top_down=True)) == Bitmap.from_bytes(
        make_bmp24(CHECKER)
    )


def test_one_bit_image_uses_palette():
    bitmap = Bitmap.from_bytes(make_bmp1(3, [0b10100000, 0b01000000]))
    assert bitmap.rows == ((ON, OFF, ON), (OFF, ON, OFF))


def test_sixteen_bit_bitfields():
    bitmap = Bitmap.from_bytes(make_bmp16_565([0xFFFF, 0x0000, 0xFFFF]))
    assert bitmap.rows == ((ON, OFF, ON),)


def test_pixel_accessor_and_bounds():
    bitmap = Bitmap.from_bytes(make_bmp24(CHECKER))
    assert bitmap.pixel(1, 0) is OFF
    assert bitmap.pixel(1, 1) is ON
    with pytest.raises(IndexError):
        bitmap.pixel(2, 0)


def test_bad_signature_is_rejected():
    data = b"XX" + make_bmp24(CHECKER)[2:]
    with pytest.raises(BmpError):
        Bitmap.from_bytes(data)


def test_truncated_pixel_data_is_rejected():
    with pytest.raises(BmpError):
        Bitmap.from_bytes(make_bmp24(CHECKER)[:-4])


def test_unsupported_compression_is_rejected():
    data = bytearray(make_bmp24(CHECKER))
    struct.pack_into("<I", data, 30, 1)
    with pytest.raises(BmpError):
        Bitmap.from_bytes(bytes(data))


def test_draw_is_clipped_to_display():
    display = FrameBuffer(4, 4)
    Bitmap.from_bytes(make_bmp24(CHECKER)).draw(display, -1, -1)
    lit = {(x, y) for x in range(4) for y in range(4) if display.get_pixel(x, y) is ON}
    assert lit == {(0, 0)}


def test_draw_overwrites_with_off_pixels():
    display = FrameBuffer(4, 4)
    display.fill_solid(display.bounding_box(), ON)
    Bitmap.from_bytes(make_bmp24(CHECKER)).draw(display, 0, 0)
    assert display.get_pixel(1, 0) is OFF
    assert display.get_pixel(0, 0) is ON
    assert display.get_pixel(3, 3) is ON


def _lit(display):
    return {
        (x, y)
        for x in range(display.width)
        for y in range(display.height)
        if display.get_pixel(x, y) is ON
    }


SOLID = [[WHITE, WHITE], [WHITE, WHITE]]


def test_static_image_is_centered_by_default():
    display = FrameBuffer(8, 8)
    StaticImage(make_bmp24(SOLID)).render(display)
    assert _lit(display) == {(x, y) for x in (3, 4) for y in (3, 4)}


def test_static_image_right_bottom():
    display = FrameBuffer(8, 8)
    page = StaticImage(
        make_bmp24(SOLID), HorizontalAlignment.RIGHT, VerticalAlignment.BOTTOM
    )
    page.render(display)
    assert _lit(display) == {(x, y) for x in (6, 7) for y in (6, 7)}


def test_static_image_left_top():
    display = FrameBuffer(8, 8)
    StaticImage(make_bmp24(SOLID), HorizontalAlignment.LEFT, VerticalAlignment.TOP).render(
        display
    )
    assert _lit(display) == {(x, y) for x in (0, 1) for y in (0, 1)}


def test_static_image_renders_once_per_second():
    assert StaticImage(make_bmp24(SOLID)).frames_per_second() == 1


def test_static_image_rejects_invalid_data():
    with pytest.raises(BmpError):
        StaticImage(b"not an image")