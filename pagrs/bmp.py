"""Decoding BMP images and showing them as a static page."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass
from itertools import islice

from .align import HorizontalAlignment, VerticalAlignment, align
from .display import BinaryColor, FrameBuffer
from .page import Page

_BI_RGB = 0
_BI_BITFIELDS = 3
_FILE_HEADER_SIZE = 14
_CORE_HEADER_SIZE = 12
_INFO_HEADER_SIZE = 40
_MASKS_OFFSET = _FILE_HEADER_SIZE + _INFO_HEADER_SIZE
_INDEXED_DEPTHS = (1, 4, 8)
_SUPPORTED_DEPTHS = (1, 4, 8, 16, 24, 32)
_DEFAULT_MASKS = {
    16: (0x7C00, 0x03E0, 0x001F),
    32: (0x00FF0000, 0x0000FF00, 0x000000FF),
}


class BmpError(ValueError):
    """Raised when data is not a BMP image that can be decoded."""


def _to_binary(red: int, green: int, blue: int) -> BinaryColor:
    luma = (red * 77 + green * 151 + blue * 28) // 256
    return BinaryColor.ON if luma >= 128 else BinaryColor.OFF


def _channel(value: int, mask: int) -> int:
    if not mask:
        return 0
    shift = (mask & -mask).bit_length() - 1
    maximum = mask >> shift
    return ((value & mask) >> shift) * 255 // maximum


def _indices(row: bytes, depth: int) -> Iterator[int]:
    mask = (1 << depth) - 1
    per_byte = 8 // depth
    for byte in row:
        for slot in range(per_byte):
            yield (byte >> (8 - depth * (slot + 1))) & mask


def _decode_row(
    row: bytes,
    width: int,
    depth: int,
    palette: tuple[BinaryColor, ...],
    masks: tuple[int, int, int],
) -> tuple[BinaryColor, ...]:
    if depth in _INDEXED_DEPTHS:
        colors = []
        for index in islice(_indices(row, depth), width):
            if index >= len(palette):
                raise BmpError(f"colour index {index} is outside the palette")
            colors.append(palette[index])
        return tuple(colors)
    if depth == 24:
        pixels = row[: 3 * width]
        return tuple(
            _to_binary(red, green, blue)
            for red, green, blue in zip(pixels[2::3], pixels[1::3], pixels[0::3])
        )
    fmt, size = ("<H", 2) if depth == 16 else ("<I", 4)
    red_mask, green_mask, blue_mask = masks
    return tuple(
        _to_binary(
            _channel(value, red_mask),
            _channel(value, green_mask),
            _channel(value, blue_mask),
        )
        for (value,) in struct.iter_unpack(fmt, row[: size * width])
    )


@dataclass(frozen=True)
class Bitmap:
    """A decoded image, reduced to monochrome pixels stored row by row from the top."""

    width: int
    height: int
    rows: tuple[tuple[BinaryColor, ...], ...]

    @classmethod
    def from_bytes(cls, data: bytes) -> Bitmap:
        """Decode an uncompressed or bit-field BMP image."""
        data = bytes(data)
        if len(data) < _FILE_HEADER_SIZE + 4 or data[:2] != b"BM":
            raise BmpError("data is not a BMP image")
        (pixel_offset,) = struct.unpack_from("<I", data, 10)
        (header_size,) = struct.unpack_from("<I", data, 14)

        try:
            if header_size == _CORE_HEADER_SIZE:
                width, height, _planes, depth = struct.unpack_from("<HHHH", data, 18)
                compression, colors_used, entry_size = _BI_RGB, 0, 3
            elif header_size >= _INFO_HEADER_SIZE:
                width, height, _planes, depth, compression = struct.unpack_from(
                    "<iiHHI", data, 18
                )
                (colors_used,) = struct.unpack_from("<I", data, 46)
                entry_size = 4
            else:
                raise BmpError(f"unsupported header size {header_size}")
        except struct.error as exc:
            raise BmpError("BMP header is truncated") from exc

        if depth not in _SUPPORTED_DEPTHS:
            raise BmpError(f"unsupported bit depth {depth}")
        if width <= 0 or height == 0:
            raise BmpError(f"invalid image size {width}x{height}")

        table_start = _FILE_HEADER_SIZE + header_size
        if compression == _BI_BITFIELDS:
            if depth not in _DEFAULT_MASKS:
                raise BmpError(f"bit fields are not allowed with bit depth {depth}")
            try:
                masks = struct.unpack_from("<III", data, _MASKS_OFFSET)
            except struct.error as exc:
                raise BmpError("bit field masks are truncated") from exc
            if header_size == _INFO_HEADER_SIZE:
                table_start += 12
        elif compression == _BI_RGB:
            masks = _DEFAULT_MASKS.get(depth, (0, 0, 0))
        else:
            raise BmpError(f"unsupported compression method {compression}")

        palette: tuple[BinaryColor, ...] = ()
        if depth in _INDEXED_DEPTHS:
            count = colors_used or (1 << depth)
            table_end = table_start + count * entry_size
            if table_end > len(data):
                raise BmpError("colour table is truncated")
            palette = tuple(
                _to_binary(data[offset + 2], data[offset + 1], data[offset])
                for offset in range(table_start, table_end, entry_size)
            )

        bottom_up = height > 0
        height = abs(height)
        stride = (width * depth + 31) // 32 * 4
        if pixel_offset + stride * height > len(data):
            raise BmpError("pixel data is truncated")

        rows = [
            _decode_row(data[start:start + stride], width, depth, palette, masks)
            for start in range(pixel_offset, pixel_offset + stride * height, stride)
        ]
        if bottom_up:
            rows.reverse()
        return cls(width, height, tuple(rows))

    def pixel(self, x: int, y: int) -> BinaryColor:
        """Colour of one pixel, counted from the top-left corner."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the image")
        return self.rows[y][x]

    def draw(self, display: FrameBuffer, x: int, y: int) -> None:
        """Draw every pixel of the image with its top-left corner at ``(x, y)``."""
        for row_offset, row in enumerate(self.rows):
            for column_offset, color in enumerate(row):
                display.set_pixel(x + column_offset, y + row_offset, color)


class StaticImage(Page):
    """A page showing one fixed image, aligned inside the display."""

    def __init__(
        self,
        data: bytes,
        horizontal: HorizontalAlignment = HorizontalAlignment.CENTER,
        vertical: VerticalAlignment = VerticalAlignment.CENTER,
    ) -> None:
        self.bitmap = Bitmap.from_bytes(data)
        self.horizontal = HorizontalAlignment(horizontal)
        self.vertical = VerticalAlignment(vertical)

    def render(self, display: FrameBuffer) -> None:
        x, y = align(
            self.bitmap.width,
            self.bitmap.height,
            display.bounding_box(),
            self.horizontal,
            self.vertical,
        )
        self.bitmap.draw(display, x, y)

    def frames_per_second(self) -> int:
        return 1