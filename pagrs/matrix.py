"""A "digital rain" page: columns of glyphs that trickle in and fade out."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum

from .display import BinaryColor, FrameBuffer, Rectangle
from .page import Page

PIXEL_PER_GLYPH_HEIGHT = 9
PIXEL_PER_GLYPH_WIDTH = 8

_GLYPH_COUNT = 27
_DOT_ROWS = 3
_DOT_SIZE = 2
_DOT_PITCH = 3
_MIN_WORKERS_PER_FRAME = 2
_MIN_ROWS = 6
_MIN_WORKER_COUNT = 6
_MIN_LENGTH = 3
_START_LENGTH = 5
_ROW_MARGIN = 3


class _Phase(Enum):
    ADDING = "adding"
    REMOVING = "removing"
    DONE = "done"


@dataclass
class _Worker:
    """Writes a run of glyphs into one column, then erases it again."""

    column: int = 0
    row: int = 0
    length: int = 0
    phase: _Phase = _Phase.DONE
    step: int = 0


def _paint_glyph(display: FrameBuffer, column: int, row: int, value: int) -> None:
    """Paint one glyph as two columns of three dots, chosen by ``value``."""
    value %= _GLYPH_COUNT
    left = column * PIXEL_PER_GLYPH_WIDTH
    top = row * PIXEL_PER_GLYPH_HEIGHT
    for dot_row in range(_DOT_ROWS):
        pattern = value % 3
        value //= 3
        y = top + _DOT_PITCH * dot_row
        if pattern in (0, 1):
            display.fill_solid(Rectangle(left, y, _DOT_SIZE, _DOT_SIZE), BinaryColor.ON)
        if pattern in (0, 2):
            display.fill_solid(
                Rectangle(left + _DOT_PITCH, y, _DOT_SIZE, _DOT_SIZE), BinaryColor.ON
            )


class DigitalRain(Page):
    """Workers drop random glyphs down the columns of a grid and erase them again."""

    def __init__(
        self,
        seed: int,
        columns: int = 16,
        rows: int = 7,
        worker_count: int = 16,
    ) -> None:
        if columns <= 0:
            raise ValueError(f"column count must be positive: {columns}")
        if rows < _MIN_ROWS:
            raise ValueError(f"row count must be at least {_MIN_ROWS}: {rows}")
        if worker_count < _MIN_WORKER_COUNT:
            raise ValueError(
                f"worker count must be at least {_MIN_WORKER_COUNT}: {worker_count}"
            )
        if worker_count > columns:
            raise ValueError(
                f"worker count {worker_count} exceeds column count {columns}"
            )
        self.columns = columns
        self.rows = rows
        self.worker_count = worker_count
        self._random = random.Random(seed)
        self._cells: list[list[int]] = []
        self._workers: list[_Worker] = []
        self._busy_columns: set[int] = set()
        self._initialize()

    @property
    def cells(self) -> tuple[tuple[int, ...], ...]:
        """Glyph values per column, top to bottom; 0 marks an empty cell."""
        return tuple(tuple(column) for column in self._cells)

    @property
    def busy_columns(self) -> frozenset[int]:
        """Columns that a worker currently writes into."""
        return frozenset(self._busy_columns)

    def _initialize(self) -> None:
        self._cells = [[0] * self.rows for _ in range(self.columns)]
        self._workers = [_Worker() for _ in range(self.worker_count)]
        self._busy_columns = set()

    def _free_column(self) -> int:
        while True:
            candidate = self._random.randrange(self.columns)
            if candidate not in self._busy_columns:
                return candidate

    def _update_state(self) -> None:
        rng = self._random
        for _ in range(rng.randrange(_MIN_WORKERS_PER_FRAME, self.worker_count // 2)):
            worker = self._workers[rng.randrange(self.worker_count)]
            last = worker.step == worker.length - 1

            if worker.phase is _Phase.ADDING:
                glyph = rng.randrange(1, _GLYPH_COUNT)
                self._cells[worker.column][worker.row + worker.step] = glyph
                if last:
                    worker.phase, worker.step = _Phase.REMOVING, 0
                else:
                    worker.step += 1
            elif worker.phase is _Phase.REMOVING:
                self._cells[worker.column][worker.row + worker.step] = 0
                if last:
                    self._busy_columns.discard(worker.column)
                    worker.phase = _Phase.DONE
                else:
                    worker.step += 1
            else:
                column = self._free_column()
                row = rng.randrange(self.rows - _ROW_MARGIN)
                max_length = self.rows - row
                length = min(max(rng.randrange(_START_LENGTH, self.rows), _MIN_LENGTH),
                             max_length)
                self._busy_columns.add(column)
                worker.column, worker.row, worker.length = column, row, length
                worker.phase, worker.step = _Phase.ADDING, 0

    def _render_state(self, display: FrameBuffer) -> None:
        for column_index, column in enumerate(self._cells):
            for row_index, value in enumerate(column):
                if value:
                    _paint_glyph(display, column_index, row_index, value)

    def activated(self) -> None:
        self._initialize()

    def render(self, display: FrameBuffer) -> None:
        self._update_state()
        self._render_state(display)

    def frames_per_second(self) -> int:
        return 8