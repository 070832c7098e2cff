from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

from crunch.errors import LevelConfigError


@dataclass(frozen=True, slots=True)
class CellMask:
    """Static map of playable cells, stored row-major with row 0 at the top.

    Produced once by whatever parses the level and never modified afterwards.
    """
    columns: int
    rows: int
    cells: Tuple[bool, ...]

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise LevelConfigError(f"Cell mask must be non-empty, got {self.columns}x{self.rows}")
        if len(self.cells) != self.columns * self.rows:
            raise LevelConfigError(
                f"Cell mask holds {len(self.cells)} cells, expected {self.columns * self.rows}"
            )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[object]]) -> "CellMask":
        """Build a mask from nested rows of truthy (playable) / falsy values."""
        if not rows:
            raise LevelConfigError("Cell mask needs at least one row")
        width = len(rows[0])
        cells: list[bool] = []
        for index, row in enumerate(rows):
            if len(row) != width:
                raise LevelConfigError(f"Row {index} has {len(row)} cells, expected {width}")
            cells.extend(bool(value) for value in row)
        return cls(columns=width, rows=len(rows), cells=tuple(cells))

    @classmethod
    def full(cls, columns: int, rows: int) -> "CellMask":
        return cls(columns=columns, rows=rows, cells=(True,) * (columns * rows))

    def in_bounds(self, column: int, row: int) -> bool:
        return 0 <= column < self.columns and 0 <= row < self.rows

    def is_playable(self, column: int, row: int) -> bool:
        if not self.in_bounds(column, row):
            return False
        return self.cells[row * self.columns + column]

    def playable_cells(self) -> Iterator[Tuple[int, int]]:
        """Yield (column, row) of every playable cell, row by row from the top."""
        for row in range(self.rows):
            for column in range(self.columns):
                if self.cells[row * self.columns + column]:
                    yield column, row

    def count(self) -> int:
        return sum(1 for value in self.cells if value)


def mask_from_strings(lines: Iterable[str], *, absent: str = " ") -> CellMask:
    """Parse a mask drawn as text, where the absent character marks a missing cell."""
    return CellMask.from_rows([[char != absent for char in line] for line in lines])
