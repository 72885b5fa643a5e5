from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .pieces import Piece


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def moved(self, dx: int = 0, dy: int = 0) -> "Position":
        return Position(self.x + dx, self.y + dy)


def is_valid_move(cells: np.ndarray, piece: Piece, position: Position) -> bool:
    """Return True if every filled cell of `piece` fits at `position`.

    Columns must lie in [0, width) and rows below the floor are rejected.
    Rows above the board (negative y) are always allowed so pieces can
    enter from the spawn buffer.
    """
    height, width = cells.shape
    for x, y in piece.cells_at(position.x, position.y):
        if x < 0 or x >= width or y >= height:
            return False
        if y >= 0 and cells[y, x] != 0:
            return False
    return True


def compact_rows(cells: np.ndarray) -> Tuple[np.ndarray, List[int]]:
    """Drop every full row and pad the top with empty rows.

    Returns the new board and the cleared row indices, bottom to top.
    The input array is left untouched.
    """
    full = np.all(cells != 0, axis=1)
    rows = [int(r) for r in np.flatnonzero(full)[::-1]]
    if not rows:
        return cells.copy(), []
    kept = cells[~full]
    padding = np.zeros((len(rows), cells.shape[1]), dtype=cells.dtype)
    return np.vstack((padding, kept)), rows


class GameGrid:
    """Fixed-size playfield.

    The grid uses 0 for empty cells and the `TetrominoType` value of the piece
    that filled a cell otherwise. Row 0 is the top.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.cells = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.cells.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_valid_move(self, piece: Piece, position: Position) -> bool:
        return is_valid_move(self.cells, piece, position)

    def merge(self, piece: Piece, position: Position) -> int:
        """Write `piece` into the grid without checking; returns cells written."""
        value = int(piece.kind)
        written = 0
        for x, y in piece.cells_at(position.x, position.y):
            if self.is_inside(x, y):
                self.cells[y, x] = value
                written += 1
        return written

    def replace(self, cells: np.ndarray) -> None:
        if cells.shape != self.cells.shape:
            raise ValueError(f"expected shape {self.cells.shape}, got {cells.shape}")
        self.cells = cells.astype(np.int8, copy=False)

    def rows_occupied(self, count: int) -> bool:
        """True if any of the top `count` rows holds a block."""
        if count <= 0:
            return False
        return bool(np.any(self.cells[:count] != 0))

    def clone_state(self) -> np.ndarray:
        return self.cells.copy()
