from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(rows) -> Shape:
    shape = np.array(rows, dtype=np.int8)
    shape.setflags(write=False)
    return shape


def _rot_cw(shape: Shape) -> Shape:
    # Transpose, then reverse each row
    return _frozen(np.rot90(shape, 1, axes=(1, 0)))


# Square bounding boxes so that rotation keeps the dimensions
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0], [0, 0, 0]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1], [0, 0, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1], [0, 0, 0]]),
}


@dataclass(frozen=True, eq=False)
class Piece:
    """A tetromino shape together with the identity it paints on the board.

    The matrix is always square and read-only; rotating a piece returns a new one.
    """

    kind: TetrominoType
    matrix: Shape

    def __post_init__(self) -> None:
        matrix = _frozen(self.matrix)
        if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
            raise ValueError(f"piece matrix must be square, got shape {matrix.shape}")
        object.__setattr__(self, "matrix", matrix)

    @classmethod
    def of(cls, kind: TetrominoType) -> "Piece":
        return cls(TetrominoType(kind), BASE_SHAPES[TetrominoType(kind)])

    @property
    def size(self) -> int:
        return int(self.matrix.shape[0])

    def offsets(self) -> List[Tuple[int, int]]:
        """(dx, dy) of every filled cell, row by row."""
        ys, xs = np.nonzero(self.matrix)
        return [(int(dx), int(dy)) for dy, dx in zip(ys, xs)]

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        return [(origin_x + dx, origin_y + dy) for dx, dy in self.offsets()]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Piece):
            return NotImplemented
        return self.kind == other.kind and np.array_equal(self.matrix, other.matrix)

    def __hash__(self) -> int:
        return hash((int(self.kind), self.matrix.shape, self.matrix.tobytes()))


def rotate(piece: Piece) -> Piece:
    """Quarter turn clockwise. No wall kicks; callers validate the result."""
    return Piece(piece.kind, _rot_cw(piece.matrix))


def random_piece(rng: random.Random) -> Piece:
    # Uniform and independent: no bag, no repeat protection
    return Piece.of(rng.choice(list(TetrominoType)))
