from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .grid import compact_rows


@dataclass
class ScoringRules:
    line_clear_scores: Tuple[int, int, int, int] = (100, 300, 500, 800)
    # Added per line beyond four; unreachable with tetrominoes on a 10-wide board
    extra_line_score: int = 400

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1]
        return self.line_clear_scores[-1] + (lines - 4) * self.extra_line_score


@dataclass
class LineClear:
    board: np.ndarray
    lines_cleared: int
    score_delta: int
    rows: List[int] = field(default_factory=list)


def clear_lines(cells: np.ndarray, rules: Optional[ScoringRules] = None) -> LineClear:
    """Remove full rows from `cells` and price the clear.

    Remaining rows keep their relative order and shift down by the number
    of cleared rows below them; empty rows are inserted at the top.
    """
    rules = rules or ScoringRules()
    board, rows = compact_rows(cells)
    return LineClear(
        board=board,
        lines_cleared=len(rows),
        score_delta=rules.score_for_lines(len(rows)),
        rows=rows,
    )
