"""Row-wise numeric matrices with defensive cell lookup."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

# One float array per indicator row. Rows are kept separate so that an
# empty or short row never breaks the lookups of the others.
Matrix = List[np.ndarray]


def as_row(values: Sequence[Optional[float]]) -> np.ndarray:
    """Convert one row to floats; None, NaN and ±inf become 0."""
    row = np.asarray([np.nan if v is None else v for v in values], dtype=float)
    row[~np.isfinite(row)] = 0.0
    return row


def as_matrix(data: Sequence[Sequence[Optional[float]]]) -> Matrix:
    return [as_row(row) for row in data]


def freeze(matrix: Matrix) -> Matrix:
    """Mark every row read-only."""
    for row in matrix:
        row.flags.writeable = False
    return matrix


def cell_value(matrix: Optional[Matrix], row: Optional[int], column: Optional[int]) -> float:
    """
    Value at (row, column), or 0 for a missing matrix, a None index or an
    index outside the matrix (negative included).
    """
    if matrix is None or row is None or column is None:
        return 0.0
    if row < 0 or row >= len(matrix):
        return 0.0
    xs = matrix[row]
    if column < 0 or column >= len(xs):
        return 0.0
    return float(xs[column])
