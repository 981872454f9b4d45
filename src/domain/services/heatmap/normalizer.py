"""
Normalizer - relative contributions and percentage shares.

For each indicator row:
    normalized[j] = data[j] / total        (0 if data[j] or total is falsy)
    row_max       = max |normalized[j]|    (0 for an empty row)
    shares[j]     = 100 * normalized[j] / row_max

With a well-formed total, normalized values lie in [-1, 1] and shares in
[-100, 100].
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from ....utils.logging_setup import get_logger
from .matrix import Matrix, as_row

logger = get_logger(__name__)


def _is_falsy(value: Optional[float]) -> bool:
    return value is None or value == 0 or (isinstance(value, float) and math.isnan(value))


def normalize_row(row: np.ndarray, total: Optional[float]) -> np.ndarray:
    """Divide a row by its total; zero cells and a falsy total give 0."""
    if _is_falsy(total):
        return np.zeros_like(row)
    out = row / float(total)
    # zero cells stay exactly 0 (no -0.0 from negative totals)
    out[row == 0] = 0.0
    return out


def row_max(normalized: np.ndarray) -> float:
    """Largest absolute value of a row, 0 for an empty row."""
    if normalized.size == 0:
        return 0.0
    return float(np.max(np.abs(normalized)))


def share_row(normalized: np.ndarray) -> np.ndarray:
    """Rescale a normalized row to a ±100 share of its largest magnitude."""
    if normalized.size == 0:
        return np.zeros(0)
    max_value = row_max(normalized)
    if max_value == 0:
        # Only reachable for rows that are all zero; kept for parity.
        shares = np.where(normalized >= 0, 100.0, -100.0)
    else:
        # divide first: the largest cell is then exactly ±100
        shares = 100.0 * (normalized / max_value)
    shares[normalized == 0] = 0.0
    return shares


def normalize(
    data: Sequence[Sequence[Optional[float]]],
    totals: Sequence[Optional[float]],
) -> Tuple[Matrix, Matrix]:
    """
    Compute the normalized and the share matrix of a raw result matrix.

    Args:
        data: Rows of raw values, one per indicator.
        totals: Row totals; a missing total counts as 0.

    Returns:
        (normalized, shares), both shaped like ``data``.
    """
    normalized: Matrix = []
    shares: Matrix = []
    zero_totals = 0
    for i, values in enumerate(data):
        total = totals[i] if i < len(totals) else None
        if _is_falsy(total):
            zero_totals += 1
        n = normalize_row(as_row(values), total)
        normalized.append(n)
        shares.append(share_row(n))

    if zero_totals:
        logger.debug(f"Normalized {len(normalized)} rows, {zero_totals} with a zero total")
    return normalized, shares
