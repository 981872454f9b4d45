"""Filtered top-N ranking of sectors by their combined normalized contribution."""

from __future__ import annotations

from operator import itemgetter
from typing import List, Optional, Sequence, Tuple

from ....models.sector import Indicator, Sector
from .matrix import Matrix, cell_value


def prepare_filter(name_filter: Optional[str]) -> Optional[str]:
    """Trimmed, lower-cased filter, or None for an empty/blank filter."""
    if not name_filter or not name_filter.strip():
        return None
    return name_filter.strip().lower()


def matches_filter(sector: Sector, name_filter: Optional[str]) -> bool:
    """``name_filter`` must already be prepared."""
    if not name_filter:
        return True
    if sector is None or not sector.name:
        return False
    return name_filter in sector.name.lower()


def ranking_value(normalized: Matrix, sector: Sector, indicators: Sequence[Indicator]) -> float:
    column = sector.index
    return sum(cell_value(normalized, indicator.index, column) for indicator in indicators)


def rank_sectors(
    sectors: Sequence[Sector],
    normalized: Matrix,
    indicators: Sequence[Indicator],
    count: int,
    name_filter: Optional[str] = None,
) -> List[Sector]:
    """
    Rank sectors by the sum of their normalized values over ``indicators``.

    Sectors with equal scores keep their input order (sorted() is stable,
    also with reverse=True).

    Args:
        sectors: Candidate sectors.
        normalized: Normalized matrix addressed by indicator/sector index.
        indicators: Indicators whose contributions are summed.
        count: Maximum number of sectors to return.
        name_filter: Case-insensitive substring the sector name must contain.

    Returns:
        At most ``count`` sectors, best first.
    """
    if count is None or count <= 0:
        return []
    prepared = prepare_filter(name_filter)
    ranks: List[Tuple[Sector, float]] = [
        (sector, ranking_value(normalized, sector, indicators))
        for sector in sectors
        if matches_filter(sector, prepared)
    ]
    ranks = sorted(ranks, key=itemgetter(1), reverse=True)
    return [sector for sector, _ in ranks[:count]]
