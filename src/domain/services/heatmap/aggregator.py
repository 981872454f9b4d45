"""
Result aggregator - collapses multi-regional results by sector code.

In a multi-regional model every sector exists once per region. For a
cross-region comparison the columns sharing a sector code are summed into
one column. The sectors returned alongside an aggregated result are
synthetic and must never be used to address the data-access API.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np

from ....models.result_matrix import ResultMatrix
from ....models.sector import Sector
from ...interfaces.model_provider import ModelProvider
from ....utils.logging_setup import get_logger
from .matrix import as_row

logger = get_logger(__name__)


def collapse_sectors(sectors: Sequence[Sector]) -> Tuple[List[Sector], Dict[str, int]]:
    """
    Create one synthetic sector per distinct code, in first-seen order.

    Returns:
        (aggregated sectors, code -> new column index)
    """
    aggregated: List[Sector] = []
    column_of: Dict[str, int] = {}
    for s in sectors:
        if s.code in column_of:
            continue
        idx = len(aggregated)
        column_of[s.code] = idx
        aggregated.append(Sector(
            code=s.code,
            id=f"{s.code}/{s.name}".lower(),
            index=idx,
            name=s.name,
            description=s.description,
            location=None,
        ))
    return aggregated, column_of


def aggregate(result: ResultMatrix, sectors: Sequence[Sector]) -> Tuple[List[Sector], ResultMatrix]:
    """
    Sum the columns of sectors sharing a code.

    Each original sector contributes column ``sector.index`` of every row
    to the column of its code. Totals and indicators pass through, so
    every row keeps its sum.

    Args:
        result: Result addressed by the original (regional) sectors.
        sectors: The original sectors.

    Returns:
        (aggregated sectors, aggregated result)
    """
    aggregated, column_of = collapse_sectors(sectors)
    width = len(aggregated)

    data: List[List[float]] = []
    for values in result.data:
        row = as_row(values)
        agg_row = np.zeros(width)
        for s in sectors:
            if 0 <= s.index < row.size:
                agg_row[column_of[s.code]] += row[s.index]
        data.append(agg_row.tolist())

    logger.debug(
        f"Aggregated {len(sectors)} regional sectors into {width} sectors "
        f"over {len(data)} indicator rows"
    )
    return aggregated, ResultMatrix(
        data=data,
        totals=list(result.totals),
        sectors=[s.id for s in aggregated],
        indicators=list(result.indicators),
    )


async def aggregate_by_regions(
    result: ResultMatrix, model: ModelProvider
) -> Tuple[List[Sector], ResultMatrix]:
    """
    Aggregate ``result`` if ``model`` is multi-regional.

    For a single-region model the model's sectors and the unchanged
    result are returned. Failures of the model calls propagate.
    """
    is_multi_regional = await model.is_multi_regional()
    sectors = await model.sectors()
    if not is_multi_regional:
        return list(sectors), result
    return aggregate(result, sectors)
