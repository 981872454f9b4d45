"""
HeatmapResult - queryable, display-ready view over a (model, result) pair.

Composes the aggregator, the normalizer and the ranker:

    heatmap = await HeatmapResult.from_model(model, result)
    share = heatmap.get_share(indicator, sector)
    top = heatmap.get_ranking(indicators, count=10, name_filter="steel")

Lookups never raise: a None argument or a stale index gives 0 so that
rendering code always has a number to draw.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ....models.result_matrix import ResultMatrix
from ....models.sector import Indicator, Sector
from ...interfaces.model_provider import ModelProvider
from ....utils.logging_setup import get_logger
from ....utils.perf_logger import log_heatmap_build_timing
from .aggregator import aggregate_by_regions
from .matrix import Matrix, as_matrix, cell_value, freeze
from .normalizer import normalize
from .ranker import rank_sectors

logger = get_logger(__name__)


class HeatmapResult:
    """
    Immutable heatmap view.

    Attributes:
        sectors: Column sectors. For multi-regional models these are the
            synthetic, region-collapsed sectors; never use them to address
            the data-access API.
        result: The (possibly aggregated) result matrix.
    """

    def __init__(self, sectors: Sequence[Sector], result: ResultMatrix):
        self._sectors = tuple(sectors)
        self._result = result
        self._data = freeze(as_matrix(result.data))
        normalized, shares = normalize(result.data, result.totals)
        self._normalized = freeze(normalized)
        self._shares = freeze(shares)

    @classmethod
    async def from_model(cls, model: ModelProvider, result: ResultMatrix) -> "HeatmapResult":
        """
        Build the view, aggregating by region when the model is multi-regional.

        Errors raised by the model propagate to the caller.
        """
        async with log_heatmap_build_timing() as ctx:
            sectors, aggregated = await aggregate_by_regions(result, model)
            heatmap = cls(sectors, aggregated)
            ctx["sectors"] = len(sectors)
            ctx["indicators"] = len(aggregated.data)
        logger.info(
            f"Heatmap built: {len(aggregated.data)} indicators x {len(sectors)} sectors"
        )
        return heatmap

    @property
    def sectors(self) -> List[Sector]:
        return list(self._sectors)

    @property
    def result(self) -> ResultMatrix:
        return self._result

    @property
    def normalized(self) -> Matrix:
        return self._normalized

    @property
    def shares(self) -> Matrix:
        return self._shares

    def get_result(self, indicator: Optional[Indicator], sector: Optional[Sector]) -> float:
        """Raw (aggregated) value of the cell, 0 if it does not exist."""
        if indicator is None or sector is None:
            return 0.0
        return cell_value(self._data, indicator.index, sector.index)

    def get_normalized(self, indicator: Optional[Indicator], sector: Optional[Sector]) -> float:
        if indicator is None or sector is None:
            return 0.0
        return cell_value(self._normalized, indicator.index, sector.index)

    def get_share(self, indicator: Optional[Indicator], sector: Optional[Sector]) -> float:
        """Share of the cell in percent of its row maximum, 0 if it does not exist."""
        if indicator is None or sector is None:
            return 0.0
        return cell_value(self._shares, indicator.index, sector.index)

    def get_ranking(
        self,
        indicators: Optional[Sequence[Indicator]],
        count: int,
        name_filter: Optional[str] = None,
    ) -> List[Sector]:
        """
        Top ``count`` sectors by summed normalized contribution.

        Args:
            indicators: Indicators to sum over; None counts as none.
            count: Maximum number of sectors.
            name_filter: Case-insensitive name substring; blank means all.
        """
        return rank_sectors(
            self._sectors,
            self._normalized,
            list(indicators or []),
            count,
            name_filter,
        )

    def value(self, matrix: Optional[Matrix], row: Optional[int], column: Optional[int]) -> float:
        return cell_value(matrix, row, column)
