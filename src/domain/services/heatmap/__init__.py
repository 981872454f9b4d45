"""Result transformation pipeline: aggregation, normalization, ranking."""

from .aggregator import aggregate, aggregate_by_regions, collapse_sectors
from .normalizer import normalize, normalize_row, row_max, share_row
from .ranker import rank_sectors, matches_filter, prepare_filter
from .matrix import Matrix, cell_value
from .heatmap_result import HeatmapResult

__all__ = [
    "aggregate",
    "aggregate_by_regions",
    "collapse_sectors",
    "normalize",
    "normalize_row",
    "row_max",
    "share_row",
    "rank_sectors",
    "matches_filter",
    "prepare_filter",
    "Matrix",
    "cell_value",
    "HeatmapResult",
]
