"""Domain services - result transformation and URL configuration codec."""

from .heatmap import HeatmapResult, aggregate, aggregate_by_regions, normalize, rank_sectors
from .url_codec import decode, encode_fragment, parse_url_config

__all__ = [
    "HeatmapResult",
    "aggregate",
    "aggregate_by_regions",
    "normalize",
    "rank_sectors",
    "decode",
    "encode_fragment",
    "parse_url_config",
]
