"""Terminal presentation."""

from .ranking_table import RankingTableWidget

__all__ = ["RankingTableWidget"]
