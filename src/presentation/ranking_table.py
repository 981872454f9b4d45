"""
Terminal ranking table using rich.

A Widget that renders the top sectors of a HeatmapResult for the
indicators selected in the shared configuration:

    rank | sector | code | score | share per indicator
"""

from __future__ import annotations
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..application.widget import Widget
from ..domain.services.heatmap import HeatmapResult
from ..models.sector import Indicator, Sector
from ..models.widget_config import WidgetConfig
from ..utils.logging_setup import get_logger

logger = get_logger(__name__)


class RankingTableWidget(Widget):
    """Ranking table bound to the shared configuration."""

    def __init__(
        self,
        heatmap: HeatmapResult,
        indicators: Sequence[Indicator],
        count: int = 10,
        name_filter: Optional[str] = None,
        share_precision: int = 1,
        show_shares: bool = True,
        console: Optional[Console] = None,
        identity: Optional[str] = None,
    ):
        """
        Args:
            heatmap: View to rank.
            indicators: All indicators of the model (rows of the heatmap).
            count: Number of sectors to show.
            name_filter: Sector name filter.
            share_precision: Decimals of the share columns.
            show_shares: Add one share column per selected indicator.
            console: Output console (defaults to stdout).
        """
        super().__init__(identity=identity)
        self.heatmap = heatmap
        self.indicators = list(indicators)
        self.count = count
        self.name_filter = name_filter
        self.share_precision = share_precision
        self.show_shares = show_shares
        self.console = console or Console()
        self.config = WidgetConfig()
        self.render_count = 0

    async def handle_update(self, config: WidgetConfig) -> None:
        self.config = config.copy()
        self.console.print(self.render())
        self.render_count += 1

    def selected_indicators(self) -> List[Indicator]:
        """Indicators named in the config, or all of them if none match."""
        codes = self.config.indicators or []
        selected = [i for i in self.indicators if i.code in codes]
        return selected or list(self.indicators)

    def ranking(self) -> List[Sector]:
        return self.heatmap.get_ranking(self.selected_indicators(), self.count, self.name_filter)

    def select_indicators(self, codes: Sequence[str]) -> None:
        """User selection: announce the new indicator list."""
        self.fire_change(WidgetConfig(indicators=list(codes)))

    def select_sectors(self, codes: Sequence[str]) -> None:
        self.fire_change(WidgetConfig(sectors=list(codes)))

    def render(self) -> Table:
        indicators = self.selected_indicators()
        highlighted = set(self.config.sectors or [])

        title = "Sector ranking"
        if self.config.model:
            title += f" - {self.config.model}"
        if self.config.year:
            title += f" ({self.config.year})"

        table = Table(title=title, show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Sector", style="cyan")
        table.add_column("Code")
        table.add_column("Score", justify="right")
        if self.show_shares:
            for indicator in indicators:
                table.add_column(f"{indicator.code} %", justify="right")

        for rank, sector in enumerate(self.ranking(), start=1):
            score = sum(self.heatmap.get_normalized(i, sector) for i in indicators)
            style = "bold" if sector.code in highlighted else ""
            row = [
                str(rank),
                Text(sector.name, style=style),
                sector.code,
                f"{score:.4f}",
            ]
            if self.show_shares:
                row.extend(self._format_share(self.heatmap.get_share(i, sector)) for i in indicators)
            table.add_row(*row)
        return table

    def _format_share(self, share: float) -> Text:
        style = "red" if share > 0 else "green" if share < 0 else "dim"
        return Text(f"{share:.{self.share_precision}f}", style=style)
