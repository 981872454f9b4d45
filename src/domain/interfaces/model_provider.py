"""Model capability protocol consumed by the heatmap pipeline."""

from __future__ import annotations
from typing import List, Protocol, runtime_checkable

from ...models.sector import Sector


@runtime_checkable
class ModelProvider(Protocol):
    """
    Read-only capability of an input-output model.

    Implementations:
    - FileModel (YAML/JSON/CSV files on disk)
    - any client of the upstream data-access API

    Usage:
        model: ModelProvider = FileModel("data/demo")
        if await model.is_multi_regional():
            sectors = await model.sectors()
    """

    async def is_multi_regional(self) -> bool:
        """True if sectors are replicated per region."""
        ...

    async def sectors(self) -> List[Sector]:
        """
        All sectors of the model.

        Returns:
            Sectors whose ``index`` addresses result matrix columns.
        """
        ...
