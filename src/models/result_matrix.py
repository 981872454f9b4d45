"""Indicator-by-sector result matrix as delivered by the data-access layer."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from ..domain.exceptions import ResultShapeError

# Cells may be missing; every computation treats None as zero.
Cell = Optional[float]


@dataclass(frozen=True)
class ResultMatrix:
    """
    Result of a model calculation.

    ``data[i][j]`` is the value of indicator row ``i`` for sector column
    ``j``; ``totals[i]`` is the row total used for normalization.
    ``sectors`` and ``indicators`` hold the codes (or ids) addressing the
    columns and rows.
    """

    data: List[List[Cell]]
    totals: List[Cell]
    sectors: List[str] = field(default_factory=list)
    indicators: List[str] = field(default_factory=list)

    @property
    def shape(self) -> tuple[int, int]:
        columns = len(self.sectors) if self.sectors else max((len(row) for row in self.data), default=0)
        return len(self.data), columns

    def validate(self) -> "ResultMatrix":
        """
        Check totals against rows and, if sector labels are present, row
        lengths against them.

        Returns:
            self, to allow chaining.

        Raises:
            ResultShapeError: On any mismatch.
        """
        if len(self.totals) != len(self.data):
            raise ResultShapeError(
                f"Expected {len(self.data)} totals, got {len(self.totals)}"
            )
        if not self.sectors:
            return self
        for i, row in enumerate(self.data):
            if len(row) != len(self.sectors):
                raise ResultShapeError(
                    f"Row {i} has {len(row)} values, expected {len(self.sectors)}"
                )
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "ResultMatrix":
        """
        Build from a plain mapping; cells and totals are converted to float.

        Raises:
            TypeError, ValueError: If a row is not a list or a cell is not numeric.
        """
        return cls(
            data=[[_to_cell(v) for v in row] for row in data.get("data") or []],
            totals=[_to_cell(t) for t in data.get("totals") or []],
            sectors=[str(s) for s in data.get("sectors") or []],
            indicators=[str(i) for i in data.get("indicators") or []],
        )


def _to_cell(value: object) -> Cell:
    return None if value is None else float(value)
