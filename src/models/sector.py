"""Sector and indicator descriptors addressing the columns and rows of a result matrix."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Sector:
    """
    Industry/commodity classification column of a result matrix.

    In multi-regional models several sectors share a ``code`` and differ
    by ``location``. ``index`` is the column position in the matrix.
    """

    code: str
    id: str
    index: int
    name: str
    description: Optional[str] = None
    location: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Sector":
        return cls(
            code=str(data["code"]),
            id=str(data.get("id") or data["code"]),
            index=int(data["index"]),
            name=str(data.get("name") or data["code"]),
            description=data.get("description"),
            location=data.get("location"),
        )


@dataclass(frozen=True)
class Indicator:
    """Impact dimension; ``index`` is the row position in a result matrix."""

    code: str
    index: int
    name: str
    id: Optional[str] = None
    unit: Optional[str] = None
    group: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Indicator":
        return cls(
            code=str(data["code"]),
            index=int(data["index"]),
            name=str(data.get("name") or data["code"]),
            id=data.get("id"),
            unit=data.get("unit"),
            group=data.get("group"),
        )
