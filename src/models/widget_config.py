"""Shared widget configuration and its enumerations."""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional


class DemandType(Enum):
    """Type of the demand vector behind a result."""
    CONSUMPTION = "Consumption"
    PRODUCTION = "Production"


class ResultPerspective(Enum):
    """Supply chain stage a result represents."""
    DIRECT = "direct"
    INTERMEDIATE = "intermediate"
    FINAL = "final"


@dataclass
class WidgetConfig:
    """
    Configuration shared by the widgets of a page.

    Every field is optional; ``None`` means "not set". ``source`` is the
    identity of the participant that produced the config. It only serves
    echo suppression: it takes no part in equality and is never encoded
    into a URL.
    """

    model: Optional[str] = None
    sectors: Optional[List[str]] = None
    indicators: Optional[List[str]] = None
    perspective: Optional[ResultPerspective] = None
    analysis: Optional[DemandType] = None
    year: Optional[int] = None
    location: Optional[str] = None
    source: Optional[str] = field(default=None, compare=False)

    @classmethod
    def field_names(cls) -> List[str]:
        """Names of the persistent fields (everything except ``source``)."""
        return [f.name for f in fields(cls) if f.name != "source"]

    def copy(self) -> "WidgetConfig":
        return replace(
            self,
            sectors=list(self.sectors) if self.sectors is not None else None,
            indicators=list(self.indicators) if self.indicators is not None else None,
        )

    def merged(self, other: Optional["WidgetConfig"]) -> "WidgetConfig":
        """
        Return a copy with every field set in ``other`` overriding this one.

        ``source`` follows the same rule.
        """
        result = self.copy()
        if other is None:
            return result
        for name in self.field_names() + ["source"]:
            value = getattr(other, name)
            if value is not None:
                if isinstance(value, list):
                    value = list(value)
                setattr(result, name, value)
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Set fields as plain values (enums by value), without ``source``."""
        out: Dict[str, Any] = {}
        for name in self.field_names():
            value = getattr(self, name)
            if value is None:
                continue
            out[name] = value.value if isinstance(value, Enum) else value
        return out
