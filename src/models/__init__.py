"""Data models for results, sectors and the shared widget configuration."""

from .sector import Sector, Indicator
from .result_matrix import ResultMatrix
from .widget_config import WidgetConfig, DemandType, ResultPerspective

__all__ = [
    "Sector",
    "Indicator",
    "ResultMatrix",
    "WidgetConfig",
    "DemandType",
    "ResultPerspective",
]
