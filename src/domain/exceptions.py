"""
Domain exceptions for the heatmap system.

Distinguishes recoverable errors (a model whose data files are missing or
malformed; the caller can skip rendering and carry on) from fatal errors
(invalid application configuration) that stop the process.

The calculation core and the sync protocol never raise these for lookups or
URL parsing; they fall back to defaults instead.
"""


class HeatmapError(Exception):
    """Base class for all heatmap domain exceptions."""
    pass


class RecoverableError(HeatmapError):
    """
    Errors the caller can recover from without restarting.

    Examples:
    - Model data file missing
    - Result matrix with mismatched totals
    """
    pass


class FatalError(HeatmapError):
    """
    Errors requiring shutdown or operator intervention.

    Examples:
    - Invalid configuration values
    - Missing base configuration
    """
    pass


class ModelDataError(RecoverableError):
    """Model data could not be loaded or parsed."""
    pass


class ResultShapeError(RecoverableError):
    """Result rows or totals do not match the declared sectors/indicators."""
    pass


class ConfigurationError(FatalError):
    """Invalid application configuration."""
    pass
