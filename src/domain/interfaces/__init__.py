"""Domain interfaces for dependency injection."""

from .model_provider import ModelProvider
from .location_provider import LocationProvider, NavigationCallback

__all__ = [
    "ModelProvider",
    "LocationProvider",
    "NavigationCallback",
]
