"""Location providers."""

from .memory_location import MemoryLocationProvider

__all__ = ["MemoryLocationProvider"]
