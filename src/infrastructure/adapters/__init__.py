"""Model adapters."""

from .file_model import FileModel

__all__ = ["FileModel"]
