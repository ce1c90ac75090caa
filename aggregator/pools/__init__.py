"""Pool state package."""

from .pool import Pool

__all__ = ["Pool"]
