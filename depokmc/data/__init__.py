"""Data module containing physical constants."""

from .constants import PhysicalConstants, get_physical_constants

__all__ = ["PhysicalConstants", "get_physical_constants"]
