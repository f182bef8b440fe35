"""KMC module: surface lattice and geometric helpers."""

from .geometry import (
    StepPolicy,
    count_neighbors,
    footprint,
    has_same_height,
    is_in_higher_step,
    is_in_lower_step,
)
from .lattice import Lattice, Site

__all__ = [
    "Lattice",
    "Site",
    "StepPolicy",
    "count_neighbors",
    "footprint",
    "has_same_height",
    "is_in_lower_step",
    "is_in_higher_step",
]
