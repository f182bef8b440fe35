"""
Lattice structure for KMC deposition simulation.

This module defines a 2D solid-on-solid surface lattice: every site is the top
of one column, carries an occupancy label and a height, and knows its nearest
neighbors in a fixed order.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


# Neighbor offsets in the order they are stored on each site: +x, -x, +y, -y
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass(eq=False)
class Site:
    """
    Represents a single lattice site.

    Attributes:
        position: 2D coordinates (x, y) of the site.
        label: Occupancy label. Equal to the lattice label when the site is vacant.
        height: Step level of the column below the site.
        neighbors: Neighboring sites in fixed +x, -x, +y, -y order.
        site_id: Unique identifier for this site.
    """

    position: tuple[int, int]
    label: str
    height: int = 0
    neighbors: list[Site] = field(default_factory=list, repr=False)
    site_id: int | None = None

    def is_vacant(self, vacant_label: str) -> bool:
        """Check if the site carries the vacant label."""
        return self.label == vacant_label


class Lattice:
    """
    2D surface lattice for deposition processes.

    Attributes:
        size: Tuple of (nx, ny) lattice dimensions.
        label: Label of the bare surface, used as the vacancy sentinel.
        species: Labels of every species that can adsorb in the simulation.
        sites: 1D list of Site objects.
    """

    def __init__(
        self,
        size: tuple[int, int],
        label: str = "Cu",
        initial_height: int = 0,
        periodic: bool = True,
        species: Iterable[str] = (),
    ) -> None:
        """
        Initialize the lattice.

        Args:
            size: Lattice dimensions (nx, ny).
            label: Species label of the bare surface.
            initial_height: Starting height of every column.
            periodic: Periodic boundary conditions in x and y.
            species: Labels of the species that can adsorb.
        """
        self.size = size
        self.nx, self.ny = size
        if self.nx <= 0 or self.ny <= 0:
            raise ValueError(f"Lattice dimensions must be positive, got {size}")

        self.label = label
        self.periodic = periodic
        self.n_sites = self.nx * self.ny
        self.species: set[str] = set()
        self._coverage: Counter[str] = Counter()

        for label_ in species:
            self.register_species(label_)

        self.sites: list[Site] = []
        self._initialize_sites(initial_height)
        self._build_neighbor_lists()
        self._site_ids = {id(site) for site in self.sites}

    def _initialize_sites(self, initial_height: int) -> None:
        """Initialize all lattice sites with unique IDs."""
        site_id = 0
        for iy in range(self.ny):
            for ix in range(self.nx):
                site = Site(
                    position=(ix, iy), label=self.label, height=initial_height, site_id=site_id
                )
                self.sites.append(site)
                site_id += 1

    def _build_neighbor_lists(self) -> None:
        """Build nearest neighbor lists for all sites (square lattice)."""
        for site in self.sites:
            x, y = site.position
            for dx, dy in NEIGHBOR_OFFSETS:
                nx, ny = x + dx, y + dy

                if self.periodic:
                    nx = nx % self.nx
                    ny = ny % self.ny
                elif not (0 <= nx < self.nx and 0 <= ny < self.ny):
                    continue

                site.neighbors.append(self.sites[self._get_index(nx, ny)])

    def _get_index(self, x: int, y: int) -> int:
        """Convert 2D coordinates to 1D index."""
        return x + y * self.nx

    def get_site(self, x: int, y: int) -> Site:
        """Get site at given coordinates."""
        return self.sites[self._get_index(x, y)]

    def get_site_by_index(self, idx: int) -> Site:
        """Get site by 1D index."""
        return self.sites[idx]

    def contains(self, site: Site | None) -> bool:
        """Check whether a site belongs to this lattice."""
        return site is not None and id(site) in self._site_ids

    def register_species(self, label: str) -> None:
        """
        Declare a species that can adsorb on this lattice.

        Args:
            label: Species label.
        """
        if label == self.label:
            raise ValueError(f"Species label {label!r} collides with the lattice label")
        self.species.add(label)

    def is_multi_species(self) -> bool:
        """Check if more than one species can adsorb."""
        return len(self.species) > 1

    def is_vacant(self, site: Site) -> bool:
        """Check if no adsorbing species occupies the site."""
        return site.label not in self.species

    def record_species(self, site: Site, label: str) -> None:
        """
        Occupy a site with a species and update the coverage bookkeeping.

        Args:
            site: Site to occupy.
            label: Species label.
        """
        if site.label in self.species:
            self._coverage[site.label] -= 1
        site.label = label
        self._coverage[label] += 1

    def vacate(self, site: Site) -> None:
        """
        Return a site to the bare lattice label.

        Args:
            site: Site to clear.
        """
        if site.label in self.species:
            self._coverage[site.label] -= 1
        site.label = self.label

    def get_height_profile(self) -> npt.NDArray[np.int64]:
        """
        Get surface height profile.

        Returns:
            2D array of heights indexed by [x, y].
        """
        heights = np.zeros((self.nx, self.ny), dtype=np.int64)
        for site in self.sites:
            x, y = site.position
            heights[x, y] = site.height
        return heights

    def get_coverage(self) -> dict[str, float]:
        """
        Get the fraction of sites carrying each label.

        Returns:
            Dictionary mapping labels to coverage fractions.
        """
        labels = np.array([site.label for site in self.sites])
        values, counts = np.unique(labels, return_counts=True)
        return {str(v): float(c) / self.n_sites for v, c in zip(values, counts)}

    def get_species_counts(self) -> dict[str, int]:
        """Get the number of sites recorded for each species."""
        return {label: self._coverage[label] for label in sorted(self.species)}

    def __iter__(self) -> Iterator[Site]:
        """Iterate over sites."""
        return iter(self.sites)

    def __len__(self) -> int:
        """Number of sites."""
        return self.n_sites

    def __repr__(self) -> str:
        """String representation."""
        return f"Lattice(size={self.size}, label={self.label!r}, species={sorted(self.species)})"
