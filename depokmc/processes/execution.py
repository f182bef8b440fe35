"""
Execution strategies applying a process to the lattice.

Each strategy occupies the target site (and, for species larger than one
site, the rest of its footprint) with the adsorbed species through
``Lattice.record_species``, so coverage counts stay in step with the labels.
The single- and multi-species variants differ only in the rule they are
paired with. Every strategy returns the sites it touched.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..kmc.geometry import footprint

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..kmc.lattice import Site
    from .adsorption import Adsorption


class ExecutionKind(Enum):
    """Available execution strategies."""

    SINGLE_SPECIES_SINGLE_SITE = "single_species_single_site"
    SINGLE_SPECIES_MULTI_SITE = "single_species_multi_site"
    MULTI_SPECIES_SINGLE_SITE = "multi_species_single_site"
    MULTI_SPECIES_MULTI_SITE = "multi_species_multi_site"


def _footprint_of(process: Adsorption, site: Site) -> list[Site]:
    sites = footprint(site, process.num_sites)
    # Guaranteed by the rule that accepted the site
    assert sites is not None, f"Site {site.position} cannot host {process.num_sites} sites"
    return sites


def single_species_single_site(process: Adsorption, site: Site) -> list[Site]:
    """Occupy the target site."""
    process.lattice.record_species(site, process.adsorbed)
    return [site]


def single_species_multi_site(process: Adsorption, site: Site) -> list[Site]:
    """Occupy the target site and the rest of its footprint."""
    sites = _footprint_of(process, site)
    for s in sites:
        process.lattice.record_species(s, process.adsorbed)
    return sites


def multi_species_single_site(process: Adsorption, site: Site) -> list[Site]:
    """Occupy the target site and record the species on the lattice."""
    process.lattice.record_species(site, process.adsorbed)
    return [site]


def multi_species_multi_site(process: Adsorption, site: Site) -> list[Site]:
    """Occupy the footprint and record the species on the lattice."""
    sites = _footprint_of(process, site)
    for s in sites:
        process.lattice.record_species(s, process.adsorbed)
    return sites


EXECUTIONS: dict[ExecutionKind, Callable[[Adsorption, Site], list[Site]]] = {
    ExecutionKind.SINGLE_SPECIES_SINGLE_SITE: single_species_single_site,
    ExecutionKind.SINGLE_SPECIES_MULTI_SITE: single_species_multi_site,
    ExecutionKind.MULTI_SPECIES_SINGLE_SITE: multi_species_single_site,
    ExecutionKind.MULTI_SPECIES_MULTI_SITE: multi_species_multi_site,
}
