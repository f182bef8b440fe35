"""
Applicability rules deciding whether a process may execute at a site.

Rules are pure predicates: they read the site and its neighborhood and never
mutate the lattice.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from ..kmc.geometry import footprint, has_same_height

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..kmc.lattice import Site
    from .adsorption import Adsorption


class RuleKind(Enum):
    """Available applicability rules."""

    UNCONDITIONAL = "unconditional"
    BASIC = "basic"
    MULTI_SPECIES_SINGLE_SITE = "multi_species_single_site"
    MULTI_SPECIES_MULTI_SITE = "multi_species_multi_site"


def unconditional_rule(process: Adsorption, site: Site) -> bool:
    """Accept the process without any check."""
    return True


def basic_rule(process: Adsorption, site: Site) -> bool:
    """Accept if the site carries the bare lattice label."""
    return site.is_vacant(process.lattice.label)


def multi_species_single_site_rule(process: Adsorption, site: Site) -> bool:
    """Accept if no adsorbing species occupies the site."""
    return process.lattice.is_vacant(site)


def multi_species_multi_site_rule(process: Adsorption, site: Site) -> bool:
    """
    Accept if the whole footprint is vacant and flat.

    The footprint is the target site plus its first neighbors, as enumerated by
    ``geometry.footprint``. A site with too few neighbors is rejected.
    """
    sites = footprint(site, process.num_sites)
    if sites is None:
        return False
    lattice = process.lattice
    return all(lattice.is_vacant(s) for s in sites) and has_same_height(sites)


RULES: dict[RuleKind, Callable[[Adsorption, Site], bool]] = {
    RuleKind.UNCONDITIONAL: unconditional_rule,
    RuleKind.BASIC: basic_rule,
    RuleKind.MULTI_SPECIES_SINGLE_SITE: multi_species_single_site_rule,
    RuleKind.MULTI_SPECIES_MULTI_SITE: multi_species_multi_site_rule,
}
