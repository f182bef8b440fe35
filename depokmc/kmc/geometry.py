"""
Geometric helpers shared by process rules and executions.

Footprint enumeration lives here so that a multi-site rule and the matching
execution always look at the same sites.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from .lattice import Site


@dataclass(frozen=True)
class StepPolicy:
    """
    Height comparison used to classify step edges.

    Attributes:
        threshold: Minimum height difference to a neighbor that counts as a step.
    """

    threshold: int = 1

    def __post_init__(self) -> None:
        if self.threshold < 1:
            raise ValueError(f"Step threshold must be >= 1, got {self.threshold}")


def count_neighbors(site: Site, predicate: Callable[[Site], bool]) -> int:
    """
    Count the neighbors of a site satisfying a predicate.

    Args:
        site: Central site.
        predicate: Condition evaluated on each neighbor.

    Returns:
        Number of matching neighbors.
    """
    return sum(1 for neighbor in site.neighbors if predicate(neighbor))


def footprint(site: Site, num_sites: int) -> list[Site] | None:
    """
    Enumerate the sites a species of the given size would cover at a site.

    The footprint is the site itself followed by the first ``num_sites - 1``
    neighbors in the lattice's neighbor order.

    Args:
        site: Target site.
        num_sites: Number of sites the species occupies.

    Returns:
        List of sites, or None if the site has too few distinct neighbors.
    """
    extra = num_sites - 1
    if extra > len(site.neighbors):
        return None
    sites = [site, *site.neighbors[:extra]]
    # Small periodic lattices can list the same neighbor twice
    if len({id(s) for s in sites}) < num_sites:
        return None
    return sites


def has_same_height(sites: Sequence[Site]) -> bool:
    """Check that all sites share the same height."""
    return len({s.height for s in sites}) <= 1


def is_in_lower_step(site: Site, policy: StepPolicy) -> bool:
    """
    Check if a site sits at the foot of an up-step.

    True when at least one neighbor is ``policy.threshold`` or more levels higher.
    """
    return any(n.height - site.height >= policy.threshold for n in site.neighbors)


def is_in_higher_step(site: Site, policy: StepPolicy) -> bool:
    """
    Check if a site sits on the upper terrace of a down-step.

    True when at least one neighbor is ``policy.threshold`` or more levels lower.
    """
    return any(site.height - n.height >= policy.threshold for n in site.neighbors)
