"""
Abstract process contract.

Every process kind is built with no arguments, configured once through
``init`` and then queried by the scheduler through ``rules``,
``get_probability`` and ``perform``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .execution import ExecutionKind
from .rate_laws import RateLawKind
from .rules import RuleKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..kmc.lattice import Lattice, Site
    from ..settings.config import KMCConfig


@dataclass(frozen=True)
class StrategySelection:
    """
    Strategy variants chosen for a process when it is initialized.

    Attributes:
        rate_law: Rate law used by ``get_probability``.
        rule: Applicability rule used by ``rules``.
        execution: Execution strategy used by ``perform``.
    """

    rate_law: RateLawKind
    rule: RuleKind
    execution: ExecutionKind


def select_strategies(
    rate_law: RateLawKind,
    num_sites: int,
    multi_species: bool,
    unconditional: bool = False,
) -> StrategySelection:
    """
    Pair rule and execution variants for a process configuration.

    Args:
        rate_law: Selected rate law.
        num_sites: Number of sites the species occupies.
        multi_species: Whether more than one species adsorbs in the simulation.
        unconditional: Replace the rule with the unconditional one.

    Returns:
        StrategySelection for the process.
    """
    multi_site = num_sites > 1
    if multi_species:
        if multi_site:
            rule = RuleKind.MULTI_SPECIES_MULTI_SITE
            execution = ExecutionKind.MULTI_SPECIES_MULTI_SITE
        else:
            rule = RuleKind.MULTI_SPECIES_SINGLE_SITE
            execution = ExecutionKind.MULTI_SPECIES_SINGLE_SITE
    elif multi_site:
        # A footprint larger than one site always needs the vacancy and height check
        rule = RuleKind.MULTI_SPECIES_MULTI_SITE
        execution = ExecutionKind.SINGLE_SPECIES_MULTI_SITE
    else:
        rule = RuleKind.BASIC
        execution = ExecutionKind.SINGLE_SPECIES_SINGLE_SITE

    if unconditional:
        rule = RuleKind.UNCONDITIONAL

    return StrategySelection(rate_law=rate_law, rule=rule, execution=execution)


class Process(ABC):
    """
    Base class for all process kinds.

    Attributes:
        name: Process name used by the registry.
        lattice: Lattice the process acts on.
        conditions: Ambient conditions; ``settings.kmc`` when unset.
    """

    name: str = "Process"

    def __init__(self) -> None:
        self.lattice: Lattice | None = None
        self.conditions: KMCConfig | None = None
        self._target_site: Site | None = None

    def set_lattice(self, lattice: Lattice) -> None:
        """Attach the lattice the process acts on."""
        self.lattice = lattice

    def set_conditions(self, conditions: KMCConfig) -> None:
        """Set the ambient conditions used for rate evaluation."""
        self.conditions = conditions

    def set_target_site(self, site: Site | None) -> None:
        """Park the site chosen by the scheduler before ``perform``."""
        self._target_site = site

    def get_target_site(self) -> Site | None:
        """Get the parked site."""
        return self._target_site

    @abstractmethod
    def init(self, params: Sequence[str | float]) -> None:
        """Configure the process from a keyword-first token list."""

    @abstractmethod
    def rules(self, site: Site | None) -> bool:
        """Check whether the process can execute at a site."""

    @abstractmethod
    def perform(self, site: Site) -> list[Site]:
        """Execute the process at a site and return the sites it changed."""

    @abstractmethod
    def get_probability(self) -> float:
        """Get the rate of the process."""

    def __repr__(self) -> str:
        """String representation."""
        return f"{type(self).__name__}(name={self.name!r})"
