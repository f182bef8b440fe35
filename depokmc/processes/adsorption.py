"""
Adsorption process.

The rate law, applicability rule and execution strategy are chosen once in
``init``; afterwards every call dispatches straight to the selected variant.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..kmc.geometry import StepPolicy, count_neighbors, is_in_higher_step, is_in_lower_step
from ..settings import settings
from .base import Process, StrategySelection, select_strategies
from .exceptions import ConfigurationError
from .execution import EXECUTIONS
from .rate_laws import RATE_LAWS, RateLaw, build_rate_law, evaluate_rate
from .rules import RULES

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ..kmc.lattice import Site
    from ..settings.config import KMCConfig

logger = logging.getLogger(__name__)


class Adsorption(Process):
    """
    Adsorption of a species from the gas phase onto the surface.

    Usage::

        process = Adsorption()
        process.set_lattice(lattice)
        process.set_adsorbed("H")
        process.set_num_sites(1)
        process.init(["constant", "1.0"])

    All species that adsorb in the simulation must be declared on the lattice
    before ``init``, since the single- or multi-species variants are chosen
    from the lattice's species set.

    Attributes:
        adsorbed: Label of the adsorbed species.
        num_sites: Number of sites the species occupies.
        unconditional: Accept the process without any site check.
        selection: Strategies chosen in ``init``.
        rate_law: Configured rate law.
    """

    name = "Adsorption"

    def __init__(self) -> None:
        super().__init__()
        self.adsorbed: str | None = None
        self.num_sites: int = 1
        self.unconditional = False
        self.selection: StrategySelection | None = None
        self.rate_law: RateLaw | None = None
        self.step_policy = StepPolicy()
        self._rate = 0.0
        self._rule: Callable[[Adsorption, Site], bool] | None = None
        self._execute: Callable[[Adsorption, Site], list[Site]] | None = None

    def set_adsorbed(self, adsorbed: str) -> None:
        """Set the label of the adsorbed species."""
        self.adsorbed = adsorbed

    def set_num_sites(self, num_sites: int) -> None:
        """Set the number of sites the adsorbed species occupies."""
        self.num_sites = num_sites

    def get_num_sites(self) -> int:
        """Get the number of sites the adsorbed species occupies."""
        return self.num_sites

    def set_unconditional(self, unconditional: bool = True) -> None:
        """Skip the site checks of ``rules``."""
        self.unconditional = unconditional

    @property
    def label(self) -> str:
        """Process label used in log and error messages."""
        return f"{self.name}[{self.adsorbed}]"

    def init(self, params: Sequence[str | float]) -> None:
        """
        Configure the process.

        Args:
            params: Rate-law keyword followed by its parameters, e.g.
                ``["constant", 2.5]``,
                ``["simple", s0, f, Ctot, MW]`` or
                ``["arrhenius", v0, E, Em, n]``.

        Raises:
            ConfigurationError: If the process definition is invalid.
            PhysicalValueError: If the resulting rate is negative or not finite.
        """
        try:
            self._check_definition()
            conditions = self.conditions if self.conditions is not None else settings.kmc
            self.rate_law = build_rate_law(params, conditions)
        except ConfigurationError as exc:
            logger.error(f"Cannot initialize {self.label}: {exc}")
            raise

        self._rate = evaluate_rate(self.rate_law, self.label)
        self.conditions = conditions
        self.step_policy = StepPolicy(threshold=conditions.step_threshold)
        self.lattice.register_species(self.adsorbed)

        self.selection = select_strategies(
            rate_law=self.rate_law.kind,
            num_sites=self.num_sites,
            multi_species=self.lattice.is_multi_species(),
            unconditional=self.unconditional,
        )
        self._rule = RULES[self.selection.rule]
        self._execute = EXECUTIONS[self.selection.execution]

        logger.info(
            f"Initialized {self.label}: num_sites={self.num_sites}, "
            f"rate_law={self.selection.rate_law.value}, rule={self.selection.rule.value}, "
            f"execution={self.selection.execution.value}, rate={self._rate:.6e}"
        )

    def _check_definition(self) -> None:
        if self.selection is not None:
            raise ConfigurationError(f"{self.label} is already initialized")
        if not self.adsorbed:
            raise ConfigurationError("Adsorbed species label is not set")
        if isinstance(self.num_sites, bool) or not isinstance(self.num_sites, int):
            raise ConfigurationError(f"Number of sites must be an integer, got {self.num_sites!r}")
        if self.num_sites < 1:
            raise ConfigurationError(f"Number of sites must be >= 1, got {self.num_sites}")
        if self.lattice is None:
            raise ConfigurationError(f"{self.label} has no lattice")
        if self.adsorbed == self.lattice.label:
            raise ConfigurationError(
                f"Adsorbed species {self.adsorbed!r} collides with the lattice label"
            )

    def update_conditions(self, conditions: KMCConfig) -> None:
        """
        Recompute the rate for new ambient conditions.

        The process keeps its previous conditions, rate and step policy when
        the new rate is rejected.

        Args:
            conditions: New conditions (e.g. after a temperature ramp step).

        Raises:
            PhysicalValueError: If the rate under the new conditions is
                negative or not finite.
        """
        if self.rate_law is None:
            raise RuntimeError(f"{self.label} is not initialized")
        previous = self.rate_law
        law = RATE_LAWS[previous.kind](previous.params, conditions, previous.constants)
        rate = evaluate_rate(law, self.label)

        self.rate_law = law
        self.conditions = conditions
        self._rate = rate
        self.step_policy = StepPolicy(threshold=conditions.step_threshold)
        logger.debug(
            f"{self.label}: rate updated to {self._rate:.6e} at T={conditions.temperature} K"
        )

    def rules(self, site: Site | None) -> bool:
        """
        Check whether the species can adsorb at a site.

        Returns False for sites outside the lattice.
        """
        if self._rule is None:
            raise RuntimeError(f"{self.label} is not initialized")
        if not self.lattice.contains(site):
            return False
        return self._rule(self, site)

    def perform(self, site: Site) -> list[Site]:
        """
        Adsorb the species at a site.

        ``rules(site)`` must have returned True in the current step.

        Returns:
            Sites whose occupancy changed.
        """
        assert self._rule is not None and self._rule(self, site), (
            f"{self.label} performed at {site.position} where its rule does not hold"
        )
        touched = self._execute(self, site)
        logger.debug(f"{self.label} at {[s.position for s in touched]}")
        return touched

    def get_probability(self) -> float:
        """Get the adsorption rate."""
        return self._rate

    def count_vacant_neighbors(self, site: Site) -> int:
        """Number of neighbors no adsorbing species occupies."""
        return count_neighbors(site, self.lattice.is_vacant)

    def is_in_lower_step(self, site: Site) -> bool:
        """Check if a site is at the foot of an up-step."""
        return is_in_lower_step(site, self.step_policy)

    def is_in_higher_step(self, site: Site) -> bool:
        """Check if a site is on the upper terrace of a down-step."""
        return is_in_higher_step(site, self.step_policy)
