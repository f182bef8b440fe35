"""
Rate laws for deposition processes.

A process definition starts with a rate-law keyword followed by the law's
parameters, e.g. ``["arrhenius", v0, E, Em, n]``. The keyword selects one of a
fixed set of laws; the remaining tokens are validated into an immutable
parameter model.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..data.constants import PhysicalConstants, get_physical_constants
from .exceptions import ConfigurationError, PhysicalValueError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..settings.config import KMCConfig

logger = logging.getLogger(__name__)


class RateLawKind(Enum):
    """Keywords selecting a rate law."""

    CONSTANT = "constant"
    SIMPLE = "simple"
    ARRHENIUS = "arrhenius"


class RateParameters(BaseModel):
    """Base class for validated rate-law parameters."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class ConstantParameters(RateParameters):
    """Parameters of a constant rate, e.g. ``constant 1.0`` [ML/s]."""

    rate: float


class SimpleParameters(RateParameters):
    """Parameters of the sticking-coefficient (kinetic theory flux) rate."""

    sticking_coefficient: float = Field(ge=0, le=1)
    molar_fraction: float = Field(ge=0, le=1)
    total_site_concentration: float = Field(gt=0, description="sites/m^2")
    molecular_weight: float = Field(gt=0, description="kg/mol")


class ArrheniusParameters(RateParameters):
    """Parameters of the Arrhenius-type rate v0 * A * exp(-n*E/kT)."""

    frequency: float
    energy: float = Field(description="eV")
    reference_energy: float = Field(description="eV")
    exponent: float


class RateLaw(ABC):
    """
    Base class for rate laws.

    Attributes:
        params: Validated parameters.
        conditions: Ambient conditions (temperature, pressure, kB).
        constants: Physical constants.
    """

    kind: ClassVar[RateLawKind]
    parameters: ClassVar[type[RateParameters]]

    def __init__(
        self,
        params: RateParameters,
        conditions: KMCConfig,
        constants: PhysicalConstants | None = None,
    ) -> None:
        self.params = params
        self.conditions = conditions
        self.constants = constants if constants is not None else get_physical_constants()

    @abstractmethod
    def calculate_rate(self) -> float:
        """Calculate the rate for the current conditions."""

    def __repr__(self) -> str:
        """String representation."""
        fields = ", ".join(f"{k}={v}" for k, v in self.params.model_dump().items())
        return f"{type(self).__name__}({fields})"


class ConstantRate(RateLaw):
    """Fixed rate given by the user."""

    kind = RateLawKind.CONSTANT
    parameters = ConstantParameters

    def calculate_rate(self) -> float:
        return self.params.rate


class SimpleRate(RateLaw):
    """
    Sticking-coefficient rate from the kinetic theory flux.

    The rate per site is: s0 * f * P / (Ctot * sqrt(2 * pi * m * kB * T))
    with m = MW / NA the mass of one molecule.
    """

    kind = RateLawKind.SIMPLE
    parameters = SimpleParameters

    def flux(self) -> float:
        """
        Impingement flux of the gas on the surface.

        Returns:
            Flux in molecules / (m^2 s).
        """
        mass = self.params.molecular_weight / self.constants.avogadro
        return self.conditions.pressure / math.sqrt(
            2.0 * math.pi * mass * self.constants.k_boltzmann_j * self.conditions.temperature
        )

    def calculate_rate(self) -> float:
        p = self.params
        return p.sticking_coefficient * p.molar_fraction * self.flux() / p.total_site_concentration


class ArrheniusRate(RateLaw):
    """
    Arrhenius-type rate.

    The rate is given by: v0 * A * exp(-n * E / (kB * T)), A = exp((E - Em) / (kB * T))
    """

    kind = RateLawKind.ARRHENIUS
    parameters = ArrheniusParameters

    def calculate_rate(self) -> float:
        p = self.params
        kt = self.conditions.k_boltzmann * self.conditions.temperature
        prefactor = math.exp((p.energy - p.reference_energy) / kt)
        return p.frequency * prefactor * math.exp(-p.exponent * p.energy / kt)


RATE_LAWS: dict[RateLawKind, type[RateLaw]] = {
    law.kind: law for law in (ConstantRate, SimpleRate, ArrheniusRate)
}


def parse_rate_law_kind(keyword: str) -> RateLawKind:
    """
    Resolve a rate-law keyword.

    Args:
        keyword: Keyword token (case insensitive).

    Returns:
        Matching RateLawKind.

    Raises:
        ConfigurationError: If the keyword is unknown.
    """
    try:
        return RateLawKind(str(keyword).strip().lower())
    except ValueError:
        valid = [k.value for k in RateLawKind]
        raise ConfigurationError(
            f"Unknown rate law {keyword!r}. Must be one of {valid}"
        ) from None


def parse_parameters(kind: RateLawKind, tokens: Sequence[str | float]) -> RateParameters:
    """
    Validate the tokens following a rate-law keyword.

    Args:
        kind: Selected rate law.
        tokens: Parameter tokens in declaration order.

    Returns:
        Immutable parameter model.

    Raises:
        ConfigurationError: On a wrong token count or an invalid value.
    """
    model = RATE_LAWS[kind].parameters
    names = list(model.model_fields)
    if len(tokens) != len(names):
        raise ConfigurationError(
            f"Rate law '{kind.value}' expects {len(names)} parameters {names}, "
            f"got {len(tokens)}: {list(tokens)}"
        )

    try:
        return model.model_validate(dict(zip(names, tokens)))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid parameters for rate law '{kind.value}': {problems}"
        ) from exc


def build_rate_law(
    tokens: Sequence[str | float],
    conditions: KMCConfig,
    constants: PhysicalConstants | None = None,
) -> RateLaw:
    """
    Build a rate law from a keyword-first token list.

    Args:
        tokens: ``[keyword, *parameters]``.
        conditions: Ambient conditions.
        constants: Physical constants (defaults to CODATA values).

    Returns:
        Configured rate law.
    """
    if not tokens:
        raise ConfigurationError("Missing rate law keyword")

    kind = parse_rate_law_kind(str(tokens[0]))
    params = parse_parameters(kind, tokens[1:])
    return RATE_LAWS[kind](params, conditions, constants)


def evaluate_rate(law: RateLaw, process: str) -> float:
    """
    Compute a rate and reject values that are negative or not finite.

    Args:
        law: Rate law to evaluate.
        process: Name of the owning process, for the error message.

    Returns:
        The rate.

    Raises:
        PhysicalValueError: If the rate overflows, is negative, NaN or infinite.
    """
    try:
        value = law.calculate_rate()
    except OverflowError:
        value = math.inf

    if not math.isfinite(value) or value < 0.0:
        message = (
            f"Process {process} produced rate {value!r} from {law!r} "
            f"at T={law.conditions.temperature} K, P={law.conditions.pressure} Pa"
        )
        logger.error(message)
        raise PhysicalValueError(message)
    return value
