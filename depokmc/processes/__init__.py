"""Process strategies for deposition KMC: rate laws, rules and executions."""

from .adsorption import Adsorption
from .base import Process, StrategySelection, select_strategies
from .exceptions import ConfigurationError, PhysicalValueError
from .execution import ExecutionKind
from .rate_laws import ArrheniusRate, ConstantRate, RateLawKind, SimpleRate, build_rate_law
from .registry import ProcessRegistry
from .rules import RuleKind

__all__ = [
    "Process",
    "Adsorption",
    "ProcessRegistry",
    "StrategySelection",
    "select_strategies",
    "RateLawKind",
    "RuleKind",
    "ExecutionKind",
    "ConstantRate",
    "SimpleRate",
    "ArrheniusRate",
    "build_rate_law",
    "ConfigurationError",
    "PhysicalValueError",
]
