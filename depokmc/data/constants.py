"""
Physical constants used by the rate laws.

Values come from scipy.constants (CODATA) so that flux and Arrhenius rates
share one consistent source.
"""

from __future__ import annotations

from dataclasses import dataclass

from scipy import constants


@dataclass(frozen=True)
class PhysicalConstants:
    """
    Physical constants in SI units unless stated otherwise.

    Attributes:
        k_boltzmann_j: Boltzmann constant (J/K).
        k_boltzmann_ev: Boltzmann constant (eV/K).
        avogadro: Avogadro constant (1/mol).
    """

    k_boltzmann_j: float = constants.k
    k_boltzmann_ev: float = constants.physical_constants["Boltzmann constant in eV/K"][0]
    avogadro: float = constants.N_A


def get_physical_constants() -> PhysicalConstants:
    """
    Get the default physical constants.

    Returns:
        PhysicalConstants instance.
    """
    return PhysicalConstants()
