"""
Test suite for rate laws.

Key validations:
- Keyword-first token parsing and parameter validation
- Constant, sticking-coefficient and Arrhenius formulas
- Negative, overflowing and non-finite rates are rejected
"""

from __future__ import annotations

import math

import pytest
from scipy import constants

from depokmc.processes import ConfigurationError, PhysicalValueError
from depokmc.processes.rate_laws import (
    ArrheniusRate,
    ConstantParameters,
    ConstantRate,
    RateLaw,
    RateLawKind,
    SimpleRate,
    build_rate_law,
    evaluate_rate,
    parse_rate_law_kind,
)
from depokmc.settings import KMCConfig

K_B_EV = constants.physical_constants["Boltzmann constant in eV/K"][0]


@pytest.fixture
def conditions():
    return KMCConfig(temperature=300.0, pressure=101325.0, k_boltzmann=K_B_EV)


@pytest.mark.parametrize(
    ("keyword", "kind"),
    [
        ("constant", RateLawKind.CONSTANT),
        ("Simple", RateLawKind.SIMPLE),
        (" ARRHENIUS ", RateLawKind.ARRHENIUS),
    ],
)
def test_parse_keyword(keyword, kind):
    assert parse_rate_law_kind(keyword) is kind


def test_unknown_keyword(conditions):
    with pytest.raises(ConfigurationError, match="Unknown rate law"):
        build_rate_law(["langmuir", "1.0"], conditions)


def test_empty_tokens(conditions):
    with pytest.raises(ConfigurationError, match="Missing rate law keyword"):
        build_rate_law([], conditions)


def test_wrong_parameter_count(conditions):
    with pytest.raises(ConfigurationError, match="expects 4 parameters"):
        build_rate_law(["arrhenius", "1e13", "1.2", "0.3"], conditions)


@pytest.mark.parametrize("token", ["fast", "nan", "inf"])
def test_non_numeric_parameter(conditions, token):
    with pytest.raises(ConfigurationError, match="Invalid parameters"):
        build_rate_law(["constant", token], conditions)


def test_out_of_range_parameter(conditions):
    """Sticking coefficients above one are rejected at parse time."""
    with pytest.raises(ConfigurationError, match="sticking_coefficient"):
        build_rate_law(["simple", "1.5", "1.0", "1e19", "0.028"], conditions)


def test_constant_rate(conditions):
    law = build_rate_law(["constant", "2.5"], conditions)
    assert isinstance(law, ConstantRate)
    assert law.calculate_rate() == 2.5
    assert evaluate_rate(law, "Adsorption[H]") == 2.5


def test_constant_rate_accepts_numbers(conditions):
    law = build_rate_law(["constant", 0.75], conditions)
    assert law.calculate_rate() == 0.75


def test_simple_rate(conditions):
    """Sticking rate follows s0 * f * P / (Ctot * sqrt(2 pi m kB T))."""
    law = build_rate_law(["simple", "0.5", "0.2", "1e19", "0.028"], conditions)
    assert isinstance(law, SimpleRate)

    mass = 0.028 / constants.N_A
    flux = 101325.0 / math.sqrt(2.0 * math.pi * mass * constants.k * 300.0)
    expected = 0.5 * 0.2 * flux / 1e19

    assert law.flux() == pytest.approx(flux, rel=1e-12)
    assert law.calculate_rate() == pytest.approx(expected, rel=1e-12)
    assert law.calculate_rate() > 0.0


def test_simple_rate_zero_pressure():
    """No gas, no adsorption."""
    law = build_rate_law(
        ["simple", "1.0", "1.0", "1e19", "0.028"], KMCConfig(temperature=300.0, pressure=0.0)
    )
    assert law.calculate_rate() == 0.0


def test_arrhenius_rate(conditions):
    """Scenario: v0=1e13, E=1.2 eV, Em=0.3 eV, n=1 at 300 K."""
    law = build_rate_law(["arrhenius", "1e13", "1.2", "0.3", "1"], conditions)
    assert isinstance(law, ArrheniusRate)

    kt = K_B_EV * 300.0
    expected = 1e13 * math.exp((1.2 - 0.3) / kt) * math.exp(-1 * 1.2 / kt)

    assert law.calculate_rate() == pytest.approx(expected, rel=1e-12)


def test_arrhenius_rate_increases_with_temperature():
    tokens = ["arrhenius", "1e13", "1.2", "0.3", "1"]
    cold = build_rate_law(tokens, KMCConfig(temperature=300.0)).calculate_rate()
    hot = build_rate_law(tokens, KMCConfig(temperature=600.0)).calculate_rate()
    assert hot > cold


def test_negative_rate_is_fatal(conditions):
    law = build_rate_law(["constant", "-1.0"], conditions)
    with pytest.raises(PhysicalValueError, match=r"Adsorption\[H\]"):
        evaluate_rate(law, "Adsorption[H]")


def test_negative_frequency_is_fatal(conditions):
    law = build_rate_law(["arrhenius", "-1e13", "1.2", "0.3", "1"], conditions)
    with pytest.raises(PhysicalValueError, match="frequency=-1"):
        evaluate_rate(law, "Adsorption[H]")


def test_overflow_is_fatal(conditions):
    """An exponent beyond float range is reported, not propagated as OverflowError."""
    law = build_rate_law(["arrhenius", "1e13", "0.0", "-100.0", "1"], conditions)
    with pytest.raises(PhysicalValueError, match="inf"):
        evaluate_rate(law, "Adsorption[H]")


def test_repr_lists_parameters(conditions):
    law = build_rate_law(["arrhenius", "1e13", "1.2", "0.3", "1"], conditions)
    text = repr(law)
    assert text.startswith("ArrheniusRate(")
    assert "reference_energy=0.3" in text


def test_rate_law_base_is_abstract(conditions):
    """Only concrete laws with a rate formula can be built."""
    with pytest.raises(TypeError, match="abstract"):
        RateLaw(ConstantParameters(rate=1.0), conditions)

    class Incomplete(RateLaw):
        kind = RateLawKind.CONSTANT
        parameters = ConstantParameters

    with pytest.raises(TypeError, match="calculate_rate"):
        Incomplete(ConstantParameters(rate=1.0), conditions)
