"""
Test suite for the surface lattice and geometric helpers.

Key validations:
- Neighbor lists follow the fixed +x, -x, +y, -y order
- Periodic and open boundaries
- Footprint enumeration, height equality and step classification
- Species bookkeeping
"""

from __future__ import annotations

import numpy as np
import pytest

from depokmc.kmc import (
    Lattice,
    StepPolicy,
    count_neighbors,
    footprint,
    has_same_height,
    is_in_higher_step,
    is_in_lower_step,
)


@pytest.fixture
def lattice():
    return Lattice(size=(4, 4), label="Cu")


def test_neighbor_order_periodic(lattice):
    """Neighbors are stored as +x, -x, +y, -y with wrap-around."""
    site = lattice.get_site(0, 0)
    positions = [n.position for n in site.neighbors]
    assert positions == [(1, 0), (3, 0), (0, 1), (0, 3)]


def test_open_boundaries_drop_missing_neighbors():
    """Corner sites of an open lattice have two neighbors."""
    lattice = Lattice(size=(3, 3), periodic=False)
    corner = lattice.get_site(2, 0)
    assert [n.position for n in corner.neighbors] == [(1, 0), (2, 1)]
    assert len(lattice.get_site(1, 1).neighbors) == 4


def test_invalid_size():
    with pytest.raises(ValueError):
        Lattice(size=(0, 3))


def test_contains(lattice):
    """Only sites of this lattice are contained."""
    other = Lattice(size=(4, 4))
    assert lattice.contains(lattice.get_site(1, 2))
    assert not lattice.contains(other.get_site(1, 2))
    assert not lattice.contains(None)


def test_species_registration(lattice):
    assert not lattice.is_multi_species()
    lattice.register_species("H")
    assert not lattice.is_multi_species()
    lattice.register_species("O")
    assert lattice.is_multi_species()

    with pytest.raises(ValueError):
        lattice.register_species("Cu")


def test_record_and_vacate_species():
    """Coverage bookkeeping follows occupation and vacancy."""
    lattice = Lattice(size=(3, 3), species=("H", "O"))
    site = lattice.get_site(1, 1)

    lattice.record_species(site, "H")
    assert site.label == "H"
    assert not lattice.is_vacant(site)
    assert lattice.get_species_counts() == {"H": 1, "O": 0}

    lattice.record_species(site, "O")
    assert lattice.get_species_counts() == {"H": 0, "O": 1}

    lattice.vacate(site)
    assert site.label == "Cu"
    assert lattice.is_vacant(site)
    assert lattice.get_species_counts() == {"H": 0, "O": 0}


def test_coverage_and_height_profile(lattice):
    lattice.get_site(1, 0).label = "H"
    lattice.get_site(2, 3).height = 2

    coverage = lattice.get_coverage()
    assert coverage["H"] == pytest.approx(1 / 16)
    assert coverage["Cu"] == pytest.approx(15 / 16)

    heights = lattice.get_height_profile()
    assert heights.shape == (4, 4)
    assert heights[2, 3] == 2
    assert int(np.sum(heights)) == 2


def test_count_neighbors(lattice):
    site = lattice.get_site(1, 1)
    site.neighbors[0].label = "H"
    site.neighbors[3].label = "H"
    assert count_neighbors(site, lambda n: n.label == "H") == 2
    assert count_neighbors(site, lambda n: n.label == "Cu") == 2


def test_footprint_uses_neighbor_order(lattice):
    site = lattice.get_site(1, 1)
    assert footprint(site, 1) == [site]
    assert [s.position for s in footprint(site, 3)] == [(1, 1), (2, 1), (0, 1)]


def test_footprint_too_large():
    """Sites with fewer neighbors than the footprint needs have no footprint."""
    lattice = Lattice(size=(3, 3), periodic=False)
    assert footprint(lattice.get_site(0, 0), 4) is None
    assert footprint(lattice.get_site(1, 1), 5) is not None
    assert footprint(lattice.get_site(1, 1), 6) is None


def test_footprint_rejects_repeated_neighbors():
    """On a 2-wide periodic lattice +x and -x are the same site."""
    lattice = Lattice(size=(2, 4))
    assert footprint(lattice.get_site(0, 0), 2) is not None
    assert footprint(lattice.get_site(0, 0), 3) is None


def test_has_same_height(lattice):
    sites = footprint(lattice.get_site(2, 2), 3)
    assert has_same_height(sites)
    sites[2].height = 1
    assert not has_same_height(sites)


def test_step_classification(lattice):
    """A site next to a higher column is in the lower step, and vice versa."""
    low = lattice.get_site(1, 1)
    high = lattice.get_site(2, 1)
    high.height = 1
    policy = StepPolicy()

    assert is_in_lower_step(low, policy)
    assert not is_in_higher_step(low, policy)
    assert is_in_higher_step(high, policy)
    assert not is_in_lower_step(high, policy)

    flat = lattice.get_site(3, 3)
    assert not is_in_lower_step(flat, policy)
    assert not is_in_higher_step(flat, policy)


def test_step_threshold(lattice):
    """Height differences below the threshold are not steps."""
    low = lattice.get_site(1, 1)
    lattice.get_site(2, 1).height = 1

    policy = StepPolicy(threshold=2)
    assert not is_in_lower_step(low, policy)

    lattice.get_site(2, 1).height = 2
    assert is_in_lower_step(low, policy)

    with pytest.raises(ValueError):
        StepPolicy(threshold=0)
