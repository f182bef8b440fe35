"""
depokmc: process evaluation core for kinetic Monte Carlo simulation of surface
deposition.

This package provides the lattice model, rate laws, applicability rules and
execution strategies that a KMC scheduler queries for every candidate site.
"""

__version__ = "0.1.0"
