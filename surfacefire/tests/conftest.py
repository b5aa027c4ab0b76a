"""Shared pytest fixtures for the surfacefire test suite.

This module provides reusable fixtures for testing surfacefire components,
including run configurations, fuel complexes and quantity registries.
"""

import pytest
import numpy as np


# ============================================================================
# Run Configuration Fixtures
# ============================================================================

@pytest.fixture
def fm1_params():
    """Provide the short grass reference run.

    Returns:
        SurfaceFireParams: Fuel model 1, 8% 1-h moisture, 5 mi/h midflame wind
        blowing upslope on a 20% slope.
    """
    from surfacefire.utilities.data_classes import (
        FuelSelection, MoistureParams, SiteParams, SurfaceFireParams, WindParams
    )
    from surfacefire.utilities.fire_util import MoistureInput, WindDirectionReference, WindHeight
    return SurfaceFireParams(
        fuel=FuelSelection(primary="1"),
        moisture=MoistureParams(
            input_type=MoistureInput.SIZE_CLASS,
            dead_1h=0.08,
            dead_10h=0.09,
            dead_100h=0.10,
            dead_1000h=0.12,
            live_herb=1.0,
            live_wood=1.0
        ),
        wind=WindParams(
            speed_mph=5.0,
            height=WindHeight.MIDFLAME,
            direction_ref=WindDirectionReference.UPSLOPE
        ),
        site=SiteParams(slope=0.2)
    )


@pytest.fixture
def fm2_params(fm1_params):
    """Provide a timber grass run with live herbaceous fuel.

    Returns:
        SurfaceFireParams: Fuel model 2 with 6/7/8% dead and 60/90% live moisture.
    """
    from surfacefire.utilities.data_classes import FuelSelection, MoistureParams
    fm1_params.fuel = FuelSelection(primary="2")
    fm1_params.moisture = MoistureParams(
        dead_1h=0.06,
        dead_10h=0.07,
        dead_100h=0.08,
        dead_1000h=0.10,
        live_herb=0.6,
        live_wood=0.9
    )
    return fm1_params


@pytest.fixture
def blend_params(fm1_params):
    """Provide a short grass / chaparral mixture at 60% primary coverage.

    Returns:
        SurfaceFireParams: Two fuel run with area weighted blending.
    """
    from surfacefire.utilities.data_classes import BlendParams
    fm1_params.fuel.secondary = "4"
    fm1_params.blend = BlendParams(coverage=0.6)
    return fm1_params


# ============================================================================
# Fuel Model Fixtures
# ============================================================================

@pytest.fixture
def grass_fuel():
    """Provide Anderson fuel model 1 (short grass)."""
    from surfacefire.models.fuel_models import StandardFuelModels
    return StandardFuelModels.get(1)


@pytest.fixture
def brush_fuel():
    """Provide Anderson fuel model 4 (chaparral)."""
    from surfacefire.models.fuel_models import StandardFuelModels
    return StandardFuelModels.get(4)


@pytest.fixture
def dynamic_grass_fuel():
    """Provide Scott & Burgan GR2 (dynamic load transfer)."""
    from surfacefire.models.fuel_models import StandardFuelModels
    return StandardFuelModels.get("GR2")


@pytest.fixture
def grass_bed(grass_fuel):
    """Provide the fuel bed intermediates of fuel model 1."""
    from surfacefire.models.fire_physics import calc_fuel_bed
    return calc_fuel_bed(depth=grass_fuel.depth, **grass_fuel.arrays())


# ============================================================================
# Registry Fixtures
# ============================================================================

@pytest.fixture
def registry():
    """Provide a fresh registry of every calculator quantity."""
    from surfacefire.calculator.quantities import build_registry
    return build_registry()


@pytest.fixture
def small_registry():
    """Provide a two-quantity registry owned by two steps.

    ``a`` is owned by ``first`` and ``b`` by ``second``.
    """
    from surfacefire.base_classes.quantity import Quantity, QuantityRegistry
    return QuantityRegistry([
        Quantity("a", "ft", "first"),
        Quantity("b", "ft/min", "second", display_unit="ch/h"),
    ])


# ============================================================================
# Random Number Generator Fixtures
# ============================================================================

@pytest.fixture
def rng():
    """Provide a seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)
