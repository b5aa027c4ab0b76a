"""Midflame wind speed and fuel particle moisture from the configured inputs."""
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from surfacefire.exceptions import ConfigurationError
from surfacefire.models import fire_physics as fp
from surfacefire.models.fuel_models import FuelComplex
from surfacefire.models.moisture_scenarios import MoistureScenarios
from surfacefire.utilities.data_classes import DirectionParams, MoistureParams, WindParams
from surfacefire.utilities.fire_util import (
    LifeCategory, MoistureInput, WafMethod, WindDirectionReference, WindHeight
)

# Dead time-lag size class thresholds on SAVR (ft2/ft3): 1-h, 10-h, 100-h
MOISTURE_SAVR_THRESHOLDS = (192.0, 48.0, 16.0)

# Indices into the six class moistures
M_1H, M_10H, M_100H, M_1000H, M_HERB, M_WOOD = range(6)

CLASS_FIELDS = ("dead_1h", "dead_10h", "dead_100h", "dead_1000h", "live_herb", "live_wood")


@dataclass
class MidflameWind:
    wind_20ft: float
    waf: float
    method: WafMethod
    crown_fraction: float
    midflame: float


def _require(value: Optional[float], parameter: str) -> float:
    if value is None:
        raise ConfigurationError("Missing fuel moisture", parameter=parameter)
    return float(value)


def _size_class_moistures(params: MoistureParams) -> Tuple[float, ...]:
    return tuple(_require(getattr(params, f), f) for f in CLASS_FIELDS)


def _dead_live_moistures(params: MoistureParams) -> Tuple[float, ...]:
    dead = _require(params.dead, "dead")
    live = _require(params.live, "live")
    return (dead, dead, dead, dead, live, live)


def _scenario_moistures(params: MoistureParams) -> Tuple[float, ...]:
    if params.scenario is None:
        raise ConfigurationError("Missing moisture scenario name", parameter="scenario")
    return MoistureScenarios.get(params.scenario).class_moistures()


_MOISTURE_RESOLVERS = {
    MoistureInput.SIZE_CLASS: _size_class_moistures,
    MoistureInput.DEAD_LIVE: _dead_live_moistures,
    MoistureInput.SCENARIO: _scenario_moistures,
}


def resolve_class_moistures(params: MoistureParams) -> Tuple[float, ...]:
    """Six class moistures (1-h, 10-h, 100-h, 1000-h, live herb, live wood).

    Raises:
        UnknownScenarioError: If the named scenario does not exist.
        ConfigurationError: If a value needed by the input convention is missing.
    """
    return _MOISTURE_RESOLVERS[params.input_type](params)


def _dead_timelag_class(savr: float) -> int:
    if savr > MOISTURE_SAVR_THRESHOLDS[0]:
        return M_1H
    if savr > MOISTURE_SAVR_THRESHOLDS[1]:
        return M_10H
    if savr > MOISTURE_SAVR_THRESHOLDS[2]:
        return M_100H
    return M_1000H


_PARTICLE_CLASS = {
    LifeCategory.DEAD_TIMELAG: _dead_timelag_class,
    LifeCategory.LIVE_HERB: lambda savr: M_HERB,
    LifeCategory.LIVE_WOOD: lambda savr: M_WOOD,
    LifeCategory.DEAD_LITTER: lambda savr: M_100H,
}


def particle_moistures(fuel: FuelComplex, classes: Tuple[float, ...]) -> np.ndarray:
    """Moisture of each particle of ``fuel`` from the six class moistures."""
    return np.array([classes[_PARTICLE_CLASS[p.life](p.savr)] for p in fuel.particles], dtype=float)


def resolve_midflame_wind(wind_speed: float, height: WindHeight, waf_input: Optional[float],
                          canopy_cover: float, canopy_ht: float, crown_ratio: float,
                          fuel_depth: float) -> MidflameWind:
    """Converts the input wind speed (ft/min) at ``height`` to midflame wind speed.

    A 10 m wind is first reduced to 20 ft, and a 20 ft wind is multiplied by
    the wind adjustment factor, either ``waf_input`` or computed from the
    canopy and fuel bed. Midflame winds are used as given.
    """
    crown_fraction = min(1.0, max(0.0, crown_ratio)) * min(1.0, max(0.0, canopy_cover)) / 3.0

    if height is WindHeight.MIDFLAME:
        return MidflameWind(wind_speed, 1.0, WafMethod.NOT_APPLICABLE, crown_fraction, wind_speed)

    wind_20ft = fp.calc_wind_at_20ft(wind_speed) if height is WindHeight.TEN_METER else wind_speed

    if waf_input is not None:
        waf = min(1.0, max(0.0, waf_input))
        method = WafMethod.INPUT
    else:
        waf, crown_fraction, method = fp.calc_wind_adjustment_factor(
            canopy_cover, canopy_ht, crown_ratio, fuel_depth)

    return MidflameWind(wind_20ft, waf, method, crown_fraction, waf * wind_20ft)


def upslope_from_aspect(aspect: float) -> float:
    return (aspect + 180.0) % 360.0


def wind_dir_from_upslope(wind: WindParams, aspect: float) -> float:
    """Wind heading in degrees clockwise from upslope."""
    if wind.direction_ref is WindDirectionReference.UPSLOPE:
        return 0.0
    if wind.direction_ref is WindDirectionReference.FROM_NORTH:
        return (wind.direction_deg - upslope_from_aspect(aspect)) % 360.0
    return wind.direction_deg % 360.0


def vector_dir_from_upslope(direction: DirectionParams, aspect: float) -> float:
    """Direction of interest in degrees clockwise from upslope."""
    if direction.vector_from_north:
        return (direction.vector_deg - upslope_from_aspect(aspect)) % 360.0
    return direction.vector_deg % 360.0
