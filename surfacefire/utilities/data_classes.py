"""Run configuration for the surface fire calculator.

Wind speed is entered in mi/h, slope as rise/reach, moistures and canopy
values as fractions, and angles in degrees clockwise.
"""
from dataclasses import dataclass, field
from typing import Optional

from surfacefire.exceptions import ValidationError
from surfacefire.utilities.fire_util import (
    BlendAlgorithm, DirectionConvention, MoistureInput, WindDirectionReference, WindHeight
)

@dataclass
class FuelSelection:
    primary: str = "1"
    secondary: Optional[str] = None
    # Overrides the computed herbaceous cured fraction when set
    cured_fraction: Optional[float] = None

@dataclass
class MoistureParams:
    input_type: MoistureInput = MoistureInput.SIZE_CLASS
    dead_1h: Optional[float] = None
    dead_10h: Optional[float] = None
    dead_100h: Optional[float] = None
    dead_1000h: Optional[float] = None
    live_herb: Optional[float] = None
    live_wood: Optional[float] = None
    dead: Optional[float] = None
    live: Optional[float] = None
    scenario: Optional[str] = None

@dataclass
class WindParams:
    speed_mph: float = 0.0
    height: WindHeight = WindHeight.MIDFLAME
    direction_ref: WindDirectionReference = WindDirectionReference.UPSLOPE
    direction_deg: float = 0.0
    waf: Optional[float] = None
    canopy_cover: float = 0.0
    canopy_ht_ft: float = 0.0
    crown_ratio: float = 0.0
    apply_wind_limit: bool = True

@dataclass
class SiteParams:
    slope: float = 0.0
    aspect_deg: float = 180.0

@dataclass
class DirectionParams:
    convention: DirectionConvention = DirectionConvention.HEAD
    vector_deg: float = 0.0
    vector_from_north: bool = False

@dataclass
class BlendParams:
    coverage: float = 1.0
    algorithm: BlendAlgorithm = BlendAlgorithm.AREA_WEIGHTED
    samples: int = 3
    depth: int = 3
    laterals: int = 0
    seed: Optional[int] = 0

    def __post_init__(self):
        if not 0.0 <= self.coverage <= 1.0:
            raise ValidationError("Primary coverage must be between 0 and 1",
                                  field="coverage", value=self.coverage)
        if self.samples < 1 or self.depth < 1 or self.laterals < 0:
            raise ValidationError("Expected spread block needs samples >= 1, depth >= 1, laterals >= 0",
                                  field="samples", value=(self.samples, self.depth, self.laterals))

    @property
    def secondary_coverage(self) -> float:
        return 1.0 - self.coverage

@dataclass
class SurfaceFireParams:
    fuel: FuelSelection = field(default_factory=FuelSelection)
    moisture: MoistureParams = field(default_factory=MoistureParams)
    wind: WindParams = field(default_factory=WindParams)
    site: SiteParams = field(default_factory=SiteParams)
    direction: DirectionParams = field(default_factory=DirectionParams)
    blend: BlendParams = field(default_factory=BlendParams)
    elapsed_min: float = 60.0
    trace_folder: Optional[str] = None
