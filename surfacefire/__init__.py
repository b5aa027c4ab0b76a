"""surfacefire - Rothermel surface fire behavior for one or two blended fuel models."""

from surfacefire.calculator.blending import SurfaceFireCalculator
from surfacefire.calculator.surface_fire import SurfaceFirePipeline
from surfacefire.calculator.quantities import build_registry
from surfacefire.base_classes.quantity import Quantity, QuantityRegistry
from surfacefire.utilities.data_classes import SurfaceFireParams
from surfacefire.exceptions import (
    SurfaceFireError,
    ConfigurationError,
    UnknownScenarioError,
    FuelModelError,
    ValidationError,
    PipelineError,
)

__version__ = "0.1.0"

__all__ = [
    "SurfaceFireCalculator",
    "SurfaceFirePipeline",
    "build_registry",
    "Quantity",
    "QuantityRegistry",
    "SurfaceFireParams",
    "SurfaceFireError",
    "ConfigurationError",
    "UnknownScenarioError",
    "FuelModelError",
    "ValidationError",
    "PipelineError",
]
