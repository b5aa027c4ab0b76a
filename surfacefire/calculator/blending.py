"""Two fuel complex blending and the top-level surface fire calculator.

When a secondary fuel complex is configured, the pipeline runs once per
complex and the results are merged. Head and vector spread rates are blended
by the configured algorithm; the other collected quantities follow fixed
override rules. Every other quantity keeps the primary complex's value. If
either complex covers at least ``FULL_COVERAGE`` of the area its results are
published unchanged.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from surfacefire.base_classes.quantity import QuantityRegistry
from surfacefire.calculator.quantities import build_registry
from surfacefire.calculator.surface_fire import SurfaceFirePipeline
from surfacefire.exceptions import PipelineError
from surfacefire.models.expected_spread import expected_spread_rate, harmonic_spread_rate
from surfacefire.models.fuel_models import FuelComplex, StandardFuelModels
from surfacefire.utilities.data_classes import BlendParams, SurfaceFireParams
from surfacefire.utilities.fire_util import BlendAlgorithm, FULL_COVERAGE
from surfacefire.utilities.logger import TraceLogger

BLENDED_RATES = ("ros_head", "ros_vector")


def _area_weighted(rates: Sequence[float], cov: Sequence[float], inputs: Dict[str, float],
                   blend: BlendParams) -> float:
    return sum(c * r for r, c in zip(rates, cov))


def _harmonic(rates, cov, inputs, blend):
    return harmonic_spread_rate(rates, cov)


def _expected_2d(rates, cov, inputs, blend):
    expected, _ = expected_spread_rate(rates, cov, inputs["lw_ratio"], samples=blend.samples,
                                       depth=blend.depth, laterals=blend.laterals, seed=blend.seed)
    return expected


RATE_BLENDERS = {
    BlendAlgorithm.AREA_WEIGHTED: _area_weighted,
    BlendAlgorithm.HARMONIC: _harmonic,
    BlendAlgorithm.EXPECTED_2D: _expected_2d,
}

# Primary complex quantities each algorithm reads besides the rates it blends
BLEND_INPUTS = {
    BlendAlgorithm.AREA_WEIGHTED: (),
    BlendAlgorithm.HARMONIC: (),
    BlendAlgorithm.EXPECTED_2D: ("lw_ratio",),
}

OVERRIDE_RULES = {
    "reaction_intensity": max,
    "heat_per_unit_area": max,
    "fli_head": max,
    "fli_vector": max,
    "flame_head": max,
    "flame_vector": max,
    "fuel_bed_depth": max,
    "head_dir_from_upslope": lambda primary, secondary: primary,
    "waf": lambda primary, secondary: primary,
    "midflame_wind": lambda primary, secondary: primary,
    "effective_wind": lambda primary, secondary: primary,
    "effective_wind_vector": lambda primary, secondary: primary,
    "lw_ratio": lambda primary, secondary: primary,
    "wind_speed_limit": min,
    "wind_limit_exceeded": lambda primary, secondary: float(bool(primary) or bool(secondary)),
}


def with_harmonic_rate(values: Dict[str, float]) -> Dict[str, float]:
    """Copy of one complex's results with its head rate as the harmonic rate.

    The harmonic mean of a single fuel at full coverage is that fuel's rate.
    """
    out = dict(values)
    if "ros_head" in out:
        out["ros_harmonic"] = out["ros_head"]
    return out


def blend_results(primary: Dict[str, float], secondary: Dict[str, float],
                  blend: BlendParams) -> Dict[str, float]:
    """Merges the quantities computed for two fuel complexes.

    Args:
        primary (Dict[str, float]): Quantities computed for the primary complex.
        secondary (Dict[str, float]): Quantities computed for the secondary complex.
        blend (BlendParams): Coverage and blending algorithm.

    Raises:
        PipelineError: If a rate is blended but a quantity its algorithm reads
            (see ``BLEND_INPUTS``) was not computed for the primary complex.

    Returns:
        Dict[str, float]: Merged quantities, including ``ros_harmonic`` whenever
        the head spread rate was computed.
    """
    if blend.coverage >= FULL_COVERAGE:
        return with_harmonic_rate(primary)
    if blend.secondary_coverage >= FULL_COVERAGE:
        return with_harmonic_rate(secondary)

    cov = (blend.coverage, blend.secondary_coverage)
    blender = RATE_BLENDERS[blend.algorithm]

    merged = dict(primary)
    rates = [name for name in BLENDED_RATES if name in primary]
    if rates:
        missing = [name for name in BLEND_INPUTS[blend.algorithm] if name not in primary]
        if missing:
            raise PipelineError(f"Blending with {blend.algorithm.value} needs a computed quantity",
                                quantity=missing[0])
        inputs = {name: primary[name] for name in BLEND_INPUTS[blend.algorithm]}
        for name in rates:
            merged[name] = blender((primary[name], secondary[name]), cov, inputs, blend)

    for name, rule in OVERRIDE_RULES.items():
        if name in primary:
            merged[name] = rule(primary[name], secondary[name])

    if "ros_head" in primary:
        merged["ros_harmonic"] = harmonic_spread_rate((primary["ros_head"], secondary["ros_head"]), cov)

    return merged


class SurfaceFireCalculator:
    """Evaluates surface fire behavior for one or two fuel complexes.

    The calculator owns no global state: the registry it publishes to is
    passed in (or created) and every pass works on private copies of it, so a
    pass that fails leaves the registry untouched.

    Args:
        params (SurfaceFireParams): Run configuration.
        registry (QuantityRegistry, optional): Registry to publish results to.
            Defaults to a fresh registry of every declared quantity.
        trace (TraceLogger, optional): Step trace sink. Defaults to a logger
            writing under ``params.trace_folder``, disabled when that is None.

    Example:
        >>> params = SurfaceFireParams(fuel=FuelSelection(primary="1"))
        >>> calc = SurfaceFireCalculator(params)
        >>> calc.evaluate("ros_head")["ros_head"]
    """

    # Blend-only quantities and the pipeline quantity they are derived from
    BLEND_SOURCES = {"ros_harmonic": "ros_head"}

    def __init__(self, params: SurfaceFireParams, registry: Optional[QuantityRegistry] = None,
                 trace: Optional[TraceLogger] = None):
        self.params = params
        self.registry = registry if registry is not None else build_registry()
        self.trace = trace if trace is not None else TraceLogger(params.trace_folder)
        self.pipeline = SurfaceFirePipeline(self.trace)

    def fuel_complexes(self) -> Tuple[FuelComplex, Optional[FuelComplex]]:
        """Primary and secondary (or None) fuel complexes from the catalog.

        Raises:
            FuelModelError: If either fuel model is unknown.
        """
        fuel = self.params.fuel
        primary = StandardFuelModels.get(fuel.primary)
        secondary = StandardFuelModels.get(fuel.secondary) if fuel.secondary is not None else None
        return primary, secondary

    def evaluate(self, target: Optional[str] = None,
                 fuels: Optional[Tuple[FuelComplex, Optional[FuelComplex]]] = None) -> Dict[str, float]:
        """Runs one evaluation pass and publishes the results to the registry.

        Args:
            target (str, optional): Quantity wanted; only the steps it depends
                on run. Defaults to every quantity.
            fuels (Tuple[FuelComplex, FuelComplex], optional): Primary and
                secondary complexes, overriding the catalog selection.

        Raises:
            ConfigurationError: On an unknown scenario, fuel model or missing
                input. Nothing is published and the trace rows of the pass
                are dropped.

        Returns:
            Dict[str, float]: Every quantity published by this pass.
        """
        with self.registry.lock:
            primary_fuel, secondary_fuel = fuels if fuels is not None else self.fuel_complexes()
            targets = self.targets_for(target, secondary_fuel is not None)
            self.trace.begin_pass()

            try:
                values = self._run_complex(primary_fuel, "primary", targets)
                if secondary_fuel is not None:
                    secondary = self._run_complex(secondary_fuel, "secondary", targets)
                    values = blend_results(values, secondary, self.params.blend)
                else:
                    values = with_harmonic_rate(values)
            except Exception:
                self.trace.discard_pass()
                raise

            self.registry.commit(values)

        if self.trace.enabled:
            self.trace.flush()
        return values

    def targets_for(self, target: Optional[str], blended: bool) -> Optional[List[str]]:
        """Pipeline quantities to evaluate for ``target``, or None for all.

        A blended pass also evaluates what the blend algorithm reads, so a
        target gives the same value as a full pass.
        """
        if target is None:
            return None
        targets = [self.BLEND_SOURCES.get(target, target)]
        if blended:
            targets.extend(BLEND_INPUTS[self.params.blend.algorithm])
        return targets

    def _run_complex(self, fuel: FuelComplex, label: str, targets) -> Dict[str, float]:
        work = self.registry.copy()
        context = self.pipeline.context(self.params, fuel, label)
        return self.pipeline.run(work, context, targets)

    def value(self, name: str) -> float:
        return self.registry.value(name)

    def display(self, name: str) -> str:
        q = self.registry.get(name)
        if q.items is not None:
            return q.active_label()
        return f"{q.display_value:.{q.decimals}f} {q.display_unit}".rstrip()
