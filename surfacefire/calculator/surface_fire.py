"""Single fuel complex surface fire pipeline.

The pipeline is an explicit ordered list of :class:`PipelineStep`. Each step
reads only the quantities it declares and returns values for the quantities
it owns. :meth:`SurfaceFirePipeline.run` executes either every step or only
those a requested target depends on, always in list order.

Steps, in order:
    site_inputs, fuel_moisture, load_transfer, fuel_bed, heat_sink,
    reaction_intensity, midflame_wind, head_spread, ellipse_shape,
    vector_direction, directional_spread, fire_size, fire_intensity
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

import numpy as np

from surfacefire.base_classes.pipeline_step import PipelineStep, check_step_order, steps_for
from surfacefire.base_classes.quantity import QuantityRegistry
from surfacefire.calculator import quantities as qn
from surfacefire.calculator.vector_resolver import VectorResolver, make_vector_resolver
from surfacefire.calculator.wind_moisture import (
    particle_moistures, resolve_class_moistures, resolve_midflame_wind,
    vector_dir_from_upslope, wind_dir_from_upslope
)
from surfacefire.models import fire_physics as fp
from surfacefire.models.fuel_models import FuelComplex
from surfacefire.utilities.data_classes import SurfaceFireParams
from surfacefire.utilities.fire_util import DirectionConvention, LoadTransfer
from surfacefire.utilities.logger import TraceLogger
from surfacefire.utilities.unit_conversions import mph_to_ft_min

MOISTURES = ("moisture_1h", "moisture_10h", "moisture_100h", "moisture_1000h",
             "moisture_live_herb", "moisture_live_wood")
HERB_LOADS = ("dead_herb_load", "live_herb_load")
ELLIPSE_RATES = ("ellipse_f_rate", "ellipse_g_rate", "ellipse_h_rate")
DIRECTIONS = ("head", "back", "flank", "beta", "psi", "vector")


@dataclass
class PassContext:
    """Raw configuration visible to the steps of one pass."""
    params: SurfaceFireParams
    fuel: FuelComplex
    label: str = "primary"


# ==============================================================================
# Steps
# ==============================================================================

def _site_inputs(view, ctx: PassContext) -> dict:
    p = ctx.params
    aspect = p.site.aspect_deg
    return {
        "fuel_bed_depth": ctx.fuel.depth,
        "dead_mext": ctx.fuel.dead_mext,
        "slope": p.site.slope,
        "aspect": aspect,
        "wind_speed_input": mph_to_ft_min(p.wind.speed_mph),
        "wind_dir_from_upslope": wind_dir_from_upslope(p.wind, aspect),
        "vector_dir_from_upslope": vector_dir_from_upslope(p.direction, aspect),
        "elapsed_time": p.elapsed_min,
        "canopy_cover": p.wind.canopy_cover,
        "canopy_height": p.wind.canopy_ht_ft,
        "crown_ratio": p.wind.crown_ratio,
        "direction_convention": p.direction.convention,
        "wind_limit_applies": p.wind.apply_wind_limit,
    }


def _fuel_moisture(view, ctx: PassContext) -> dict:
    return dict(zip(MOISTURES, resolve_class_moistures(ctx.params.moisture)))


_CURED_FRACTION = {
    LoadTransfer.STATIC: lambda herb_mois: 0.0,
    LoadTransfer.DYNAMIC: fp.calc_herb_cured_fraction,
}


def _load_transfer(view, ctx: PassContext) -> dict:
    fuel = ctx.fuel
    if fuel.transfer_pair is None:
        return {"herb_cured_fraction": 0.0, "dead_herb_load": 0.0, "live_herb_load": 0.0}

    override = ctx.params.fuel.cured_fraction
    if override is not None:
        cured = min(1.0, max(0.0, override))
    else:
        cured = _CURED_FRACTION[fuel.transfer](view["moisture_live_herb"])

    loads = fuel.transferred_loads(cured)
    live, dead = fuel.transfer_pair
    return {"herb_cured_fraction": cured, "dead_herb_load": loads[dead], "live_herb_load": loads[live]}


def _fuel_bed_of(view, ctx: PassContext) -> fp.FuelBed:
    """Fuel bed of the complex with the transferred herbaceous loads."""
    fuel = ctx.fuel
    loads = np.array([p.load for p in fuel.particles], dtype=float)
    if fuel.transfer_pair is not None:
        live, dead = fuel.transfer_pair
        loads[live] = view["live_herb_load"]
        loads[dead] = view["dead_herb_load"]
    return fp.calc_fuel_bed(depth=view["fuel_bed_depth"], **fuel.arrays(loads))


def _fuel_bed(view, ctx: PassContext) -> dict:
    bed = _fuel_bed_of(view, ctx)
    return {
        "total_load": bed.total_load,
        "bulk_density": bed.bulk_density,
        "packing_ratio": bed.packing_ratio,
        "optimum_packing_ratio": bed.beta_opt,
        "relative_packing_ratio": bed.beta_ratio,
        "characteristic_savr": bed.sigma,
        "wind_factor_b": bed.wind_b,
        "wind_factor_k": bed.wind_k,
        "wind_factor_e": bed.wind_e,
        "slope_factor_k": bed.slope_k,
        "reaction_intensity_dry_dead": bed.rx_dry_dead,
        "reaction_intensity_dry_live": bed.rx_dry_live,
        "live_mext_factor": bed.live_mext_k,
        "propagating_flux": bed.prop_flux,
        "residence_time": bed.res_time,
    }


def _heat_sink(view, ctx: PassContext) -> dict:
    bed = _fuel_bed_of(view, ctx)
    mois = particle_moistures(ctx.fuel, tuple(view[m] for m in MOISTURES))
    sink = fp.calc_heat_sink(bed, mois, view["dead_mext"])
    return {
        "heat_sink": sink.rb_qig,
        "dead_moisture": sink.dead_mois,
        "live_moisture": sink.live_mois,
        "live_mext": sink.live_mext,
    }


def _reaction_intensity(view, ctx: PassContext) -> dict:
    rx_dead, rx_live = fp.calc_reaction_intensity(
        view["reaction_intensity_dry_dead"], view["reaction_intensity_dry_live"],
        view["dead_moisture"], view["live_moisture"], view["dead_mext"], view["live_mext"]
    )
    rx = rx_dead + rx_live
    return {
        "reaction_intensity_dead": rx_dead,
        "reaction_intensity_live": rx_live,
        "reaction_intensity": rx,
        "no_wind_no_slope_ros": fp.calc_no_wind_no_slope_ros(rx, view["propagating_flux"], view["heat_sink"]),
    }


def _midflame_wind(view, ctx: PassContext) -> dict:
    wind = resolve_midflame_wind(
        view["wind_speed_input"], ctx.params.wind.height, ctx.params.wind.waf,
        view["canopy_cover"], view["canopy_height"], view["crown_ratio"], view["fuel_bed_depth"]
    )
    return {
        "wind_speed_20ft": wind.wind_20ft,
        "waf": wind.waf,
        "waf_method": wind.method,
        "crown_fill_fraction": wind.crown_fraction,
        "midflame_wind": wind.midflame,
    }


def _head_spread(view, ctx: PassContext) -> dict:
    midflame = view["midflame_wind"]
    hs = fp.calc_head_spread(
        view["no_wind_no_slope_ros"], midflame, view["wind_dir_from_upslope"], view["slope"],
        view["wind_factor_b"], view["wind_factor_k"], view["wind_factor_e"], view["slope_factor_k"],
        view["reaction_intensity"], apply_limit=view.flag("wind_limit_applies")
    )
    return {
        "wind_factor": fp.calc_wind_factor(midflame, view["wind_factor_k"], view["wind_factor_b"]),
        "slope_factor": fp.calc_slope_factor(view["slope"], view["slope_factor_k"]),
        "ros_head": hs.ros_head,
        "head_dir_from_upslope": hs.dir_max,
        "effective_wind": hs.eff_wind,
        "wind_speed_limit": hs.wind_limit,
        "wind_limit_exceeded": hs.limit_exceeded or midflame > hs.wind_limit,
        "spread_exceeds_wind": hs.spread_exceeds_wind,
        "spread_situation": hs.situation,
    }


def _ellipse_shape(view, ctx: PassContext) -> dict:
    head = view["ros_head"]
    lw = fp.calc_lw_ratio(view["effective_wind"])
    back = fp.calc_ros_back(head, lw)
    flank = fp.calc_ros_flank(head, lw)
    f, g, h = fp.calc_ellipse_factors(head, back, flank)
    return {
        "lw_ratio": lw,
        "eccentricity": fp.calc_eccentricity(lw),
        "ros_back": back,
        "ros_flank": flank,
        "ellipse_f_rate": f,
        "ellipse_g_rate": g,
        "ellipse_h_rate": h,
    }


def _resolver_of(view) -> VectorResolver:
    """Vector resolver for the direction convention stored this pass."""
    return make_vector_resolver(DirectionConvention(view.quantity("direction_convention").active_label()))


def _vector_direction(view, ctx: PassContext) -> dict:
    angles = _resolver_of(view).resolve(view["head_dir_from_upslope"], view["vector_dir_from_upslope"],
                                  *(view[r] for r in ELLIPSE_RATES))
    return {"vector_beta": angles.beta, "vector_theta": angles.theta, "vector_psi": angles.psi}


def _directional_spread(view, ctx: PassContext) -> dict:
    ros_beta = fp.calc_ros_at_beta(view["ros_head"], view["lw_ratio"], view["vector_beta"])
    ros_psi = fp.calc_ros_at_psi(view["vector_psi"], *(view[r] for r in ELLIPSE_RATES))
    ros_vector = _resolver_of(view).vector_rate(ros_beta, ros_psi)
    return {
        "ros_beta": ros_beta,
        "ros_psi": ros_psi,
        "ros_vector": ros_vector,
        "effective_wind_vector": fp.calc_effective_wind_at_vector(
            ros_vector, view["no_wind_no_slope_ros"], view["wind_factor_b"], view["wind_factor_e"]),
    }


def _fire_size(view, ctx: PassContext) -> dict:
    t = view["elapsed_time"]
    head_distance = view["ros_head"] * t
    back_distance = view["ros_back"] * t
    length = head_distance + back_distance
    width = 2.0 * view["ros_flank"] * t
    return {
        "head_distance": head_distance,
        "back_distance": back_distance,
        "fire_length": length,
        "fire_width": width,
        "ellipse_f": view["ellipse_f_rate"] * t,
        "ellipse_g": view["ellipse_g_rate"] * t,
        "ellipse_h": view["ellipse_h_rate"] * t,
        "fire_area": fp.calc_fire_area(length, view["lw_ratio"]),
        "fire_perimeter": fp.calc_fire_perimeter(length, width),
    }


def _fire_intensity(view, ctx: PassContext) -> dict:
    rx = view["reaction_intensity"]
    rt = view["residence_time"]
    out = {"heat_per_unit_area": fp.calc_heat_per_unit_area(rx, rt)}
    for where in DIRECTIONS:
        fli = fp.calc_fireline_intensity(view[f"ros_{where}"], rx, rt)
        out[f"fli_{where}"] = fli
        out[f"flame_{where}"] = fp.calc_flame_length(fli)
    return out


def _outputs_of(owner: str) -> tuple:
    return tuple(name for name, _, _, _, o in qn.QUANTITY_SPECS if o == owner)


STEPS: List[PipelineStep] = [
    PipelineStep(qn.SITE_INPUTS, (), _outputs_of(qn.SITE_INPUTS), _site_inputs),
    PipelineStep(qn.FUEL_MOISTURE, (), MOISTURES, _fuel_moisture),
    PipelineStep(qn.LOAD_TRANSFER, ("moisture_live_herb",), _outputs_of(qn.LOAD_TRANSFER), _load_transfer),
    PipelineStep(qn.FUEL_BED, ("fuel_bed_depth",) + HERB_LOADS, _outputs_of(qn.FUEL_BED), _fuel_bed),
    PipelineStep(qn.HEAT_SINK, ("fuel_bed_depth", "dead_mext") + HERB_LOADS + MOISTURES,
                 _outputs_of(qn.HEAT_SINK), _heat_sink),
    PipelineStep(qn.REACTION_INTENSITY,
                 ("reaction_intensity_dry_dead", "reaction_intensity_dry_live", "dead_moisture",
                  "live_moisture", "dead_mext", "live_mext", "propagating_flux", "heat_sink"),
                 _outputs_of(qn.REACTION_INTENSITY), _reaction_intensity),
    PipelineStep(qn.MIDFLAME_WIND,
                 ("wind_speed_input", "canopy_cover", "canopy_height", "crown_ratio", "fuel_bed_depth"),
                 _outputs_of(qn.MIDFLAME_WIND), _midflame_wind),
    PipelineStep(qn.HEAD_SPREAD,
                 ("no_wind_no_slope_ros", "midflame_wind", "wind_dir_from_upslope", "slope",
                  "wind_factor_b", "wind_factor_k", "wind_factor_e", "slope_factor_k",
                  "reaction_intensity", "wind_limit_applies"),
                 _outputs_of(qn.HEAD_SPREAD), _head_spread),
    PipelineStep(qn.ELLIPSE_SHAPE, ("ros_head", "effective_wind"), _outputs_of(qn.ELLIPSE_SHAPE), _ellipse_shape),
    PipelineStep(qn.VECTOR_DIRECTION,
                 ("head_dir_from_upslope", "vector_dir_from_upslope", "direction_convention") + ELLIPSE_RATES,
                 _outputs_of(qn.VECTOR_DIRECTION), _vector_direction),
    PipelineStep(qn.DIRECTIONAL_SPREAD,
                 ("ros_head", "lw_ratio", "vector_beta", "vector_psi", "no_wind_no_slope_ros",
                  "wind_factor_b", "wind_factor_e", "direction_convention") + ELLIPSE_RATES,
                 _outputs_of(qn.DIRECTIONAL_SPREAD), _directional_spread),
    PipelineStep(qn.FIRE_SIZE,
                 ("ros_head", "ros_back", "ros_flank", "lw_ratio", "elapsed_time") + ELLIPSE_RATES,
                 _outputs_of(qn.FIRE_SIZE), _fire_size),
    PipelineStep(qn.FIRE_INTENSITY,
                 ("reaction_intensity", "residence_time") + tuple(f"ros_{w}" for w in DIRECTIONS),
                 _outputs_of(qn.FIRE_INTENSITY), _fire_intensity),
]


class SurfaceFirePipeline:
    """Runs the surface fire steps for one fuel complex against a registry.

    Args:
        trace (TraceLogger, optional): Receives every step's inputs and outputs.
            Defaults to a disabled logger.
        steps (List[PipelineStep], optional): Step list; checked for dependency
            order on construction. Defaults to ``STEPS``.
    """

    def __init__(self, trace: Optional[TraceLogger] = None, steps: Optional[List[PipelineStep]] = None):
        self.trace = trace if trace is not None else TraceLogger()
        self.steps = list(STEPS if steps is None else steps)
        check_step_order(self.steps)

    @staticmethod
    def context(params: SurfaceFireParams, fuel: FuelComplex, label: str = "primary") -> PassContext:
        return PassContext(params, fuel, label)

    def outputs(self) -> List[str]:
        return [name for step in self.steps for name in step.outputs]

    def run(self, registry: QuantityRegistry, context: PassContext,
            targets: Optional[Iterable[str]] = None) -> Dict[str, float]:
        """Evaluates the pipeline, writing each computed quantity once.

        Args:
            registry (QuantityRegistry): Registry to read and write.
            context (PassContext): Fuel complex and configuration for this pass.
            targets (Iterable[str], optional): Quantities wanted; only the steps
                they depend on run. Defaults to every step.

        Returns:
            Dict[str, float]: Every quantity written in this pass.
        """
        steps = self.steps if targets is None else steps_for(self.steps, targets)
        registry.begin_pass()
        for step in steps:
            step.run(registry, context)
            if self.trace.enabled:
                self.trace.log_step(context.label, step.name,
                                    [registry.get(n) for n in step.inputs],
                                    [registry.get(n) for n in step.outputs])
        return {name: registry.value(name) for name in registry.written()}
