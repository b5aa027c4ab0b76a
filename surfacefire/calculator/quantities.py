"""Declarations of every quantity the surface fire calculator computes.

Each entry is ``(name, native unit, display unit, decimals, owning step)``.
Enumerated quantities list their item labels in ``ENUMERATED``; configuration
inputs are listed in ``INPUTS``.
"""
from surfacefire.base_classes.quantity import Quantity, QuantityRegistry
from surfacefire.utilities.fire_util import (
    DirectionConvention, SpreadSituation, WafMethod, enum_items
)

SITE_INPUTS = "site_inputs"
FUEL_MOISTURE = "fuel_moisture"
LOAD_TRANSFER = "load_transfer"
FUEL_BED = "fuel_bed"
HEAT_SINK = "heat_sink"
REACTION_INTENSITY = "reaction_intensity"
MIDFLAME_WIND = "midflame_wind"
HEAD_SPREAD = "head_spread"
ELLIPSE_SHAPE = "ellipse_shape"
VECTOR_DIRECTION = "vector_direction"
DIRECTIONAL_SPREAD = "directional_spread"
FIRE_SIZE = "fire_size"
FIRE_INTENSITY = "fire_intensity"
BLEND = "blend"

NO_YES = ["no", "yes"]

QUANTITY_SPECS = [
    # Configuration inputs
    ("fuel_bed_depth", "ft", "ft", 2, SITE_INPUTS),
    ("dead_mext", "fraction", "%", 0, SITE_INPUTS),
    ("slope", "fraction", "%", 0, SITE_INPUTS),
    ("aspect", "deg", "deg", 0, SITE_INPUTS),
    ("wind_speed_input", "ft/min", "mi/h", 1, SITE_INPUTS),
    ("wind_dir_from_upslope", "deg", "deg", 0, SITE_INPUTS),
    ("vector_dir_from_upslope", "deg", "deg", 0, SITE_INPUTS),
    ("elapsed_time", "min", "min", 1, SITE_INPUTS),
    ("canopy_cover", "fraction", "%", 0, SITE_INPUTS),
    ("canopy_height", "ft", "ft", 1, SITE_INPUTS),
    ("crown_ratio", "fraction", "fraction", 2, SITE_INPUTS),
    ("direction_convention", "", "", 0, SITE_INPUTS),
    ("wind_limit_applies", "", "", 0, SITE_INPUTS),

    ("moisture_1h", "fraction", "%", 0, FUEL_MOISTURE),
    ("moisture_10h", "fraction", "%", 0, FUEL_MOISTURE),
    ("moisture_100h", "fraction", "%", 0, FUEL_MOISTURE),
    ("moisture_1000h", "fraction", "%", 0, FUEL_MOISTURE),
    ("moisture_live_herb", "fraction", "%", 0, FUEL_MOISTURE),
    ("moisture_live_wood", "fraction", "%", 0, FUEL_MOISTURE),

    ("herb_cured_fraction", "fraction", "%", 0, LOAD_TRANSFER),
    ("dead_herb_load", "lb/ft2", "tons/ac", 2, LOAD_TRANSFER),
    ("live_herb_load", "lb/ft2", "tons/ac", 2, LOAD_TRANSFER),

    ("total_load", "lb/ft2", "tons/ac", 2, FUEL_BED),
    ("bulk_density", "lb/ft3", "lb/ft3", 4, FUEL_BED),
    ("packing_ratio", "ratio", "ratio", 5, FUEL_BED),
    ("optimum_packing_ratio", "ratio", "ratio", 5, FUEL_BED),
    ("relative_packing_ratio", "ratio", "ratio", 3, FUEL_BED),
    ("characteristic_savr", "ft2/ft3", "ft2/ft3", 0, FUEL_BED),
    ("wind_factor_b", "ratio", "ratio", 4, FUEL_BED),
    ("wind_factor_k", "ratio", "ratio", 6, FUEL_BED),
    ("wind_factor_e", "ratio", "ratio", 6, FUEL_BED),
    ("slope_factor_k", "ratio", "ratio", 4, FUEL_BED),
    ("reaction_intensity_dry_dead", "btu/ft2/min", "btu/ft2/min", 0, FUEL_BED),
    ("reaction_intensity_dry_live", "btu/ft2/min", "btu/ft2/min", 0, FUEL_BED),
    ("live_mext_factor", "ratio", "ratio", 4, FUEL_BED),
    ("propagating_flux", "ratio", "ratio", 6, FUEL_BED),
    ("residence_time", "min", "min", 4, FUEL_BED),

    ("heat_sink", "btu/ft3", "btu/ft3", 2, HEAT_SINK),
    ("dead_moisture", "fraction", "%", 1, HEAT_SINK),
    ("live_moisture", "fraction", "%", 1, HEAT_SINK),
    ("live_mext", "fraction", "%", 0, HEAT_SINK),

    ("reaction_intensity_dead", "btu/ft2/min", "btu/ft2/min", 0, REACTION_INTENSITY),
    ("reaction_intensity_live", "btu/ft2/min", "btu/ft2/min", 0, REACTION_INTENSITY),
    ("reaction_intensity", "btu/ft2/min", "btu/ft2/min", 0, REACTION_INTENSITY),
    ("no_wind_no_slope_ros", "ft/min", "ch/h", 2, REACTION_INTENSITY),

    ("wind_speed_20ft", "ft/min", "mi/h", 1, MIDFLAME_WIND),
    ("waf", "fraction", "fraction", 2, MIDFLAME_WIND),
    ("waf_method", "", "", 0, MIDFLAME_WIND),
    ("crown_fill_fraction", "fraction", "%", 0, MIDFLAME_WIND),
    ("midflame_wind", "ft/min", "mi/h", 1, MIDFLAME_WIND),

    ("wind_factor", "ratio", "ratio", 3, HEAD_SPREAD),
    ("slope_factor", "ratio", "ratio", 3, HEAD_SPREAD),
    ("ros_head", "ft/min", "ch/h", 1, HEAD_SPREAD),
    ("head_dir_from_upslope", "deg", "deg", 0, HEAD_SPREAD),
    ("effective_wind", "ft/min", "mi/h", 1, HEAD_SPREAD),
    ("wind_speed_limit", "ft/min", "mi/h", 1, HEAD_SPREAD),
    ("wind_limit_exceeded", "", "", 0, HEAD_SPREAD),
    ("spread_exceeds_wind", "", "", 0, HEAD_SPREAD),
    ("spread_situation", "", "", 0, HEAD_SPREAD),

    ("lw_ratio", "ratio", "ratio", 2, ELLIPSE_SHAPE),
    ("eccentricity", "ratio", "ratio", 3, ELLIPSE_SHAPE),
    ("ros_back", "ft/min", "ch/h", 1, ELLIPSE_SHAPE),
    ("ros_flank", "ft/min", "ch/h", 1, ELLIPSE_SHAPE),
    ("ellipse_f_rate", "ft/min", "ft/min", 2, ELLIPSE_SHAPE),
    ("ellipse_g_rate", "ft/min", "ft/min", 2, ELLIPSE_SHAPE),
    ("ellipse_h_rate", "ft/min", "ft/min", 2, ELLIPSE_SHAPE),

    ("vector_beta", "deg", "deg", 1, VECTOR_DIRECTION),
    ("vector_theta", "deg", "deg", 1, VECTOR_DIRECTION),
    ("vector_psi", "deg", "deg", 1, VECTOR_DIRECTION),

    ("ros_beta", "ft/min", "ch/h", 1, DIRECTIONAL_SPREAD),
    ("ros_psi", "ft/min", "ch/h", 1, DIRECTIONAL_SPREAD),
    ("ros_vector", "ft/min", "ch/h", 1, DIRECTIONAL_SPREAD),
    ("effective_wind_vector", "ft/min", "mi/h", 1, DIRECTIONAL_SPREAD),

    ("head_distance", "ft", "ch", 1, FIRE_SIZE),
    ("back_distance", "ft", "ch", 1, FIRE_SIZE),
    ("fire_length", "ft", "ch", 1, FIRE_SIZE),
    ("fire_width", "ft", "ch", 1, FIRE_SIZE),
    ("ellipse_f", "ft", "ch", 1, FIRE_SIZE),
    ("ellipse_g", "ft", "ch", 1, FIRE_SIZE),
    ("ellipse_h", "ft", "ch", 1, FIRE_SIZE),
    ("fire_area", "ft2", "ac", 2, FIRE_SIZE),
    ("fire_perimeter", "ft", "ch", 1, FIRE_SIZE),

    ("heat_per_unit_area", "btu/ft2", "btu/ft2", 0, FIRE_INTENSITY),
    ("fli_head", "btu/ft/s", "btu/ft/s", 0, FIRE_INTENSITY),
    ("fli_back", "btu/ft/s", "btu/ft/s", 0, FIRE_INTENSITY),
    ("fli_flank", "btu/ft/s", "btu/ft/s", 0, FIRE_INTENSITY),
    ("fli_beta", "btu/ft/s", "btu/ft/s", 0, FIRE_INTENSITY),
    ("fli_psi", "btu/ft/s", "btu/ft/s", 0, FIRE_INTENSITY),
    ("fli_vector", "btu/ft/s", "btu/ft/s", 0, FIRE_INTENSITY),
    ("flame_head", "ft", "ft", 1, FIRE_INTENSITY),
    ("flame_back", "ft", "ft", 1, FIRE_INTENSITY),
    ("flame_flank", "ft", "ft", 1, FIRE_INTENSITY),
    ("flame_beta", "ft", "ft", 1, FIRE_INTENSITY),
    ("flame_psi", "ft", "ft", 1, FIRE_INTENSITY),
    ("flame_vector", "ft", "ft", 1, FIRE_INTENSITY),

    # Written only when two complexes are blended
    ("ros_harmonic", "ft/min", "ch/h", 1, BLEND),
]

ENUMERATED = {
    "direction_convention": enum_items(DirectionConvention),
    "wind_limit_applies": NO_YES,
    "waf_method": enum_items(WafMethod),
    "wind_limit_exceeded": NO_YES,
    "spread_exceeds_wind": NO_YES,
    "spread_situation": enum_items(SpreadSituation),
}

INPUTS = frozenset(name for name, _, _, _, owner in QUANTITY_SPECS if owner == SITE_INPUTS)


def build_registry() -> QuantityRegistry:
    """Returns a registry holding every declared quantity at zero."""
    return QuantityRegistry(
        Quantity(name, unit, owner, display_unit=display, decimals=decimals,
                 is_input=name in INPUTS, items=ENUMERATED.get(name))
        for name, unit, display, decimals, owner in QUANTITY_SPECS
    )
