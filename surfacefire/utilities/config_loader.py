"""Loads a :class:`SurfaceFireParams` run configuration from a ``.cfg`` file.

Example file::

    [Fuel]
    primary = 1
    secondary = GR2

    [Moisture]
    input_type = scenario
    scenario = d2l2

    [Wind]
    speed_mph = 5
    height = midflame
    direction_ref = from_upslope
    direction_deg = 90

    [Site]
    slope_pct = 20

    [Blend]
    coverage = 0.6
    algorithm = harmonic

Missing optional sections fall back to the dataclass defaults. Percent inputs
(``slope_pct``, ``*_pct``) are converted to fractions.
"""
import configparser
import os

from surfacefire.exceptions import ConfigurationError
from surfacefire.utilities.data_classes import (
    BlendParams, DirectionParams, FuelSelection, MoistureParams, SiteParams,
    SurfaceFireParams, WindParams
)
from surfacefire.utilities.fire_util import (
    BlendAlgorithm, DirectionConvention, MoistureInput, WindDirectionReference,
    WindHeight, enum_from_label
)
from surfacefire.utilities.unit_conversions import percent_to_fraction

MOISTURE_KEYS = ("dead_1h", "dead_10h", "dead_100h", "dead_1000h", "live_herb", "live_wood", "dead", "live")


def _get_float(section, key, cfg_path, default=None):
    try:
        return section.getfloat(key, default)
    except ValueError:
        raise ConfigurationError(f"'{section.get(key)}' is not a number",
                                 config_path=cfg_path, parameter=key) from None


def _get_int(section, key, cfg_path, default=None):
    try:
        return section.getint(key, default)
    except ValueError:
        raise ConfigurationError(f"'{section.get(key)}' is not an integer",
                                 config_path=cfg_path, parameter=key) from None


def _get_bool(section, key, cfg_path, default=None):
    try:
        return section.getboolean(key, default)
    except ValueError:
        raise ConfigurationError(f"'{section.get(key)}' is not a yes/no value",
                                 config_path=cfg_path, parameter=key) from None


def _get_fraction(section, key, cfg_path, default=None):
    """Reads ``key`` as a fraction, or ``key_pct`` as a percent."""
    pct = _get_float(section, f"{key}_pct", cfg_path)
    if pct is not None:
        return percent_to_fraction(pct)
    return _get_float(section, key, cfg_path, default)


def _section(config, name):
    if name in config:
        return config[name]
    return config[configparser.DEFAULTSECT]


def load_surface_params(cfg_path: str) -> SurfaceFireParams:
    """Parses a surface fire run configuration.

    Args:
        cfg_path (str): Path to the ``.cfg`` file.

    Raises:
        ConfigurationError: If the file is missing, a required value is absent,
            or a value cannot be parsed.

    Returns:
        SurfaceFireParams: The run configuration.
    """
    if not os.path.exists(cfg_path):
        raise ConfigurationError("Configuration file not found", config_path=cfg_path)

    config = configparser.ConfigParser()
    config.read(cfg_path)

    if "Fuel" not in config:
        raise ConfigurationError("Missing [Fuel] section", config_path=cfg_path)

    fuel_sec = config["Fuel"]
    primary = fuel_sec.get("primary", None)
    if primary is None:
        raise ConfigurationError("Missing primary fuel model", config_path=cfg_path, parameter="primary")

    fuel = FuelSelection(
        primary=primary,
        secondary=fuel_sec.get("secondary", None),
        cured_fraction=_get_fraction(fuel_sec, "cured_fraction", cfg_path)
    )

    moist_sec = _section(config, "Moisture")
    moisture = MoistureParams(
        input_type=enum_from_label(MoistureInput, moist_sec.get("input_type", "size_class"),
                                   parameter="input_type", config_path=cfg_path),
        scenario=moist_sec.get("scenario", None),
        **{key: _get_fraction(moist_sec, key, cfg_path) for key in MOISTURE_KEYS}
    )

    wind_sec = _section(config, "Wind")
    wind = WindParams(
        speed_mph=_get_float(wind_sec, "speed_mph", cfg_path, 0.0),
        height=enum_from_label(WindHeight, wind_sec.get("height", "midflame"),
                               parameter="height", config_path=cfg_path),
        direction_ref=enum_from_label(WindDirectionReference, wind_sec.get("direction_ref", "upslope"),
                                      parameter="direction_ref", config_path=cfg_path),
        direction_deg=_get_float(wind_sec, "direction_deg", cfg_path, 0.0),
        waf=_get_float(wind_sec, "waf", cfg_path),
        canopy_cover=_get_fraction(wind_sec, "canopy_cover", cfg_path, 0.0),
        canopy_ht_ft=_get_float(wind_sec, "canopy_ht_ft", cfg_path, 0.0),
        crown_ratio=_get_fraction(wind_sec, "crown_ratio", cfg_path, 0.0),
        apply_wind_limit=_get_bool(wind_sec, "apply_wind_limit", cfg_path, True)
    )

    site_sec = _section(config, "Site")
    site = SiteParams(
        slope=_get_fraction(site_sec, "slope", cfg_path, 0.0),
        aspect_deg=_get_float(site_sec, "aspect_deg", cfg_path, 180.0)
    )

    dir_sec = _section(config, "Direction")
    direction = DirectionParams(
        convention=enum_from_label(DirectionConvention, dir_sec.get("convention", "head"),
                                   parameter="convention", config_path=cfg_path),
        vector_deg=_get_float(dir_sec, "vector_deg", cfg_path, 0.0),
        vector_from_north=_get_bool(dir_sec, "vector_from_north", cfg_path, False)
    )

    blend_sec = _section(config, "Blend")
    seed = blend_sec.get("seed", "0")
    blend = BlendParams(
        coverage=_get_fraction(blend_sec, "coverage", cfg_path, 1.0),
        algorithm=enum_from_label(BlendAlgorithm, blend_sec.get("algorithm", "area_weighted"),
                                  parameter="algorithm", config_path=cfg_path),
        samples=_get_int(blend_sec, "samples", cfg_path, 3),
        depth=_get_int(blend_sec, "depth", cfg_path, 3),
        laterals=_get_int(blend_sec, "laterals", cfg_path, 0),
        seed=None if seed.strip().lower() == "none" else _get_int(blend_sec, "seed", cfg_path, 0)
    )

    calc_sec = _section(config, "Calculation")
    return SurfaceFireParams(
        fuel=fuel,
        moisture=moisture,
        wind=wind,
        site=site,
        direction=direction,
        blend=blend,
        elapsed_min=_get_float(calc_sec, "elapsed_min", cfg_path, 60.0),
        trace_folder=calc_sec.get("trace_folder", None)
    )
