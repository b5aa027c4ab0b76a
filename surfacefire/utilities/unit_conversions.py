"""This module contains functions for unit conversions

Quantities are stored in native units and shown in a display unit. Only the
fixed native/display pairs listed in ``DISPLAY_CONVERSIONS`` are supported.
"""

from surfacefire.exceptions import ConfigurationError


def m_to_ft(f_m: float) -> float:
    """Converts from meters to feet

    Args:
        f_m (float): meters

    Returns:
        _type_: float
    """
    g = 3.28084
    f = f_m * g

    return f

def ft_to_m(f_ft: float) -> float:
    """Converts from feet to meters

    Args:
        f_ft (float): feet
    Returns:
        _type_: float
    """
    g = 1 / m_to_ft(1)
    f = f_ft * g

    return f

def ft_min_to_m_s(f_ft_min: float) -> float:
    """Converts from ft/min to m/s

    Args:
        f_ft_min (float): ft/min

    Returns:
        _type_: float
    """
    g = 0.00508
    f = f_ft_min * g

    return f

def mph_to_ft_min(f_mph: float) -> float:
    """Converts from mi/h to ft/min

    Args:
        f_mph (float): mi/h

    Returns:
        _type_: float
    """
    return f_mph * 88.0

def ft_min_to_mph(f_ft_min: float) -> float:
    """Converts from ft/min to mi/h

    Args:
        f_ft_min (float): ft/min

    Returns:
        _type_: float
    """
    return f_ft_min / 88.0

def ft_min_to_ch_h(f_ft_min: float) -> float:
    """Converts from ft/min to chains/h (1 chain = 66 ft)

    Args:
        f_ft_min (float): ft/min

    Returns:
        _type_: float
    """
    return f_ft_min * 60.0 / 66.0

def ft_to_ch(f_ft: float) -> float:
    """Converts from feet to chains"""
    return f_ft / 66.0

def ft2_to_acres(f_ft2: float) -> float:
    """Converts from ft^2 to acres"""
    return f_ft2 / 43560.0

def tons_ac_to_lb_ft2(f_tons_ac: float) -> float:
    """Converts from tons/acre to lb/ft^2

    Args:
        f_tons_ac (float): tons/acre

    Returns:
        _type_: float
    """
    return f_tons_ac * 2000.0 / 43560.0

def lb_ft2_to_tons_ac(f_lb_ft2: float) -> float:
    """Converts from lb/ft^2 to tons/acre"""
    return f_lb_ft2 * 43560.0 / 2000.0

def btu_ft_s_to_kw_m(f_btu_ft_s: float) -> float:
    """Converts from Btu/ft/s to kW/m

    Args:
        f_btu_ft_s (float): Btu/ft/s

    Returns:
        _type_: float
    """
    return f_btu_ft_s * 3.46414

def fraction_to_percent(f: float) -> float:
    return f * 100.0

def percent_to_fraction(p: float) -> float:
    return p / 100.0

def identity(value: float) -> float:
    return value


# (native unit, display unit) -> conversion applied to the native value
DISPLAY_CONVERSIONS = {
    ("ft/min", "ft/min"): identity,
    ("ft/min", "ch/h"): ft_min_to_ch_h,
    ("ft/min", "mi/h"): ft_min_to_mph,
    ("ft/min", "m/s"): ft_min_to_m_s,
    ("ft", "ft"): identity,
    ("ft", "ch"): ft_to_ch,
    ("ft", "m"): ft_to_m,
    ("ft2", "ac"): ft2_to_acres,
    ("lb/ft2", "lb/ft2"): identity,
    ("lb/ft2", "tons/ac"): lb_ft2_to_tons_ac,
    ("lb/ft3", "lb/ft3"): identity,
    ("ft2/ft3", "ft2/ft3"): identity,
    ("btu/ft/s", "btu/ft/s"): identity,
    ("btu/ft/s", "kW/m"): btu_ft_s_to_kw_m,
    ("btu/ft2", "btu/ft2"): identity,
    ("btu/ft2/min", "btu/ft2/min"): identity,
    ("btu/lb", "btu/lb"): identity,
    ("btu/ft3", "btu/ft3"): identity,
    ("fraction", "fraction"): identity,
    ("fraction", "%"): fraction_to_percent,
    ("ratio", "ratio"): identity,
    ("deg", "deg"): identity,
    ("min", "min"): identity,
    ("", ""): identity,
}


def display_conversion(native_unit: str, display_unit: str):
    """Returns the function converting ``native_unit`` values to ``display_unit``.

    Raises:
        ConfigurationError: If the unit pair is not one of the fixed pairs.
    """
    try:
        return DISPLAY_CONVERSIONS[(native_unit, display_unit)]
    except KeyError:
        raise ConfigurationError(
            f"No conversion from '{native_unit}' to '{display_unit}'",
            parameter="display_unit"
        ) from None
