"""Closed categories and numeric tolerances used throughout the codebase

Every selector the calculator reads from configuration is an :class:`enum.Enum`
whose value is the label accepted in ``.cfg`` files. Dispatch tables keyed by
these enums are expected to cover every member.

.. autoclass:: LifeCategory
    :members:

.. autoclass:: DirectionConvention
    :members:

.. autoclass:: BlendAlgorithm
    :members:

"""

from enum import Enum

from surfacefire.exceptions import ConfigurationError

# Near-zero threshold shared by the fire physics formulas
SMIDGEN = 1.0e-7

# Beta angles closer than this to the head direction use the head rate (degrees)
BETA_TOLERANCE_DEG = 0.1

# Directions of maximum spread within this of upslope are snapped to 0 (degrees)
DIRECTION_SNAP_DEG = 0.5

# Coverage at or above this bypasses blending entirely
FULL_COVERAGE = 0.999

# Rates below this are treated as zero by the harmonic blend (ft/min)
RATE_TOLERANCE = 1.0e-7

# Maximum number of particles in one fuel complex
MAX_PARTICLES = 10


class LifeCategory(Enum):
    DEAD_TIMELAG = "dead_timelag"
    LIVE_HERB = "live_herb"
    LIVE_WOOD = "live_wood"
    DEAD_LITTER = "dead_litter"

    @property
    def is_dead(self) -> bool:
        return _LIFE_IS_DEAD[self]


_LIFE_IS_DEAD = {
    LifeCategory.DEAD_TIMELAG: True,
    LifeCategory.LIVE_HERB: False,
    LifeCategory.LIVE_WOOD: False,
    LifeCategory.DEAD_LITTER: True,
}


class DirectionConvention(Enum):
    """Where on the fire perimeter the vector spread rate is reported.

    ``POINT_SOURCE_BETA`` measures the vector from the direction of maximum
    spread. All other conventions are psi based and measure from the
    ignition point.
    """
    HEAD = "head"
    BACK = "back"
    FLANK = "flank"
    FIRE_FRONT = "fire_front"
    POINT_SOURCE_PSI = "point_source_psi"
    POINT_SOURCE_BETA = "point_source_beta"

    @property
    def is_beta(self) -> bool:
        return self is DirectionConvention.POINT_SOURCE_BETA


class MoistureInput(Enum):
    SIZE_CLASS = "size_class"
    DEAD_LIVE = "dead_live"
    SCENARIO = "scenario"


class WindHeight(Enum):
    MIDFLAME = "midflame"
    TWENTY_FOOT = "20ft"
    TEN_METER = "10m"


class WindDirectionReference(Enum):
    """Reference for the wind and vector direction inputs.

    ``UPSLOPE`` ignores the direction input and pushes the fire straight
    upslope. The others give the heading direction in degrees clockwise from
    upslope or from north.
    """
    UPSLOPE = "upslope"
    FROM_UPSLOPE = "from_upslope"
    FROM_NORTH = "from_north"


class BlendAlgorithm(Enum):
    AREA_WEIGHTED = "area_weighted"
    HARMONIC = "harmonic"
    EXPECTED_2D = "expected_2d"


class LoadTransfer(Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


class WafMethod(Enum):
    UNSHELTERED = "unsheltered"
    SHELTERED = "sheltered"
    INPUT = "input"
    NOT_APPLICABLE = "not_applicable"


class SpreadSituation(Enum):
    """How the wind and slope vectors combined at the head of the fire."""
    NO_SPREAD = "no_spread"
    NO_WIND_NO_SLOPE = "no_wind_no_slope"
    WIND_NO_SLOPE = "wind_no_slope"
    SLOPE_NO_WIND = "slope_no_wind"
    UPSLOPE_WIND = "upslope_wind"
    CROSS_SLOPE_WIND = "cross_slope_wind"


def enum_from_label(enum_cls, label, parameter: str = None, config_path: str = None):
    """Looks up an enum member by its label, case-insensitively.

    Members are returned unchanged so callers may pass either form.

    Args:
        enum_cls: Enum class to search.
        label (str): Label (the member's value) or member name.
        parameter (str, optional): Name of the configuration parameter, for diagnostics.
        config_path (str, optional): Configuration file being read, for diagnostics.

    Raises:
        ConfigurationError: If no member matches ``label``.

    Returns:
        Enum: The matching member.
    """
    if isinstance(label, enum_cls):
        return label

    key = str(label).strip().lower()
    for member in enum_cls:
        if member.value.lower() == key or member.name.lower() == key:
            return member

    choices = ", ".join(m.value for m in enum_cls)
    raise ConfigurationError(
        f"Unknown {enum_cls.__name__} '{label}' (expected one of: {choices})",
        config_path=config_path, parameter=parameter
    )


def enum_items(enum_cls) -> list:
    """Returns the display labels of an enum in declaration order."""
    return [m.value for m in enum_cls]
