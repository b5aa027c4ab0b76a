"""Surface fire behavior equations.

Pure functions mapping physical scalars (and per-particle arrays) to physical
scalars. Everything is in native units: feet, minutes, pounds, Btu, fractions
and degrees. Beta angles are measured clockwise from the direction of maximum
spread with the ignition point at the rear focus of the fire ellipse; psi
angles give the direction of the outward normal to the fire front; theta is
the parametric angle of a point on the ellipse.

References:
    - Rothermel, R. C. (1972). A mathematical model for predicting fire spread in
      wildland fuels. USDA Forest Service Research Paper INT-115.
    - Albini, F. A. (1976). Estimating wildfire behavior and effects. USDA Forest
      Service General Technical Report INT-30.
    - Andrews, P. L. (2018). The Rothermel surface fire spread model and associated
      developments. USDA Forest Service General Technical Report RMRS-GTR-371.
    - Catchpole, E. A., de Mestre, N. J., Gill, A. M. (1982). Intensity of fire at
      its perimeter. Australian Forest Research 12.
"""
from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from surfacefire.utilities.fire_util import (
    SMIDGEN, BETA_TOLERANCE_DEG, DIRECTION_SNAP_DEG, SpreadSituation, WafMethod
)

# Size class boundaries on surface area to volume ratio (ft2/ft3)
SIZE_BOUNDARIES = (1200.0, 192.0, 96.0, 48.0, 16.0, 0.0)

DEAD = 0
LIVE = 1

# 10 m open wind over 20 ft open wind
TEN_METER_TO_TWENTY_FOOT = 1.15

# Effective wind (ft/min) above which the head rate is capped at the wind speed
SPREAD_CAP_WIND = 88.0


@dataclass
class FuelBed:
    """Fuel bed intermediates that depend only on the fuel particles.

    Scalars are in native units. ``load``, ``a_wtg``, ``sig_k`` and ``is_dead``
    are per particle; ``life_awtg`` is indexed by ``DEAD``/``LIVE``.
    """
    total_load: float = 0.0
    total_area: float = 0.0
    bulk_density: float = 0.0
    packing_ratio: float = 0.0
    beta_opt: float = 0.0
    beta_ratio: float = 0.0
    sigma: float = 0.0
    gamma_opt: float = 0.0
    wind_b: float = 0.0
    wind_k: float = 0.0
    wind_e: float = 0.0
    slope_k: float = 0.0
    rx_dry_dead: float = 0.0
    rx_dry_live: float = 0.0
    fine_dead: float = 0.0
    fine_live: float = 0.0
    live_mext_k: float = 0.0
    prop_flux: float = 0.0
    res_time: float = 0.0
    load: np.ndarray = field(default_factory=lambda: np.zeros(0))
    a_wtg: np.ndarray = field(default_factory=lambda: np.zeros(0))
    sig_k: np.ndarray = field(default_factory=lambda: np.zeros(0))
    is_dead: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=bool))
    life_awtg: np.ndarray = field(default_factory=lambda: np.zeros(2))


@dataclass
class HeatSink:
    rb_qig: float = 0.0
    dead_mois: float = 0.0
    live_mois: float = 0.0
    live_mext: float = 0.0


@dataclass
class HeadSpread:
    """Result of combining the wind and slope vectors at the fire head."""
    ros_head: float = 0.0
    dir_max: float = 0.0
    eff_wind: float = 0.0
    phi_ew: float = 0.0
    wind_limit: float = 0.0
    limit_exceeded: bool = False
    spread_exceeds_wind: bool = False
    situation: SpreadSituation = SpreadSituation.NO_SPREAD


# ==============================================================================
# Fuel bed
# ==============================================================================

def size_class(savr: float) -> int:
    """Returns the size class index of a particle from its SAVR (ft2/ft3)."""
    s = 0
    while savr < SIZE_BOUNDARIES[s]:
        s += 1
    return s


def calc_fuel_bed(is_dead: np.ndarray, load: np.ndarray, savr: np.ndarray,
                  heat: np.ndarray, dens: np.ndarray, stot: np.ndarray,
                  seff: np.ndarray, depth: float) -> FuelBed:
    """Computes the fuel bed intermediates for a set of particles.

    Particle areas are weighted within each life category, and loads are
    weighted by size class within each life category.

    Args:
        is_dead (np.ndarray): True for dead particles.
        load (np.ndarray): Oven-dry load (lb/ft2).
        savr (np.ndarray): Surface area to volume ratio (ft2/ft3).
        heat (np.ndarray): Low heat of combustion (Btu/lb).
        dens (np.ndarray): Particle density (lb/ft3).
        stot (np.ndarray): Total silica content (fraction).
        seff (np.ndarray): Effective silica content (fraction).
        depth (float): Fuel bed depth (ft).

    Returns:
        FuelBed: Intermediates; all zero if the bed has no depth or no surface area.
    """
    is_dead = np.asarray(is_dead, dtype=bool)
    load = np.asarray(load, dtype=float)
    savr = np.asarray(savr, dtype=float)
    heat = np.asarray(heat, dtype=float)
    dens = np.asarray(dens, dtype=float)
    stot = np.asarray(stot, dtype=float)
    seff = np.asarray(seff, dtype=float)

    n = len(load)
    bed = FuelBed(load=load, a_wtg=np.zeros(n), sig_k=np.zeros(n), is_dead=is_dead)

    if depth < SMIDGEN or n < 1:
        return bed

    life = np.where(is_dead, DEAD, LIVE)
    safe_dens = np.where(dens < SMIDGEN, 1.0, dens)
    safe_savr = np.where(savr < SMIDGEN, 1.0, savr)

    area = np.where(dens < SMIDGEN, 0.0, load * savr / safe_dens)
    sig_k = np.where(savr < SMIDGEN, 0.0, np.exp(-138.0 / safe_savr))
    sizes = np.array([size_class(s) for s in savr])

    life_area = np.array([area[life == l].sum() for l in (DEAD, LIVE)])
    total_area = float(area.sum())
    bed.total_load = float(load.sum())
    bed.total_area = total_area
    bed.sig_k = sig_k

    if total_area < SMIDGEN:
        return bed

    bed.bulk_density = bed.total_load / depth
    bed.packing_ratio = float(np.where(dens < SMIDGEN, 0.0, load / safe_dens).sum()) / depth
    bed.slope_k = 0.0 if bed.packing_ratio < SMIDGEN else 5.275 * bed.packing_ratio ** -0.3

    # Surface area weights within life category, then summed by size class
    life_area_p = life_area[life]
    a_wtg = np.where(life_area_p < SMIDGEN, 0.0,
                     area / np.where(life_area_p < SMIDGEN, 1.0, life_area_p))
    s_wtg = np.array([a_wtg[(life == life[p]) & (sizes == sizes[p])].sum() for p in range(n)])
    bed.a_wtg = a_wtg
    bed.life_awtg = life_area / total_area

    life_load = np.zeros(2)
    life_savr = np.zeros(2)
    life_heat = np.zeros(2)
    life_seff = np.zeros(2)
    life_stot = np.zeros(2)
    for l in (DEAD, LIVE):
        mask = life == l
        life_load[l] = (s_wtg[mask] * load[mask]).sum()
        life_savr[l] = (a_wtg[mask] * savr[mask]).sum()
        life_heat[l] = (a_wtg[mask] * heat[mask]).sum()
        life_seff[l] = (a_wtg[mask] * seff[mask]).sum()
        life_stot[l] = (a_wtg[mask] * stot[mask]).sum()

    sigma = float((bed.life_awtg * life_savr).sum())
    bed.sigma = sigma

    # Optimum reaction velocity
    bed.beta_opt = 3.348 / sigma ** 0.8189
    aa = 133.0 / sigma ** 0.7913
    sigma15 = sigma ** 1.5
    gamma_max = sigma15 / (495.0 + 0.0594 * sigma15)
    bed.beta_ratio = bed.packing_ratio / bed.beta_opt
    if bed.beta_ratio > SMIDGEN:
        bed.gamma_opt = float(gamma_max * bed.beta_ratio ** aa * np.exp(aa * (1.0 - bed.beta_ratio)))

    # Wind and slope intermediates
    bed.wind_b = 0.02526 * sigma ** 0.54
    c = 7.47 * np.exp(-0.133 * sigma ** 0.55)
    e = 0.715 * np.exp(-0.000359 * sigma)
    if bed.beta_ratio >= SMIDGEN:
        bed.wind_k = float(c * bed.beta_ratio ** -e)
        bed.wind_e = 0.0 if c < SMIDGEN else float(bed.beta_ratio ** e / c)

    rx_dry = [0.0, 0.0]
    for l in (DEAD, LIVE):
        eta_s = calc_mineral_damping(life_seff[l])
        rx_dry[l] = bed.gamma_opt * life_load[l] * (1.0 - life_stot[l]) * life_heat[l] * eta_s
    bed.rx_dry_dead = float(rx_dry[DEAD])
    bed.rx_dry_live = float(rx_dry[LIVE])

    # Fine fuel loads used by the live extinction moisture
    bed.fine_dead = float((load * sig_k)[is_dead].sum())
    live_fine = np.where(savr > SMIDGEN, load * np.exp(-500.0 / safe_savr), 0.0)
    bed.fine_live = float(live_fine[~is_dead].sum())
    bed.live_mext_k = 0.0 if bed.fine_live < SMIDGEN else 2.9 * bed.fine_dead / bed.fine_live

    bed.prop_flux = calc_propagating_flux(sigma, bed.packing_ratio)
    bed.res_time = calc_residence_time(sigma)

    return bed


def calc_propagating_flux(sigma: float, packing_ratio: float) -> float:
    """Propagating flux ratio (dimensionless)."""
    if sigma < SMIDGEN:
        return 0.0
    return float(np.exp((0.792 + 0.681 * np.sqrt(sigma)) * (packing_ratio + 0.1))
                 / (192.0 + 0.2595 * sigma))


def calc_residence_time(sigma: float) -> float:
    """Flaming front residence time (min) from the characteristic SAVR."""
    return 0.0 if sigma < SMIDGEN else 384.0 / sigma


# ==============================================================================
# Moisture and reaction intensity
# ==============================================================================

def calc_mineral_damping(s_e: float = 0.010) -> float:
    """Mineral damping coefficient, capped at 1.

    Args:
        s_e (float, optional): Effective silica content. Defaults to 0.010.

    Returns:
        float: Mineral damping coefficient.
    """
    if s_e < SMIDGEN:
        return 1.0
    return min(1.0, 0.174 / s_e ** 0.19)


def calc_moisture_damping(m_f: float, m_x: float) -> float:
    """Moisture damping coefficient for one life category.

    Args:
        m_f (float): Characteristic moisture content (fraction).
        m_x (float): Moisture of extinction (fraction).

    Returns:
        float: Damping coefficient; 0 at or above extinction.
    """
    if m_x < SMIDGEN:
        return 0.0
    r = m_f / m_x
    if r >= 1.0:
        return 0.0
    return 1.0 - 2.59 * r + 5.11 * r ** 2 - 3.52 * r ** 3


def calc_heat_sink(bed: FuelBed, mois: np.ndarray, dead_mext: float) -> HeatSink:
    """Heat sink term and characteristic moistures.

    Args:
        bed (FuelBed): Fuel bed intermediates.
        mois (np.ndarray): Per particle moisture content (fraction).
        dead_mext (float): Dead fuel moisture of extinction (fraction).

    Returns:
        HeatSink: Heat sink (Btu/ft3), dead and live characteristic moisture, and
        live moisture of extinction (never below ``dead_mext``).
    """
    mois = np.asarray(mois, dtype=float)
    sink = HeatSink(live_mext=dead_mext)
    if len(mois) == 0 or bed.total_area < SMIDGEN:
        return sink

    is_dead = bed.is_dead
    life = np.where(is_dead, DEAD, LIVE)
    qig = 250.0 + 1116.0 * mois

    sink.dead_mois = float((bed.a_wtg * mois)[is_dead].sum())
    sink.live_mois = float((bed.a_wtg * mois)[~is_dead].sum())
    sink.rb_qig = bed.bulk_density * float((qig * bed.a_wtg * bed.life_awtg[life] * bed.sig_k).sum())

    live_mext = dead_mext
    if (~is_dead).any():
        # Water in the fine dead fuel that must be heated to ignition
        wfmd = float((mois * bed.sig_k * bed.load)[is_dead].sum())
        fdmois = 0.0 if bed.fine_dead < SMIDGEN else wfmd / bed.fine_dead
        live_mext = 0.0 if dead_mext < SMIDGEN else bed.live_mext_k * (1.0 - fdmois / dead_mext) - 0.226
    sink.live_mext = max(live_mext, dead_mext)
    return sink


def calc_reaction_intensity(rx_dry_dead: float, rx_dry_live: float, dead_mois: float,
                            live_mois: float, dead_mext: float, live_mext: float) -> Tuple[float, float]:
    """Dead and live reaction intensity (Btu/ft2/min).

    Args:
        rx_dry_dead (float): Dead reaction intensity before moisture damping.
        rx_dry_live (float): Live reaction intensity before moisture damping.
        dead_mois (float): Characteristic dead moisture (fraction).
        live_mois (float): Characteristic live moisture (fraction).
        dead_mext (float): Dead moisture of extinction (fraction).
        live_mext (float): Live moisture of extinction (fraction).

    Returns:
        Tuple[float, float]: Dead and live reaction intensity; their sum is the total.
    """
    rx_dead = rx_dry_dead * calc_moisture_damping(dead_mois, dead_mext)
    rx_live = rx_dry_live * calc_moisture_damping(live_mois, live_mext)
    return rx_dead, rx_live


def calc_no_wind_no_slope_ros(rx_int: float, prop_flux: float, rb_qig: float) -> float:
    """No-wind no-slope spread rate (ft/min)."""
    return 0.0 if rb_qig < SMIDGEN else rx_int * prop_flux / rb_qig


def calc_herb_cured_fraction(herb_mois: float) -> float:
    """Fraction of live herbaceous load that is cured, clamped to [0, 1]."""
    return min(1.0, max(0.0, 1.333 - 1.11 * herb_mois))


# ==============================================================================
# Wind and slope
# ==============================================================================

def calc_wind_factor(wind_fpm: float, wind_k: float, wind_b: float) -> float:
    """Rothermel wind coefficient phi_w for a midflame wind in ft/min."""
    return 0.0 if wind_fpm < SMIDGEN else wind_k * wind_fpm ** wind_b


def calc_slope_factor(slope: float, slope_k: float) -> float:
    """Rothermel slope coefficient phi_s for a slope given as rise/reach."""
    return slope_k * slope * slope


def calc_effective_wind(phi_ew: float, wind_b: float, wind_e: float) -> float:
    """Wind speed (ft/min) that alone would produce the combined factor ``phi_ew``."""
    if phi_ew * wind_e < SMIDGEN or wind_b < SMIDGEN:
        return 0.0
    return (phi_ew * wind_e) ** (1.0 / wind_b)


def calc_wind_speed_limit(rx_int: float) -> float:
    """Maximum reliable effective wind speed (ft/min)."""
    return 0.9 * rx_int


def calc_head_spread(ros0: float, wind_fpm: float, wind_dir: float, slope: float,
                     wind_b: float, wind_k: float, wind_e: float, slope_k: float,
                     rx_int: float, apply_limit: bool = True) -> HeadSpread:
    """Spread rate and direction at the fire head by wind and slope vector addition.

    Args:
        ros0 (float): No-wind no-slope spread rate (ft/min).
        wind_fpm (float): Midflame wind speed (ft/min).
        wind_dir (float): Wind heading, degrees clockwise from upslope.
        slope (float): Slope steepness (rise/reach).
        wind_b (float): Wind factor exponent B.
        wind_k (float): Wind factor multiplier K.
        wind_e (float): Inverse wind factor multiplier.
        slope_k (float): Slope factor multiplier.
        rx_int (float): Reaction intensity (Btu/ft2/min).
        apply_limit (bool, optional): Cap the effective wind at the wind speed
            limit. Defaults to True.

    Returns:
        HeadSpread: Head rate, direction of maximum spread from upslope, effective
        wind speed, limit diagnostics and the vector situation.
    """
    phi_s = calc_slope_factor(slope, slope_k)
    phi_w = calc_wind_factor(wind_fpm, wind_k, wind_b)
    phi_ew = phi_s + phi_w

    out = HeadSpread(ros_head=ros0, phi_ew=phi_ew)
    do_eff_wind = False

    if ros0 < SMIDGEN:
        out.situation = SpreadSituation.NO_SPREAD
    elif phi_ew < SMIDGEN:
        out.situation = SpreadSituation.NO_WIND_NO_SLOPE
    elif phi_s < SMIDGEN:
        out.ros_head = ros0 * (1.0 + phi_ew)
        out.dir_max = wind_dir
        out.eff_wind = wind_fpm
        out.situation = SpreadSituation.WIND_NO_SLOPE
    elif phi_w < SMIDGEN:
        out.ros_head = ros0 * (1.0 + phi_ew)
        do_eff_wind = True
        out.situation = SpreadSituation.SLOPE_NO_WIND
    elif wind_dir < SMIDGEN:
        out.ros_head = ros0 * (1.0 + phi_ew)
        do_eff_wind = True
        out.situation = SpreadSituation.UPSLOPE_WIND
    else:
        split = np.radians(wind_dir)
        slp_rate = ros0 * phi_s
        wnd_rate = ros0 * phi_w
        x = slp_rate + wnd_rate * np.cos(split)
        y = wnd_rate * np.sin(split)
        rv = float(np.hypot(x, y))
        out.ros_head = ros0 + rv
        out.phi_ew = out.ros_head / ros0 - 1.0
        do_eff_wind = out.phi_ew >= SMIDGEN

        dir_max = float(np.degrees(np.arctan2(y, x))) % 360.0
        if abs(dir_max) < DIRECTION_SNAP_DEG:
            dir_max = 0.0
        out.dir_max = dir_max
        out.situation = SpreadSituation.CROSS_SLOPE_WIND

    if do_eff_wind:
        out.eff_wind = calc_effective_wind(out.phi_ew, wind_b, wind_e)

    out.wind_limit = calc_wind_speed_limit(rx_int)
    if out.eff_wind > out.wind_limit:
        out.limit_exceeded = True
        if apply_limit:
            out.phi_ew = calc_wind_factor(out.wind_limit, wind_k, wind_b)
            out.ros_head = ros0 * (1.0 + out.phi_ew)
            out.eff_wind = out.wind_limit

    if out.ros_head > out.eff_wind and out.eff_wind > SPREAD_CAP_WIND:
        out.spread_exceeds_wind = True
        out.ros_head = out.eff_wind

    return out


def calc_effective_wind_at_vector(ros_vector: float, ros0: float, wind_b: float, wind_e: float) -> float:
    """Effective wind speed (ft/min) that would drive the vector spread rate."""
    if ros0 < SMIDGEN:
        return 0.0
    return calc_effective_wind(ros_vector / ros0 - 1.0, wind_b, wind_e)


def calc_wind_adjustment_factor(canopy_cover: float, canopy_ht: float, crown_ratio: float,
                                fuel_depth: float) -> Tuple[float, float, WafMethod]:
    """Wind adjustment factor from 20 ft wind to midflame wind.

    Args:
        canopy_cover (float): Canopy cover (fraction), clamped to [0, 1].
        canopy_ht (float): Canopy height (ft).
        crown_ratio (float): Crown ratio (fraction), clamped to [0, 1].
        fuel_depth (float): Fuel bed depth (ft).

    Returns:
        Tuple[float, float, WafMethod]: Factor in [0, 1], crown fill fraction, and
        whether the sheltered or unsheltered equation applied.
    """
    canopy_cover = min(1.0, max(0.0, canopy_cover))
    crown_ratio = min(1.0, max(0.0, crown_ratio))
    fraction = crown_ratio * canopy_cover / 3.0

    if canopy_cover < SMIDGEN or fraction < 0.05 or canopy_ht < 6.0:
        method = WafMethod.UNSHELTERED
        if fuel_depth > SMIDGEN:
            waf = 1.83 / np.log((20.0 + 0.36 * fuel_depth) / (0.13 * fuel_depth))
        else:
            waf = 1.0
    else:
        method = WafMethod.SHELTERED
        waf = 0.555 / (np.sqrt(fraction * canopy_ht)
                       * np.log((20.0 + 0.36 * canopy_ht) / (0.13 * canopy_ht)))

    return float(min(1.0, max(0.0, waf))), fraction, method


def calc_wind_at_20ft(wind_10m: float) -> float:
    return wind_10m / TEN_METER_TO_TWENTY_FOOT


# ==============================================================================
# Fire ellipse
# ==============================================================================

def calc_lw_ratio(eff_wind_fpm: float) -> float:
    """Length-to-width ratio from effective wind speed in ft/min."""
    return 1.0 + 0.25 * eff_wind_fpm / 88.0


def calc_eccentricity(lw_ratio: float) -> float:
    x = lw_ratio * lw_ratio - 1.0
    return 0.0 if x <= 0.0 else float(np.sqrt(x)) / lw_ratio


def calc_ros_back(ros_head: float, lw_ratio: float) -> float:
    e = calc_eccentricity(lw_ratio)
    return ros_head * (1.0 - e) / (1.0 + e)


def calc_ros_flank(ros_head: float, lw_ratio: float) -> float:
    if lw_ratio < SMIDGEN:
        return 0.0
    return 0.5 * (ros_head + calc_ros_back(ros_head, lw_ratio)) / lw_ratio


def calc_ros_at_beta(ros_head: float, lw_ratio: float, beta: float) -> float:
    """Spread rate (ft/min) at ``beta`` degrees from the direction of maximum spread."""
    if abs(beta) <= BETA_TOLERANCE_DEG:
        return ros_head
    e = calc_eccentricity(lw_ratio)
    return ros_head * (1.0 - e) / (1.0 - e * np.cos(np.radians(beta)))


def calc_ellipse_factors(ros_head: float, ros_back: float, ros_flank: float) -> Tuple[float, float, float]:
    """Ellipse rate factors F, G, H (ft/min).

    F is half the major axis rate, G the rate at which the ellipse center moves
    away from the ignition point, and H half the minor axis rate. Multiply by
    elapsed time for distances.
    """
    f = 0.5 * (ros_head + ros_back)
    return f, f - ros_back, ros_flank


def _is_degenerate(f: float, h: float) -> bool:
    return f < SMIDGEN or h < SMIDGEN


def calc_beta_from_theta(theta: float, f: float, g: float, h: float) -> float:
    """Beta (degrees) of the perimeter point with parametric angle ``theta``."""
    if _is_degenerate(f, h):
        return theta % 360.0
    t = np.radians(theta)
    return float(np.degrees(np.arctan2(h * np.sin(t), g + f * np.cos(t)))) % 360.0


def calc_theta_from_beta(beta: float, f: float, g: float, h: float) -> float:
    """Parametric angle (degrees) of the perimeter point seen at ``beta`` from ignition.

    Intersects the ray from the ignition point with the ellipse centered ``g``
    ahead of it.
    """
    if _is_degenerate(f, h):
        return beta % 360.0
    b = np.radians(beta)
    cb, sb = np.cos(b), np.sin(b)
    qa = cb * cb / (f * f) + sb * sb / (h * h)
    qb = -2.0 * g * cb / (f * f)
    qc = g * g / (f * f) - 1.0
    r = (-qb + np.sqrt(max(0.0, qb * qb - 4.0 * qa * qc))) / (2.0 * qa)
    return float(np.degrees(np.arctan2(r * sb / h, (r * cb - g) / f))) % 360.0


def calc_psi_from_theta(theta: float, f: float, h: float) -> float:
    """Direction (degrees) of the outward normal at parametric angle ``theta``."""
    if _is_degenerate(f, h):
        return theta % 360.0
    t = np.radians(theta)
    return float(np.degrees(np.arctan2(f * np.sin(t), h * np.cos(t)))) % 360.0


def calc_theta_from_psi(psi: float, f: float, h: float) -> float:
    """Parametric angle (degrees) of the perimeter point whose normal points along ``psi``."""
    if _is_degenerate(f, h):
        return psi % 360.0
    p = np.radians(psi)
    return float(np.degrees(np.arctan2(h * np.sin(p), f * np.cos(p)))) % 360.0


def calc_ros_at_psi(psi: float, f: float, g: float, h: float) -> float:
    """Normal expansion rate (ft/min) of the fire front in direction ``psi``.

    ``f``, ``g`` and ``h`` are the ellipse rate factors, not distances.
    """
    p = np.radians(psi)
    cp, sp = np.cos(p), np.sin(p)
    return float(g * cp + np.sqrt(f * f * cp * cp + h * h * sp * sp))


def calc_vector_beta(head_dir: float, vector_dir: float) -> float:
    """Angle (degrees, [0, 360)) between the head and a vector, both measured from upslope."""
    return abs(head_dir - vector_dir) % 360.0


# ==============================================================================
# Intensity, flame and size
# ==============================================================================

def calc_fireline_intensity(ros: float, rx_int: float, res_time: float) -> float:
    """Byram's fireline intensity (Btu/ft/s)."""
    return ros * rx_int * res_time / 60.0


def calc_flame_length(fli: float) -> float:
    """Byram's flame length (ft) from fireline intensity (Btu/ft/s)."""
    return 0.0 if fli <= 0.0 else 0.45 * fli ** 0.46


def calc_heat_per_unit_area(rx_int: float, res_time: float) -> float:
    return rx_int * res_time


def calc_fire_area(length: float, lw_ratio: float) -> float:
    """Ellipse area (ft2) from its length and length-to-width ratio."""
    if lw_ratio < SMIDGEN:
        return 0.0
    return np.pi * length * length / (4.0 * lw_ratio)


def calc_fire_perimeter(length: float, width: float) -> float:
    """Ellipse perimeter (ft) by Ramanujan's series in ``(a - b) / (a + b)``."""
    a = 0.5 * length
    b = 0.5 * width
    xm = 0.0 if a + b <= 0.0 else (a - b) / (a + b)
    return np.pi * (a + b) * (1.0 + xm ** 2 / 4.0 + xm ** 4 / 64.0)
