"""Tests for the surface fire behavior equations.

Reference values are for Anderson fuel model 1 at 8% dead fuel moisture with
a 5 mi/h midflame wind blowing upslope on a 20% slope, as computed by
BehavePlus.
"""

import pytest
import numpy as np
from surfacefire.models.fire_physics import (
    calc_beta_from_theta,
    calc_eccentricity,
    calc_effective_wind,
    calc_effective_wind_at_vector,
    calc_ellipse_factors,
    calc_fire_area,
    calc_fire_perimeter,
    calc_fireline_intensity,
    calc_flame_length,
    calc_fuel_bed,
    calc_head_spread,
    calc_heat_per_unit_area,
    calc_heat_sink,
    calc_herb_cured_fraction,
    calc_lw_ratio,
    calc_mineral_damping,
    calc_moisture_damping,
    calc_no_wind_no_slope_ros,
    calc_psi_from_theta,
    calc_reaction_intensity,
    calc_ros_at_beta,
    calc_ros_at_psi,
    calc_ros_back,
    calc_ros_flank,
    calc_theta_from_beta,
    calc_theta_from_psi,
    calc_vector_beta,
    calc_wind_adjustment_factor,
    calc_wind_at_20ft,
    size_class,
)
from surfacefire.utilities.fire_util import SpreadSituation, WafMethod
from surfacefire.utilities.unit_conversions import mph_to_ft_min


FM1_MOISTURE = np.array([0.08, 0.08, 0.08, 0.08, 1.0, 1.0])


def _ros0(bed, fuel, mois):
    sink = calc_heat_sink(bed, mois, fuel.dead_mext)
    rx_dead, rx_live = calc_reaction_intensity(bed.rx_dry_dead, bed.rx_dry_live,
                                               sink.dead_mois, sink.live_mois,
                                               fuel.dead_mext, sink.live_mext)
    rx = rx_dead + rx_live
    return rx, calc_no_wind_no_slope_ros(rx, bed.prop_flux, sink.rb_qig)


def _head(bed, ros0, rx, wind_mph, wind_dir, slope, apply_limit=True):
    return calc_head_spread(ros0, mph_to_ft_min(wind_mph), wind_dir, slope,
                            bed.wind_b, bed.wind_k, bed.wind_e, bed.slope_k, rx,
                            apply_limit=apply_limit)


class TestSizeClass:
    """Tests for the SAVR size class boundaries."""

    @pytest.mark.parametrize("savr,expected", [
        (3500.0, 0),
        (1200.0, 0),
        (1000.0, 1),
        (109.0, 2),
        (60.0, 3),
        (30.0, 4),
        (8.0, 5),
        (0.0, 5),
    ])
    def test_size_class(self, savr, expected):
        assert size_class(savr) == expected


class TestFuelBed:
    """Tests for the fuel bed intermediates of fuel model 1."""

    def test_characteristic_savr(self, grass_bed):
        """A single loaded particle sets the characteristic SAVR."""
        assert grass_bed.sigma == pytest.approx(3500.0)

    def test_packing_and_bulk_density(self, grass_bed):
        assert grass_bed.bulk_density == pytest.approx(0.034)
        assert grass_bed.packing_ratio == pytest.approx(0.034 / 32.0)
        assert grass_bed.beta_ratio == pytest.approx(grass_bed.packing_ratio / grass_bed.beta_opt)

    def test_residence_time(self, grass_bed):
        assert grass_bed.res_time == pytest.approx(0.109714, rel=1e-4)

    def test_no_live_fuel(self, grass_bed):
        assert grass_bed.rx_dry_live == 0.0
        assert grass_bed.live_mext_k == 0.0

    def test_zero_depth_bed_is_empty(self, grass_fuel):
        bed = calc_fuel_bed(depth=0.0, **grass_fuel.arrays())
        assert bed.sigma == 0.0
        assert bed.rx_dry_dead == 0.0
        assert bed.prop_flux == 0.0

    def test_zero_load_bed_is_empty(self, grass_fuel):
        bed = calc_fuel_bed(depth=1.0, **grass_fuel.arrays(np.zeros(6)))
        assert bed.total_area == 0.0
        assert bed.sigma == 0.0

    def test_area_weights_sum_to_one_per_life(self, brush_fuel):
        bed = calc_fuel_bed(depth=brush_fuel.depth, **brush_fuel.arrays())
        assert bed.a_wtg[bed.is_dead].sum() == pytest.approx(1.0)
        assert bed.a_wtg[~bed.is_dead].sum() == pytest.approx(1.0)
        assert bed.life_awtg.sum() == pytest.approx(1.0)


class TestDamping:
    """Tests for mineral and moisture damping coefficients."""

    def test_mineral_damping_standard_silica(self):
        assert calc_mineral_damping(0.010) == pytest.approx(0.4174, abs=1e-4)

    def test_mineral_damping_capped_at_one(self):
        assert calc_mineral_damping(0.0) == 1.0
        assert calc_mineral_damping(1e-6) == 1.0

    def test_moisture_damping_dry(self):
        assert calc_moisture_damping(0.0, 0.12) == pytest.approx(1.0)

    def test_moisture_damping_at_extinction(self):
        assert calc_moisture_damping(0.12, 0.12) == 0.0
        assert calc_moisture_damping(0.20, 0.12) == 0.0

    def test_moisture_damping_zero_extinction(self):
        assert calc_moisture_damping(0.05, 0.0) == 0.0

    def test_moisture_damping_decreasing(self):
        values = [calc_moisture_damping(m, 0.12) for m in np.linspace(0.0, 0.12, 13)]
        assert all(a >= b for a, b in zip(values, values[1:]))


class TestReactionIntensity:
    """Tests for heat sink, reaction intensity and no-wind no-slope spread."""

    def test_fm1_reaction_intensity(self, grass_bed, grass_fuel):
        rx, _ = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        assert rx == pytest.approx(763.668626, rel=1e-4)

    def test_fm1_no_wind_no_slope(self, grass_bed, grass_fuel):
        _, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        assert ros0 == pytest.approx(3.977038, rel=1e-4)

    def test_dead_moisture_is_area_weighted(self, grass_bed, grass_fuel):
        sink = calc_heat_sink(grass_bed, FM1_MOISTURE, grass_fuel.dead_mext)
        assert sink.dead_mois == pytest.approx(0.08)
        assert sink.live_mext == pytest.approx(grass_fuel.dead_mext)

    def test_live_mext_never_below_dead(self, brush_fuel):
        bed = calc_fuel_bed(depth=brush_fuel.depth, **brush_fuel.arrays())
        wet_dead = np.array([0.19, 0.19, 0.19, 0.19, 1.0, 1.0])
        sink = calc_heat_sink(bed, wet_dead, brush_fuel.dead_mext)
        assert sink.live_mext >= brush_fuel.dead_mext

    def test_fuel_at_extinction_does_not_spread(self, grass_bed, grass_fuel):
        _, ros0 = _ros0(grass_bed, grass_fuel, np.full(6, 0.12))
        assert ros0 == 0.0

    def test_no_heat_sink(self):
        assert calc_no_wind_no_slope_ros(500.0, 0.05, 0.0) == 0.0


class TestHerbCuring:
    """Tests for the dynamic herbaceous cured fraction."""

    @pytest.mark.parametrize("herb_mois,expected", [
        (0.30, 1.0),
        (0.20, 1.0),
        (0.60, 0.667),
        (1.25, 0.0),
        (2.00, 0.0),
    ])
    def test_cured_fraction(self, herb_mois, expected):
        assert calc_herb_cured_fraction(herb_mois) == pytest.approx(expected, abs=1e-3)


class TestHeadSpread:
    """Tests for wind and slope vector addition at the fire head."""

    def test_fm1_upslope_wind(self, grass_bed, grass_fuel):
        rx, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        hs = _head(grass_bed, ros0, rx, 5.0, 0.0, 0.2)
        assert hs.situation is SpreadSituation.UPSLOPE_WIND
        assert hs.ros_head == pytest.approx(95.735922, rel=1e-3)
        assert hs.eff_wind == pytest.approx(456.005559, rel=1e-3)
        assert hs.wind_limit == pytest.approx(687.3018, rel=1e-3)
        assert hs.dir_max == 0.0
        assert not hs.limit_exceeded
        assert not hs.spread_exceeds_wind

    def test_fm1_cross_slope_wind(self, grass_bed, grass_fuel):
        rx, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        hs = _head(grass_bed, ros0, rx, 5.0, 90.0, 0.2)
        assert hs.situation is SpreadSituation.CROSS_SLOPE_WIND
        assert hs.ros_head == pytest.approx(89.441433, rel=1e-3)
        assert hs.dir_max == pytest.approx(85.6076, abs=0.01)
        assert hs.eff_wind == pytest.approx(440.625308, rel=1e-3)

    def test_cross_slope_mirror(self, grass_bed, grass_fuel):
        """Wind from the other side mirrors the spread direction."""
        rx, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        right = _head(grass_bed, ros0, rx, 5.0, 90.0, 0.2)
        left = _head(grass_bed, ros0, rx, 5.0, 270.0, 0.2)
        assert left.ros_head == pytest.approx(right.ros_head)
        assert left.dir_max == pytest.approx(360.0 - right.dir_max)

    def test_wind_no_slope(self, grass_bed, grass_fuel):
        rx, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        hs = _head(grass_bed, ros0, rx, 5.0, 45.0, 0.0)
        assert hs.situation is SpreadSituation.WIND_NO_SLOPE
        assert hs.eff_wind == pytest.approx(440.0)
        assert hs.dir_max == 45.0

    def test_slope_no_wind(self, grass_bed, grass_fuel):
        rx, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        hs = _head(grass_bed, ros0, rx, 0.0, 0.0, 0.2)
        assert hs.situation is SpreadSituation.SLOPE_NO_WIND
        assert hs.ros_head > ros0
        assert hs.eff_wind > 0.0

    def test_no_wind_no_slope(self, grass_bed, grass_fuel):
        rx, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        hs = _head(grass_bed, ros0, rx, 0.0, 0.0, 0.0)
        assert hs.situation is SpreadSituation.NO_WIND_NO_SLOPE
        assert hs.ros_head == ros0
        assert hs.eff_wind == 0.0

    def test_no_spread(self, grass_bed):
        hs = _head(grass_bed, 0.0, 0.0, 5.0, 0.0, 0.2)
        assert hs.situation is SpreadSituation.NO_SPREAD
        assert hs.ros_head == 0.0

    def test_wind_limit_exceeded(self, grass_bed, grass_fuel):
        """At 11% moisture the 5 mi/h wind is above the wind speed limit."""
        mois = np.array([0.11, 0.11, 0.11, 0.11, 1.0, 1.0])
        rx, ros0 = _ros0(grass_bed, grass_fuel, mois)
        assert rx == pytest.approx(317.290496, rel=1e-3)

        free = _head(grass_bed, ros0, rx, 5.0, 0.0, 0.0, apply_limit=False)
        assert free.limit_exceeded
        assert free.wind_limit == pytest.approx(285.5614, rel=1e-3)
        assert free.eff_wind == pytest.approx(440.0)
        assert free.ros_head == pytest.approx(33.728672, rel=1e-3)

        capped = _head(grass_bed, ros0, rx, 5.0, 0.0, 0.0, apply_limit=True)
        assert capped.limit_exceeded
        assert capped.eff_wind == pytest.approx(capped.wind_limit)
        assert capped.ros_head < free.ros_head

    def test_spread_capped_at_effective_wind(self):
        hs = calc_head_spread(50.0, 100.0, 0.0, 0.0, wind_b=1.0, wind_k=1.0, wind_e=1.0,
                              slope_k=0.0, rx_int=1.0e6)
        assert hs.spread_exceeds_wind
        assert hs.ros_head == pytest.approx(100.0)

    def test_spread_not_capped_below_88(self):
        hs = calc_head_spread(50.0, 80.0, 0.0, 0.0, wind_b=1.0, wind_k=1.0, wind_e=1.0,
                              slope_k=0.0, rx_int=1.0e6)
        assert not hs.spread_exceeds_wind
        assert hs.ros_head == pytest.approx(50.0 * 81.0)


class TestEffectiveWind:
    """Tests for effective wind speed inversions."""

    def test_zero_factor(self):
        assert calc_effective_wind(0.0, 2.0, 0.5) == 0.0

    def test_inverse_of_wind_factor(self):
        # phi = k * u**b with e = 1/k
        k, b = 2.0e-4, 1.8
        u = 350.0
        assert calc_effective_wind(k * u ** b, b, 1.0 / k) == pytest.approx(u)

    def test_vector_at_head_matches_head(self, grass_bed, grass_fuel):
        rx, ros0 = _ros0(grass_bed, grass_fuel, FM1_MOISTURE)
        hs = _head(grass_bed, ros0, rx, 5.0, 0.0, 0.2)
        eff = calc_effective_wind_at_vector(hs.ros_head, ros0, grass_bed.wind_b, grass_bed.wind_e)
        assert eff == pytest.approx(hs.eff_wind, rel=1e-6)

    def test_vector_without_spread(self):
        assert calc_effective_wind_at_vector(10.0, 0.0, 2.0, 0.5) == 0.0


class TestWindAdjustment:
    """Tests for the wind adjustment factor."""

    def test_unsheltered(self):
        waf, fraction, method = calc_wind_adjustment_factor(0.0, 0.0, 0.0, 1.0)
        assert method is WafMethod.UNSHELTERED
        assert fraction == 0.0
        assert waf == pytest.approx(0.3621, abs=1e-4)

    def test_unsheltered_without_depth(self):
        waf, _, method = calc_wind_adjustment_factor(0.0, 0.0, 0.0, 0.0)
        assert method is WafMethod.UNSHELTERED
        assert waf == 1.0

    def test_short_canopy_is_unsheltered(self):
        _, _, method = calc_wind_adjustment_factor(0.8, 5.0, 0.8, 1.0)
        assert method is WafMethod.UNSHELTERED

    def test_sparse_crowns_are_unsheltered(self):
        _, fraction, method = calc_wind_adjustment_factor(0.1, 60.0, 0.5, 1.0)
        assert fraction < 0.05
        assert method is WafMethod.UNSHELTERED

    def test_sheltered(self):
        waf, fraction, method = calc_wind_adjustment_factor(0.5, 60.0, 0.6, 1.0)
        assert method is WafMethod.SHELTERED
        assert fraction == pytest.approx(0.1)
        assert waf == pytest.approx(0.13535, abs=1e-4)

    def test_factor_in_unit_interval(self):
        for depth in (0.1, 0.5, 1.0, 6.0):
            waf, _, _ = calc_wind_adjustment_factor(0.0, 0.0, 0.0, depth)
            assert 0.0 <= waf <= 1.0

    def test_ten_meter_to_twenty_foot(self):
        assert calc_wind_at_20ft(1.15) == pytest.approx(1.0)


class TestFireEllipse:
    """Tests for the fire ellipse shape and directional spread rates."""

    HEAD = 95.735922
    EFF_WIND = 456.005559

    def test_lw_ratio(self):
        assert calc_lw_ratio(self.EFF_WIND) == pytest.approx(2.295470, rel=1e-5)
        assert calc_lw_ratio(0.0) == 1.0

    def test_eccentricity(self):
        assert calc_eccentricity(2.295470) == pytest.approx(0.900121, rel=1e-5)
        assert calc_eccentricity(1.0) == 0.0

    def test_back_and_flank(self):
        lw = calc_lw_ratio(self.EFF_WIND)
        assert calc_ros_back(self.HEAD, lw) == pytest.approx(5.032331, rel=1e-4)
        assert calc_ros_flank(self.HEAD, lw) == pytest.approx(21.949369, rel=1e-4)

    def test_circle_without_wind(self):
        assert calc_ros_back(10.0, 1.0) == pytest.approx(10.0)
        assert calc_ros_flank(10.0, 1.0) == pytest.approx(10.0)

    def test_ros_at_beta_head_and_back(self):
        lw = calc_lw_ratio(self.EFF_WIND)
        assert calc_ros_at_beta(self.HEAD, lw, 0.0) == self.HEAD
        assert calc_ros_at_beta(self.HEAD, lw, 0.05) == self.HEAD
        assert calc_ros_at_beta(self.HEAD, lw, 180.0) == pytest.approx(calc_ros_back(self.HEAD, lw))

    def test_ros_at_beta_decreases_away_from_head(self):
        lw = calc_lw_ratio(self.EFF_WIND)
        rates = [calc_ros_at_beta(self.HEAD, lw, b) for b in range(0, 181, 15)]
        assert all(a >= b for a, b in zip(rates, rates[1:]))

    def test_ellipse_factors(self):
        f, g, h = calc_ellipse_factors(10.0, 2.0, 4.0)
        assert (f, g, h) == (6.0, 4.0, 4.0)

    def test_ros_at_psi_head_back_flank(self):
        lw = calc_lw_ratio(self.EFF_WIND)
        back = calc_ros_back(self.HEAD, lw)
        flank = calc_ros_flank(self.HEAD, lw)
        f, g, h = calc_ellipse_factors(self.HEAD, back, flank)
        assert calc_ros_at_psi(0.0, f, g, h) == pytest.approx(self.HEAD)
        assert calc_ros_at_psi(180.0, f, g, h) == pytest.approx(back)
        assert calc_ros_at_psi(90.0, f, g, h) == pytest.approx(flank)

    @pytest.mark.parametrize("beta", [0.0, 10.0, 45.0, 90.0, 135.0, 179.0, 200.0, 300.0])
    def test_beta_theta_round_trip(self, beta):
        f, g, h = calc_ellipse_factors(95.7, 5.03, 21.95)
        theta = calc_theta_from_beta(beta, f, g, h)
        back = calc_beta_from_theta(theta, f, g, h)
        assert (back - beta + 180.0) % 360.0 - 180.0 == pytest.approx(0.0, abs=0.1)

    @pytest.mark.parametrize("psi", [0.0, 30.0, 90.0, 150.0, 180.0, 270.0, 330.0])
    def test_psi_theta_round_trip(self, psi):
        f, _, h = calc_ellipse_factors(95.7, 5.03, 21.95)
        theta = calc_theta_from_psi(psi, f, h)
        back = calc_psi_from_theta(theta, f, h)
        assert (back - psi + 180.0) % 360.0 - 180.0 == pytest.approx(0.0, abs=0.1)

    def test_ros_at_beta_matches_ellipse_point(self):
        """The beta formula and the ellipse geometry agree on the spread distance."""
        head, lw = 95.735922, 2.295470
        back = calc_ros_back(head, lw)
        f, g, h = calc_ellipse_factors(head, back, calc_ros_flank(head, lw))
        for beta in (30.0, 90.0, 150.0):
            t = np.radians(calc_theta_from_beta(beta, f, g, h))
            dist = np.hypot(g + f * np.cos(t), h * np.sin(t))
            assert calc_ros_at_beta(head, lw, beta) == pytest.approx(dist, rel=1e-3)

    def test_degenerate_ellipse_keeps_angle(self):
        assert calc_theta_from_beta(37.0, 0.0, 0.0, 0.0) == 37.0
        assert calc_beta_from_theta(37.0, 5.0, 1.0, 0.0) == 37.0
        assert calc_psi_from_theta(37.0, 0.0, 0.0) == 37.0
        assert calc_theta_from_psi(37.0, 0.0, 0.0) == 37.0

    def test_vector_beta(self):
        assert calc_vector_beta(0.0, 90.0) == 90.0
        assert calc_vector_beta(350.0, 10.0) == 340.0
        assert calc_vector_beta(45.0, 45.0) == 0.0


class TestIntensityAndSize:
    """Tests for fireline intensity, flame length and fire size."""

    def test_fm1_fireline_intensity(self):
        fli = calc_fireline_intensity(95.735922, 763.668626, 0.109714)
        assert fli == pytest.approx(133.687808, rel=1e-4)

    def test_fm1_flame_length(self):
        assert calc_flame_length(133.687808) == pytest.approx(4.277744, rel=1e-4)

    def test_no_flame_without_intensity(self):
        assert calc_flame_length(0.0) == 0.0

    def test_heat_per_unit_area(self):
        assert calc_heat_per_unit_area(763.668626, 0.109714) == pytest.approx(83.785358, rel=1e-4)

    def test_circle_area_and_perimeter(self):
        assert calc_fire_area(2.0, 1.0) == pytest.approx(np.pi)
        assert calc_fire_perimeter(2.0, 2.0) == pytest.approx(2.0 * np.pi)

    def test_elongated_area(self):
        assert calc_fire_area(4.0, 2.0) == pytest.approx(2.0 * np.pi)

    def test_no_fire(self):
        assert calc_fire_area(0.0, 1.0) == 0.0
        assert calc_fire_perimeter(0.0, 0.0) == 0.0
