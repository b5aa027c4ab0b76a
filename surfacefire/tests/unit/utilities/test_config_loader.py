"""Tests for loading run configurations from .cfg files."""

import pytest
from surfacefire.exceptions import ConfigurationError
from surfacefire.utilities.config_loader import load_surface_params
from surfacefire.utilities.fire_util import (
    BlendAlgorithm, DirectionConvention, MoistureInput, WindDirectionReference, WindHeight
)


def _write(tmp_path, text):
    path = tmp_path / "run.cfg"
    path.write_text(text)
    return str(path)


FULL_CONFIG = """
[Fuel]
primary = 1
secondary = GR2
cured_fraction_pct = 40

[Moisture]
input_type = scenario
scenario = d2l2

[Wind]
speed_mph = 7.5
height = 20ft
direction_ref = from_north
direction_deg = 225
canopy_cover_pct = 50
canopy_ht_ft = 60
crown_ratio = 0.6
apply_wind_limit = no

[Site]
slope_pct = 35
aspect_deg = 45

[Direction]
convention = point_source_beta
vector_deg = 90
vector_from_north = yes

[Blend]
coverage = 0.6
algorithm = expected_2d
samples = 4
depth = 2
laterals = 1
seed = none

[Calculation]
elapsed_min = 30
"""


class TestLoadSurfaceParams:
    """Tests for parsing every section."""

    def test_full_config(self, tmp_path):
        params = load_surface_params(_write(tmp_path, FULL_CONFIG))

        assert params.fuel.primary == "1"
        assert params.fuel.secondary == "GR2"
        assert params.fuel.cured_fraction == pytest.approx(0.4)

        assert params.moisture.input_type is MoistureInput.SCENARIO
        assert params.moisture.scenario == "d2l2"

        assert params.wind.speed_mph == 7.5
        assert params.wind.height is WindHeight.TWENTY_FOOT
        assert params.wind.direction_ref is WindDirectionReference.FROM_NORTH
        assert params.wind.direction_deg == 225.0
        assert params.wind.canopy_cover == pytest.approx(0.5)
        assert params.wind.canopy_ht_ft == 60.0
        assert params.wind.crown_ratio == pytest.approx(0.6)
        assert params.wind.apply_wind_limit is False
        assert params.wind.waf is None

        assert params.site.slope == pytest.approx(0.35)
        assert params.site.aspect_deg == 45.0

        assert params.direction.convention is DirectionConvention.POINT_SOURCE_BETA
        assert params.direction.vector_deg == 90.0
        assert params.direction.vector_from_north is True

        assert params.blend.coverage == pytest.approx(0.6)
        assert params.blend.algorithm is BlendAlgorithm.EXPECTED_2D
        assert (params.blend.samples, params.blend.depth, params.blend.laterals) == (4, 2, 1)
        assert params.blend.seed is None

        assert params.elapsed_min == 30.0
        assert params.trace_folder is None

    def test_defaults(self, tmp_path):
        params = load_surface_params(_write(tmp_path, "[Fuel]\nprimary = 4\n"))
        assert params.fuel.secondary is None
        assert params.moisture.input_type is MoistureInput.SIZE_CLASS
        assert params.wind.height is WindHeight.MIDFLAME
        assert params.wind.apply_wind_limit is True
        assert params.site.slope == 0.0
        assert params.direction.convention is DirectionConvention.HEAD
        assert params.blend.coverage == 1.0
        assert params.blend.seed == 0
        assert params.elapsed_min == 60.0

    def test_size_class_moistures(self, tmp_path):
        text = "[Fuel]\nprimary = 1\n[Moisture]\ndead_1h_pct = 6\nlive_herb = 0.9\n"
        params = load_surface_params(_write(tmp_path, text))
        assert params.moisture.dead_1h == pytest.approx(0.06)
        assert params.moisture.live_herb == pytest.approx(0.9)
        assert params.moisture.dead_10h is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_params(str(tmp_path / "missing.cfg"))
        assert "missing.cfg" in str(exc_info.value)

    def test_missing_fuel_section(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_surface_params(_write(tmp_path, "[Wind]\nspeed_mph = 5\n"))

    def test_missing_primary(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_params(_write(tmp_path, "[Fuel]\nsecondary = 4\n"))
        assert exc_info.value.parameter == "primary"

    def test_bad_number(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_params(_write(tmp_path, "[Fuel]\nprimary = 1\n[Wind]\nspeed_mph = fast\n"))
        assert exc_info.value.parameter == "speed_mph"

    def test_bad_flag(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_surface_params(_write(tmp_path, "[Fuel]\nprimary = 1\n[Wind]\napply_wind_limit = maybe\n"))

    def test_unknown_algorithm(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_surface_params(_write(tmp_path, "[Fuel]\nprimary = 1\n[Blend]\nalgorithm = median\n"))
        assert exc_info.value.parameter == "algorithm"
