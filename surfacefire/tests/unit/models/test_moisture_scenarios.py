"""Tests for the named fuel moisture scenarios."""

import pytest
from surfacefire.exceptions import ConfigurationError, UnknownScenarioError
from surfacefire.models.moisture_scenarios import MoistureScenarios


class TestMoistureScenarios:
    """Tests for scenario lookup."""

    def test_catalog_names(self):
        names = MoistureScenarios.names()
        for expected in ("1-low", "2-med", "3-high", "d1l1", "d4l4"):
            assert expected in names
        assert len(names) == 19

    def test_lookup(self):
        scenario = MoistureScenarios.get("2-med")
        assert scenario.class_moistures() == pytest.approx((0.06, 0.07, 0.08, 0.14, 1.20, 1.20))

    def test_lookup_is_case_insensitive(self):
        assert MoistureScenarios.get("D1L1") == MoistureScenarios.get("d1l1")

    def test_six_moistures(self):
        for name in MoistureScenarios.names():
            moistures = MoistureScenarios.get(name).class_moistures()
            assert len(moistures) == 6
            assert all(m > 0.0 for m in moistures)

    def test_unknown_scenario(self):
        with pytest.raises(UnknownScenarioError) as exc_info:
            MoistureScenarios.get("d9l9")
        assert exc_info.value.scenario == "d9l9"
        assert "d9l9" in str(exc_info.value)

    def test_unknown_scenario_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            MoistureScenarios.get("monsoon")
