"""Named fuel moisture scenarios.

Each scenario supplies all six size class moistures (fraction). Names are
matched case-insensitively.
"""
from dataclasses import dataclass, astuple
from typing import List
import json
import os

from surfacefire.exceptions import UnknownScenarioError


@dataclass(frozen=True)
class MoistureScenario:
    name: str
    description: str
    dead_1h: float
    dead_10h: float
    dead_100h: float
    dead_1000h: float
    live_herb: float
    live_wood: float

    def class_moistures(self) -> tuple:
        """Returns (1-h, 10-h, 100-h, 1000-h, live herb, live wood)."""
        return astuple(self)[2:]


class MoistureScenarios:
    _scenarios = None # class-level cache

    @classmethod
    def load_scenarios(cls) -> dict:
        if cls._scenarios is None:
            json_path = os.path.join(os.path.dirname(__file__), "moisture_scenarios.json")
            with open(json_path, "r") as f:
                raw = json.load(f)["scenarios"]
            cls._scenarios = {name.lower(): MoistureScenario(name=name, **values)
                              for name, values in raw.items()}
        return cls._scenarios

    @classmethod
    def names(cls) -> List[str]:
        return [s.name for s in cls.load_scenarios().values()]

    @classmethod
    def get(cls, name: str) -> MoistureScenario:
        """Looks up a scenario by name.

        Raises:
            UnknownScenarioError: If no scenario has this name.
        """
        scenario = cls.load_scenarios().get(str(name).strip().lower())
        if scenario is None:
            raise UnknownScenarioError(name)
        return scenario
