"""Fuel particles, fuel complexes and the standard fire behavior fuel models.

A fuel complex is a fuel bed of up to ten particles, each belonging to one
life category. Complexes built from the standard catalog always carry six
particles in a fixed order (dead 1-h, dead 10-h, dead 100-h, dead herbaceous,
live herbaceous and live woody), so the live herbaceous to dead herbaceous
load transfer pair is always at the same indices.

Classes:
    - FuelParticle: Physical description of one fuel particle class.
    - FuelComplex: A fuel bed made of fuel particles.
    - StandardFuelModels: Catalog of the Anderson 13 and Scott & Burgan 40 models.

References:
    - Anderson, H. E. (1982). Aids to Determining Fuel Models for Estimating Fire Behavior.
      USDA Forest Service General Technical Report INT-122.
    - Scott, J. H., Burgan, R. E. (2005). Standard Fire Behavior Fuel Models: A Comprehensive
      Set for Use with Rothermel's Surface Fire Spread Model. USDA Forest Service
      General Technical Report RMRS-GTR-153.

"""
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple
import json
import os

import numpy as np

from surfacefire.exceptions import FuelModelError, ValidationError
from surfacefire.utilities.fire_util import LifeCategory, LoadTransfer, MAX_PARTICLES

# SAVR (ft2/ft3) of the standard 10-h and 100-h particles
SAVR_10H = 109.0
SAVR_100H = 30.0

# Particle order of complexes built from the standard catalog
DEAD_1H, DEAD_10H, DEAD_100H, DEAD_HERB, LIVE_HERB, LIVE_WOOD = range(6)


@dataclass(frozen=True)
class FuelParticle:
    life: LifeCategory
    load: float
    savr: float
    heat: float = 8000.0
    density: float = 32.0
    silica_total: float = 0.0555
    silica_effective: float = 0.010


class FuelComplex:
    """A fuel bed: depth, dead extinction moisture and its fuel particles.

    Args:
        name (str): Descriptive name of the fuel model.
        code (str): Short code or number used to select the model.
        depth (float): Fuel bed depth (ft).
        dead_mext (float): Dead fuel moisture of extinction (fraction).
        particles (List[FuelParticle]): At most ten fuel particles.
        transfer (LoadTransfer, optional): Herbaceous load transfer equation.
            Defaults to ``LoadTransfer.STATIC``.
        transfer_pair (Tuple[int, int], optional): Indices of the live herbaceous
            particle and the dead particle that receives its cured load.

    Raises:
        ValidationError: If there are more than ``MAX_PARTICLES`` particles.
        FuelModelError: If the transfer pair does not connect a live
            herbaceous particle to a dead particle.
    """
    def __init__(self, name: str, code: str, depth: float, dead_mext: float,
                 particles: List[FuelParticle], transfer: LoadTransfer = LoadTransfer.STATIC,
                 transfer_pair: Optional[Tuple[int, int]] = None):

        if len(particles) > MAX_PARTICLES:
            raise ValidationError(f"A fuel complex holds at most {MAX_PARTICLES} particles",
                                  field="particles", value=len(particles))

        if transfer_pair is not None:
            live, dead = transfer_pair
            if not (0 <= live < len(particles) and 0 <= dead < len(particles)):
                raise FuelModelError("Load transfer pair is out of range", fuel_model_id=code)
            if particles[live].life is not LifeCategory.LIVE_HERB or not particles[dead].life.is_dead:
                raise FuelModelError("Load transfer must move live herbaceous load to a dead particle",
                                     fuel_model_id=code)

        self.name = name
        self.code = code
        self.depth = depth
        self.dead_mext = dead_mext
        self.particles = list(particles)
        self.transfer = transfer
        self.transfer_pair = transfer_pair

    def __repr__(self) -> str:
        return f"FuelComplex(code={self.code!r}, name={self.name!r}, particles={len(self.particles)})"

    @property
    def num_particles(self) -> int:
        return len(self.particles)

    @property
    def herb_load(self) -> float:
        """Live herbaceous load available for transfer (lb/ft2)."""
        if self.transfer_pair is None:
            return 0.0
        return self.particles[self.transfer_pair[0]].load

    def arrays(self, loads: Optional[np.ndarray] = None) -> dict:
        """Per particle arrays in the argument order of the fuel bed equations.

        Args:
            loads (np.ndarray, optional): Loads replacing the particles' own, e.g.
                after herbaceous load transfer.
        """
        p = self.particles
        return {
            "is_dead": np.array([x.life.is_dead for x in p], dtype=bool),
            "load": np.array([x.load for x in p], dtype=float) if loads is None else np.asarray(loads, dtype=float),
            "savr": np.array([x.savr for x in p], dtype=float),
            "heat": np.array([x.heat for x in p], dtype=float),
            "dens": np.array([x.density for x in p], dtype=float),
            "stot": np.array([x.silica_total for x in p], dtype=float),
            "seff": np.array([x.silica_effective for x in p], dtype=float),
        }

    def transferred_loads(self, cured_fraction: float) -> np.ndarray:
        """Particle loads after moving ``cured_fraction`` of the herbaceous load to dead."""
        loads = np.array([x.load for x in self.particles], dtype=float)
        if self.transfer_pair is not None:
            live, dead = self.transfer_pair
            moved = loads[live] * cured_fraction
            loads[live] -= moved
            loads[dead] += moved
        return loads

    def with_particle(self, index: int, **changes) -> "FuelComplex":
        """Returns a copy with one particle's fields replaced."""
        particles = list(self.particles)
        particles[index] = replace(particles[index], **changes)
        return FuelComplex(self.name, self.code, self.depth, self.dead_mext, particles,
                           self.transfer, self.transfer_pair)


class StandardFuelModels:
    """Catalog of the standard burnable fire behavior fuel models.

    Models are looked up by number (``1``, ``"101"``) or code (``"GR1"``,
    case-insensitive). The JSON catalog is read once per process.
    """
    _fuel_models = None # class-level cache

    @classmethod
    def load_fuel_models(cls) -> dict:
        if cls._fuel_models is None:
            json_path = os.path.join(os.path.dirname(__file__), "standard_fuel_models.json")
            with open(json_path, "r") as f:
                cls._fuel_models = json.load(f)["models"]
        return cls._fuel_models

    @classmethod
    def numbers(cls) -> List[int]:
        return sorted(int(k) for k in cls.load_fuel_models())

    @classmethod
    def _lookup(cls, model) -> Tuple[str, dict]:
        models = cls.load_fuel_models()
        key = str(model).strip()
        if key in models:
            return key, models[key]
        for number, entry in models.items():
            if entry["code"].lower() == key.lower():
                return number, entry
        raise FuelModelError("Unknown fuel model", fuel_model_id=model)

    @classmethod
    def get(cls, model) -> FuelComplex:
        """Builds the six-particle fuel complex for a standard fuel model.

        Args:
            model (int | str): Fuel model number or code.

        Raises:
            FuelModelError: If the model is not in the catalog.

        Returns:
            FuelComplex: A fresh complex; callers may modify it freely.
        """
        number, m = cls._lookup(model)

        dead = LifeCategory.DEAD_TIMELAG
        particles = [
            FuelParticle(dead, m["load_1h"], m["savr_1h"], m["heat_dead"]),
            FuelParticle(dead, m["load_10h"], SAVR_10H, m["heat_dead"]),
            FuelParticle(dead, m["load_100h"], SAVR_100H, m["heat_dead"]),
            FuelParticle(dead, 0.0, m["savr_herb"], m["heat_dead"]),
            FuelParticle(LifeCategory.LIVE_HERB, m["load_herb"], m["savr_herb"], m["heat_live"]),
            FuelParticle(LifeCategory.LIVE_WOOD, m["load_wood"], m["savr_wood"], m["heat_live"]),
        ]

        transfer = LoadTransfer(m["transfer"])
        return FuelComplex(m["name"], m["code"], m["depth"], m["dead_mext"], particles,
                           transfer=transfer, transfer_pair=(LIVE_HERB, DEAD_HERB))
