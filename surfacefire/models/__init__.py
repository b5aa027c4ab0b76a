"""Fire behavior models for surfacefire.

This package provides the physical models and reference data behind the
surface fire calculation.

Modules:
    - fire_physics: Rothermel (1972) spread, Albini (1976) wind adjustment and fire ellipse equations.
    - expected_spread: Expected spread rate through a random mixture of two or more fuels.
    - fuel_models: Fuel particles, fuel complexes and the standard fuel model catalog.
    - moisture_scenarios: Named fuel moisture scenarios.
"""
