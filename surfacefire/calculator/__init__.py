"""Surface fire calculation for one or two fuel complexes.

Modules:
    - quantities: Declarations of every computed quantity.
    - wind_moisture: Midflame wind and fuel particle moisture resolution.
    - vector_resolver: Beta and psi spread vector conventions.
    - surface_fire: The ordered single-complex pipeline.
    - blending: Two-complex blending and the top-level calculator.
"""
