from __future__ import annotations

import math

from modelrocket.engine.aero import reference_area, skin_friction_cd
from modelrocket.engine.errors import ConfigurationError
from modelrocket.engine.geometry import Body, ComponentResult, Nose


def calculate_body(body: Body, nose: Nose) -> ComponentResult:
    if not body.length_m > 0 or not body.diameter_m > 0:
        raise ConfigurationError("body length and diameter must be positive")

    # first-order thin shell: circumference x length x wall
    volume = math.pi * body.diameter_m * body.length_m * body.thickness_m
    mass = volume * body.material.density
    inertia = mass * (body.diameter_m**2 / 8.0 + body.length_m**2 / 12.0)
    wetted = math.pi * body.diameter_m * body.length_m
    cd = skin_friction_cd(body.length_m, wetted, reference_area(body.diameter_m))

    return ComponentResult(
        volume_m3=volume,
        mass_kg=mass,
        cg_m=nose.length_m + body.length_m / 2.0,
        inertia_kg_m2=inertia,
        cd=cd,
        cna=0.0,
        cp_m=0.0,
    )
