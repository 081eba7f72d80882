from __future__ import annotations

import math

from modelrocket.engine.aero import reference_area, skin_friction_cd
from modelrocket.engine.errors import ConfigurationError
from modelrocket.engine.geometry import ComponentResult, Nose, NoseShape

NOSE_CNA = 2.0
OGIVE_DRAG_FACTOR = 0.82
MIN_ECCENTRICITY = 0.001


def _conical_shell_volume(radius: float, length: float, thickness: float) -> float:
    outer = math.pi * radius**2 * length / 3.0
    inner_radius = max(0.0, radius - thickness)
    inner_length = max(0.0, length * (inner_radius / radius))
    inner = math.pi * inner_radius**2 * inner_length / 3.0
    return outer - inner


def _ellipsoid_surface(radius: float, length: float) -> float:
    aspect_ratio = radius / length
    if aspect_ratio >= 1.0:
        return 4.0 * math.pi * radius**2
    eccentricity = math.sqrt(1.0 - aspect_ratio**2)
    if eccentricity > MIN_ECCENTRICITY:
        return 2.0 * math.pi * radius**2 * (
            1.0 + (length / radius) * math.asin(eccentricity) / eccentricity
        )
    return math.pi * radius * math.hypot(length, radius)


def calculate_nose(nose: Nose) -> ComponentResult:
    if not nose.length_m > 0 or not nose.diameter_m > 0:
        raise ConfigurationError("nose length and diameter must be positive")

    radius = nose.diameter_m / 2.0
    length = nose.length_m
    thickness = nose.thickness_m
    density = nose.material.density
    ref_area = reference_area(nose.diameter_m)
    phi = math.atan(nose.diameter_m / (2.0 * length))
    slant = math.hypot(length, radius)

    if nose.shape == NoseShape.CONICAL:
        volume = _conical_shell_volume(radius, length, thickness)
        wetted = math.pi * radius * slant
        mass = volume * density
        cg = length / 4.0
        inertia = mass * (radius**2 / 10.0 + length**2 / 18.0)
        cd = 0.8 * math.sin(phi) ** 2
    elif nose.shape == NoseShape.OGIVE:
        # thin shell over the cone-equivalent surface
        wetted = math.pi * radius * slant
        volume = wetted * thickness
        mass = volume * density
        cg = 0.4 * length + length**2 / (6.0 * radius)
        inertia = mass * (radius**2 / 10.0 + length**2 / 18.0)
        cd = OGIVE_DRAG_FACTOR * 0.8 * math.sin(phi) ** 2
    elif nose.shape == NoseShape.ELLIPTICAL:
        # half of the full ellipsoid surface
        wetted = _ellipsoid_surface(radius, length) / 2.0
        volume = wetted * thickness
        mass = volume * density
        cg = 3.0 * length / 8.0
        inertia = mass * (radius**2 / 5.0 + length**2 / 20.0)
        cd = 1.0 / (length / nose.diameter_m + 1.0) ** 2.5
    else:
        raise ConfigurationError(f"unsupported nose shape: {nose.shape}")

    cd += skin_friction_cd(length, wetted, ref_area)

    return ComponentResult(
        volume_m3=volume,
        mass_kg=mass,
        cg_m=cg,
        inertia_kg_m2=max(0.0, inertia),
        cd=cd,
        cna=NOSE_CNA,
        cp_m=length - volume / ref_area,
    )
