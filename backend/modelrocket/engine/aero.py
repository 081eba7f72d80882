from __future__ import annotations

import math

from modelrocket.engine.constants import NU_AIR, REF_VEL, TURBULENT_RE
from modelrocket.engine.errors import ConfigurationError


def reference_area(diameter_m: float) -> float:
    return math.pi * (diameter_m / 2.0) ** 2


def reynolds_number(ref_length_m: float) -> float:
    return REF_VEL * ref_length_m / NU_AIR


def skin_friction_cd(ref_length_m: float, surface_area_m2: float, ref_area_m2: float) -> float:
    """Skin-friction drag coefficient scaled by wetted/reference area.

    Laminar or turbulent flat-plate correlation at the reference velocity,
    floored by the empirical low-Reynolds roughness term.
    """
    if ref_length_m <= 0:
        raise ConfigurationError(f"reference length must be positive, got {ref_length_m}")
    if ref_area_m2 <= 0:
        raise ConfigurationError(f"reference area must be positive, got {ref_area_m2}")
    re = reynolds_number(ref_length_m)
    if re > TURBULENT_RE:
        cf = 0.455 / math.log10(re) ** 2.58
    else:
        cf = 1.328 / math.sqrt(re)
    cf = max(cf, 0.032 * (3e-5 / ref_length_m) ** 0.2)
    return cf * surface_area_m2 / ref_area_m2
