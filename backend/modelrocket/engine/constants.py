from __future__ import annotations

from enum import StrEnum

# --- PHYSICS CONSTANTS ---
AIR_DENSITY = 1.225  # kg/m^3, sea level
GRAVITY = 9.81  # m/s^2
NU_AIR = 15.01e-6  # kinematic viscosity of air, m^2/s
REF_VEL = 30.0  # reference velocity for Reynolds number, m/s

TURBULENT_RE = 5e5

# --- MATERIALS ---


class Material(StrEnum):
    PLASTIC = "plastic"
    BALSA = "balsa"
    CARDBOARD = "cardboard"

    @property
    def density(self) -> float:
        return MATERIAL_DENSITY_KG_M3[self]


MATERIAL_DENSITY_KG_M3: dict[Material, float] = {
    Material.PLASTIC: 1250.0,
    Material.BALSA: 170.0,
    Material.CARDBOARD: 680.0,
}
