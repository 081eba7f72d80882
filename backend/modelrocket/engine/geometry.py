from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import math
from typing import Union

from modelrocket.engine.constants import Material
from modelrocket.engine.errors import ConfigurationError


class NoseShape(StrEnum):
    CONICAL = "conical"
    OGIVE = "ogive"
    ELLIPTICAL = "elliptical"


def _require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if not value >= 0:
            raise ConfigurationError(f"{name} must be non-negative, got {value}")


def _require_wall(thickness: float, diameter: float, component: str) -> None:
    if thickness > diameter / 2.0:
        raise ConfigurationError(
            f"{component} thickness {thickness} exceeds half the diameter {diameter}"
        )


@dataclass(frozen=True)
class Nose:
    shape: NoseShape
    length_m: float
    diameter_m: float
    thickness_m: float
    material: Material

    def __post_init__(self):
        _require_non_negative(
            length_m=self.length_m, diameter_m=self.diameter_m, thickness_m=self.thickness_m
        )
        _require_wall(self.thickness_m, self.diameter_m, "nose")


@dataclass(frozen=True)
class Body:
    length_m: float
    diameter_m: float
    thickness_m: float
    material: Material

    def __post_init__(self):
        _require_non_negative(
            length_m=self.length_m, diameter_m=self.diameter_m, thickness_m=self.thickness_m
        )
        _require_wall(self.thickness_m, self.diameter_m, "body")


@dataclass(frozen=True)
class TrapezoidalFin:
    root_chord_m: float
    tip_chord_m: float
    sweep_length_m: float
    height_m: float

    def __post_init__(self):
        _require_non_negative(
            root_chord_m=self.root_chord_m,
            tip_chord_m=self.tip_chord_m,
            sweep_length_m=self.sweep_length_m,
            height_m=self.height_m,
        )


@dataclass(frozen=True)
class EllipticalFin:
    root_chord_m: float
    height_m: float

    def __post_init__(self):
        _require_non_negative(root_chord_m=self.root_chord_m, height_m=self.height_m)


@dataclass(frozen=True)
class FreeformFin:
    # (x, y) in meters: x along the body from the root leading edge, y outward
    points: tuple[tuple[float, float], ...]

    def __post_init__(self):
        for x, y in self.points:
            if not (math.isfinite(x) and math.isfinite(y)):
                raise ConfigurationError(f"fin point ({x}, {y}) must be finite")


FinShape = Union[TrapezoidalFin, EllipticalFin, FreeformFin]


@dataclass(frozen=True)
class FinSet:
    shape: FinShape
    count: int
    thickness_m: float
    material: Material
    offset_m: float

    def __post_init__(self):
        if self.count < 1:
            raise ConfigurationError(f"fin count must be at least 1, got {self.count}")
        _require_non_negative(thickness_m=self.thickness_m, offset_m=self.offset_m)


@dataclass(frozen=True)
class RocketDesign:
    name: str
    nose: Nose
    body: Body
    fins: FinSet
    designer: str = ""
    payload_mass_kg: float = 0.0

    def __post_init__(self):
        _require_non_negative(payload_mass_kg=self.payload_mass_kg)


@dataclass(frozen=True)
class ComponentResult:
    volume_m3: float
    mass_kg: float
    cg_m: float
    inertia_kg_m2: float
    cd: float
    cna: float
    cp_m: float
