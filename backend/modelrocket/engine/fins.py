from __future__ import annotations

from dataclasses import dataclass
import math

from modelrocket.engine.aero import reference_area, skin_friction_cd
from modelrocket.engine.errors import ConfigurationError
from modelrocket.engine.geometry import (
    ComponentResult,
    EllipticalFin,
    FinSet,
    FreeformFin,
    TrapezoidalFin,
)


@dataclass(frozen=True)
class FinPlanform:
    area_m2: float
    centroid_x_m: float
    centroid_y_m: float
    chord_m: float


def _polygon_planform(points: tuple[tuple[float, float], ...]) -> FinPlanform:
    if not points:
        return FinPlanform(area_m2=0.0, centroid_x_m=0.0, centroid_y_m=0.0, chord_m=0.0)
    xs = [p[0] for p in points]
    chord = max(xs) - min(xs)
    mean_x = sum(xs) / len(points)
    mean_y = sum(p[1] for p in points) / len(points)

    signed_area = 0.0
    moment_x = 0.0
    moment_y = 0.0
    for i, (x0, y0) in enumerate(points):
        x1, y1 = points[(i + 1) % len(points)]
        cross = x0 * y1 - x1 * y0
        signed_area += cross
        moment_x += (x0 + x1) * cross
        moment_y += (y0 + y1) * cross
    signed_area /= 2.0

    if len(points) < 3 or abs(signed_area) < 1e-15:
        return FinPlanform(area_m2=0.0, centroid_x_m=mean_x, centroid_y_m=mean_y, chord_m=chord)
    return FinPlanform(
        area_m2=abs(signed_area),
        centroid_x_m=moment_x / (6.0 * signed_area),
        centroid_y_m=moment_y / (6.0 * signed_area),
        chord_m=chord,
    )


def fin_planform(fins: FinSet) -> FinPlanform:
    """Single-fin area and centroid, measured from the root leading edge."""
    shape = fins.shape
    if isinstance(shape, TrapezoidalFin):
        root, tip, h = shape.root_chord_m, shape.tip_chord_m, shape.height_m
        chord_sum = root + tip
        area = chord_sum * h / 2.0
        if chord_sum <= 0:
            return FinPlanform(area_m2=0.0, centroid_x_m=0.0, centroid_y_m=0.0, chord_m=0.0)
        # leading-edge sweep shifts the centroid aft in proportion to the tip share
        x = (shape.sweep_length_m * (root + 2.0 * tip) + root**2 + root * tip + tip**2) / (
            3.0 * chord_sum
        )
        y = h * (root + 2.0 * tip) / (3.0 * chord_sum)
        return FinPlanform(area_m2=area, centroid_x_m=x, centroid_y_m=y, chord_m=root)
    if isinstance(shape, EllipticalFin):
        area = math.pi * shape.root_chord_m * shape.height_m / 4.0
        return FinPlanform(
            area_m2=area,
            centroid_x_m=shape.root_chord_m / 2.0,
            centroid_y_m=4.0 * shape.height_m / (3.0 * math.pi),
            chord_m=shape.root_chord_m,
        )
    if isinstance(shape, FreeformFin):
        return _polygon_planform(shape.points)
    raise ConfigurationError(f"unsupported fin shape: {type(shape).__name__}")


def calculate_fins(fins: FinSet, body_diameter_m: float) -> ComponentResult:
    if body_diameter_m <= 0:
        raise ConfigurationError("body diameter must be positive")
    planform = fin_planform(fins)
    volume = planform.area_m2 * fins.thickness_m * fins.count
    mass = volume * fins.material.density

    # both faces of every fin
    wetted = 2.0 * planform.area_m2 * fins.count
    cd = 0.0
    if wetted > 0:
        cd = skin_friction_cd(planform.chord_m, wetted, reference_area(body_diameter_m))

    # TODO: Barrowman fin lift (cna, cp) once the fin-lift model is agreed on
    return ComponentResult(
        volume_m3=volume,
        mass_kg=mass,
        cg_m=fins.offset_m,
        inertia_kg_m2=0.0,
        cd=cd,
        cna=0.0,
        cp_m=0.0,
    )
