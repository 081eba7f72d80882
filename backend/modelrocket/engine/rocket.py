from __future__ import annotations

from dataclasses import dataclass
import logging

from modelrocket.engine.aero import reference_area
from modelrocket.engine.body import calculate_body
from modelrocket.engine.fins import calculate_fins
from modelrocket.engine.geometry import ComponentResult, RocketDesign
from modelrocket.engine.motor import MotorSpec
from modelrocket.engine.nose import calculate_nose

logger = logging.getLogger("modelrocket.engine")


@dataclass(frozen=True)
class RocketSpecs:
    ref_length_m: float
    ref_diameter_m: float
    dry_mass_kg: float
    ignition_mass_kg: float
    burnout_mass_kg: float
    cg_ignition_m: float
    cg_burnout_m: float
    inertia_kg_m2: float
    cp_m: float
    cd: float
    cna: float
    cmq: float
    motor: MotorSpec

    @property
    def ref_area_m2(self) -> float:
        return reference_area(self.ref_diameter_m)


@dataclass(frozen=True)
class RocketProperties:
    nose: ComponentResult
    body: ComponentResult
    fins: ComponentResult
    specs: RocketSpecs
    stability_margin: float


def _weighted_mean(pairs: list[tuple[float, float]]) -> float:
    total_weight = sum(weight for weight, _ in pairs)
    if total_weight <= 0:
        return 0.0
    return sum(weight * value for weight, value in pairs) / total_weight


def calculate_rocket_properties(design: RocketDesign, motor: MotorSpec) -> RocketProperties:
    nose = calculate_nose(design.nose)
    body = calculate_body(design.body, design.nose)
    fins = calculate_fins(design.fins, design.body.diameter_m)
    components = [nose, body, fins]

    ref_length = design.nose.length_m + design.body.length_m
    ref_diameter = design.body.diameter_m

    dry_mass = sum(c.mass_kg for c in components) + design.payload_mass_kg
    burnout_mass = dry_mass + motor.case_mass_kg
    ignition_mass = burnout_mass + motor.propellant_mass_kg

    # motor sits flush with the aft end, payload at the nose/body joint
    motor_cg = ref_length - motor.length_m / 2.0
    structure = [(c.mass_kg, c.cg_m) for c in components]
    structure.append((design.payload_mass_kg, design.nose.length_m))
    cg_ignition = _weighted_mean(structure + [(motor.total_mass_kg, motor_cg)])
    cg_burnout = _weighted_mean(structure + [(motor.case_mass_kg, motor_cg)])

    total_cna = sum(c.cna for c in components)
    cp = _weighted_mean([(c.cna, c.cp_m) for c in components]) if total_cna > 0 else 0.0
    dry_cg = _weighted_mean(structure)
    cmq = -2.0 * sum(c.cna * (c.cg_m - dry_cg) / ref_length for c in components)

    specs = RocketSpecs(
        ref_length_m=ref_length,
        ref_diameter_m=ref_diameter,
        dry_mass_kg=dry_mass,
        ignition_mass_kg=ignition_mass,
        burnout_mass_kg=burnout_mass,
        cg_ignition_m=cg_ignition,
        cg_burnout_m=cg_burnout,
        inertia_kg_m2=sum(c.inertia_kg_m2 for c in components),
        cp_m=cp,
        cd=sum(c.cd for c in components),
        cna=total_cna,
        cmq=cmq,
        motor=motor,
    )
    stability_margin = (cp - cg_ignition) / ref_length
    logger.debug(
        "rocket %s: dry=%.4f kg ignition=%.4f kg cg=%.4f m cp=%.4f m margin=%.3f",
        design.name,
        dry_mass,
        ignition_mass,
        cg_ignition,
        cp,
        stability_margin,
    )
    return RocketProperties(
        nose=nose, body=body, fins=fins, specs=specs, stability_margin=stability_margin
    )
