import math

from modelrocket.api.v1.schemas import (
    BodySchema,
    ComponentResultSchema,
    EllipticalFinSchema,
    FinSetSchema,
    FlightSummarySchema,
    FreeformFinSchema,
    LaunchConditionsSchema,
    MotorDetail,
    MotorSummary,
    NoseSchema,
    RocketDesignSchema,
    RocketPropertiesResponse,
    RocketSpecsSchema,
    SimulationResponse,
    ThrustPointSchema,
    TrajectorySampleSchema,
)
from modelrocket.engine.constants import Material
from modelrocket.engine.geometry import (
    Body,
    ComponentResult,
    EllipticalFin,
    FinSet,
    FinShape,
    FreeformFin,
    Nose,
    NoseShape,
    RocketDesign,
    TrapezoidalFin,
)
from modelrocket.engine.motor import MotorSpec
from modelrocket.engine.pipeline import FlightSummary, SimulationResult
from modelrocket.engine.rocket import RocketProperties
from modelrocket.engine.trajectory import LaunchConditions, Trajectory
from modelrocket.motors.storage import MotorInfo


def nose_from_schema(schema: NoseSchema) -> Nose:
    return Nose(
        shape=NoseShape(schema.shape),
        length_m=schema.length_m,
        diameter_m=schema.diameter_m,
        thickness_m=schema.thickness_m,
        material=Material(schema.material),
    )


def body_from_schema(schema: BodySchema) -> Body:
    return Body(
        length_m=schema.length_m,
        diameter_m=schema.diameter_m,
        thickness_m=schema.thickness_m,
        material=Material(schema.material),
    )


def fin_shape_from_schema(shape) -> FinShape:
    if isinstance(shape, EllipticalFinSchema):
        return EllipticalFin(root_chord_m=shape.root_chord_m, height_m=shape.height_m)
    if isinstance(shape, FreeformFinSchema):
        return FreeformFin(points=tuple((p.x, p.y) for p in shape.points))
    return TrapezoidalFin(
        root_chord_m=shape.root_chord_m,
        tip_chord_m=shape.tip_chord_m,
        sweep_length_m=shape.sweep_length_m,
        height_m=shape.height_m,
    )


def fins_from_schema(schema: FinSetSchema) -> FinSet:
    return FinSet(
        shape=fin_shape_from_schema(schema.shape),
        count=schema.count,
        thickness_m=schema.thickness_m,
        material=Material(schema.material),
        offset_m=schema.offset_m,
    )


def design_from_schema(schema: RocketDesignSchema) -> RocketDesign:
    return RocketDesign(
        name=schema.name,
        designer=schema.designer,
        nose=nose_from_schema(schema.nose),
        body=body_from_schema(schema.body),
        fins=fins_from_schema(schema.fins),
        payload_mass_kg=schema.payload_mass_kg,
    )


def launch_from_schema(schema: LaunchConditionsSchema) -> LaunchConditions:
    return LaunchConditions(
        rod_elevation_deg=schema.rod_elevation_deg, rod_length_m=schema.rod_length_m
    )


def _component_schema(result: ComponentResult) -> ComponentResultSchema:
    return ComponentResultSchema(**result.__dict__)


def properties_to_schema(properties: RocketProperties) -> RocketPropertiesResponse:
    specs = properties.specs
    spec_values = {k: v for k, v in specs.__dict__.items() if k != "motor"}
    return RocketPropertiesResponse(
        nose=_component_schema(properties.nose),
        body=_component_schema(properties.body),
        fins=_component_schema(properties.fins),
        specs=RocketSpecsSchema(**spec_values, motor_name=specs.motor.name),
        stability_margin=properties.stability_margin,
    )


def summary_to_schema(summary: FlightSummary) -> FlightSummarySchema:
    values = dict(summary.__dict__)
    values["termination"] = summary.termination.value
    return FlightSummarySchema(**values)


def sample_stride(sample_count: int, sample_every: int | None, max_samples: int) -> int:
    capped = max(1, math.ceil(sample_count / max(max_samples, 1)))
    return max(sample_every or 1, capped)


def samples_to_schema(trajectory: Trajectory, every: int) -> list[TrajectorySampleSchema]:
    picked = list(trajectory.samples[::every])
    if trajectory.samples and picked[-1] is not trajectory.samples[-1]:
        picked.append(trajectory.samples[-1])
    return [TrajectorySampleSchema(**sample.__dict__) for sample in picked]


def simulation_to_schema(result: SimulationResult, every: int) -> SimulationResponse:
    return SimulationResponse(
        name=result.name,
        properties=properties_to_schema(result.properties),
        summary=summary_to_schema(result.summary),
        samples=samples_to_schema(result.trajectory, every),
    )


def motor_summary(info: MotorInfo, spec: MotorSpec) -> MotorSummary:
    return MotorSummary(**_motor_values(info, spec))


def motor_detail(info: MotorInfo, spec: MotorSpec) -> MotorDetail:
    return MotorDetail(
        **_motor_values(info, spec),
        thrust_curve=[
            ThrustPointSchema(time_s=p.time_s, thrust_n=p.thrust_n) for p in spec.thrust_curve
        ],
    )


def _motor_values(info: MotorInfo, spec: MotorSpec) -> dict:
    return {
        "motor_id": info.motor_id,
        "filename": info.filename,
        "source": info.source,
        "name": spec.name,
        "manufacturer": spec.manufacturer,
        "diameter_m": spec.diameter_m,
        "length_m": spec.length_m,
        "propellant_mass_kg": spec.propellant_mass_kg,
        "total_mass_kg": spec.total_mass_kg,
        "delays_s": [None if math.isinf(d) else d for d in spec.delays_s],
        "burn_time_s": spec.burn_time_s,
        "peak_thrust_n": spec.peak_thrust_n,
        "average_thrust_n": spec.average_thrust_n,
        "total_impulse_ns": spec.total_impulse_ns,
        "impulse_class": spec.impulse_class,
    }
