from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, model_validator

MaterialName = Literal["plastic", "balsa", "cardboard"]


class NoseSchema(BaseModel):
    shape: Literal["conical", "ogive", "elliptical"] = "conical"
    length_m: float = Field(..., gt=0)
    diameter_m: float = Field(..., gt=0)
    thickness_m: float = Field(..., ge=0)
    material: MaterialName = "plastic"

    @model_validator(mode="after")
    def validate_wall(self):
        if self.thickness_m > self.diameter_m / 2:
            raise ValueError("nose thickness must not exceed half the diameter")
        return self


class BodySchema(BaseModel):
    length_m: float = Field(..., gt=0)
    diameter_m: float = Field(..., gt=0)
    thickness_m: float = Field(..., ge=0)
    material: MaterialName = "cardboard"

    @model_validator(mode="after")
    def validate_wall(self):
        if self.thickness_m > self.diameter_m / 2:
            raise ValueError("body thickness must not exceed half the diameter")
        return self


class TrapezoidalFinSchema(BaseModel):
    type: Literal["trapezoidal"] = "trapezoidal"
    root_chord_m: float = Field(..., ge=0)
    tip_chord_m: float = Field(..., ge=0)
    sweep_length_m: float = Field(default=0.0, ge=0)
    height_m: float = Field(..., ge=0)


class EllipticalFinSchema(BaseModel):
    type: Literal["elliptical"] = "elliptical"
    root_chord_m: float = Field(..., ge=0)
    height_m: float = Field(..., ge=0)


class PointSchema(BaseModel):
    x: float
    y: float


class FreeformFinSchema(BaseModel):
    type: Literal["freeform"] = "freeform"
    points: list[PointSchema] = Field(..., min_length=3)


FinShapeSchema = Annotated[
    Union[TrapezoidalFinSchema, EllipticalFinSchema, FreeformFinSchema],
    Field(discriminator="type"),
]


class FinSetSchema(BaseModel):
    shape: FinShapeSchema
    count: int = Field(default=3, ge=1)
    thickness_m: float = Field(..., ge=0)
    material: MaterialName = "balsa"
    offset_m: float = Field(..., ge=0)


class RocketDesignSchema(BaseModel):
    name: str = "rocket"
    designer: str = ""
    nose: NoseSchema
    body: BodySchema
    fins: FinSetSchema
    payload_mass_kg: float = Field(default=0.0, ge=0)


class LaunchConditionsSchema(BaseModel):
    rod_elevation_deg: float = Field(default=89.0, gt=0, le=90)
    rod_length_m: float = Field(default=1.0, ge=0)


class RocketPropertiesRequest(BaseModel):
    rocket: RocketDesignSchema
    motor_id: str


class ComponentResultSchema(BaseModel):
    volume_m3: float
    mass_kg: float
    cg_m: float
    inertia_kg_m2: float
    cd: float
    cna: float
    cp_m: float


class RocketSpecsSchema(BaseModel):
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
    motor_name: str


class RocketPropertiesResponse(BaseModel):
    nose: ComponentResultSchema
    body: ComponentResultSchema
    fins: ComponentResultSchema
    specs: RocketSpecsSchema
    stability_margin: float


class SimulationRequest(BaseModel):
    rocket: RocketDesignSchema
    motor_id: str
    launch: LaunchConditionsSchema = Field(default_factory=LaunchConditionsSchema)
    time_step_s: float | None = Field(default=None, gt=0)
    max_time_s: float | None = Field(default=None, gt=0)
    sample_every: int | None = Field(default=None, ge=1)


class TrajectorySampleSchema(BaseModel):
    time_s: float
    x_m: float
    y_m: float
    vx_m_s: float
    vy_m_s: float
    mass_kg: float
    fx_n: float
    fy_n: float
    pitch_rad: float
    pitch_rate_rad_s: float
    is_combusting: bool
    on_rod: bool


class FlightSummarySchema(BaseModel):
    apogee_m: float
    apogee_time_s: float
    max_speed_m_s: float
    rod_exit_speed_m_s: float | None = None
    burnout_time_s: float | None = None
    flight_time_s: float
    touched_down: bool
    termination: Literal["touchdown", "max_time", "cancelled"]


class SimulationResponse(BaseModel):
    name: str
    properties: RocketPropertiesResponse
    summary: FlightSummarySchema
    samples: list[TrajectorySampleSchema]


class ComparisonEntrySchema(BaseModel):
    rocket: RocketDesignSchema
    motor_id: str


class ComparisonRequest(BaseModel):
    entries: list[ComparisonEntrySchema] = Field(..., min_length=1)
    launch: LaunchConditionsSchema = Field(default_factory=LaunchConditionsSchema)
    time_step_s: float | None = Field(default=None, gt=0)
    max_time_s: float | None = Field(default=None, gt=0)
    sample_every: int | None = Field(default=None, ge=1)


class JobResponse(BaseModel):
    job_id: str
    status: str
    result: Any | None = None
    error: str | None = None


class ThrustPointSchema(BaseModel):
    time_s: float
    thrust_n: float


class MotorSummary(BaseModel):
    motor_id: str
    filename: str
    source: Literal["bundled"] = "bundled"
    name: str
    manufacturer: str
    diameter_m: float
    length_m: float
    propellant_mass_kg: float
    total_mass_kg: float
    delays_s: list[float | None]  # None marks a plugged motor
    burn_time_s: float
    peak_thrust_n: float
    average_thrust_n: float
    total_impulse_ns: float
    impulse_class: str | None = None


class MotorDetail(MotorSummary):
    thrust_curve: list[ThrustPointSchema]
