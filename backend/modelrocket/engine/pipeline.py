from __future__ import annotations

from dataclasses import dataclass
import logging

from modelrocket.engine.geometry import RocketDesign
from modelrocket.engine.motor import MotorSpec
from modelrocket.engine.rocket import RocketProperties, calculate_rocket_properties
from modelrocket.engine.trajectory import (
    DEFAULT_MAX_TIME_S,
    DEFAULT_TIME_STEP_S,
    LaunchConditions,
    Termination,
    Trajectory,
    simulate_trajectory,
)

logger = logging.getLogger("modelrocket.engine")


@dataclass(frozen=True)
class FlightSummary:
    apogee_m: float
    apogee_time_s: float
    max_speed_m_s: float
    rod_exit_speed_m_s: float | None
    burnout_time_s: float | None
    flight_time_s: float
    touched_down: bool
    termination: Termination


@dataclass(frozen=True)
class SimulationResult:
    name: str
    properties: RocketProperties
    trajectory: Trajectory
    summary: FlightSummary


@dataclass(frozen=True)
class SimulationEntry:
    design: RocketDesign
    motor: MotorSpec


def summarize(trajectory: Trajectory) -> FlightSummary:
    apogee = trajectory.apogee()
    rod_exit = trajectory.rod_exit()
    return FlightSummary(
        apogee_m=apogee.y_m,
        apogee_time_s=apogee.time_s,
        max_speed_m_s=trajectory.max_speed(),
        rod_exit_speed_m_s=rod_exit.speed_m_s if rod_exit is not None else None,
        burnout_time_s=trajectory.burnout_time_s,
        flight_time_s=trajectory.flight_time_s,
        touched_down=trajectory.touched_down,
        termination=trajectory.termination,
    )


def run_simulation(
    design: RocketDesign,
    motor: MotorSpec,
    launch: LaunchConditions,
    time_step_s: float = DEFAULT_TIME_STEP_S,
    max_time_s: float = DEFAULT_MAX_TIME_S,
) -> SimulationResult:
    properties = calculate_rocket_properties(design, motor)
    trajectory = simulate_trajectory(properties.specs, launch, time_step_s, max_time_s)
    summary = summarize(trajectory)
    logger.info(
        "simulated %s with %s: apogee=%.2f m, flight=%.2f s (%s)",
        design.name,
        motor.name,
        summary.apogee_m,
        summary.flight_time_s,
        summary.termination.value,
    )
    return SimulationResult(
        name=design.name, properties=properties, trajectory=trajectory, summary=summary
    )


def compare_rockets(
    entries: list[SimulationEntry],
    launch: LaunchConditions,
    time_step_s: float = DEFAULT_TIME_STEP_S,
    max_time_s: float = DEFAULT_MAX_TIME_S,
) -> list[SimulationResult]:
    """Simulate a primary design and its rivals; one independent run each, in order."""
    return [
        run_simulation(entry.design, entry.motor, launch, time_step_s, max_time_s)
        for entry in entries
    ]
