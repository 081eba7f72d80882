from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
import logging
import math
from typing import Callable

import numpy as np

from modelrocket.engine.constants import AIR_DENSITY, GRAVITY
from modelrocket.engine.errors import ConfigurationError
from modelrocket.engine.rocket import RocketSpecs

logger = logging.getLogger("modelrocket.engine")

DEFAULT_TIME_STEP_S = 5e-4
DEFAULT_MAX_TIME_S = 30.0


class Termination(StrEnum):
    TOUCHDOWN = "touchdown"
    MAX_TIME = "max_time"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class LaunchConditions:
    rod_elevation_deg: float = 89.0
    rod_length_m: float = 1.0


@dataclass(frozen=True)
class TrajectorySample:
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

    @property
    def speed_m_s(self) -> float:
        return math.hypot(self.vx_m_s, self.vy_m_s)


SAMPLE_FIELDS = (
    "time_s",
    "x_m",
    "y_m",
    "vx_m_s",
    "vy_m_s",
    "mass_kg",
    "fx_n",
    "fy_n",
    "pitch_rad",
    "pitch_rate_rad_s",
    "is_combusting",
    "on_rod",
)


@dataclass(frozen=True)
class Trajectory:
    samples: tuple[TrajectorySample, ...]
    termination: Termination

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    @property
    def touched_down(self) -> bool:
        return self.termination == Termination.TOUCHDOWN

    @property
    def flight_time_s(self) -> float:
        return self.samples[-1].time_s if self.samples else 0.0

    @property
    def burnout_time_s(self) -> float | None:
        for sample in self.samples:
            if not sample.is_combusting:
                return sample.time_s
        return None

    def apogee(self) -> TrajectorySample:
        return max(self.samples, key=lambda s: s.y_m)

    def max_speed(self) -> float:
        return max((s.speed_m_s for s in self.samples), default=0.0)

    def rod_exit(self) -> TrajectorySample | None:
        for sample in self.samples:
            if not sample.on_rod:
                return sample
        return None

    def altitude_series(self, every: int = 1) -> list[tuple[float, float]]:
        every = max(1, every)
        picked = list(self.samples[::every])
        if self.samples and picked[-1] is not self.samples[-1]:
            picked.append(self.samples[-1])
        return [(s.time_s, s.y_m) for s in picked]

    def to_arrays(self) -> dict[str, np.ndarray]:
        columns = {}
        for name in SAMPLE_FIELDS:
            values = [getattr(s, name) for s in self.samples]
            dtype = bool if name in ("is_combusting", "on_rod") else float
            columns[name] = np.asarray(values, dtype=dtype)
        return columns


class TrajectoryBuilder:
    """Append-only sample buffer owned by a single integration run."""

    def __init__(self):
        self._samples: list[TrajectorySample] = []

    def __len__(self) -> int:
        return len(self._samples)

    def append(self, sample: TrajectorySample) -> None:
        self._samples.append(sample)

    def build(self, termination: Termination) -> Trajectory:
        return Trajectory(samples=tuple(self._samples), termination=termination)


def _unit(angle_rad: float) -> tuple[float, float]:
    c, s = math.cos(angle_rad), math.sin(angle_rad)
    # cos(pi/2) is not exactly zero in floating point
    if abs(c) < 1e-15:
        c = 0.0
    if abs(s) < 1e-15:
        s = 0.0
    return c, s


def _wrap_angle(angle: float) -> float:
    """Wrap to (-pi, pi]."""
    wrapped = math.fmod(angle + math.pi, 2.0 * math.pi)
    if wrapped <= 0:
        wrapped += 2.0 * math.pi
    return wrapped - math.pi


def damping_moment(
    cmq: float, speed: float, ref_area: float, ref_length: float, omega: float
) -> float:
    """Pitch-damping moment; always opposes the pitch rate whatever the sign of ``cmq``."""
    return -abs(cmq) * 0.25 * AIR_DENSITY * speed * ref_area * ref_length**2 * omega


def _validate(specs: RocketSpecs, launch: LaunchConditions, time_step_s: float, max_time_s: float) -> None:
    if not time_step_s > 0:
        raise ConfigurationError(f"time step must be positive, got {time_step_s}")
    if not max_time_s >= 0:
        raise ConfigurationError(f"max time must be non-negative, got {max_time_s}")
    if not launch.rod_length_m >= 0:
        raise ConfigurationError(f"rod length must be non-negative, got {launch.rod_length_m}")
    if not specs.burnout_mass_kg > 0:
        raise ConfigurationError("burnout mass must be positive")
    if not specs.ignition_mass_kg >= specs.burnout_mass_kg >= specs.dry_mass_kg >= 0:
        raise ConfigurationError("masses must satisfy ignition >= burnout >= dry >= 0")
    if not specs.inertia_kg_m2 > 0:
        raise ConfigurationError("pitch moment of inertia must be positive")
    if not specs.ref_diameter_m > 0 or not specs.ref_length_m > 0:
        raise ConfigurationError("reference length and diameter must be positive")
    for name in ("cg_ignition_m", "cg_burnout_m", "cp_m", "cd", "cna", "cmq"):
        if not math.isfinite(getattr(specs, name)):
            raise ConfigurationError(f"{name} must be finite")
    if not math.isfinite(launch.rod_elevation_deg):
        raise ConfigurationError("rod elevation must be finite")


def simulate_trajectory(
    specs: RocketSpecs,
    launch: LaunchConditions,
    time_step_s: float = DEFAULT_TIME_STEP_S,
    max_time_s: float = DEFAULT_MAX_TIME_S,
    should_cancel: Callable[[], bool] | None = None,
) -> Trajectory:
    """Integrate the planar 4DoF flight with fixed-step forward Euler.

    The rocket is constrained to the launch rod until its distance from the
    origin exceeds the rod length, then flies free until touchdown or until
    ``max_time_s``. ``should_cancel`` is polled between steps.
    """
    _validate(specs, launch, time_step_s, max_time_s)

    motor = specs.motor
    burn_time = motor.burn_time_s
    ref_area = specs.ref_area_m2
    ref_length = specs.ref_length_m
    dt = time_step_s

    rod_angle = math.radians(launch.rod_elevation_deg)
    rod_x, rod_y = _unit(rod_angle)

    x = y = vx = vy = 0.0
    pitch = rod_angle
    omega = 0.0
    on_rod = True
    combusting = True
    step = 0
    t = 0.0
    termination = Termination.MAX_TIME
    builder = TrajectoryBuilder()

    while True:
        if combusting:
            frac = min(t / burn_time, 1.0) if burn_time > 0 else 1.0
            mass = specs.ignition_mass_kg + (specs.burnout_mass_kg - specs.ignition_mass_kg) * frac
            cg = specs.cg_ignition_m + (specs.cg_burnout_m - specs.cg_ignition_m) * frac
        else:
            mass = specs.burnout_mass_kg
            cg = specs.cg_burnout_m

        speed = math.hypot(vx, vy)
        if speed > 0:
            ux, uy = vx / speed, vy / speed
            alpha = _wrap_angle(pitch - math.atan2(vy, vx))
        else:
            ux = uy = 0.0
            alpha = 0.0

        thrust = motor.thrust_at(t) if combusting else 0.0
        q = 0.5 * AIR_DENSITY * speed**2 * ref_area
        bx, by = _unit(pitch)
        drag = q * specs.cd
        normal = q * specs.cna * alpha

        fx = thrust * bx - drag * ux - normal * by
        fy = thrust * by - mass * GRAVITY - drag * uy + normal * bx

        if on_rod:
            along = fx * rod_x + fy * rod_y
            at_foot = x * rod_x + y * rod_y <= 0 and vx * rod_x + vy * rod_y <= 0
            if at_foot and along <= 0:
                # pad carries the rocket until thrust exceeds the along-rod load
                along = 0.0
                vx = vy = 0.0
            fx, fy = along * rod_x, along * rod_y

        builder.append(
            TrajectorySample(
                time_s=t,
                x_m=x,
                y_m=y,
                vx_m_s=vx,
                vy_m_s=vy,
                mass_kg=mass,
                fx_n=fx,
                fy_n=fy,
                pitch_rad=pitch,
                pitch_rate_rad_s=omega,
                is_combusting=combusting,
                on_rod=on_rod,
            )
        )

        if not on_rod and y <= 0 and vy <= 0:
            termination = Termination.TOUCHDOWN
            break
        if t >= max_time_s:
            break
        if should_cancel is not None and should_cancel():
            termination = Termination.CANCELLED
            break

        x += vx * dt
        y += vy * dt
        vx += fx / mass * dt
        vy += fy / mass * dt
        pitch += omega * dt

        if not on_rod:
            moment = -(specs.cp_m - cg) * normal
            moment += damping_moment(specs.cmq, speed, ref_area, ref_length, omega)
            omega += moment / specs.inertia_kg_m2 * dt

        if on_rod:
            # the rod foot is the lowest point of the rail
            if x * rod_x + y * rod_y < 0:
                x = y = vx = vy = 0.0
        elif y <= 0:
            y = 0.0
            vy = min(vy, 0.0)

        if on_rod and math.hypot(x, y) > launch.rod_length_m:
            on_rod = False
            logger.debug("rod exit at t=%.4f s, v=%.3f m/s", t + dt, math.hypot(vx, vy))

        step += 1
        t = step * dt
        was_combusting = combusting
        combusting = t <= burn_time
        if was_combusting and not combusting:
            logger.debug("burnout at t=%.4f s", t)

    trajectory = builder.build(termination)
    logger.debug(
        "trajectory finished: %s after %d samples (t=%.3f s)",
        termination.value,
        len(trajectory),
        trajectory.flight_time_s,
    )
    return trajectory
