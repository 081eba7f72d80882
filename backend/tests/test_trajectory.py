import math
import unittest
from dataclasses import replace

import numpy as np

from modelrocket.engine.constants import Material
from modelrocket.engine.errors import ConfigurationError
from modelrocket.engine.geometry import (
    Body,
    FinSet,
    Nose,
    NoseShape,
    RocketDesign,
    TrapezoidalFin,
)
from modelrocket.engine.motor import MotorSpec, ThrustCurvePoint
from modelrocket.engine.rocket import RocketSpecs, calculate_rocket_properties
from modelrocket.engine.trajectory import (
    LaunchConditions,
    Termination,
    damping_moment,
    simulate_trajectory,
)

MOTOR_TEXT = "TEST 13 50 0 0.002 0.012 Test\n0 0\n0.05 6\n0.25 4\n0.3 0\n"


def _motor(points, name="custom"):
    return MotorSpec(
        name=name,
        manufacturer="Test",
        diameter_m=0.018,
        length_m=0.07,
        propellant_mass_kg=0.01,
        total_mass_kg=0.02,
        thrust_curve=tuple(ThrustCurvePoint(t, f) for t, f in points),
    )


def _sparrow_specs() -> RocketSpecs:
    design = RocketDesign(
        name="Sparrow",
        nose=Nose(
            shape=NoseShape.CONICAL,
            length_m=0.08,
            diameter_m=0.025,
            thickness_m=0.001,
            material=Material.PLASTIC,
        ),
        body=Body(length_m=0.25, diameter_m=0.025, thickness_m=0.0005, material=Material.CARDBOARD),
        fins=FinSet(
            shape=TrapezoidalFin(
                root_chord_m=0.05, tip_chord_m=0.025, sweep_length_m=0.02, height_m=0.04
            ),
            count=3,
            thickness_m=0.002,
            material=Material.BALSA,
            offset_m=0.28,
        ),
    )
    return calculate_rocket_properties(design, MotorSpec.from_text(MOTOR_TEXT)).specs


def _box_specs(motor, cd=0.5) -> RocketSpecs:
    return RocketSpecs(
        ref_length_m=0.3,
        ref_diameter_m=0.025,
        dry_mass_kg=0.03,
        ignition_mass_kg=0.05,
        burnout_mass_kg=0.04,
        cg_ignition_m=0.2,
        cg_burnout_m=0.18,
        inertia_kg_m2=1e-4,
        cp_m=0.25,
        cd=cd,
        cna=0.0,
        cmq=0.0,
        motor=motor,
    )


class TrajectoryTests(unittest.TestCase):
    def test_end_to_end_flight_touches_down(self):
        launch = LaunchConditions(rod_elevation_deg=89.0, rod_length_m=1.0)
        trajectory = simulate_trajectory(_sparrow_specs(), launch)
        self.assertEqual(trajectory.termination, Termination.TOUCHDOWN)
        self.assertTrue(trajectory.touched_down)
        self.assertGreater(trajectory.apogee().y_m, launch.rod_length_m)
        self.assertLess(trajectory.flight_time_s, 30.0)
        self.assertIsNotNone(trajectory.rod_exit())
        self.assertAlmostEqual(trajectory.burnout_time_s, 0.3, delta=1e-3)
        for sample in trajectory:
            self.assertFalse(math.isnan(sample.y_m))
            self.assertGreaterEqual(sample.y_m, 0.0)

    def test_first_sample_is_at_rest_with_ignition_mass(self):
        specs = _sparrow_specs()
        trajectory = simulate_trajectory(specs, LaunchConditions(), max_time_s=0.5)
        first = trajectory.samples[0]
        self.assertEqual(first.time_s, 0.0)
        self.assertEqual((first.x_m, first.y_m, first.vx_m_s, first.vy_m_s), (0.0, 0.0, 0.0, 0.0))
        self.assertAlmostEqual(first.mass_kg, specs.ignition_mass_kg)
        self.assertAlmostEqual(first.pitch_rad, math.radians(89.0))
        self.assertTrue(first.on_rod)
        self.assertTrue(first.is_combusting)

    def test_mass_is_blended_while_combusting(self):
        specs = _sparrow_specs()
        trajectory = simulate_trajectory(specs, LaunchConditions(), max_time_s=1.0)
        burning = [s for s in trajectory if s.is_combusting]
        for prev, cur in zip(burning, burning[1:]):
            self.assertLessEqual(cur.mass_kg, prev.mass_kg)
        self.assertAlmostEqual(burning[-1].mass_kg, specs.burnout_mass_kg, delta=1e-5)
        for sample in trajectory:
            if not sample.is_combusting:
                self.assertEqual(sample.mass_kg, specs.burnout_mass_kg)

    def test_rod_phase_keeps_pitch_fixed(self):
        trajectory = simulate_trajectory(_sparrow_specs(), LaunchConditions(), max_time_s=2.0)
        rod_angle = math.radians(89.0)
        for sample in trajectory:
            if not sample.on_rod:
                break
            self.assertEqual(sample.pitch_rad, rod_angle)
            self.assertEqual(sample.pitch_rate_rad_s, 0.0)
            if sample.x_m > 0:
                self.assertAlmostEqual(math.atan2(sample.y_m, sample.x_m), rod_angle)

    def test_vertical_launch_without_lift_stays_on_axis(self):
        specs = replace(_sparrow_specs(), cna=0.0, cmq=0.0)
        trajectory = simulate_trajectory(specs, LaunchConditions(rod_elevation_deg=90.0))
        self.assertEqual(trajectory.termination, Termination.TOUCHDOWN)
        for sample in trajectory:
            self.assertEqual(sample.x_m, 0.0)
            self.assertEqual(sample.vx_m_s, 0.0)

    def test_zero_thrust_stays_on_the_pad(self):
        specs = _box_specs(_motor([(0.0, 0.0), (1.0, 0.0)]), cd=0.0)
        trajectory = simulate_trajectory(
            specs, LaunchConditions(rod_elevation_deg=90.0), max_time_s=2.0
        )
        self.assertEqual(trajectory.termination, Termination.MAX_TIME)
        for sample in trajectory:
            self.assertEqual(sample.y_m, 0.0)
            self.assertTrue(sample.on_rod)

    def test_high_drag_flight_ends_at_max_time(self):
        specs = _box_specs(_motor([(0.0, 50.0), (2.0, 50.0)]), cd=3e5)
        launch = LaunchConditions(rod_elevation_deg=90.0, rod_length_m=0.5)
        trajectory = simulate_trajectory(specs, launch, time_step_s=2e-4, max_time_s=10.0)
        self.assertEqual(trajectory.termination, Termination.MAX_TIME)
        self.assertFalse(trajectory.touched_down)
        self.assertGreater(trajectory.samples[-1].y_m, 0.0)
        self.assertGreaterEqual(trajectory.flight_time_s, 10.0)

    def test_cancellation_is_checked_between_steps(self):
        calls = []

        def should_cancel():
            calls.append(1)
            return len(calls) >= 5

        trajectory = simulate_trajectory(
            _sparrow_specs(), LaunchConditions(), should_cancel=should_cancel
        )
        self.assertEqual(trajectory.termination, Termination.CANCELLED)
        self.assertEqual(len(trajectory), 5)

    def test_runs_are_deterministic(self):
        specs = _sparrow_specs()
        a = simulate_trajectory(specs, LaunchConditions(), max_time_s=1.0)
        b = simulate_trajectory(specs, LaunchConditions(), max_time_s=1.0)
        self.assertEqual(a, b)

    def test_degenerate_specs_are_rejected(self):
        specs = _sparrow_specs()
        launch = LaunchConditions()
        with self.assertRaises(ConfigurationError):
            simulate_trajectory(specs, launch, time_step_s=0.0)
        with self.assertRaises(ConfigurationError):
            simulate_trajectory(replace(specs, inertia_kg_m2=0.0), launch)
        with self.assertRaises(ConfigurationError):
            simulate_trajectory(replace(specs, burnout_mass_kg=0.0, dry_mass_kg=0.0), launch)
        with self.assertRaises(ConfigurationError):
            simulate_trajectory(replace(specs, ref_diameter_m=0.0), launch)
        with self.assertRaises(ConfigurationError):
            simulate_trajectory(specs, LaunchConditions(rod_length_m=-1.0))

    def test_position_advances_with_velocity_from_before_the_step(self):
        specs = replace(
            _box_specs(_motor([(0.0, 100.0), (10.0, 100.0)]), cd=0.0),
            dry_mass_kg=1.0,
            burnout_mass_kg=1.0,
            ignition_mass_kg=1.0,
        )
        launch = LaunchConditions(rod_elevation_deg=90.0, rod_length_m=0.0)
        trajectory = simulate_trajectory(specs, launch, time_step_s=0.1, max_time_s=0.3)
        first, second, third = trajectory.samples[:3]
        self.assertEqual(first.y_m, 0.0)
        self.assertEqual(second.y_m, 0.0)
        self.assertAlmostEqual(second.vy_m_s, (100.0 - 9.81) * 0.1)
        self.assertAlmostEqual(third.y_m, second.vy_m_s * 0.1)
        self.assertAlmostEqual(third.vy_m_s, 2 * (100.0 - 9.81) * 0.1)

    def test_weak_motor_never_sinks_below_the_rod_foot(self):
        specs = _box_specs(_motor([(0.0, 0.6), (0.05, 0.6), (0.06, 0.0)]), cd=0.0)
        trajectory = simulate_trajectory(
            specs, LaunchConditions(rod_elevation_deg=80.0, rod_length_m=1.0), max_time_s=1.0
        )
        self.assertGreater(trajectory.apogee().y_m, 0.0)
        for sample in trajectory:
            self.assertTrue(sample.on_rod)
            self.assertGreaterEqual(sample.y_m, 0.0)
        self.assertEqual(trajectory.samples[-1].y_m, 0.0)

    def test_damping_moment_opposes_pitch_rate(self):
        for cmq in (-0.5, 0.5):
            self.assertLess(damping_moment(cmq, 20.0, 5e-4, 0.3, 2.0), 0.0)
            self.assertGreater(damping_moment(cmq, 20.0, 5e-4, 0.3, -2.0), 0.0)
        self.assertEqual(damping_moment(0.5, 0.0, 5e-4, 0.3, 2.0), 0.0)

    def test_nan_coefficients_are_rejected(self):
        specs = _sparrow_specs()
        for field in ("cd", "cp_m", "cmq"):
            with self.assertRaises(ConfigurationError):
                simulate_trajectory(replace(specs, **{field: float("nan")}), LaunchConditions())
        with self.assertRaises(ConfigurationError):
            simulate_trajectory(replace(specs, inertia_kg_m2=float("nan")), LaunchConditions())

    def test_helpers_and_arrays(self):
        trajectory = simulate_trajectory(_sparrow_specs(), LaunchConditions(), max_time_s=1.0)
        arrays = trajectory.to_arrays()
        self.assertEqual(arrays["time_s"].shape, (len(trajectory),))
        self.assertEqual(arrays["on_rod"].dtype, np.bool_)
        self.assertAlmostEqual(float(arrays["y_m"].max()), trajectory.apogee().y_m)
        self.assertAlmostEqual(
            trajectory.max_speed(), float(np.hypot(arrays["vx_m_s"], arrays["vy_m_s"]).max())
        )
        series = trajectory.altitude_series(every=100)
        self.assertEqual(series[0], (0.0, 0.0))
        self.assertEqual(series[-1][0], trajectory.flight_time_s)
