import unittest

from modelrocket.engine.constants import Material
from modelrocket.engine.geometry import (
    Body,
    EllipticalFin,
    FinSet,
    Nose,
    NoseShape,
    RocketDesign,
)
from modelrocket.engine.motor import MotorSpec
from modelrocket.engine.pipeline import SimulationEntry, compare_rockets, run_simulation
from modelrocket.engine.trajectory import LaunchConditions, Termination

MOTOR_TEXT = "TEST 13 50 0 0.002 0.012 Test\n0 0\n0.05 6\n0.25 4\n0.3 0\n"


def _design(name, nose_shape=NoseShape.OGIVE, body_length=0.25):
    return RocketDesign(
        name=name,
        nose=Nose(
            shape=nose_shape,
            length_m=0.07,
            diameter_m=0.025,
            thickness_m=0.001,
            material=Material.PLASTIC,
        ),
        body=Body(
            length_m=body_length, diameter_m=0.025, thickness_m=0.0005, material=Material.CARDBOARD
        ),
        fins=FinSet(
            shape=EllipticalFin(root_chord_m=0.05, height_m=0.035),
            count=4,
            thickness_m=0.0015,
            material=Material.BALSA,
            offset_m=0.27,
        ),
    )


class PipelineTests(unittest.TestCase):
    def setUp(self):
        self.motor = MotorSpec.from_text(MOTOR_TEXT)
        self.launch = LaunchConditions(rod_elevation_deg=89.0, rod_length_m=1.0)

    def test_run_simulation_summary(self):
        with self.assertLogs("modelrocket.engine", level="INFO"):
            result = run_simulation(_design("Finch"), self.motor, self.launch, time_step_s=1e-3)
        summary = result.summary
        self.assertEqual(result.name, "Finch")
        self.assertEqual(summary.termination, Termination.TOUCHDOWN)
        self.assertTrue(summary.touched_down)
        self.assertEqual(summary.apogee_m, result.trajectory.apogee().y_m)
        self.assertGreater(summary.apogee_m, 1.0)
        self.assertLess(summary.apogee_time_s, summary.flight_time_s)
        self.assertGreater(summary.max_speed_m_s, summary.rod_exit_speed_m_s)
        self.assertIsNotNone(summary.burnout_time_s)

    def test_compare_rockets_keeps_order(self):
        entries = [
            SimulationEntry(design=_design("primary"), motor=self.motor),
            SimulationEntry(
                design=_design("rival", nose_shape=NoseShape.CONICAL, body_length=0.35),
                motor=self.motor,
            ),
        ]
        results = compare_rockets(entries, self.launch, time_step_s=1e-3, max_time_s=5.0)
        self.assertEqual([r.name for r in results], ["primary", "rival"])
        self.assertGreater(
            results[1].properties.specs.dry_mass_kg, results[0].properties.specs.dry_mass_kg
        )
        for result in results:
            self.assertLessEqual(result.summary.flight_time_s, 5.0 + 1e-3)
