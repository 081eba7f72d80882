from __future__ import annotations

from dataclasses import dataclass, field

from modelrocket.engine.eng_parser import EngData, load_eng, parse_eng_text
from modelrocket.engine.units import mm_to_m

# NAR impulse classes: (letter, low, high] in N*s
IMPULSE_CLASSES: list[tuple[str, float, float]] = [
    ("A", 1.25, 2.5),
    ("B", 2.5, 5.0),
    ("C", 5.0, 10.0),
    ("D", 10.0, 20.0),
    ("E", 20.0, 40.0),
    ("F", 40.0, 80.0),
    ("G", 80.0, 160.0),
    ("H", 160.0, 320.0),
    ("I", 320.0, 640.0),
    ("J", 640.0, 1280.0),
    ("K", 1280.0, 2560.0),
    ("L", 2560.0, 5120.0),
    ("M", 5120.0, 10240.0),
    ("N", 10240.0, 20480.0),
    ("O", 20480.0, 40960.0),
]


def impulse_class(total_impulse_ns: float) -> str | None:
    for letter, low, high in IMPULSE_CLASSES:
        if low < total_impulse_ns <= high:
            return letter
    return None


def impulse_class_range(letter: str) -> tuple[float, float] | None:
    for name, low, high in IMPULSE_CLASSES:
        if name == letter.upper():
            return low, high
    return None


@dataclass(frozen=True)
class ThrustCurvePoint:
    time_s: float
    thrust_n: float


def _total_impulse(curve: tuple[ThrustCurvePoint, ...]) -> float:
    total = 0.0
    for idx in range(1, len(curve)):
        prev, point = curve[idx - 1], curve[idx]
        total += (point.time_s - prev.time_s) * (point.thrust_n + prev.thrust_n) / 2.0
    return total


@dataclass(frozen=True)
class MotorSpec:
    name: str
    manufacturer: str
    diameter_m: float
    length_m: float
    propellant_mass_kg: float
    total_mass_kg: float
    thrust_curve: tuple[ThrustCurvePoint, ...]
    delays_s: tuple[float, ...] = field(default_factory=tuple)

    @classmethod
    def from_eng(cls, data: EngData) -> MotorSpec:
        header = data.header
        return cls(
            name=header.name,
            manufacturer=header.manufacturer,
            diameter_m=mm_to_m(header.diameter_mm),
            length_m=mm_to_m(header.length_mm),
            propellant_mass_kg=header.propellant_mass_kg,
            total_mass_kg=header.total_mass_kg,
            thrust_curve=tuple(ThrustCurvePoint(t, f) for t, f in data.curve),
            delays_s=tuple(header.delays_s),
        )

    @classmethod
    def from_text(cls, content: str, source: str = "<text>") -> MotorSpec:
        return cls.from_eng(parse_eng_text(content, source))

    @classmethod
    def from_file(cls, path: str) -> MotorSpec:
        return cls.from_eng(load_eng(path))

    @property
    def burn_time_s(self) -> float:
        return self.thrust_curve[-1].time_s if self.thrust_curve else 0.0

    @property
    def peak_thrust_n(self) -> float:
        return max((p.thrust_n for p in self.thrust_curve), default=0.0)

    @property
    def total_impulse_ns(self) -> float:
        return _total_impulse(self.thrust_curve)

    @property
    def average_thrust_n(self) -> float:
        burn_time = self.burn_time_s
        return self.total_impulse_ns / burn_time if burn_time > 0 else 0.0

    @property
    def case_mass_kg(self) -> float:
        return max(0.0, self.total_mass_kg - self.propellant_mass_kg)

    @property
    def impulse_class(self) -> str | None:
        return impulse_class(self.total_impulse_ns)

    def thrust_at(self, time_s: float) -> float:
        """Linearly interpolated thrust; zero outside the curve's time range."""
        curve = self.thrust_curve
        for idx in range(1, len(curve)):
            a, b = curve[idx - 1], curve[idx]
            if a.time_s <= time_s <= b.time_s:
                span = b.time_s - a.time_s
                if span <= 0:
                    return a.thrust_n
                return a.thrust_n + (time_s - a.time_s) / span * (b.thrust_n - a.thrust_n)
        return 0.0
