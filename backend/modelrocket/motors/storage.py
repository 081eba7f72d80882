import logging
import os
import re
from dataclasses import dataclass

from modelrocket.core.config import get_settings
from modelrocket.engine.errors import MotorParseError
from modelrocket.engine.motor import MotorSpec, impulse_class_range

logger = logging.getLogger("modelrocket.motors")

MOTOR_SUFFIX = ".eng"


@dataclass(frozen=True)
class MotorInfo:
    motor_id: str
    filename: str
    source: str


@dataclass(frozen=True)
class LibraryMotor:
    info: MotorInfo
    spec: MotorSpec


def bundled_dir() -> str:
    return os.path.join(get_settings().motors_dir, "bundled")


def motor_filename(motor_name: str) -> str:
    return re.sub(r"\s+", "_", motor_name.strip()) + MOTOR_SUFFIX


def list_bundled_motors() -> list[MotorInfo]:
    directory = bundled_dir()
    if not os.path.isdir(directory):
        return []
    motors = []
    for name in sorted(os.listdir(directory)):
        if name.lower().endswith(MOTOR_SUFFIX):
            motors.append(MotorInfo(motor_id=name, filename=name, source="bundled"))
    return motors


def resolve_motor_path(motor_id: str) -> str:
    safe_id = os.path.basename(motor_id)
    if not safe_id or safe_id != motor_id:
        raise ValueError(f"invalid motor id: {motor_id}")
    path = os.path.join(bundled_dir(), safe_id)
    if not os.path.exists(path):
        raise FileNotFoundError(f"Motor file not found: {path}")
    return path


def load_motor(motor_id: str) -> MotorSpec:
    return MotorSpec.from_file(resolve_motor_path(motor_id))


def load_motor_by_name(motor_name: str) -> MotorSpec:
    """Resolve a motor by display name, e.g. ``"Estes C6"`` -> ``Estes_C6.eng``."""
    try:
        return load_motor(motor_filename(motor_name))
    except FileNotFoundError:
        motor = MotorLibrary.from_directory(bundled_dir()).get_by_name(motor_name)
        if motor is None:
            raise
        return motor.spec


class MotorLibrary:
    def __init__(self, motors: list[LibraryMotor]):
        self.motors = motors

    @classmethod
    def from_directory(cls, directory: str, source: str = "bundled") -> "MotorLibrary":
        motors: list[LibraryMotor] = []
        if not os.path.isdir(directory):
            return cls(motors)
        for name in sorted(os.listdir(directory)):
            if not name.lower().endswith(MOTOR_SUFFIX):
                continue
            try:
                spec = MotorSpec.from_file(os.path.join(directory, name))
            except MotorParseError as exc:
                logger.warning("skipping motor file %s: %s", name, exc)
                continue
            motors.append(
                LibraryMotor(info=MotorInfo(motor_id=name, filename=name, source=source), spec=spec)
            )
        return cls(motors)

    @classmethod
    def bundled(cls) -> "MotorLibrary":
        return cls.from_directory(bundled_dir())

    def __len__(self) -> int:
        return len(self.motors)

    def get_by_id(self, motor_id: str) -> LibraryMotor | None:
        for motor in self.motors:
            if motor.info.motor_id == motor_id:
                return motor
        return None

    def get_by_name(self, name: str) -> LibraryMotor | None:
        wanted = name.strip().lower()
        for motor in self.motors:
            full_name = f"{motor.spec.manufacturer} {motor.spec.name}".lower()
            if motor.spec.name.lower() == wanted or full_name == wanted:
                return motor
        return None

    def by_manufacturer(self, manufacturer: str) -> list[LibraryMotor]:
        wanted = manufacturer.strip().lower()
        return [m for m in self.motors if m.spec.manufacturer.lower() == wanted]

    def by_impulse_class(self, letter: str) -> list[LibraryMotor]:
        if impulse_class_range(letter) is None:
            return []
        wanted = letter.upper()
        return [m for m in self.motors if m.spec.impulse_class == wanted]
