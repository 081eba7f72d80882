from __future__ import annotations

from dataclasses import dataclass
import logging
import math

from modelrocket.engine.errors import MotorParseError

logger = logging.getLogger("modelrocket.engine")

COMMENT_MARKER = ";"
HEADER_FIELDS = 7
PLUGGED_DELAY = "P"


@dataclass(frozen=True)
class EngHeader:
    name: str
    diameter_mm: float
    length_mm: float
    delays_s: list[float]
    propellant_mass_kg: float
    total_mass_kg: float
    manufacturer: str


@dataclass(frozen=True)
class EngData:
    header: EngHeader
    curve: list[tuple[float, float]]


def _parse_float(value: str, field: str, source: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise MotorParseError(f"invalid {field} {value!r} in {source}") from exc


def parse_delays(delay_string: str, source: str = "<text>") -> list[float]:
    """Parse a ``-`` separated delay code; ``P`` (plugged) maps to infinity."""
    if not delay_string.strip():
        return []
    delays: list[float] = []
    for token in delay_string.split("-"):
        token = token.strip()
        if token == PLUGGED_DELAY:
            delays.append(math.inf)
            continue
        value = _parse_float(token, "delay", source)
        if math.isnan(value) or value < 0:
            raise MotorParseError(f"invalid delay {token!r} in {source}")
        delays.append(value)
    return sorted(delays)


def _parse_header(tokens: list[str], source: str) -> EngHeader:
    if len(tokens) < HEADER_FIELDS:
        raise MotorParseError(
            f"invalid .eng header in {source}: expected {HEADER_FIELDS} fields, got {len(tokens)}"
        )
    diameter_mm = _parse_float(tokens[1], "diameter", source)
    length_mm = _parse_float(tokens[2], "length", source)
    propellant_mass_kg = _parse_float(tokens[4], "propellant mass", source)
    total_mass_kg = _parse_float(tokens[5], "total mass", source)
    if not diameter_mm > 0 or not length_mm > 0:
        raise MotorParseError(f"motor diameter and length must be positive in {source}")
    if not propellant_mass_kg >= 0 or not total_mass_kg >= 0:
        raise MotorParseError(f"motor masses must be non-negative in {source}")
    return EngHeader(
        name=tokens[0],
        diameter_mm=diameter_mm,
        length_mm=length_mm,
        delays_s=parse_delays(tokens[3], source),
        propellant_mass_kg=propellant_mass_kg,
        total_mass_kg=total_mass_kg,
        manufacturer=" ".join(tokens[6:]),
    )


def parse_eng_text(content: str, source: str = "<text>") -> EngData:
    curve: list[tuple[float, float]] = []
    header: EngHeader | None = None
    for lineno, line in enumerate(content.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith(COMMENT_MARKER):
            continue
        parts = line.split()
        if header is None:
            header = _parse_header(parts, source)
            continue
        if len(parts) < 2:
            logger.debug("skipping short data line %d in %s", lineno, source)
            continue
        try:
            point = (float(parts[0]), float(parts[1]))
        except ValueError:
            logger.debug("skipping malformed data line %d in %s", lineno, source)
            continue
        if math.isnan(point[0]) or math.isnan(point[1]):
            continue
        curve.append(point)
    if header is None:
        raise MotorParseError(f"missing .eng header in {source}")
    if not curve:
        raise MotorParseError(f"no motor data available in {source}")
    return EngData(header=header, curve=curve)


def load_eng(path: str) -> EngData:
    with open(path, "r", encoding="utf-8", errors="ignore") as handle:
        return parse_eng_text(handle.read(), source=path)
