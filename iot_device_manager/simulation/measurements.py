"""
Measurement selection and value generation for simulated telemetry.

Maps a device's declared type and name to a measurement kind, and a kind
to a plausible value and unit.
"""
import random
from typing import Dict, Optional, Sequence, Tuple, Union

from ..domain.entities.device import Device, DeviceType
from ..domain.entities.telemetry import MeasurementKind

K = MeasurementKind

DEFAULT_KINDS: Tuple[MeasurementKind, ...] = (
    K.TEMPERATURE, K.HUMIDITY, K.PRESSURE, K.VIBRATION, K.STATUS,
)

SENSOR_KINDS: Tuple[MeasurementKind, ...] = (
    K.TEMPERATURE, K.HUMIDITY, K.PRESSURE, K.VIBRATION,
)

KINDS_BY_TYPE: Dict[DeviceType, Tuple[MeasurementKind, ...]] = {
    DeviceType.SENSOR: SENSOR_KINDS,
    DeviceType.ACTUATOR: (K.STATUS, K.POSITION, K.SPEED),
    DeviceType.GATEWAY: (K.STATUS, K.THROUGHPUT),
    DeviceType.CONTROLLER: (K.STATUS, K.OUTPUT, K.SETPOINT),
    DeviceType.MONITOR: (K.STATUS, K.LEVEL, K.COUNT),
}

# (low, span, decimals): value = round(low + random() * span, decimals)
VALUE_RANGES: Dict[MeasurementKind, Tuple[float, float, int]] = {
    K.TEMPERATURE: (15.0, 50.0, 2),
    K.HUMIDITY: (30.0, 60.0, 2),
    K.PRESSURE: (95.0, 30.0, 2),
    K.VIBRATION: (0.0, 100.0, 2),
    K.STATUS: (0.0, 100.0, 2),
    K.POSITION: (0.0, 100.0, 2),
    K.SPEED: (0.0, 3000.0, 0),
    K.THROUGHPUT: (0.0, 1000.0, 2),
    K.OUTPUT: (0.0, 100.0, 2),
    K.SETPOINT: (0.0, 100.0, 2),
    K.LEVEL: (0.0, 100.0, 2),
}

COUNT_MAX = 1000  # exclusive

UNITS: Dict[MeasurementKind, str] = {
    K.TEMPERATURE: "°C",
    K.HUMIDITY: "%",
    K.STATUS: "%",
    K.POSITION: "%",
    K.OUTPUT: "%",
    K.LEVEL: "%",
    K.PRESSURE: "kPa",
    K.VIBRATION: "Hz",
    K.SPEED: "RPM",
    K.THROUGHPUT: "Mbps",
    K.SETPOINT: "",
    K.COUNT: "",
}

FALLBACK_UNITS: Tuple[str, ...] = ("°C", "%", "kPa", "Hz", "")


def _sensor_kind_from_name(name: str) -> Optional[MeasurementKind]:
    # Order matters: "pr" matches many names, so temperature and humidity win
    if name == "temperature" or "temp" in name:
        return K.TEMPERATURE
    if name == "humidity" or "humid" in name:
        return K.HUMIDITY
    if "pr" in name or "press" in name:
        return K.PRESSURE
    return None


def choose_kind(device: Device, rng: random.Random) -> MeasurementKind:
    """
    Pick the measurement kind a device reports.

    Sensors are matched on their name first; every other type, and sensors
    whose name gives no hint, pick uniformly from the kinds of their type.

    Args:
        device: Device to read from.
        rng: Random source.

    Returns:
        The chosen measurement kind.
    """
    device_type = DeviceType.parse(device.device_type)

    if device_type is DeviceType.SENSOR:
        kind = _sensor_kind_from_name((device.name or "").lower())
        if kind is not None:
            return kind

    return rng.choice(KINDS_BY_TYPE.get(device_type, DEFAULT_KINDS))


def generate_value(
    kind: Union[MeasurementKind, str],
    rng: random.Random,
) -> Union[int, float]:
    """
    Generate a value for a measurement kind.

    Count is an integer in 0..999. Unknown kinds fall back to 0..100.
    """
    kind = _coerce(kind)

    if kind is K.COUNT:
        return rng.randrange(0, COUNT_MAX)

    low, span, decimals = VALUE_RANGES.get(kind, (0.0, 100.0, 2))
    return round(low + rng.random() * span, decimals)


def unit_for(kind: Union[MeasurementKind, str]) -> str:
    """Unit string for a measurement kind, empty when it has none."""
    return UNITS.get(_coerce(kind), "")


def value_bounds(kind: MeasurementKind) -> Tuple[float, float]:
    """Inclusive (min, max) a generated value can take."""
    if kind is K.COUNT:
        return 0, COUNT_MAX - 1
    low, span, _ = VALUE_RANGES[kind]
    return low, low + span


def random_kind(rng: random.Random, kinds: Sequence[MeasurementKind] = DEFAULT_KINDS) -> MeasurementKind:
    return rng.choice(kinds)


def random_unit(rng: random.Random) -> str:
    return rng.choice(FALLBACK_UNITS)


def _coerce(kind: Union[MeasurementKind, str]) -> Optional[MeasurementKind]:
    if isinstance(kind, MeasurementKind):
        return kind
    for member in MeasurementKind:
        if member.value.lower() == str(kind).lower():
            return member
    return None
