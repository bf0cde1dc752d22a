"""
Unit tests for measurement selection, value generation and units.
"""
import random

import pytest

from iot_device_manager.domain.entities.device import Device
from iot_device_manager.domain.entities.telemetry import MeasurementKind as K
from iot_device_manager.simulation import measurements
from iot_device_manager.simulation.measurements import (
    DEFAULT_KINDS,
    KINDS_BY_TYPE,
    SENSOR_KINDS,
    choose_kind,
    generate_value,
    unit_for,
    value_bounds,
)

DRAWS = 10_000


@pytest.fixture
def rng():
    return random.Random(42)


def _kinds_for(device, rng, draws=500):
    return {choose_kind(device, rng) for _ in range(draws)}


class TestSensorNameMatching:
    """Sensor names decide the kind, first match wins."""

    @pytest.mark.parametrize("name,expected", [
        ("Temperature", K.TEMPERATURE),
        ("temperature", K.TEMPERATURE),
        ("Room Temp Probe", K.TEMPERATURE),
        ("Humidity", K.HUMIDITY),
        ("Humid Cellar", K.HUMIDITY),
        ("Pr Sensor", K.PRESSURE),
        ("Pressure Gauge", K.PRESSURE),
        ("Sprinkler", K.PRESSURE),
        # Overlapping names resolve in check order
        ("Temperature Press", K.TEMPERATURE),
        ("Humid Sprinkler", K.HUMIDITY),
        ("Temp/Humidity Combo", K.TEMPERATURE),
    ])
    def test_name_decides_kind(self, rng, name, expected):
        device = Device(name=name, device_type="Sensor")
        assert _kinds_for(device, rng, draws=50) == {expected}

    def test_type_is_case_insensitive(self, rng):
        device = Device(name="Temperature", device_type="SENSOR")
        assert choose_kind(device, rng) is K.TEMPERATURE

    def test_unhinted_sensor_picks_sensor_kinds(self, rng):
        device = Device(name="Multi Sensor", device_type="Sensor")
        assert _kinds_for(device, rng) == set(SENSOR_KINDS)

    def test_name_only_applies_to_sensors(self, rng):
        device = Device(name="Temperature", device_type="Actuator")
        assert _kinds_for(device, rng) == {K.STATUS, K.POSITION, K.SPEED}


class TestTypeKinds:
    @pytest.mark.parametrize("device_type,expected", [
        ("Actuator", {K.STATUS, K.POSITION, K.SPEED}),
        ("Gateway", {K.STATUS, K.THROUGHPUT}),
        ("Controller", {K.STATUS, K.OUTPUT, K.SETPOINT}),
        ("Monitor", {K.STATUS, K.LEVEL, K.COUNT}),
        ("monitor", {K.STATUS, K.LEVEL, K.COUNT}),
    ])
    def test_kinds_by_type(self, rng, device_type, expected):
        device = Device(name="Unit", device_type=device_type)
        assert _kinds_for(device, rng) == expected

    @pytest.mark.parametrize("device_type", ["Camera", "", None])
    def test_other_types_use_defaults(self, rng, device_type):
        device = Device(name="Temperature", device_type=device_type)
        assert _kinds_for(device, rng) == set(DEFAULT_KINDS)

    def test_every_known_type_has_kinds(self):
        assert all(KINDS_BY_TYPE.values())


class TestUnits:
    @pytest.mark.parametrize("kind,unit", [
        (K.TEMPERATURE, "°C"),
        (K.HUMIDITY, "%"),
        (K.STATUS, "%"),
        (K.POSITION, "%"),
        (K.OUTPUT, "%"),
        (K.LEVEL, "%"),
        (K.PRESSURE, "kPa"),
        (K.VIBRATION, "Hz"),
        (K.SPEED, "RPM"),
        (K.THROUGHPUT, "Mbps"),
        (K.SETPOINT, ""),
        (K.COUNT, ""),
    ])
    def test_unit_for_kind(self, kind, unit):
        assert unit_for(kind) == unit

    def test_accepts_kind_names(self):
        assert unit_for("temperature") == "°C"

    def test_unknown_kind_has_no_unit(self):
        assert unit_for("Connected Devices") == ""


class TestValueRanges:
    """Generated values stay within the documented inclusive ranges."""

    @pytest.mark.parametrize("kind,low,high", [
        (K.TEMPERATURE, 15, 65),
        (K.HUMIDITY, 30, 90),
        (K.PRESSURE, 95, 125),
        (K.VIBRATION, 0, 100),
        (K.STATUS, 0, 100),
        (K.POSITION, 0, 100),
        (K.OUTPUT, 0, 100),
        (K.SETPOINT, 0, 100),
        (K.LEVEL, 0, 100),
        (K.SPEED, 0, 3000),
        (K.THROUGHPUT, 0, 1000),
        (K.COUNT, 0, 999),
    ])
    def test_range(self, rng, kind, low, high):
        assert value_bounds(kind) == (low, high)
        for _ in range(DRAWS):
            value = generate_value(kind, rng)
            assert low <= value <= high

    @pytest.mark.parametrize("kind", [k for k in K if k not in (K.SPEED, K.COUNT)])
    def test_two_decimal_places(self, rng, kind):
        for _ in range(1000):
            value = generate_value(kind, rng)
            assert round(value, 2) == value

    def test_speed_is_whole_number(self, rng):
        for _ in range(1000):
            value = generate_value(K.SPEED, rng)
            assert value == int(value)

    def test_count_is_integer(self, rng):
        values = [generate_value(K.COUNT, rng) for _ in range(DRAWS)]
        assert all(isinstance(v, int) for v in values)
        assert max(values) <= 999

    def test_unknown_kind_falls_back(self, rng):
        for _ in range(1000):
            assert 0 <= generate_value("Connected Devices", rng) <= 100


def test_random_unit_comes_from_fallback_set(rng):
    assert {measurements.random_unit(rng) for _ in range(200)} == set(measurements.FALLBACK_UNITS)
