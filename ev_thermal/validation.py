"""
Config validation module.

Checks that a simulation request is physically and structurally well-formed
before any integration work is done.
"""

import math
from dataclasses import dataclass
from numbers import Integral, Real

from .config import (
    AREA_PER_KWH, COOLING_COEFFICIENTS, MASS_PER_KWH, SPECIFIC_HEAT, TIME_STEP_S,
    CoolingType, SimulationConfig,
)


class ConfigError(ValueError):
    """Base class for rejected simulation requests."""

    kind = "ConfigError"

    def __init__(self, field: str, value, message: str):
        super().__init__(f"{field}={value!r} {message}")
        self.field = field
        self.value = value


class InvalidCoolingTypeError(ConfigError):
    kind = "InvalidCoolingType"


class NonPositiveCapacityError(ConfigError):
    kind = "NonPositiveCapacity"


class NegativeResistanceError(ConfigError):
    kind = "NegativeResistance"


class NonPositiveCRateError(ConfigError):
    kind = "NonPositiveCRate"


class NegativeDurationError(ConfigError):
    kind = "NegativeDuration"


class NonIntegerDurationError(ConfigError):
    kind = "NonIntegerDuration"


class NonFiniteInputError(ConfigError):
    kind = "NonFiniteInput"


class NonPositiveVoltageError(ConfigError):
    kind = "NonPositiveVoltage"


@dataclass(frozen=True)
class ValidConfig:
    """
    A request that passed validation.
    cooling_type is always resolved to the enum and h is its coefficient.
    """
    ambient_temp_c: float
    initial_temp_c: float
    c_rate: float
    cooling_type: CoolingType
    duration_minutes: int
    battery_capacity_kwh: float
    internal_resistance_mohm: float
    nominal_voltage: float
    h: float


_REAL_FIELDS = (
    "ambient_temp_c",
    "initial_temp_c",
    "c_rate",
    "battery_capacity_kwh",
    "internal_resistance_mohm",
    "nominal_voltage",
)


def _resolve_cooling(value) -> CoolingType:
    try:
        return CoolingType(value)
    except ValueError:
        raise InvalidCoolingTypeError(
            "cooling_type", value,
            f"is not one of {[c.value for c in CoolingType]}") from None


def _check_number(field: str, value, error_cls) -> None:
    # bool is an int subclass but never a meaningful physical quantity
    if isinstance(value, bool) or not isinstance(value, Real):
        raise error_cls(field, value, "must be a real number")


def _check_derived(config: SimulationConfig, h: float) -> None:
    """
    Reject finite inputs whose derived quantities overflow or underflow.

    The trajectory stays between the initial and equilibrium temperatures,
    so bounding these few run constants bounds every sample.
    """
    capacity = config.battery_capacity_kwh
    conductance = h * capacity * AREA_PER_KWH
    heat_capacity = capacity * MASS_PER_KWH * SPECIFIC_HEAT
    if not (conductance > 0 and heat_capacity > 0):
        raise NonPositiveCapacityError("battery_capacity_kwh", capacity, "is too small to model")

    power = capacity * 1000.0 * config.c_rate
    if not power > 0:
        raise NonPositiveCRateError("c_rate", config.c_rate, "gives zero discharge power for this capacity")
    current = power / config.nominal_voltage
    heat = current * current * (config.internal_resistance_mohm / 1000.0)
    delta_t = config.initial_temp_c - config.ambient_temp_c
    derived = (
        ("power_out_w", power),
        ("current_a", current),
        ("heat_gen_w", heat),
        ("initial_temp_delta_k", delta_t),
        ("initial_dissipation_w", conductance * delta_t),
        ("equilibrium_rise_k", heat / conductance),
        ("step_rise_k", heat / heat_capacity * TIME_STEP_S),
        ("heat_capacity_j_per_k", heat_capacity),
    )
    for name, value in derived:
        if not math.isfinite(value):
            raise NonFiniteInputError(name, value, "overflows; inputs are outside the modelled range")


def validate(config: SimulationConfig) -> ValidConfig:
    """
    Validate a request, failing fast on the first problem found.

    Checks run in a fixed priority order: cooling type, capacity,
    resistance, C-rate, duration, finiteness, voltage, then the
    derived run constants (power, current, heat) must stay finite.

    Returns:
        ValidConfig ready for `simulate`.

    Raises:
        ConfigError subclass naming the offending field.
    """
    cooling = _resolve_cooling(config.cooling_type)

    capacity = config.battery_capacity_kwh
    _check_number("battery_capacity_kwh", capacity, NonPositiveCapacityError)
    if not capacity > 0:
        raise NonPositiveCapacityError("battery_capacity_kwh", capacity, "must be > 0")

    resistance = config.internal_resistance_mohm
    _check_number("internal_resistance_mohm", resistance, NegativeResistanceError)
    if not resistance >= 0:
        raise NegativeResistanceError("internal_resistance_mohm", resistance, "must be >= 0")

    c_rate = config.c_rate
    _check_number("c_rate", c_rate, NonPositiveCRateError)
    if not c_rate > 0:
        raise NonPositiveCRateError("c_rate", c_rate, "must be > 0")

    duration = config.duration_minutes
    _check_number("duration_minutes", duration, NegativeDurationError)
    if not duration >= 0:
        raise NegativeDurationError("duration_minutes", duration, "must be >= 0")
    if not isinstance(duration, Integral):
        if not math.isfinite(duration) or duration != int(duration):
            raise NonIntegerDurationError("duration_minutes", duration, "must be a whole number of minutes")

    for name in _REAL_FIELDS:
        value = getattr(config, name)
        _check_number(name, value, NonFiniteInputError)
        if not math.isfinite(value):
            raise NonFiniteInputError(name, value, "must be finite")

    if not config.nominal_voltage > 0:
        raise NonPositiveVoltageError("nominal_voltage", config.nominal_voltage, "must be > 0")

    _check_derived(config, COOLING_COEFFICIENTS[cooling])

    return ValidConfig(
        ambient_temp_c=float(config.ambient_temp_c),
        initial_temp_c=float(config.initial_temp_c),
        c_rate=float(c_rate),
        cooling_type=cooling,
        duration_minutes=int(duration),
        battery_capacity_kwh=float(capacity),
        internal_resistance_mohm=float(resistance),
        nominal_voltage=float(config.nominal_voltage),
        h=COOLING_COEFFICIENTS[cooling],
    )
