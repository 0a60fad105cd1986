"""
EV Thermal Configuration Module.

This module contains the physical constants, the cooling lookup table and the
simulation request structure consumed by the engine.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Union


class CoolingType(str, Enum):
    """Closed set of cooling methods supported by the pack model."""

    PASSIVE_AIR = "Passive Air"
    ACTIVE_AIR = "Active Air"
    LIQUID_COOLING = "Liquid Cooling"
    IMMERSION = "Immersion"


# Effective convection coefficient per cooling method, W/(m^2 K)
COOLING_COEFFICIENTS: Dict[CoolingType, float] = {
    CoolingType.PASSIVE_AIR: 5.0,
    CoolingType.ACTIVE_AIR: 25.0,
    CoolingType.LIQUID_COOLING: 150.0,
    CoolingType.IMMERSION: 450.0,
}

SPECIFIC_HEAT = 800.0
"""[C] Specific heat of the pack in J/(kg K), approximate for Li-ion."""

MASS_PER_KWH = 6.0
"""[C] Pack mass per kWh of capacity in kg/kWh."""

AREA_PER_KWH = 0.05
"""[C] External surface area per kWh of capacity in m^2/kWh."""

TIME_STEP_S = 60.0
"""[C] Integration step in seconds (one sample per minute)."""

DEFAULT_NOMINAL_VOLTAGE = 400.0
"""[C] Pack voltage assumed when none is given, in V."""


class UnknownConfigKeyError(KeyError):
    """Raised when a config mapping contains a key the model does not know."""
    pass


@dataclass(frozen=True)
class SimulationConfig:
    """
    One simulation request.
    Built once per request and never mutated; use `replace` to derive a new one.
    """

    ambient_temp_c: float = 25.0
    """Ambient temperature in degC."""

    initial_temp_c: float = 25.0
    """Pack temperature at t = 0 in degC."""

    c_rate: float = 1.5
    """Discharge rate normalized to capacity (1C drains the pack in one hour)."""

    cooling_type: Union[CoolingType, str] = CoolingType.LIQUID_COOLING
    """Cooling method. Strings are resolved against CoolingType at validation."""

    duration_minutes: int = 60
    """Simulated duration in minutes."""

    battery_capacity_kwh: float = 75.0
    """Pack capacity in kWh."""

    internal_resistance_mohm: float = 20.0
    """Whole-pack internal resistance in milliohms."""

    nominal_voltage: float = DEFAULT_NOMINAL_VOLTAGE
    """Pack-level nominal voltage in V."""

    def replace(self, **changes: Any) -> "SimulationConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        cooling = data["cooling_type"]
        data["cooling_type"] = cooling.value if isinstance(cooling, CoolingType) else cooling
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """
        Build a config from a mapping.

        Accepts the snake_case field names as well as the camelCase names
        used by the dashboard front-end (ambientTempC, cRate, ...).
        Missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_ALIASES.get(key, key)
            if name not in known:
                raise UnknownConfigKeyError(key)
            kwargs[name] = value
        return cls(**kwargs)


_CAMEL_ALIASES = {
    "ambientTempC": "ambient_temp_c",
    "initialTempC": "initial_temp_c",
    "cRate": "c_rate",
    "coolingType": "cooling_type",
    "durationMinutes": "duration_minutes",
    "batteryCapacityKWh": "battery_capacity_kwh",
    "internalResistanceMilliOhm": "internal_resistance_mohm",
    "nominalVoltage": "nominal_voltage",
}


def load_config(path: Union[str, Path]) -> SimulationConfig:
    """Read a SimulationConfig from a JSON object file."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
    return SimulationConfig.from_dict(data)
