"""
Battery electrical module.

Derives the discharge current and the Joule heat generated by the pack.
"""

from dataclasses import dataclass

from .validation import ValidConfig


@dataclass(frozen=True)
class ElectricalState:
    """Run-constant electrical quantities."""
    current_a: float
    resistance_ohm: float
    heat_gen_w: float
    power_out_w: float

    @property
    def efficiency_pct(self) -> float:
        """Share of output power not lost as heat, in percent."""
        return (self.power_out_w - self.heat_gen_w) / self.power_out_w * 100.0


class BatteryModel:
    """
    Constant-voltage pack model.

    The pack voltage does not depend on state of charge and the resistance
    applies to the whole pack, so current and heat are fixed for a run.
    """

    def __init__(self, config: ValidConfig):
        self.config = config

    def get_power_out(self) -> float:
        """Discharge power P = capacity * 1000 * C-rate, in W."""
        return self.config.battery_capacity_kwh * 1000.0 * self.config.c_rate

    def get_current(self) -> float:
        """
        Discharge current I = P / V_nom.

        Returns:
            Current in A.
        """
        return self.get_power_out() / self.config.nominal_voltage

    def get_resistance(self) -> float:
        """Pack resistance in Ohms."""
        return self.config.internal_resistance_mohm / 1000.0

    def get_heat_generation(self) -> float:
        """Joule heating I^2 * R in W."""
        return self.get_current() ** 2 * self.get_resistance()

    def derive(self) -> ElectricalState:
        return ElectricalState(
            current_a=self.get_current(),
            resistance_ohm=self.get_resistance(),
            heat_gen_w=self.get_heat_generation(),
            power_out_w=self.get_power_out(),
        )


def derive_electrical(config: ValidConfig) -> ElectricalState:
    return BatteryModel(config).derive()
