"""
Thermal dynamics module.

Implements the lumped single-node pack model.
"""

from .config import AREA_PER_KWH, MASS_PER_KWH, SPECIFIC_HEAT, TIME_STEP_S
from .validation import ValidConfig


class ThermalModel:
    """
    Lumped thermal model for pack temperature.

    The whole pack is one uniform-temperature mass T exchanging heat with
    ambient by Newton's law of cooling.

    Equation:
        m * c * dT/dt = Q_gen - h * A * (T - T_amb)
    """

    def __init__(self, config: ValidConfig):
        self.config = config
        self.h = config.h
        self.area = config.battery_capacity_kwh * AREA_PER_KWH
        self.mass = config.battery_capacity_kwh * MASS_PER_KWH
        self.heat_capacity = self.mass * SPECIFIC_HEAT

    @property
    def conductance(self) -> float:
        """h * A in W/K."""
        return self.h * self.area

    @property
    def time_constant(self) -> float:
        """m * c / (h * A) in seconds."""
        return self.heat_capacity / self.conductance

    def get_heat_dissipated(self, T: float) -> float:
        """
        Convective heat flow to ambient.

        Args:
            T: [arg] Pack temperature (degC).

        Returns:
            Heat flow in W. Negative when the pack is below ambient.
        """
        return self.conductance * (T - self.config.ambient_temp_c)

    def get_temp_derivative(self, T: float, heat_gen: float) -> float:
        """
        Calculate dT/dt.

        Args:
            T: [arg] Pack temperature (degC).
            heat_gen: [arg] Heat generated inside the pack (W).

        Returns:
            dT/dt in K/s.
        """
        q_net = heat_gen - self.get_heat_dissipated(T)
        return q_net / self.heat_capacity

    def step(self, T: float, heat_gen: float, dt: float = TIME_STEP_S) -> float:
        """Advance T by one explicit Euler step of dt seconds."""
        return T + self.get_temp_derivative(T, heat_gen) * dt

    def get_equilibrium_temp(self, heat_gen: float) -> float:
        """Temperature at which dissipation balances generation."""
        return self.config.ambient_temp_c + heat_gen / self.conductance
