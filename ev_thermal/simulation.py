"""
Main Simulation Engine.

Integrates the electrical and thermal modules over a fixed one-minute grid.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Tuple, Union

import numpy as np

from .battery import BatteryModel, ElectricalState
from .config import SimulationConfig, TIME_STEP_S
from .thermal import ThermalModel
from .validation import ValidConfig, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    """Pack state at one whole minute."""
    time_minutes: int
    battery_temp_c: float
    heat_generated_w: float
    heat_dissipated_w: float
    efficiency_pct: float


class SimulationResult:
    """
    Immutable, ordered sequence of samples from one run.
    Also keeps the validated config and electrical state that produced it.
    """

    def __init__(self, samples: Tuple[Sample, ...], config: ValidConfig, electrical: ElectricalState):
        self._samples = tuple(samples)
        self.config = config
        self.electrical = electrical

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return self._samples

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __getitem__(self, index):
        return self._samples[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, SimulationResult):
            return NotImplemented
        return self._samples == other._samples and self.config == other.config

    def __repr__(self) -> str:
        return f"SimulationResult(n={len(self)}, cooling={self.config.cooling_type.value!r})"

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """Column arrays keyed by Sample field name."""
        return {
            "time_minutes": np.array([s.time_minutes for s in self._samples], dtype=int),
            "battery_temp_c": np.array([s.battery_temp_c for s in self._samples]),
            "heat_generated_w": np.array([s.heat_generated_w for s in self._samples]),
            "heat_dissipated_w": np.array([s.heat_dissipated_w for s in self._samples]),
            "efficiency_pct": np.array([s.efficiency_pct for s in self._samples]),
        }


class SimulationEngine:
    """
    Runs one simulation for a validated config.
    An engine is single use: `run` integrates from the initial temperature every time.
    """

    def __init__(self, config: ValidConfig):
        self.config = config
        self.battery_model = BatteryModel(config)
        self.thermal_model = ThermalModel(config)
        self.electrical = self.battery_model.derive()

    def run(self) -> SimulationResult:
        """
        Integrate pack temperature for duration_minutes steps.

        Sample i holds the temperature at minute i and the heat dissipated
        at that temperature; sample 0 is the initial state.
        """
        cfg = self.config
        heat_gen = self.electrical.heat_gen_w
        efficiency = self.electrical.efficiency_pct

        logger.debug(
            "Simulating %d min: I=%.2f A, Q_gen=%.2f W, h=%.0f, tau=%.0f s",
            cfg.duration_minutes, self.electrical.current_a, heat_gen,
            cfg.h, self.thermal_model.time_constant,
        )

        samples = []
        T = cfg.initial_temp_c
        for t in range(cfg.duration_minutes + 1):
            samples.append(Sample(
                time_minutes=t,
                battery_temp_c=T,
                heat_generated_w=heat_gen,
                heat_dissipated_w=self.thermal_model.get_heat_dissipated(T),
                efficiency_pct=efficiency,
            ))
            if t < cfg.duration_minutes:
                T = self.thermal_model.step(T, heat_gen, TIME_STEP_S)

        logger.debug("Simulation finished: final T=%.2f degC", T)
        return SimulationResult(tuple(samples), cfg, self.electrical)


def simulate(config: Union[ValidConfig, SimulationConfig]) -> SimulationResult:
    """
    Run the thermal simulation.

    A raw SimulationConfig is validated first, so a rejected request raises
    ConfigError before any integration happens.
    """
    if not isinstance(config, ValidConfig):
        config = validate(config)
    return SimulationEngine(config).run()
