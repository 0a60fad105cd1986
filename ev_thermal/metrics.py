"""
Metrics module.

Summarizes a simulated trajectory into peak temperature, average
efficiency and a thermal risk tier.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Sequence

import numpy as np

from .simulation import Sample

RUNAWAY_THRESHOLD_C = 60.0
HIGH_THRESHOLD_C = 55.0
ELEVATED_THRESHOLD_C = 45.0


class RiskTier(str, Enum):
    NOMINAL = "nominal"
    ELEVATED = "elevated"
    HIGH = "high"
    RUNAWAY = "runaway"


RISK_MESSAGES: Dict[RiskTier, str] = {
    RiskTier.NOMINAL: "Pack temperature within normal operating range.",
    RiskTier.ELEVATED: "Pack temperature elevated. Monitor cooling performance.",
    RiskTier.HIGH: "Pack temperature high. Degradation accelerated.",
    RiskTier.RUNAWAY: (
        "Thermal Runaway Risk Detected. Battery core temperature has exceeded "
        "60°C. Degradation accelerated. Immediate cooling optimization required."
    ),
}


@dataclass(frozen=True)
class Summary:
    peak_temp_c: float
    avg_efficiency_pct: float
    risk_tier: RiskTier
    final_temp_c: float
    duration_minutes: int

    @property
    def message(self) -> str:
        return RISK_MESSAGES[self.risk_tier]


def classify_risk(peak_temp_c: float) -> RiskTier:
    """
    Map peak temperature to a risk tier.

    60 degC and above is runaway; (55, 60) high; (45, 55] elevated;
    45 degC and below nominal.
    """
    if peak_temp_c >= RUNAWAY_THRESHOLD_C:
        return RiskTier.RUNAWAY
    if peak_temp_c > HIGH_THRESHOLD_C:
        return RiskTier.HIGH
    if peak_temp_c > ELEVATED_THRESHOLD_C:
        return RiskTier.ELEVATED
    return RiskTier.NOMINAL


def summarize(samples: Sequence[Sample]) -> Summary:
    """
    Summarize a trajectory.

    Raises:
        ValueError: if samples is empty.
    """
    if len(samples) == 0:
        raise ValueError("Cannot summarize an empty trajectory.")

    temps = np.array([s.battery_temp_c for s in samples])
    efficiencies = np.array([s.efficiency_pct for s in samples])
    peak = float(temps.max())

    return Summary(
        peak_temp_c=peak,
        avg_efficiency_pct=float(efficiencies.mean()),
        risk_tier=classify_risk(peak),
        final_temp_c=float(temps[-1]),
        duration_minutes=samples[-1].time_minutes,
    )
