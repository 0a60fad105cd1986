from .config import CoolingType, SimulationConfig, load_config
from .metrics import RiskTier, Summary, summarize
from .simulation import Sample, SimulationResult, simulate
from .validation import ConfigError, ValidConfig, validate

__all__ = [
    "ConfigError",
    "CoolingType",
    "RiskTier",
    "Sample",
    "SimulationConfig",
    "SimulationResult",
    "Summary",
    "ValidConfig",
    "load_config",
    "simulate",
    "summarize",
    "validate",
]
