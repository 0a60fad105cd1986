"""
Simulation session.

Holds the latest config and result for an interactive caller. Every config
change re-runs the simulation and replaces the previous result; advisory
requests for an older run come back marked stale.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import replace
from typing import Any, Optional

from .advisory import Advice, Advisor, advise
from .config import SimulationConfig
from .metrics import Summary, summarize
from .simulation import SimulationResult, simulate
from .validation import validate

logger = logging.getLogger(__name__)


class SimulationSession:
    """
    Last-run-wins holder of one simulation.

    Simulation is synchronous; only the advisory call runs in the background.
    """

    def __init__(self, config: Optional[SimulationConfig] = None, advisor: Optional[Advisor] = None,
                 max_workers: int = 1):
        self.advisor = advisor
        self.generation = 0
        self.config: Optional[SimulationConfig] = None
        self.result: Optional[SimulationResult] = None
        self.summary: Optional[Summary] = None
        self.advice: Optional[Advice] = None
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self.set_config(config if config is not None else SimulationConfig())

    def set_config(self, config: SimulationConfig) -> SimulationResult:
        """
        Validate and simulate config, replacing the current result.
        A rejected config raises ConfigError and leaves the session unchanged.
        """
        valid = validate(config)
        result = simulate(valid)
        summary = summarize(result)
        with self._lock:
            self.generation += 1
            self.config = config
            self.result = result
            self.summary = summary
            self.advice = None
        logger.debug("Session generation %d: peak %.2f degC", self.generation, summary.peak_temp_c)
        return result

    def update(self, **changes: Any) -> SimulationResult:
        return self.set_config(self.config.replace(**changes))

    def request_advice(self) -> "Future[Advice]":
        """
        Ask the advisor about the current run in the background.

        The future always resolves to an Advice. If the session moved on
        before the answer arrived, the advice is flagged stale and not stored.
        """
        if self.advisor is None:
            raise RuntimeError("No advisor configured for this session.")

        with self._lock:
            generation = self.generation
            config = self.config
            summary = self.summary

        def _task() -> Advice:
            advice = advise(self.advisor, config, summary)
            with self._lock:
                if generation != self.generation:
                    logger.debug("Dropping advisory for stale generation %d", generation)
                    return replace(advice, stale=True)
                self.advice = advice
            return advice

        return self._executor.submit(_task)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "SimulationSession":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
