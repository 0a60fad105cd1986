"""
Advisory text module.

Asks an external language model for short thermal-management insights on a
finished simulation. The call is slow and may fail; failures degrade to a
fixed fallback text and never touch the simulation result.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol

import requests

from .config import SimulationConfig
from .metrics import Summary

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "Failed to connect to thermal intelligence engine."
EMPTY_TEXT = "Analysis unavailable."

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_MODEL = "gemini-3-flash-preview"


class AdviceError(Exception):
    """Raised when the advisory backend cannot produce text."""
    pass


@dataclass(frozen=True)
class Advice:
    text: str
    ok: bool
    error: Optional[str] = None
    stale: bool = False


class Advisor(Protocol):
    def generate(self, prompt: str) -> str:
        ...


def build_prompt(config: SimulationConfig, summary: Summary) -> str:
    cooling = getattr(config.cooling_type, "value", config.cooling_type)
    return (
        "Analyze this EV battery thermal simulation:\n"
        f"- Battery: {config.battery_capacity_kwh}kWh, {config.internal_resistance_mohm}mΩ resistance\n"
        f"- Discharge: {config.c_rate}C\n"
        f"- Cooling: {cooling}\n"
        f"- Ambient: {config.ambient_temp_c}°C\n"
        f"- Max Temperature Reached: {summary.peak_temp_c:.1f}°C\n"
        f"- Average Efficiency: {summary.avg_efficiency_pct:.2f}%\n"
        f"- Risk Tier: {summary.risk_tier.value}\n"
        "\n"
        "Provide 3 concise professional insights on thermal stability, safety risks, "
        "and optimization.\n"
        "Format as a short list. Keep it technical and data-driven."
    )


class GeminiAdvisor:
    """
    Google Generative Language REST client.
    """

    def __init__(self, api_key: str, model: str = DEFAULT_MODEL, timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @classmethod
    def from_env(cls, model: str = DEFAULT_MODEL) -> "GeminiAdvisor":
        api_key = os.environ.get("GEMINI_API_KEY")
        if not api_key:
            raise AdviceError("GEMINI_API_KEY is not set")
        return cls(api_key, model=model)

    def generate(self, prompt: str) -> str:
        url = GEMINI_ENDPOINT.format(model=self.model)
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            resp = requests.post(url, params={"key": self.api_key}, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise AdviceError(f"Advisory request failed: {e}") from e
        except ValueError as e:
            raise AdviceError(f"Advisory response is not JSON: {e}") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(p.get("text") or "" for p in parts if isinstance(p, dict))
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise AdviceError(f"Unexpected advisory payload: {e!r}") from e


def advise(advisor: Advisor, config: SimulationConfig, summary: Summary) -> Advice:
    """
    Request advisory text. Never raises.

    Returns:
        Advice with ok=False and the fallback text when the backend fails.
    """
    try:
        text = advisor.generate(build_prompt(config, summary))
    except AdviceError as e:
        logger.warning("Advisory unavailable: %s", e)
        return Advice(text=FALLBACK_TEXT, ok=False, error=str(e))
    except Exception as e:
        logger.warning("Advisory backend failed: %r", e)
        return Advice(text=FALLBACK_TEXT, ok=False, error=repr(e))

    if not isinstance(text, str) or not text.strip():
        return Advice(text=EMPTY_TEXT, ok=True)
    return Advice(text=text.strip(), ok=True)
