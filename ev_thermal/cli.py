"""
Command line entry point: run one simulation and print a summary.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .advisory import AdviceError, GeminiAdvisor, advise
from .config import CoolingType, SimulationConfig, UnknownConfigKeyError, load_config
from .export import export_csv
from .metrics import summarize
from .simulation import simulate
from .validation import ConfigError, validate

logger = logging.getLogger(__name__)

_FIELDS = [
    ("--ambient", "ambient_temp_c", float, "Ambient temperature (degC)"),
    ("--initial", "initial_temp_c", float, "Initial pack temperature (degC)"),
    ("--c-rate", "c_rate", float, "Discharge C-rate"),
    ("--duration", "duration_minutes", int, "Duration (minutes)"),
    ("--capacity", "battery_capacity_kwh", float, "Pack capacity (kWh)"),
    ("--resistance", "internal_resistance_mohm", float, "Pack internal resistance (mOhm)"),
    ("--voltage", "nominal_voltage", float, "Pack nominal voltage (V)"),
]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="ev-thermal",
        description="Lumped thermal simulation of an EV battery pack under constant discharge.",
    )
    ap.add_argument("--config", help="JSON file with config fields (flags override it)")
    for flag, dest, typ, help_text in _FIELDS:
        ap.add_argument(flag, dest=dest, type=typ, default=None, help=help_text)
    ap.add_argument("--cooling", dest="cooling_type", default=None,
                    help=f"Cooling type: {', '.join(repr(c.value) for c in CoolingType)}")
    ap.add_argument("--csv", help="Write samples to this CSV file")
    ap.add_argument("--advise", action="store_true", help="Request advisory text (needs GEMINI_API_KEY)")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    config = load_config(args.config) if args.config else SimulationConfig()
    overrides = {}
    for _, dest, _, _ in _FIELDS:
        value = getattr(args, dest)
        if value is not None:
            overrides[dest] = value
    if args.cooling_type is not None:
        overrides["cooling_type"] = args.cooling_type
    return config.replace(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - [EV-THERMAL] - %(levelname)s - %(message)s",
    )

    try:
        config = config_from_args(args)
    except UnknownConfigKeyError as e:
        print(f"Invalid config file {args.config}: unknown key {e}", file=sys.stderr)
        return 2
    except (OSError, ValueError) as e:
        print(f"Cannot read config file {args.config}: {e}", file=sys.stderr)
        return 2

    try:
        valid = validate(config)
    except ConfigError as e:
        print(f"Invalid config ({e.kind}): {e}", file=sys.stderr)
        return 2

    result = simulate(valid)
    summary = summarize(result)
    el = result.electrical

    print(f"{'Cooling':<22} | {valid.cooling_type.value}")
    print(f"{'Current (A)':<22} | {el.current_a:.2f}")
    print(f"{'Heat generated (W)':<22} | {el.heat_gen_w:.2f}")
    print(f"{'Peak temp (degC)':<22} | {summary.peak_temp_c:.2f}")
    print(f"{'Final temp (degC)':<22} | {summary.final_temp_c:.2f}")
    print(f"{'Avg efficiency (%)':<22} | {summary.avg_efficiency_pct:.3f}")
    print(f"{'Risk tier':<22} | {summary.risk_tier.value}")
    print(summary.message)

    if args.csv:
        path = export_csv(result, args.csv)
        logger.info("Samples written to %s", path)

    if args.advise:
        try:
            advisor = GeminiAdvisor.from_env()
        except AdviceError as e:
            logger.warning("%s", e)
        else:
            print("-" * 60)
            print(advise(advisor, config, summary).text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
