"""
Script to compare cooling methods.
Runs every cooling type across several C-rates and prints peak temperature stats.
"""
import sys
import os

# Ensure project root in path
sys.path.append(os.getcwd())

from ev_thermal.config import CoolingType, SimulationConfig
from ev_thermal.metrics import summarize
from ev_thermal.simulation import simulate

def analyze_cooling():
    c_rates = [0.5, 1.0, 1.5, 2.0, 3.0]
    duration = 120

    print(f"Running {len(c_rates) * len(CoolingType)} simulations of {duration} min...")
    print("-" * 80)
    print(f"{'Cooling':<16} | {'C-rate':<6} | {'Q_gen (W)':<10} | {'Peak (C)':<9} | {'Final (C)':<9} | {'Risk':<9}")
    print("-" * 80)

    for cooling in CoolingType:
        for c_rate in c_rates:
            config = SimulationConfig(cooling_type=cooling, c_rate=c_rate, duration_minutes=duration)
            result = simulate(config)
            summary = summarize(result)

            print(f"{cooling.value:<16} | {c_rate:<6.1f} | {result.electrical.heat_gen_w:<10.1f} | "
                  f"{summary.peak_temp_c:<9.2f} | {summary.final_temp_c:<9.2f} | {summary.risk_tier.value:<9}")
        print("-" * 80)

if __name__ == "__main__":
    analyze_cooling()
