"""
Script to run a pack thermal simulation and generate a report figure.
Includes: Temperature vs. equilibrium, Heat flow balance, and Efficiency.
"""

import matplotlib.pyplot as plt
import numpy as np
import sys
import os

# Ensure project root is in path
sys.path.append(os.getcwd())

from ev_thermal.config import SimulationConfig
from ev_thermal.metrics import ELEVATED_THRESHOLD_C, RUNAWAY_THRESHOLD_C, summarize
from ev_thermal.simulation import SimulationEngine
from ev_thermal.validation import validate

def plot_detailed_results(engine: SimulationEngine, result) -> None:
    data = result.to_arrays()
    summary = summarize(result)
    t = data["time_minutes"]

    fig, (ax1, ax2, ax3) = plt.subplots(3, 1, figsize=(12, 12), sharex=True, gridspec_kw={'height_ratios': [2, 2, 1]})

    # --- Panel 1: Temperature ---
    ax1.plot(t, data["battery_temp_c"], label='Pack Temp', color='red', linewidth=2)
    T_eq = engine.thermal_model.get_equilibrium_temp(engine.electrical.heat_gen_w)
    ax1.axhline(T_eq, color='gray', linestyle=':', label=f'Equilibrium ({T_eq:.1f}°C)')
    ax1.axhline(engine.config.ambient_temp_c, color='blue', linestyle='--', linewidth=1, label='Ambient')

    # Risk bands
    ax1.axhspan(ELEVATED_THRESHOLD_C, RUNAWAY_THRESHOLD_C, color='orange', alpha=0.08)
    ax1.axhspan(RUNAWAY_THRESHOLD_C, max(RUNAWAY_THRESHOLD_C, data["battery_temp_c"].max()) + 5, color='red', alpha=0.08)

    ax1.set_ylabel('Temperature (°C)')
    ax1.set_title(f'Pack Temperature ({engine.config.cooling_type.value}, peak {summary.peak_temp_c:.1f}°C, {summary.risk_tier.value})')
    ax1.legend(loc='upper left')
    ax1.grid(True, alpha=0.3)

    # --- Panel 2: Heat Flows ---
    ax2.plot(t, data["heat_generated_w"], label='Heat Generated', color='#ff9999', linewidth=2)
    ax2.plot(t, data["heat_dissipated_w"], label='Heat Dissipated', color='#66b3ff', linewidth=2)
    ax2.fill_between(t, data["heat_dissipated_w"], data["heat_generated_w"], color='gray', alpha=0.15, label='Net (stored)')
    ax2.set_ylabel('Power (W)')
    ax2.set_title('Heat Generation vs. Dissipation')
    ax2.legend(loc='lower right')
    ax2.grid(True, alpha=0.3)

    # --- Panel 3: Efficiency ---
    ax3.plot(t, data["efficiency_pct"], color='#3b82f6', linewidth=2)
    ax3.set_ylim(90, 100)
    ax3.set_ylabel('Efficiency (%)')
    ax3.set_xlabel('Time (minutes)')
    ax3.set_title('System Efficiency')
    ax3.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig('detailed_simulation_report.png')
    print("Report saved to 'detailed_simulation_report.png'")

def main():
    # Setup
    config = validate(SimulationConfig(duration_minutes=240))

    # Initialize Engine
    engine = SimulationEngine(config)

    print(f"Starting simulation ({config.cooling_type.value}, {config.c_rate}C, {config.duration_minutes} min)...")

    # Run
    result = engine.run()
    summary = summarize(result)

    print(f"Heat generated: {engine.electrical.heat_gen_w:.2f} W at {engine.electrical.current_a:.2f} A")
    print(f"Peak temperature: {summary.peak_temp_c:.2f}°C ({summary.risk_tier.value})")
    print(f"Thermal time constant: {engine.thermal_model.time_constant / 60.0:.1f} min")
    if np.isclose(summary.avg_efficiency_pct, result[0].efficiency_pct):
        print(f"Efficiency: {summary.avg_efficiency_pct:.3f}%")

    # Plot
    plot_detailed_results(engine, result)

if __name__ == "__main__":
    main()
