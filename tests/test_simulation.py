import pytest
from ev_thermal.config import CoolingType, SimulationConfig
from ev_thermal.metrics import summarize
from ev_thermal.simulation import SimulationEngine, simulate
from ev_thermal.thermal import ThermalModel
from ev_thermal.validation import NonPositiveCRateError, validate

@pytest.mark.parametrize("duration", [0, 1, 60, 600])
def test_sample_count_and_times(duration):
    result = simulate(SimulationConfig(duration_minutes=duration))

    assert len(result) == duration + 1
    for i, s in enumerate(result):
        assert s.time_minutes == i

def test_initial_sample_is_initial_state():
    config = validate(SimulationConfig(ambient_temp_c=20.0, initial_temp_c=30.0))
    result = simulate(config)
    thermal = ThermalModel(config)

    first = result[0]
    assert first.battery_temp_c == 30.0
    assert abs(first.heat_dissipated_w - thermal.get_heat_dissipated(30.0)) < 1e-12

def test_samples_follow_euler_rule():
    config = validate(SimulationConfig(duration_minutes=30, cooling_type="Active Air"))
    result = simulate(config)
    thermal = ThermalModel(config)
    Q = result.electrical.heat_gen_w

    for prev, cur in zip(result[:-1], result[1:]):
        assert abs(cur.battery_temp_c - thermal.step(prev.battery_temp_c, Q)) < 1e-12
        assert abs(cur.heat_dissipated_w - thermal.get_heat_dissipated(cur.battery_temp_c)) < 1e-9

def test_heat_generation_constant():
    result = simulate(SimulationConfig(duration_minutes=120))
    values = {s.heat_generated_w for s in result}
    assert len(values) == 1

def test_efficiency_constant_and_regression():
    result = simulate(SimulationConfig(
        battery_capacity_kwh=75.0, c_rate=1.5,
        nominal_voltage=400.0, internal_resistance_mohm=20.0))

    for s in result:
        assert abs(s.efficiency_pct - 98.594) < 1e-3
    assert len({s.efficiency_pct for s in result}) == 1

def test_monotonic_convergence():
    config = validate(SimulationConfig(
        ambient_temp_c=25.0, initial_temp_c=25.0,
        cooling_type="Liquid Cooling", duration_minutes=2000))
    result = simulate(config)
    thermal = ThermalModel(config)
    T_eq = thermal.get_equilibrium_temp(result.electrical.heat_gen_w)

    temps = [s.battery_temp_c for s in result]
    assert all(b >= a for a, b in zip(temps[:-1], temps[1:]))
    assert all(t <= T_eq + 1e-9 for t in temps)
    assert abs(temps[-1] - T_eq) < 1e-6

def test_cooling_ordering():
    peaks = {}
    for cooling in CoolingType:
        result = simulate(SimulationConfig(cooling_type=cooling, c_rate=2.0, duration_minutes=90))
        peaks[cooling] = summarize(result).peak_temp_c

    assert peaks[CoolingType.IMMERSION] <= peaks[CoolingType.LIQUID_COOLING]
    assert peaks[CoolingType.LIQUID_COOLING] <= peaks[CoolingType.ACTIVE_AIR]
    assert peaks[CoolingType.ACTIVE_AIR] <= peaks[CoolingType.PASSIVE_AIR]

def test_simulation_is_pure():
    config = SimulationConfig(duration_minutes=45, cooling_type="Passive Air")
    first = simulate(config)
    second = simulate(config)

    assert first == second
    assert first.samples == second.samples

def test_engine_run_repeatable():
    engine = SimulationEngine(validate(SimulationConfig(duration_minutes=10)))
    assert engine.run() == engine.run()

def test_simulate_rejects_invalid_config():
    with pytest.raises(NonPositiveCRateError):
        simulate(SimulationConfig(c_rate=0.0))

def test_cooler_pack_warmed_by_environment():
    result = simulate(SimulationConfig(
        ambient_temp_c=40.0, initial_temp_c=10.0,
        internal_resistance_mohm=0.0, duration_minutes=30))

    assert result[0].heat_dissipated_w < 0.0
    assert result[-1].battery_temp_c > result[0].battery_temp_c

def test_to_arrays():
    result = simulate(SimulationConfig(duration_minutes=5))
    arrays = result.to_arrays()

    assert list(arrays["time_minutes"]) == [0, 1, 2, 3, 4, 5]
    assert arrays["battery_temp_c"].shape == (6,)
