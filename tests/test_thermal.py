import pytest
import numpy as np
from scipy.integrate import solve_ivp
from ev_thermal.config import CoolingType, SimulationConfig
from ev_thermal.thermal import ThermalModel
from ev_thermal.simulation import simulate
from ev_thermal.validation import validate

def test_thermal_constants():
    config = validate(SimulationConfig(battery_capacity_kwh=75.0, cooling_type="Liquid Cooling"))
    thermal = ThermalModel(config)

    # A = 75 * 0.05 = 3.75 m^2
    assert abs(thermal.area - 3.75) < 1e-12
    # m * c = 75 * 6 * 800 = 360000 J/K
    assert abs(thermal.heat_capacity - 360000.0) < 1e-9
    assert thermal.h == 150.0
    # tau = 360000 / (150 * 3.75) = 640 s
    assert abs(thermal.time_constant - 640.0) < 1e-9

def test_thermal_derivatives():
    config = validate(SimulationConfig(
        battery_capacity_kwh=20.0, ambient_temp_c=20.0,
        cooling_type="Active Air"))
    thermal = ThermalModel(config)

    # hA = 25 * 1.0 = 25 W/K
    # q_diss = 25 * (30 - 20) = 250 W
    assert abs(thermal.get_heat_dissipated(30.0) - 250.0) < 1e-9

    # dT/dt = (1000 - 250) / (20 * 6 * 800) = 750 / 96000
    dT = thermal.get_temp_derivative(30.0, 1000.0)
    assert abs(dT - 750.0 / 96000.0) < 1e-12

    # One 60 s Euler step
    T1 = thermal.step(30.0, 1000.0)
    assert abs(T1 - (30.0 + 60.0 * 750.0 / 96000.0)) < 1e-12

def test_dissipation_negative_below_ambient():
    config = validate(SimulationConfig(ambient_temp_c=35.0))
    thermal = ThermalModel(config)

    assert thermal.get_heat_dissipated(25.0) < 0.0
    # With no generation the environment warms the pack
    assert thermal.get_temp_derivative(25.0, 0.0) > 0.0

def test_thermal_equilibrium():
    """Test if temp stays constant at the equilibrium point."""
    config = validate(SimulationConfig(ambient_temp_c=25.0))
    thermal = ThermalModel(config)

    Q = 1500.0
    T_eq = thermal.get_equilibrium_temp(Q)

    assert abs(thermal.get_temp_derivative(T_eq, Q)) < 1e-12
    assert thermal.get_temp_derivative(25.0, 0.0) == 0.0

def test_euler_tracks_exact_solution():
    """Forward Euler at 60 s stays close to a tight ODE reference."""
    config = validate(SimulationConfig(duration_minutes=60))
    result = simulate(config)
    thermal = ThermalModel(config)
    Q = result.electrical.heat_gen_w

    t_eval = np.arange(config.duration_minutes + 1) * 60.0
    ref = solve_ivp(lambda t, y: [thermal.get_temp_derivative(y[0], Q)],
                    (0.0, t_eval[-1]), [config.initial_temp_c],
                    t_eval=t_eval, rtol=1e-9, atol=1e-9)

    euler = result.to_arrays()["battery_temp_c"]
    assert ref.success
    assert np.max(np.abs(euler - ref.y[0])) < 0.1

@pytest.mark.parametrize("cooling", list(CoolingType))
def test_euler_step_is_stable(cooling):
    # dt * hA / (m c) is independent of capacity and below 1 for every cooling type
    thermal = ThermalModel(validate(SimulationConfig(cooling_type=cooling)))
    assert 60.0 / thermal.time_constant < 1.0
