"""
Integrator accuracy and step semantics.

Run with: pytest tests/test_integrator.py -v
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
import pytest

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams, VehicleState
from laptime_sim.simulation.integrator import (
    EulerIntegrator,
    StateIntegrator,
    VehicleDynamics,
    create_integrator,
    solve_reference,
)
from laptime_sim.tracks.circuit import TrackSegment


STRAIGHT = TrackSegment(10000.0)


def rolling_start(params, config, velocity=30.0, tire_temp=60.0):
    """State already moving, with loads consistent with its speed."""
    dynamics = VehicleDynamics(params, config)
    front, rear = dynamics.loads.loads(velocity, 0.0)
    return VehicleState(velocity=velocity, tire_temp=tire_temp, front_load=front, rear_load=rear)


def integrate(integrator, state, segment, dt, duration):
    for _ in range(int(round(duration / dt))):
        state = integrator.step(state, segment, dt)
    return state


def test_create_integrator_follows_config():
    params = VehicleParams()

    assert type(create_integrator(params)) is StateIntegrator
    assert type(create_integrator(params, SimulationConfig(integration_method="euler"))) is EulerIntegrator


def test_first_step_from_standstill():
    """Position advances with the pre-step velocity, so the first step stays put."""
    integrator = StateIntegrator(VehicleParams())
    state = integrator.dynamics.initial_state()

    new = integrator.step(state, STRAIGHT, 0.01, segment_index=3)

    assert new.position == 0.0
    assert new.velocity > 0.0
    assert new.time == pytest.approx(0.01)
    assert new.throttle == 1.0
    assert new.brake == 0.0
    assert new.segment_index == 3
    assert state.velocity == 0.0  # input state untouched


def test_step_conserves_total_load():
    params = VehicleParams()
    config = SimulationConfig()
    integrator = StateIntegrator(params, config)
    state = integrator.dynamics.initial_state()

    for _ in range(200):
        state = integrator.step(state, STRAIGHT, 0.02)
        expected = params.mass * config.gravity + integrator.dynamics.forces.downforce(state.velocity)
        assert state.front_load + state.rear_load == pytest.approx(expected, rel=1e-12)


def test_velocity_clamped_at_upper_bound():
    params = VehicleParams(max_power=5000000.0, drag_coeff=0.0)
    config = SimulationConfig()
    integrator = StateIntegrator(params, config)
    state = rolling_start(params, config, velocity=99.9, tire_temp=100.0)

    new = integrator.step(state, STRAIGHT, 0.1)

    assert new.velocity == config.v_max


def test_velocity_clamped_at_zero():
    """Heavy braking at walking pace cannot reverse the car."""
    params = VehicleParams()
    config = SimulationConfig()
    integrator = EulerIntegrator(params, config)
    hairpin = TrackSegment(10.0, radius=0.001, type="left")
    state = rolling_start(params, config, velocity=0.5)

    new = integrator.step(state, hairpin, 0.1)

    assert new.brake == config.brake_level
    assert new.velocity == 0.0


def test_controls_reevaluated_per_stage():
    """Stage speeds crossing the band change the chosen controls."""
    params = VehicleParams()
    config = SimulationConfig()
    integrator = StateIntegrator(params, config)
    corner = TrackSegment(100.0, radius=50.0, type="right")
    dynamics = integrator.dynamics

    state = rolling_start(params, config, velocity=28.0, tire_temp=100.0)
    grip = dynamics.grip.grip_multiplier(state.front_load, state.rear_load, state.tire_temp)
    target = dynamics.policy.target_speed(corner.radius, grip)
    assert state.velocity < config.band_low * target

    k = integrator.stages(state, corner, 0.5)

    assert k[0].throttle == config.full_throttle
    assert any(stage.throttle != config.full_throttle for stage in k[1:])


def test_rk4_matches_reference_solution():
    params = VehicleParams(max_power=200000.0)
    config = SimulationConfig()
    integrator = StateIntegrator(params, config)
    state = rolling_start(params, config)

    reference = solve_reference(integrator.dynamics, state, STRAIGHT, 10.0, rtol=1e-12, atol=1e-12)
    result = integrate(integrator, state, STRAIGHT, 0.05, 10.0)

    assert result.velocity == pytest.approx(reference.velocity, abs=1e-6)
    assert result.tire_temp == pytest.approx(reference.tire_temp, abs=1e-6)


def test_rk4_converges_faster_than_euler():
    """Halving dt cuts RK4 error ~16x and Euler error ~2x."""
    params = VehicleParams(max_power=200000.0)
    config = SimulationConfig()
    rk4 = StateIntegrator(params, config)
    euler = EulerIntegrator(params, config)
    state = rolling_start(params, config)
    duration = 10.0

    reference = solve_reference(rk4.dynamics, state, STRAIGHT, duration, rtol=1e-12, atol=1e-12)

    rk4_errors = []
    euler_errors = []
    for dt in (0.4, 0.2, 0.1):
        rk4_errors.append(abs(integrate(rk4, state, STRAIGHT, dt, duration).velocity - reference.velocity))
        euler_errors.append(abs(integrate(euler, state, STRAIGHT, dt, duration).velocity - reference.velocity))

    for rk4_error, euler_error in zip(rk4_errors, euler_errors):
        assert rk4_error < euler_error

    for coarse, fine in zip(rk4_errors, rk4_errors[1:]):
        assert coarse / fine > 8.0
    for coarse, fine in zip(euler_errors, euler_errors[1:]):
        assert 1.5 < coarse / fine < 3.0

    print(f"✓ RK4 errors: {rk4_errors}")
    print(f"✓ Euler errors: {euler_errors}")


def test_terminal_velocity_on_long_straight():
    """Full throttle settles where power / v equals aerodynamic drag."""
    params = VehicleParams(max_power=300000.0)
    config = SimulationConfig()
    integrator = StateIntegrator(params, config)
    state = integrator.dynamics.initial_state()

    velocities = []
    for _ in range(3000):  # 150 s
        state = integrator.step(state, STRAIGHT, 0.05)
        velocities.append(state.velocity)

    drag_factor = 0.5 * config.air_density * params.frontal_area * params.drag_coeff
    terminal = (params.max_power / drag_factor) ** (1.0 / 3.0)

    assert terminal < config.v_max
    assert np.all(np.diff(velocities) >= -1e-9)
    assert state.velocity == pytest.approx(terminal, rel=5e-3)


def test_tire_temperature_reaches_equilibrium():
    params = VehicleParams(max_power=300000.0)
    config = SimulationConfig()
    integrator = StateIntegrator(params, config)
    state = integrator.dynamics.initial_state()

    for _ in range(3000):
        state = integrator.step(state, STRAIGHT, 0.05)

    traction = params.max_power / state.velocity
    expected = integrator.dynamics.thermal.equilibrium_temperature(traction, state.velocity)

    assert state.tire_temp == pytest.approx(expected, abs=0.5)
