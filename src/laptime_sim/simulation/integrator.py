"""
State Integrators

Advance the coupled longitudinal state (velocity, tire temperature,
loads) one time step. Grip depends on load and tire temperature, which
feed the force law producing the derivative being integrated, so loads,
grip and controls are re-evaluated at every stage rather than frozen
from the previous step.
"""

from dataclasses import dataclass, replace
from typing import List, Optional

import numpy as np
from scipy.integrate import solve_ivp

from laptime_sim.config import SimulationConfig
from laptime_sim.control.policy import ControlPolicy
from laptime_sim.physics.forces import ForceModel
from laptime_sim.physics.load_transfer import LoadTransferModel
from laptime_sim.physics.tire_model import GripCouplingModel, ThermalModel
from laptime_sim.physics.vehicle import VehicleParams, VehicleState
from laptime_sim.tracks.circuit import TrackSegment


@dataclass(frozen=True)
class StageDerivative:
    """Derivative evaluated at one integration stage."""

    acceleration: float  # m/s²
    temp_rate: float  # °C/s
    throttle: float
    brake: float
    grip_multiplier: float


class VehicleDynamics:
    """
    Right-hand side of the longitudinal ODE.

    Bundles the force, load transfer, grip, thermal and control models
    for one set of vehicle parameters.
    """

    def __init__(self, params: VehicleParams, config: Optional[SimulationConfig] = None):
        self.params = params
        self.config = config or SimulationConfig()

        self.forces = ForceModel(params, self.config)
        self.loads = LoadTransferModel(params, self.config)
        self.grip = GripCouplingModel(params, self.config)
        self.thermal = ThermalModel(self.config)
        self.policy = ControlPolicy(params, self.config)

    def evaluate(
        self,
        velocity: float,
        tire_temp: float,
        front_load: float,
        rear_load: float,
        segment: TrackSegment
    ) -> StageDerivative:
        """Acceleration and tire temperature rate at the given point."""
        grip = self.grip.grip_multiplier(front_load, rear_load, tire_temp)

        # Driver reacts to the corner speed allowed by current grip
        controls = self.policy(velocity, segment.radius, grip)

        forces = self.forces.breakdown(
            velocity, controls.throttle, controls.brake, grip, segment.inclination
        )
        acceleration = forces.net / self.params.mass
        temp_rate = self.thermal.temperature_rate(tire_temp, forces.traction, velocity)

        return StageDerivative(
            acceleration=acceleration,
            temp_rate=temp_rate,
            throttle=controls.throttle,
            brake=controls.brake,
            grip_multiplier=grip,
        )

    def evaluate_state(self, state: VehicleState, segment: TrackSegment) -> StageDerivative:
        return self.evaluate(
            state.velocity, state.tire_temp, state.front_load, state.rear_load, segment
        )

    def initial_state(self, position: float = 0.0) -> VehicleState:
        """Standing start with tires at the configured baseline temperature."""
        front, rear = self.loads.loads(0.0, 0.0)
        return VehicleState(
            position=position,
            tire_temp=self.config.initial_tire_temp,
            front_load=front,
            rear_load=rear,
        )


class StateIntegrator:
    """
    Classical 4-stage Runge-Kutta integrator.

    Stages are evaluated at t, t+dt/2, t+dt/2 and t+dt. Velocity and tire
    temperature advance with the weighted stage average; position advances
    with the pre-step velocity, and the final loads are recomputed from the
    combined acceleration and the new velocity.
    """

    # (stage offset as a fraction of dt) for stages 2-4
    STAGE_OFFSETS = (0.5, 0.5, 1.0)
    WEIGHTS = (1.0, 2.0, 2.0, 1.0)

    def __init__(self, params: VehicleParams, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.dynamics = VehicleDynamics(params, self.config)

    @property
    def params(self) -> VehicleParams:
        return self.dynamics.params

    def stages(self, state: VehicleState, segment: TrackSegment, dt: float) -> List[StageDerivative]:
        """Evaluate k1..k4 for one step."""
        k = [self.dynamics.evaluate_state(state, segment)]

        for offset in self.STAGE_OFFSETS:
            h = offset * dt
            prev = k[-1]
            velocity = state.velocity + prev.acceleration * h
            tire_temp = state.tire_temp + prev.temp_rate * h
            front, rear = self.dynamics.loads.loads(velocity, prev.acceleration)

            k.append(self.dynamics.evaluate(velocity, tire_temp, front, rear, segment))

        return k

    def combine(self, k: List[StageDerivative]):
        """Weighted average (k1 + 2k2 + 2k3 + k4) / 6."""
        total = sum(self.WEIGHTS)
        acceleration = sum(w * s.acceleration for w, s in zip(self.WEIGHTS, k)) / total
        temp_rate = sum(w * s.temp_rate for w, s in zip(self.WEIGHTS, k)) / total
        return acceleration, temp_rate

    def step(
        self,
        state: VehicleState,
        segment: TrackSegment,
        dt: float,
        segment_index: Optional[int] = None
    ) -> VehicleState:
        """Advance ``state`` by ``dt`` on ``segment``; returns a new state."""
        k = self.stages(state, segment, dt)
        acceleration, temp_rate = self.combine(k)

        velocity = float(np.clip(state.velocity + acceleration * dt, 0.0, self.config.v_max))
        front, rear = self.dynamics.loads.loads(velocity, acceleration)

        return VehicleState(
            position=state.position + state.velocity * dt,
            velocity=velocity,
            acceleration=acceleration,
            time=state.time + dt,
            throttle=k[0].throttle,
            brake=k[0].brake,
            tire_temp=state.tire_temp + temp_rate * dt,
            front_load=front,
            rear_load=rear,
            grip_multiplier=k[0].grip_multiplier,
            segment_index=state.segment_index if segment_index is None else segment_index,
        )


class EulerIntegrator(StateIntegrator):
    """Single-stage explicit Euler, kept as the accuracy baseline."""

    STAGE_OFFSETS = ()
    WEIGHTS = (1.0,)


INTEGRATORS = {
    'rk4': StateIntegrator,
    'euler': EulerIntegrator,
}


def create_integrator(params: VehicleParams, config: Optional[SimulationConfig] = None) -> StateIntegrator:
    """Integrator selected by ``config.integration_method``."""
    config = config or SimulationConfig()
    return INTEGRATORS[config.integration_method](params, config)


def solve_reference(
    dynamics: VehicleDynamics,
    state: VehicleState,
    segment: TrackSegment,
    duration: float,
    rtol: float = 1e-10,
    atol: float = 1e-10
) -> VehicleState:
    """
    High-accuracy reference solution over ``duration`` seconds.

    Integrates velocity, tire temperature and position with an adaptive
    high-order solver (DOP853). Velocity is not clamped, so use it on
    scenarios that stay within ``[0, v_max]``.
    """
    def rhs(t, y):
        velocity, tire_temp, _ = y
        front, rear = dynamics.loads.loads(velocity, 0.0)
        d = dynamics.evaluate(velocity, tire_temp, front, rear, segment)
        return [d.acceleration, d.temp_rate, velocity]

    y0 = [state.velocity, state.tire_temp, state.position]
    solution = solve_ivp(rhs, (0.0, duration), y0, method='DOP853', rtol=rtol, atol=atol)
    if not solution.success:
        raise RuntimeError(f"Reference integration failed: {solution.message}")

    velocity, tire_temp, position = solution.y[:, -1]
    front, rear = dynamics.loads.loads(velocity, 0.0)
    final = dynamics.evaluate(velocity, tire_temp, front, rear, segment)
    front, rear = dynamics.loads.loads(velocity, final.acceleration)

    return replace(
        state,
        position=float(position),
        velocity=float(velocity),
        acceleration=final.acceleration,
        time=state.time + duration,
        tire_temp=float(tire_temp),
        front_load=front,
        rear_load=rear,
        grip_multiplier=final.grip_multiplier,
    )
