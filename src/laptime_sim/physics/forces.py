"""
Longitudinal Force Model

Force laws acting along the direction of travel:
- Aerodynamic drag and downforce
- Power-limited traction, capped by available tire grip
- Brake force from brake torque
- Gravity component on inclined segments
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams


@dataclass(frozen=True)
class ForceBreakdown:
    """All longitudinal force components at one instant (N)."""

    traction: float
    drag: float
    brake: float
    gravity: float
    downforce: float

    @property
    def net(self) -> float:
        return self.traction - self.drag - self.brake - self.gravity


class ForceModel:
    """
    Pure force laws for one vehicle.

    Every method is a function of its arguments and the (immutable)
    vehicle parameters and configuration.
    """

    def __init__(self, params: VehicleParams, config: Optional[SimulationConfig] = None):
        self.params = params
        self.config = config or SimulationConfig()

    def drag(self, velocity: float) -> float:
        """Aerodynamic drag: ½·ρ·A·Cd·v²."""
        q = 0.5 * self.config.air_density * velocity**2
        return q * self.params.frontal_area * self.params.drag_coeff

    def downforce(self, velocity: float) -> float:
        """Aerodynamic downforce: ½·ρ·A·Cl·v²."""
        q = 0.5 * self.config.air_density * velocity**2
        return q * self.params.frontal_area * self.params.downforce_coeff

    def max_traction(self, grip_multiplier: float) -> float:
        """Largest longitudinal force the tires can transmit."""
        return (self.params.tire_grip_coeff * grip_multiplier *
                self.params.mass * self.config.gravity)

    def traction(self, velocity: float, throttle: float, grip_multiplier: float) -> float:
        """
        Drive force at the contact patch.

        Engine force is power divided by speed (floored to avoid the
        singularity at standstill), limited by available grip.
        """
        speed = max(velocity, self.config.v_floor)
        engine_force = (self.params.max_power / speed) * throttle
        return min(engine_force, self.max_traction(grip_multiplier))

    def brake_force(self, brake: float) -> float:
        return self.params.max_brake_torque * brake / self.params.wheel_radius

    def gravity_along_slope(self, inclination_deg: float) -> float:
        """Gravity component resisting motion (positive uphill)."""
        return (self.params.mass * self.config.gravity *
                np.sin(np.radians(inclination_deg)))

    def max_corner_speed(self, radius: float, grip_multiplier: float) -> float:
        """
        Highest speed sustainable through a corner of given radius.

        v = sqrt(mu · grip · g · r). Straights (radius <= 0) carry no
        cornering constraint.
        """
        if radius <= 0:
            return self.config.unconstrained_target_speed

        return float(np.sqrt(self.params.tire_grip_coeff * max(grip_multiplier, 0.0) *
                             self.config.gravity * radius))

    def breakdown(
        self,
        velocity: float,
        throttle: float,
        brake: float,
        grip_multiplier: float,
        inclination_deg: float = 0.0
    ) -> ForceBreakdown:
        """Evaluate every force component for the given inputs."""
        return ForceBreakdown(
            traction=self.traction(velocity, throttle, grip_multiplier),
            drag=self.drag(velocity),
            brake=self.brake_force(brake),
            gravity=float(self.gravity_along_slope(inclination_deg)),
            downforce=self.downforce(velocity),
        )

    def acceleration(
        self,
        velocity: float,
        throttle: float,
        brake: float,
        grip_multiplier: float,
        inclination_deg: float = 0.0
    ) -> float:
        """Longitudinal acceleration: net force / mass."""
        forces = self.breakdown(velocity, throttle, brake, grip_multiplier, inclination_deg)
        return forces.net / self.params.mass
