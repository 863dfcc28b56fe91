"""
Longitudinal Load Transfer

Normal load on each axle from static weight, aerodynamic downforce and
the pitch moment of longitudinal acceleration.
"""

from typing import Optional, Tuple

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.forces import ForceModel
from laptime_sim.physics.vehicle import VehicleParams


class LoadTransferModel:
    """Front/rear normal loads (N)."""

    def __init__(self, params: VehicleParams, config: Optional[SimulationConfig] = None):
        self.params = params
        self.config = config or SimulationConfig()
        self.forces = ForceModel(params, self.config)

    def static_load(self) -> float:
        return self.params.mass * self.config.gravity

    def total_load(self, velocity: float) -> float:
        """Static weight plus downforce."""
        return self.static_load() + self.forces.downforce(velocity)

    def transfer(self, acceleration: float) -> float:
        """Load moved from front to rear axle: a·m·h / L."""
        return (acceleration * self.params.mass * self.params.center_gravity_height /
                self.params.wheel_base)

    def loads(self, velocity: float, acceleration: float) -> Tuple[float, float]:
        """
        Compute (front_load, rear_load).

        Forward acceleration unloads the front axle and loads the rear;
        braking does the opposite. The transfer term is zero-sum, so the
        total always equals ``total_load(velocity)``.
        """
        total = self.total_load(velocity)
        transfer = self.transfer(acceleration)

        front = total * self.params.weight_dist_front - transfer
        rear = total * self.params.weight_dist_rear + transfer

        return front, rear
