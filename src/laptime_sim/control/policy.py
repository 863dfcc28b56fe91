"""
Speed-tracking control policy.

Chooses throttle and brake from the current speed and the segment's
target corner speed, with a hysteresis band around the target so the
controls do not chatter at the boundary.
"""

from typing import NamedTuple, Optional

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.forces import ForceModel
from laptime_sim.physics.vehicle import VehicleParams


class ControlInputs(NamedTuple):
    throttle: float
    brake: float


class ControlPolicy:
    """
    Three-state hysteresis controller.

    - below ``band_low`` * target: full throttle
    - above ``band_high`` * target: brake
    - inside the band: light throttle to hold speed
    """

    def __init__(self, params: VehicleParams, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.forces = ForceModel(params, self.config)

    def target_speed(self, radius: float, grip_multiplier: float) -> float:
        return self.forces.max_corner_speed(radius, grip_multiplier)

    def select(self, velocity: float, target_speed: float) -> ControlInputs:
        cfg = self.config

        if velocity < target_speed * cfg.band_low:
            return ControlInputs(cfg.full_throttle, 0.0)
        if velocity > target_speed * cfg.band_high:
            return ControlInputs(0.0, cfg.brake_level)
        return ControlInputs(cfg.maintain_throttle, 0.0)

    def __call__(self, velocity: float, radius: float, grip_multiplier: float) -> ControlInputs:
        return self.select(velocity, self.target_speed(radius, grip_multiplier))
