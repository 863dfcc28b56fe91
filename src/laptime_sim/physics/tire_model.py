"""
Tire Model

Grip and thermal behaviour of the tire set:
- Temperature efficiency curve (cold / optimal window / overheated)
- Load sensitivity from the normal-load ratio
- Frictional heating and convective cooling
"""

import numpy as np
from typing import Optional

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams


class GripCouplingModel:
    """
    Dimensionless grip multiplier fed back into the traction limit.

    Uses one combined-axle proxy (total load over static load) even though
    front and rear loads are tracked separately. Per-axle grip is not
    modelled.
    """

    def __init__(self, params: VehicleParams, config: Optional[SimulationConfig] = None):
        self.params = params
        self.config = config or SimulationConfig()

    def load_ratio(self, front_load: float, rear_load: float) -> float:
        """sqrt(total normal load / static normal load)."""
        static_load = self.params.mass * self.config.gravity
        return float(np.sqrt(max(front_load + rear_load, 0.0) / static_load))

    def temperature_efficiency(self, tire_temp: float) -> float:
        """
        Grip efficiency from tire temperature.

        Rises linearly to 1.0 at ``optimal_temp_min``, stays at 1.0 through
        the optimal window, then falls by 50% over ``overheat_span``.
        """
        opt_min = self.config.optimal_temp_min
        opt_max = self.config.optimal_temp_max

        if tire_temp < opt_min:
            # Cold tire
            efficiency = 0.7 + 0.3 * (tire_temp / opt_min)
        elif tire_temp > opt_max:
            # Overheated
            efficiency = 1.0 - 0.5 * ((tire_temp - opt_max) / self.config.overheat_span)
        else:
            efficiency = 1.0

        return max(efficiency, 0.0)

    def grip_multiplier(self, front_load: float, rear_load: float, tire_temp: float) -> float:
        """Combined grip multiplier, never negative. No upper clamp."""
        return self.load_ratio(front_load, rear_load) * self.temperature_efficiency(tire_temp)


class ThermalModel:
    """Lumped tire temperature: slip-energy heating minus convective cooling."""

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()

    def heat_rate(self, traction: float, velocity: float) -> float:
        """Heating rate (°C/s) from slip-energy proxy 4·F·v."""
        return (4.0 * traction * velocity /
                (self.config.tire_mass * self.config.tire_specific_heat))

    def cool_rate(self, tire_temp: float) -> float:
        """Cooling rate (°C/s) toward ambient."""
        return (self.config.heat_transfer_coeff *
                (tire_temp - self.config.ambient_temp) / self.config.tire_mass)

    def temperature_rate(self, tire_temp: float, traction: float, velocity: float) -> float:
        """dT/dt = heat - cool."""
        return self.heat_rate(traction, velocity) - self.cool_rate(tire_temp)

    def equilibrium_temperature(self, traction: float, velocity: float) -> float:
        """Temperature where heating and cooling balance for constant inputs."""
        return (self.config.ambient_temp +
                self.heat_rate(traction, velocity) * self.config.tire_mass /
                self.config.heat_transfer_coeff)
