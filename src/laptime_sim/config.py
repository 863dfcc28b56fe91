"""
Simulation Configuration

Physical constants and numerical settings shared by every model:
- Environment (gravity, air density, ambient temperature)
- Tire thermal properties
- Control policy band and outputs
- Integrator selection and numerical guard rails
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Tuple

import yaml


INTEGRATION_METHODS = ("rk4", "euler")


@dataclass(frozen=True)
class SimulationConfig:
    """Physical constants and numerical settings for one simulation run."""

    # Environment
    gravity: float = 9.81  # m/s²
    air_density: float = 1.225  # kg/m³
    ambient_temp: float = 25.0  # °C

    # Tire thermal properties
    tire_mass: float = 10.0  # kg per tire
    tire_specific_heat: float = 1000.0  # J/(kg K)
    heat_transfer_coeff: float = 20.0  # W/K
    initial_tire_temp: float = 60.0  # °C
    optimal_temp_min: float = 80.0  # °C, full grip from here
    optimal_temp_max: float = 120.0  # °C, full grip up to here
    overheat_span: float = 80.0  # °C past optimal_temp_max costing 50% grip

    # Kinematic limits
    v_floor: float = 0.1  # m/s, guards power / velocity
    v_max: float = 100.0  # m/s (~360 km/h)
    unconstrained_target_speed: float = 1000.0  # m/s, straights

    # Control policy
    band_low: float = 0.95  # full throttle below band_low * target
    band_high: float = 1.05  # brake above band_high * target
    full_throttle: float = 1.0
    maintain_throttle: float = 0.3
    brake_level: float = 0.8

    # Numerics
    integration_method: str = "rk4"
    max_time_step: float = 0.5  # s
    max_grip_multiplier: float = 3.0
    tire_temp_limits: Tuple[float, float] = (-50.0, 300.0)  # °C
    max_lap_time: float = 3600.0  # s

    def __post_init__(self):
        """Validate configuration."""
        for name in ("gravity", "air_density", "tire_mass", "tire_specific_heat",
                     "heat_transfer_coeff", "v_floor", "v_max",
                     "unconstrained_target_speed", "max_time_step",
                     "max_grip_multiplier", "max_lap_time",
                     "optimal_temp_min", "overheat_span"):
            if not getattr(self, name) > 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

        if not 0.0 < self.band_low <= 1.0 <= self.band_high:
            raise ValueError(
                f"Control band must satisfy 0 < low <= 1 <= high, "
                f"got ({self.band_low}, {self.band_high})"
            )

        for name in ("full_throttle", "maintain_throttle", "brake_level"):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {getattr(self, name)}")

        if self.integration_method not in INTEGRATION_METHODS:
            raise ValueError(
                f"Unknown integration method: {self.integration_method}. "
                f"Available: {list(INTEGRATION_METHODS)}"
            )

        if self.optimal_temp_max < self.optimal_temp_min:
            raise ValueError(
                f"optimal_temp_max ({self.optimal_temp_max}) is below "
                f"optimal_temp_min ({self.optimal_temp_min})"
            )

        low, high = self.tire_temp_limits
        if not low < high:
            raise ValueError(f"Invalid tire temperature limits: {self.tire_temp_limits}")

        # YAML hands back lists
        object.__setattr__(self, "tire_temp_limits", (float(low), float(high)))

    def to_dict(self) -> Dict[str, Any]:
        config_dict = asdict(self)
        config_dict["tire_temp_limits"] = list(self.tire_temp_limits)
        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'SimulationConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(config_dict) - known
        if unknown:
            raise ValueError(f"Unknown simulation settings: {sorted(unknown)}")
        return cls(**config_dict)

    @classmethod
    def from_yaml(cls, filepath: str) -> 'SimulationConfig':
        """Load configuration from YAML file."""
        with open(filepath, 'r') as f:
            config_dict = yaml.safe_load(f) or {}
        return cls.from_dict(config_dict)

    def to_yaml(self, filepath: str):
        """Save configuration to YAML file."""
        with open(filepath, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)
