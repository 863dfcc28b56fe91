"""
Vehicle Parameters and State

Static vehicle description and the instantaneous longitudinal state:
- Mass, aerodynamics, power and brakes
- Tire grip and wheel geometry
- Weight distribution and chassis geometry for load transfer
"""

import math
from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict, Tuple

import yaml


# Valid (min, max) range per parameter. Bounds are inclusive unless the
# parameter is listed in _STRICT_LOWER.
PARAM_LIMITS: Dict[str, Tuple[float, float]] = {
    'mass': (1.0, 1.0e5),
    'drag_coeff': (0.0, 5.0),
    'frontal_area': (0.0, 20.0),
    'downforce_coeff': (0.0, 10.0),
    'max_power': (0.0, 5.0e6),
    'max_brake_torque': (0.0, 1.0e5),
    'tire_grip_coeff': (0.0, 5.0),
    'wheel_radius': (0.05, 2.0),
    'weight_dist_front': (0.0, 1.0),
    'weight_dist_rear': (0.0, 1.0),
    'center_gravity_height': (0.0, 3.0),
    'wheel_base': (0.5, 10.0),
    'suspension_stiffness': (0.0, 1.0e7),
}

_STRICT_LOWER = {'wheel_radius', 'wheel_base', 'mass'}

_WEIGHT_SPLIT_PARTNER = {
    'weight_dist_front': 'weight_dist_rear',
    'weight_dist_rear': 'weight_dist_front',
}


@dataclass(frozen=True)
class VehicleParams:
    """F1-like vehicle parameters, fixed for the duration of one run."""

    # Mass
    mass: float = 798.0  # kg (minimum F1 weight with driver)

    # Aerodynamics
    drag_coeff: float = 0.7  # Cd
    frontal_area: float = 1.5  # m²
    downforce_coeff: float = 3.5  # Cl

    # Power and brakes
    max_power: float = 750000.0  # W (750 kW / ~1000 hp)
    max_brake_torque: float = 5000.0  # Nm

    # Tires
    tire_grip_coeff: float = 1.8  # mu
    wheel_radius: float = 0.33  # m

    # Chassis
    weight_dist_front: float = 0.46  # 46% front
    weight_dist_rear: float = 0.54
    center_gravity_height: float = 0.30  # m
    wheel_base: float = 3.6  # m
    suspension_stiffness: float = 200000.0  # N/m

    def __post_init__(self):
        """Validate parameters."""
        for name, (low, high) in PARAM_LIMITS.items():
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, got {value!r}")
            below = value <= low if name in _STRICT_LOWER else value < low
            if below or value > high:
                raise ValueError(f"{name}={value} outside valid range [{low}, {high}]")

        split = self.weight_dist_front + self.weight_dist_rear
        if abs(split - 1.0) > 1e-9:
            raise ValueError(
                f"Weight distribution must sum to 1.0, got "
                f"{self.weight_dist_front} + {self.weight_dist_rear} = {split}"
            )

    @classmethod
    def param_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def with_param(self, key: str, value: float) -> 'VehicleParams':
        """
        Return a copy with exactly one parameter changed.

        Changing one side of the weight split re-derives the other so the
        pair keeps summing to 1.

        Raises:
            ValueError: unknown key or out-of-range value
        """
        if key not in PARAM_LIMITS:
            raise ValueError(f"Unknown vehicle parameter: {key}. Available: {list(PARAM_LIMITS)}")

        changes = {key: float(value)}
        partner = _WEIGHT_SPLIT_PARTNER.get(key)
        if partner is not None:
            changes[partner] = 1.0 - float(value)

        return replace(self, **changes)

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'VehicleParams':
        unknown = set(params) - set(cls.param_names())
        if unknown:
            raise ValueError(f"Unknown vehicle parameters: {sorted(unknown)}")

        params = dict(params)
        # Allow a single side of the weight split in config files
        if 'weight_dist_front' in params and 'weight_dist_rear' not in params:
            params['weight_dist_rear'] = 1.0 - params['weight_dist_front']
        elif 'weight_dist_rear' in params and 'weight_dist_front' not in params:
            params['weight_dist_front'] = 1.0 - params['weight_dist_rear']

        return cls(**{k: float(v) for k, v in params.items()})

    @classmethod
    def from_yaml(cls, filepath: str) -> 'VehicleParams':
        """Load parameters from YAML file."""
        with open(filepath, 'r') as f:
            params = yaml.safe_load(f) or {}
        return cls.from_dict(params)

    def to_yaml(self, filepath: str):
        """Save parameters to YAML file."""
        with open(filepath, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)


@dataclass(frozen=True)
class VehicleState:
    """
    Longitudinal vehicle state at one simulated instant.

    Loads are normal forces in Newtons. ``throttle``/``brake`` are the
    controls applied over the step that produced this state, and
    ``grip_multiplier`` is the grip evaluated at the start of that step.
    """

    position: float = 0.0  # m
    velocity: float = 0.0  # m/s
    acceleration: float = 0.0  # m/s²
    time: float = 0.0  # s
    throttle: float = 0.0  # 0-1
    brake: float = 0.0  # 0-1
    tire_temp: float = 60.0  # °C
    front_load: float = 0.0  # N
    rear_load: float = 0.0  # N
    grip_multiplier: float = 1.0
    segment_index: int = 0

    @property
    def velocity_kmh(self) -> float:
        return self.velocity * 3.6

    @property
    def total_load(self) -> float:
        return self.front_load + self.rear_load

    def is_finite(self) -> bool:
        """True when every numeric field is a finite float."""
        return all(math.isfinite(v) for v in (
            self.position, self.velocity, self.acceleration, self.time,
            self.tire_temp, self.front_load, self.rear_load, self.grip_multiplier,
        ))
