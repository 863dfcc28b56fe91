"""
Scenario files.

A scenario bundles vehicle parameters, simulation settings and a track in
one YAML document:

    vehicle:
      downforce_coeff: 3.0
    simulation:
      ambient_temp: 30.0
    track:
      circuit: monaco_style        # preset, or
      segments:                    # explicit list
        - {length: 200}
        - {length: 80, radius: 50, type: right}
"""

from dataclasses import dataclass, field
from typing import Any, Dict

import yaml

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams
from laptime_sim.tracks import get_circuit
from laptime_sim.tracks.circuit import Circuit


@dataclass
class Scenario:
    params: VehicleParams = field(default_factory=VehicleParams)
    config: SimulationConfig = field(default_factory=SimulationConfig)
    circuit: Circuit = field(default_factory=lambda: get_circuit('monaco_style'))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Scenario':
        track = data.get('track') or {}
        if 'segments' in track:
            circuit = Circuit.from_dict(track)
        else:
            circuit = get_circuit(track.get('circuit', 'monaco_style'))

        return cls(
            params=VehicleParams.from_dict(data.get('vehicle') or {}),
            config=SimulationConfig.from_dict(data.get('simulation') or {}),
            circuit=circuit,
        )

    @classmethod
    def from_yaml(cls, filepath: str) -> 'Scenario':
        """Load scenario from YAML file."""
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def to_yaml(self, filepath: str):
        data = {
            'vehicle': self.params.to_dict(),
            'simulation': self.config.to_dict(),
            'track': self.circuit.to_dict(),
        }
        with open(filepath, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
