"""Lap Time Simulator - longitudinal vehicle physics with tire thermal coupling."""

__version__ = "1.0.0"
__author__ = "Lap Time Sim Team"

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams, VehicleState
from laptime_sim.simulation.simulator import LapTimeSimulator
from laptime_sim.simulation.sweep import SweepRunner
from laptime_sim.tracks.circuit import Circuit, CircuitBuilder, TrackSegment

__all__ = [
    "SimulationConfig",
    "VehicleParams",
    "VehicleState",
    "LapTimeSimulator",
    "SweepRunner",
    "Circuit",
    "CircuitBuilder",
    "TrackSegment",
]
