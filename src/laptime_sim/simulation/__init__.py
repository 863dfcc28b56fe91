"""Integration, lap orchestration and parameter sweeps."""

from laptime_sim.simulation.integrator import (
    EulerIntegrator,
    StageDerivative,
    StateIntegrator,
    VehicleDynamics,
    create_integrator,
    solve_reference,
)
from laptime_sim.simulation.lap import LapOrchestrator, LapResult, SegmentSummary, check_invariants
from laptime_sim.simulation.simulator import LapTimeSimulator
from laptime_sim.simulation.sweep import SweepPoint, SweepResult, SweepRunner

__all__ = [
    "EulerIntegrator",
    "StageDerivative",
    "StateIntegrator",
    "VehicleDynamics",
    "create_integrator",
    "solve_reference",
    "LapOrchestrator",
    "LapResult",
    "SegmentSummary",
    "check_invariants",
    "LapTimeSimulator",
    "SweepPoint",
    "SweepResult",
    "SweepRunner",
]
