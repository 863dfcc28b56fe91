"""Physics models for lap time simulation."""

from laptime_sim.physics.vehicle import VehicleParams, VehicleState, PARAM_LIMITS
from laptime_sim.physics.forces import ForceModel, ForceBreakdown
from laptime_sim.physics.load_transfer import LoadTransferModel
from laptime_sim.physics.tire_model import GripCouplingModel, ThermalModel

__all__ = [
    "VehicleParams",
    "VehicleState",
    "PARAM_LIMITS",
    "ForceModel",
    "ForceBreakdown",
    "LoadTransferModel",
    "GripCouplingModel",
    "ThermalModel",
]
