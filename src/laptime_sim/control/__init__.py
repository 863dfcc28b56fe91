"""Driver control policies."""

from laptime_sim.control.policy import ControlInputs, ControlPolicy

__all__ = ["ControlInputs", "ControlPolicy"]
