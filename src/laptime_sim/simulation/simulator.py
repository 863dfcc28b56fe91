"""
Lap Time Simulator

Run context consumed by the CLI and export layers. Holds the vehicle
parameters, the circuit and the results of the last run. Invalid
requests are rejected (``False``) and leave the context unchanged.
"""

import logging
from typing import Optional, Tuple, Union

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams, VehicleState
from laptime_sim.simulation.lap import LapOrchestrator, LapResult
from laptime_sim.tracks.circuit import Circuit, SegmentType, TrackSegment

logger = logging.getLogger(__name__)


class LapTimeSimulator:
    """
    Single-vehicle lap time simulator.

    Usage:
        sim = LapTimeSimulator()
        sim.add_segment(200)
        sim.add_segment(80, radius=50, type="right")
        sim.run(0.01)
        sim.lap_time()
    """

    def __init__(
        self,
        params: Optional[VehicleParams] = None,
        config: Optional[SimulationConfig] = None,
        circuit: Optional[Circuit] = None
    ):
        self.params = params or VehicleParams()
        self.config = config or SimulationConfig()
        self.circuit = circuit or Circuit()
        self.sinks = []

        self.last_result: Optional[LapResult] = None
        self._lap_time = 0.0
        self._telemetry: Tuple[VehicleState, ...] = ()

    # === Track ===

    def add_segment(
        self,
        length: float,
        radius: float = 0.0,
        inclination: float = 0.0,
        type: Union[SegmentType, str] = SegmentType.STRAIGHT
    ) -> bool:
        """Append a segment. Returns False (track unchanged) if invalid."""
        try:
            segment = TrackSegment(length, radius, inclination, type)
        except ValueError as e:
            logger.warning("Rejected track segment: %s", e)
            return False

        self.circuit = self.circuit.with_segment(segment)
        return True

    def load_circuit(self, circuit: Circuit):
        """Replace the whole track."""
        self.circuit = circuit

    # === Vehicle ===

    def update_param(self, key: str, value: float) -> bool:
        """Change one vehicle parameter before the next run."""
        try:
            self.params = self.params.with_param(key, value)
        except (TypeError, ValueError) as e:
            logger.warning("Rejected parameter update %s=%r: %s", key, value, e)
            return False

        return True

    # === Telemetry sinks ===

    def add_sink(self, sink):
        """Register a sink receiving every telemetry sample of later runs."""
        self.sinks.append(sink)

    # === Running ===

    def run(self, time_step: float = 0.01) -> bool:
        """
        Simulate one lap over the current track.

        Returns False without touching previous results when the time step
        or track is invalid, and False with the failed run recorded in
        ``last_result`` when the integration diverged.
        """
        if not time_step > 0:
            logger.warning("Rejected run: time step must be positive, got %s", time_step)
            return False
        if time_step > self.config.max_time_step:
            logger.warning("Rejected run: time step %gs above limit %gs",
                           time_step, self.config.max_time_step)
            return False
        if len(self.circuit) == 0:
            logger.warning("Rejected run: track has no segments")
            return False

        orchestrator = LapOrchestrator(self.params, self.circuit, self.config, self.sinks)
        try:
            result = orchestrator.run(time_step)
        finally:
            for sink in self.sinks:
                sink.close()

        self.last_result = result
        self._telemetry = result.telemetry
        if result.completed:
            self._lap_time = result.lap_time

        return result.completed

    def lap_time(self) -> float:
        """Total time of the last completed run, 0.0 before any run."""
        return self._lap_time

    def telemetry(self) -> Tuple[VehicleState, ...]:
        """Samples of the last run, in order."""
        return self._telemetry

    def final_state(self) -> Optional[VehicleState]:
        return self.last_result.final_state if self.last_result else None
