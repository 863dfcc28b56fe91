"""
Lap Orchestration

Drives the integrator through a circuit segment by segment and records
one telemetry sample per integration step.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams, VehicleState
from laptime_sim.simulation.integrator import create_integrator
from laptime_sim.tracks.circuit import Circuit, TrackSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentSummary:
    """What happened on one segment."""

    index: int
    segment: TrackSegment
    entry_speed: float  # m/s
    exit_speed: float  # m/s
    min_speed: float  # m/s
    max_speed: float  # m/s
    start_time: float  # s
    end_time: float  # s
    end_position: float  # m, may overshoot the nominal segment end

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class LapResult:
    """Outcome of one lap run."""

    lap_time: float
    telemetry: Tuple[VehicleState, ...]
    final_state: VehicleState
    segments: Tuple[SegmentSummary, ...] = ()
    completed: bool = True
    failure: Optional[str] = None

    @property
    def num_samples(self) -> int:
        return len(self.telemetry)


def check_invariants(state: VehicleState, config: SimulationConfig) -> Optional[str]:
    """
    Describe the first numerical invariant ``state`` violates, if any.

    Catches the blow-up modes of ill-conditioned runs: non-finite values,
    runaway tire temperature, grip beyond the configured bound, and a car
    that never reaches the end of the track.
    """
    if not state.is_finite():
        return f"non-finite state at t={state.time:.3f}s"

    low, high = config.tire_temp_limits
    if not low <= state.tire_temp <= high:
        return (f"tire temperature {state.tire_temp:.1f}°C outside "
                f"[{low:g}, {high:g}] at t={state.time:.3f}s")

    if state.grip_multiplier > config.max_grip_multiplier:
        return (f"grip multiplier {state.grip_multiplier:.3f} above "
                f"{config.max_grip_multiplier:g} at t={state.time:.3f}s")

    if state.time > config.max_lap_time:
        return f"lap exceeded {config.max_lap_time:g}s without finishing"

    return None


class LapOrchestrator:
    """
    Sequences the segments of one circuit for one vehicle.

    Each instance owns its parameters, integrator and telemetry, so
    independent orchestrators can run concurrently.
    """

    def __init__(
        self,
        params: VehicleParams,
        circuit: Circuit,
        config: Optional[SimulationConfig] = None,
        sinks: Iterable = ()
    ):
        self.params = params
        self.circuit = circuit
        self.config = config or SimulationConfig()
        self.sinks = list(sinks)
        self.integrator = create_integrator(params, self.config)

    def run(self, dt: float) -> LapResult:
        """
        Simulate one lap from a standing start.

        A segment ends on the first step whose position reaches the
        segment end. That step may overshoot; the overshoot is carried into
        the next segment, whose end is measured from where the car is.
        """
        if not dt > 0:
            raise ValueError(f"Time step must be positive, got {dt}")

        state = self.integrator.dynamics.initial_state()
        telemetry: List[VehicleState] = []
        summaries: List[SegmentSummary] = []
        failure: Optional[str] = None

        logger.info(
            "Starting lap: %s, %d segments, %.0fm, dt=%gs",
            self.circuit.name, len(self.circuit), self.circuit.length, dt
        )

        for index, segment in enumerate(self.circuit):
            segment_end = state.position + segment.length
            entry = state
            min_speed = max_speed = state.velocity

            while state.position < segment_end:
                telemetry.append(state)
                self._emit(state)

                state = self.integrator.step(state, segment, dt, segment_index=index)
                min_speed = min(min_speed, state.velocity)
                max_speed = max(max_speed, state.velocity)

                failure = check_invariants(state, self.config)
                if failure is not None:
                    break

            summaries.append(SegmentSummary(
                index=index,
                segment=segment,
                entry_speed=entry.velocity,
                exit_speed=state.velocity,
                min_speed=min_speed,
                max_speed=max_speed,
                start_time=entry.time,
                end_time=state.time,
                end_position=state.position,
            ))

            if failure is not None:
                logger.error("Lap aborted on segment %d (%s): %s",
                             index + 1, segment.type.value, failure)
                break

            logger.debug("Segment %d (%s): exit speed %.1f km/h",
                         index + 1, segment.describe(), state.velocity_kmh)

        completed = failure is None
        lap_time = state.time if completed else math.nan

        if completed:
            logger.info("Lap complete: %.3fs, %d telemetry points", lap_time, len(telemetry))

        return LapResult(
            lap_time=lap_time,
            telemetry=tuple(telemetry),
            final_state=state,
            segments=tuple(summaries),
            completed=completed,
            failure=failure,
        )

    def _emit(self, state: VehicleState):
        for sink in self.sinks:
            sink.on_sample(state)
