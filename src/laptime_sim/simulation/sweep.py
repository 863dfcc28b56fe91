"""
Parameter Sweep

Runs one independent lap per value of a single vehicle parameter and
collects (value, lap time) pairs in the caller's order. Runs share no
mutable state: each gets its own parameter copy, integrator and
telemetry.
"""

import logging
import os
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence

from tqdm import tqdm

from laptime_sim.config import SimulationConfig
from laptime_sim.physics.vehicle import VehicleParams
from laptime_sim.simulation.lap import LapOrchestrator
from laptime_sim.tracks.circuit import Circuit

logger = logging.getLogger(__name__)


class SweepPoint(NamedTuple):
    """One (parameter value, lap time) result."""

    value: float
    lap_time: float
    completed: bool = True


@dataclass(frozen=True)
class SweepResult:
    """Ordered results of a sweep over ``param``."""

    param: str
    points: tuple

    def pairs(self) -> List[tuple]:
        return [(p.value, p.lap_time) for p in self.points]

    def best(self) -> Optional[SweepPoint]:
        """Fastest completed point."""
        completed = [p for p in self.points if p.completed]
        return min(completed, key=lambda p: p.lap_time) if completed else None


def run_single(
    params: VehicleParams,
    circuit: Circuit,
    config: SimulationConfig,
    dt: float,
    value: float
) -> SweepPoint:
    """Worker: simulate one lap. Module-level so process pools can pickle it."""
    result = LapOrchestrator(params, circuit, config).run(dt)
    return SweepPoint(value, result.lap_time, result.completed)


class SweepRunner:
    """
    Embarrassingly parallel map of lap simulations over parameter values.

    Args:
        base_params: Parameters every run starts from
        circuit: Track shared read-only by all runs
        config: Simulation settings
        max_workers: Worker count (defaults to CPU count)
        use_processes: Use a process pool instead of threads
    """

    def __init__(
        self,
        base_params: VehicleParams,
        circuit: Circuit,
        config: Optional[SimulationConfig] = None,
        max_workers: Optional[int] = None,
        use_processes: bool = False
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self.base_params = base_params
        self.circuit = circuit
        self.config = config or SimulationConfig()
        self.max_workers = max_workers or os.cpu_count() or 1
        self.use_processes = use_processes

    def _variants(self, param: str, values: Sequence[float]) -> List[VehicleParams]:
        """Clone the base parameters once per value, validating all up front."""
        return [self.base_params.with_param(param, value) for value in values]

    def _check(self, dt: float):
        if not dt > 0:
            raise ValueError(f"Time step must be positive, got {dt}")
        if dt > self.config.max_time_step:
            raise ValueError(f"Time step {dt}s above limit {self.config.max_time_step}s")
        if len(self.circuit) == 0:
            raise ValueError("Circuit has no segments")

    def _executor(self) -> Executor:
        if self.use_processes:
            return ProcessPoolExecutor(max_workers=self.max_workers)
        return ThreadPoolExecutor(max_workers=self.max_workers)

    def run(
        self,
        param: str,
        values: Sequence[float],
        dt: float = 0.01,
        progress: bool = False
    ) -> SweepResult:
        """
        Run all values concurrently.

        Results are stored by input index as futures complete, so the
        output order always matches ``values``.

        Raises:
            ValueError: invalid parameter name, value or time step
        """
        self._check(dt)
        variants = self._variants(param, values)

        logger.info("Sweeping %s over %d values with %d %s",
                    param, len(variants), self.max_workers,
                    "processes" if self.use_processes else "threads")

        points: List[Optional[SweepPoint]] = [None] * len(variants)

        with self._executor() as executor:
            future_to_index = {
                executor.submit(run_single, params, self.circuit, self.config, dt, float(value)): i
                for i, (params, value) in enumerate(zip(variants, values))
            }

            for future in tqdm(as_completed(future_to_index), total=len(future_to_index),
                               desc=f"Sweep {param}", disable=not progress):
                points[future_to_index[future]] = future.result()

        self._log_summary(param, points)
        return SweepResult(param=param, points=tuple(points))

    def run_sequential(self, param: str, values: Sequence[float], dt: float = 0.01) -> SweepResult:
        """Same sweep, one value after another in the calling thread."""
        self._check(dt)
        variants = self._variants(param, values)

        points = [
            run_single(params, self.circuit, self.config, dt, float(value))
            for params, value in zip(variants, values)
        ]

        self._log_summary(param, points)
        return SweepResult(param=param, points=tuple(points))

    @staticmethod
    def _log_summary(param: str, points: Sequence[SweepPoint]):
        failed = [p.value for p in points if not p.completed]
        if failed:
            logger.warning("Sweep %s: %d runs did not complete (values %s)", param, len(failed), failed)
        logger.info("Sweep %s finished: %d runs", param, len(points))
