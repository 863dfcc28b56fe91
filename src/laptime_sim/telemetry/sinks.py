"""
Telemetry sinks.

Sinks receive every sample of a run as it is recorded, keeping I/O out of
the physics loop.
"""

import csv
from pathlib import Path
from typing import List, Protocol, Tuple, Union

from laptime_sim.physics.vehicle import VehicleState


CSV_COLUMNS = (
    'time',
    'position',
    'velocity',
    'velocity_kmh',
    'acceleration',
    'throttle_pct',
    'brake_pct',
    'tireTemp',
)


def telemetry_row(state: VehicleState) -> Tuple[float, ...]:
    """Export row for one sample, in ``CSV_COLUMNS`` order."""
    return (
        state.time,
        state.position,
        state.velocity,
        state.velocity_kmh,
        state.acceleration,
        state.throttle * 100.0,
        state.brake * 100.0,
        state.tire_temp,
    )


class TelemetrySink(Protocol):
    def on_sample(self, state: VehicleState) -> None: ...

    def close(self) -> None: ...


class ListSink:
    """Collects samples in memory."""

    def __init__(self):
        self.samples: List[VehicleState] = []
        self.closed = False

    def on_sample(self, state: VehicleState):
        if self.closed:
            # New run replaces the previous one
            self.samples = []
            self.closed = False
        self.samples.append(state)

    def close(self):
        self.closed = True


class CsvTelemetrySink:
    """
    Streams samples to a CSV file.

    The file is (re)created on the first sample of each run and flushed
    when the run ends.
    """

    def __init__(self, filepath: Union[str, Path], precision: int = 3):
        self.filepath = Path(filepath)
        self.precision = precision
        self._file = None
        self._writer = None
        self.rows_written = 0

    def _open(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, 'w', newline='')
        self._writer = csv.writer(self._file)
        self._writer.writerow(CSV_COLUMNS)
        self.rows_written = 0

    def on_sample(self, state: VehicleState):
        if self._file is None:
            self._open()
        self._writer.writerow(f"{value:.{self.precision}f}" for value in telemetry_row(state))
        self.rows_written += 1

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None
