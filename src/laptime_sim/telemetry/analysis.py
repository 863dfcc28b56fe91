"""
Telemetry analysis.

Summary figures of one run: top speed, peak acceleration and braking
(in G), average speed and peak tire temperature.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from laptime_sim.physics.vehicle import VehicleState


@dataclass(frozen=True)
class TelemetrySummary:
    """Container for analysis results."""

    num_samples: int
    max_speed_kmh: float
    mean_speed_kmh: float
    max_acceleration_g: float
    max_braking_g: float  # positive magnitude
    max_tire_temp: float  # °C
    min_tire_temp: float  # °C


def analyze_telemetry(telemetry: Sequence[VehicleState], gravity: float = 9.81) -> TelemetrySummary:
    """
    Summarize one run.

    Raises:
        ValueError: if ``telemetry`` is empty
    """
    if len(telemetry) == 0:
        raise ValueError("No telemetry data available")

    speed = np.array([s.velocity for s in telemetry]) * 3.6
    accel = np.array([s.acceleration for s in telemetry])
    temps = np.array([s.tire_temp for s in telemetry])

    return TelemetrySummary(
        num_samples=len(telemetry),
        max_speed_kmh=float(speed.max()),
        mean_speed_kmh=float(speed.mean()),
        max_acceleration_g=float(max(accel.max(), 0.0) / gravity),
        max_braking_g=float(abs(min(accel.min(), 0.0)) / gravity),
        max_tire_temp=float(temps.max()),
        min_tire_temp=float(temps.min()),
    )
