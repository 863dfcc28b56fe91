"""
Telemetry plots.

Speed, driver inputs and tire temperature against distance for one run.
"""

from pathlib import Path
from typing import Sequence, Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from laptime_sim.physics.vehicle import VehicleState


def plot_telemetry(
    telemetry: Sequence[VehicleState],
    output_path: Union[str, Path] = "lap_telemetry.png",
    title: str = "Lap Telemetry"
) -> Path:
    """Save a three-panel telemetry trace to ``output_path``."""
    if len(telemetry) == 0:
        raise ValueError("No telemetry data available")

    distance = np.array([s.position for s in telemetry])
    speed = np.array([s.velocity_kmh for s in telemetry])
    throttle = np.array([s.throttle for s in telemetry]) * 100
    brake = np.array([s.brake for s in telemetry]) * 100
    tire_temp = np.array([s.tire_temp for s in telemetry])

    fig, axes = plt.subplots(3, 1, figsize=(12, 9), sharex=True)

    axes[0].plot(distance, speed, 'b-', linewidth=1.5)
    axes[0].set_ylabel('Speed (km/h)', fontsize=11)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(distance, throttle, 'g-', linewidth=1.2, label='Throttle')
    axes[1].plot(distance, brake, 'r-', linewidth=1.2, label='Brake')
    axes[1].set_ylabel('Input (%)', fontsize=11)
    axes[1].set_ylim(-5, 105)
    axes[1].legend(loc='upper right')
    axes[1].grid(True, alpha=0.3)

    axes[2].plot(distance, tire_temp, color='darkorange', linewidth=1.5)
    axes[2].set_ylabel('Tire temp (°C)', fontsize=11)
    axes[2].set_xlabel('Distance (m)', fontsize=11)
    axes[2].grid(True, alpha=0.3)

    fig.suptitle(title, fontsize=13, fontweight='bold')
    plt.tight_layout()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)

    return output_path
