"""
Telemetry export.

Whole-run conversion of telemetry to a pandas DataFrame and CSV.
"""

from pathlib import Path
from typing import Sequence, Union

import pandas as pd

from laptime_sim.physics.vehicle import VehicleState
from laptime_sim.telemetry.sinks import CSV_COLUMNS, telemetry_row


def telemetry_to_dataframe(telemetry: Sequence[VehicleState], extended: bool = False) -> pd.DataFrame:
    """
    Build a DataFrame with one row per sample.

    Args:
        telemetry: Samples of one run
        extended: Also include loads, grip multiplier and segment index

    Returns:
        DataFrame with the export columns (plus extended columns)
    """
    df = pd.DataFrame([telemetry_row(s) for s in telemetry], columns=list(CSV_COLUMNS))

    if extended:
        df['front_load'] = [s.front_load for s in telemetry]
        df['rear_load'] = [s.rear_load for s in telemetry]
        df['grip_multiplier'] = [s.grip_multiplier for s in telemetry]
        df['segment'] = [s.segment_index for s in telemetry]

    return df


def export_csv(telemetry: Sequence[VehicleState], filepath: Union[str, Path], precision: int = 3) -> Path:
    """Save telemetry to CSV."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df = telemetry_to_dataframe(telemetry)
    df.to_csv(filepath, index=False, float_format=f"%.{precision}f")

    return filepath
