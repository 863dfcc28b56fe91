"""Telemetry sinks, export, analysis and plots."""

from laptime_sim.telemetry.analysis import TelemetrySummary, analyze_telemetry
from laptime_sim.telemetry.export import export_csv, telemetry_to_dataframe
from laptime_sim.telemetry.sinks import (
    CSV_COLUMNS,
    CsvTelemetrySink,
    ListSink,
    TelemetrySink,
    telemetry_row,
)

__all__ = [
    "TelemetrySummary",
    "analyze_telemetry",
    "export_csv",
    "telemetry_to_dataframe",
    "CSV_COLUMNS",
    "CsvTelemetrySink",
    "ListSink",
    "TelemetrySink",
    "telemetry_row",
]
