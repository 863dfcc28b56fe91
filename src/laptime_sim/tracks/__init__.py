"""Track segments, circuits and preset layouts."""

from laptime_sim.tracks.circuit import Circuit, CircuitBuilder, SegmentType, TrackSegment
from laptime_sim.tracks.monaco import MonacoStyle

__all__ = ["Circuit", "CircuitBuilder", "SegmentType", "TrackSegment", "MonacoStyle"]


# Preset layouts by name
CIRCUITS = {
    'monaco_style': MonacoStyle,
}


def get_circuit(name: str) -> Circuit:
    """
    Build a preset circuit.

    Names are case-insensitive and accept '-' for '_' ("Monaco-Style").

    Raises:
        ValueError: no preset with that name
    """
    key = name.strip().lower().replace('-', '_')
    factory = CIRCUITS.get(key)
    if factory is None:
        raise ValueError(f"Unknown circuit: {name}. Available: {sorted(CIRCUITS)}")

    return factory()
