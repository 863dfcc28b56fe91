"""
Monaco-style demo circuit

Short street-circuit layout used for development runs
- Length: 1.1 km
- Corners: 4 (tight right, medium left, hairpin, fast left)
- Characteristics: slow corners, one downhill and one uphill straight
"""

from laptime_sim.tracks.circuit import Circuit, CircuitBuilder


class MonacoStyle(Circuit):
    """Monaco-inspired demo layout."""

    def __init__(self):
        builder = (
            CircuitBuilder("Monaco-style Demo Circuit")
            .straight(200)              # Start straight
            .right(80, radius=50)       # Tight right
            .straight(150, -2)          # Downhill straight
            .left(100, radius=80)       # Medium left
            .straight(300)              # Long straight
            .right(60, radius=40)       # Hairpin
            .straight(120, 3)           # Uphill
            .left(90, radius=120)       # Fast left
        )
        track = builder.build()

        super().__init__(track.segments, name=track.name)
