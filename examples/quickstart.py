"""
Quickstart Example - Lap Time Simulator

Demonstrates basic usage of the system.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from laptime_sim import LapTimeSimulator, SweepRunner
from laptime_sim.telemetry import analyze_telemetry
from laptime_sim.tracks import get_circuit


def main():
    print("=" * 60)
    print("Lap Time Simulator - Quickstart Example")
    print("=" * 60 + "\n")

    # 1. Build a small track
    print("Building track...")
    sim = LapTimeSimulator()
    sim.add_segment(200, type="straight")
    sim.add_segment(80, radius=50, type="right")
    sim.add_segment(150, inclination=-2, type="straight")
    print(f"✓ Track built: {sim.circuit.length:.0f}m, {len(sim.circuit)} segments\n")

    # 2. Run one lap
    print("Running lap (dt = 0.01s)...")
    sim.run(0.01)
    summary = analyze_telemetry(sim.telemetry(), gravity=sim.config.gravity)
    print(f"✓ Lap time: {sim.lap_time():.3f}s")
    print(f"✓ Max speed: {summary.max_speed_kmh:.1f} km/h")
    print(f"✓ Max braking: {summary.max_braking_g:.2f} G\n")

    # 3. Sweep downforce on the demo circuit
    print("Sweeping downforce coefficient (4 workers)...")
    runner = SweepRunner(sim.params, get_circuit("monaco_style"), max_workers=4)
    result = runner.run("downforce_coeff", [2.5, 3.0, 3.5, 4.0], dt=0.01)
    for value, lap_time in result.pairs():
        print(f"  Cl = {value:.1f}: {lap_time:.3f}s")

    print("\n✓ Quickstart complete")


if __name__ == "__main__":
    main()
