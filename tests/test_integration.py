"""
Integration tests to validate the lap time simulator end to end.

Run with: pytest tests/test_integration.py -v
Or: python tests/test_integration.py
"""

import sys
import tempfile
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
import pandas as pd

from laptime_sim import LapTimeSimulator, SweepRunner, VehicleParams
from laptime_sim.cli import main
from laptime_sim.telemetry import CSV_COLUMNS, analyze_telemetry, export_csv
from laptime_sim.tracks import CIRCUITS, get_circuit


CONFIG_DIR = Path(__file__).parent.parent / "configs"


def test_build_and_run_lap():
    """Test building a track segment by segment and running it."""
    print("\n" + "="*60)
    print("TEST: Build and Run Lap")
    print("="*60)

    sim = LapTimeSimulator()
    assert sim.add_segment(200, type="straight")
    assert sim.add_segment(80, radius=50, type="right")
    assert sim.add_segment(150, inclination=-2, type="straight")

    assert sim.run(0.01), "Lap should complete"
    assert sim.lap_time() > 0, f"Lap time should be positive, got {sim.lap_time()}"
    assert len(sim.telemetry()) > 0, "Telemetry should not be empty"

    print(f"✓ Track: {sim.circuit.length:.0f}m, {len(sim.circuit)} segments")
    print(f"✓ Lap time: {sim.lap_time():.3f}s")
    print(f"✓ Telemetry points: {len(sim.telemetry())}")


def test_circuits():
    """Test circuit loading."""
    print("\n" + "="*60)
    print("TEST: Circuits")
    print("="*60)

    for name in CIRCUITS:
        circuit = get_circuit(name)
        assert circuit.length > 0, f"{name} has no length"
        assert circuit.num_corners > 0, f"{name} has no corners"
        print(f"✓ {circuit.name}: {circuit.length:.0f}m, {circuit.num_corners} corners")

    assert get_circuit("Monaco-Style").segments == get_circuit("monaco_style").segments
    print("✓ Circuit names are case and dash insensitive")

    try:
        get_circuit("nurburgring")
    except ValueError:
        print("✓ Unknown circuit rejected")
    else:
        raise AssertionError("Unknown circuit should raise ValueError")


def test_lap_with_export():
    """Test full lap followed by CSV export and analysis."""
    print("\n" + "="*60)
    print("TEST: Lap With Export")
    print("="*60)

    sim = LapTimeSimulator(circuit=get_circuit("monaco_style"))
    assert sim.run(0.01)

    summary = analyze_telemetry(sim.telemetry())
    assert 0 < summary.max_speed_kmh <= 360.0
    assert summary.max_braking_g > 0, "Monaco layout needs braking"

    with tempfile.TemporaryDirectory() as tmpdir:
        path = export_csv(sim.telemetry(), Path(tmpdir) / "monaco.csv")
        df = pd.read_csv(path)

    assert tuple(df.columns) == CSV_COLUMNS
    assert len(df) == len(sim.telemetry())

    print(f"✓ Lap time: {sim.lap_time():.3f}s")
    print(f"✓ Max speed: {summary.max_speed_kmh:.1f} km/h")
    print(f"✓ Max braking: {summary.max_braking_g:.2f} G")
    print(f"✓ Exported {len(df)} rows")


def test_downforce_sweep():
    """Test a parallel downforce sweep on the demo circuit."""
    print("\n" + "="*60)
    print("TEST: Downforce Sweep")
    print("="*60)

    values = [2.5, 3.0, 3.5, 4.0]
    runner = SweepRunner(VehicleParams(), get_circuit("monaco_style"), max_workers=4)
    result = runner.run("downforce_coeff", values, dt=0.01)

    assert [v for v, _ in result.pairs()] == values
    assert all(np.isfinite(t) and t > 0 for _, t in result.pairs())

    for value, lap_time in result.pairs():
        print(f"✓ Cl = {value:.1f}: {lap_time:.3f}s")


def test_cli_run():
    """Test the run command with telemetry and plot output."""
    print("\n" + "="*60)
    print("TEST: CLI Run")
    print("="*60)

    with tempfile.TemporaryDirectory() as tmpdir:
        telemetry = Path(tmpdir) / "lap.csv"
        plot = Path(tmpdir) / "lap.png"

        code = main([
            "run",
            "--scenario", str(CONFIG_DIR / "monaco_style.yaml"),
            "--dt", "0.02",
            "--telemetry", str(telemetry),
            "--plot", str(plot),
        ])

        assert code == 0, f"run exited with {code}"
        assert telemetry.exists()
        assert plot.exists()

    print("✓ CLI run completed")


def test_cli_rejects_bad_time_step():
    """Test the run command refusing an invalid time step."""
    print("\n" + "="*60)
    print("TEST: CLI Bad Time Step")
    print("="*60)

    assert main(["run", "--circuit", "monaco_style", "--dt", "-0.01"]) == 2
    print("✓ Negative time step rejected")


def test_cli_sweep():
    """Test the sweep command."""
    print("\n" + "="*60)
    print("TEST: CLI Sweep")
    print("="*60)

    code = main([
        "sweep",
        "--circuit", "monaco_style",
        "--param", "downforce_coeff",
        "--values", "3.0", "3.5",
        "--workers", "2",
        "--dt", "0.02",
    ])

    assert code == 0, f"sweep exited with {code}"
    print("✓ CLI sweep completed")


def run_all_tests():
    """Run all integration tests."""
    print("\n" + "="*70)
    print("LAP TIME SIMULATOR - INTEGRATION TESTS")
    print("="*70)

    tests = [
        test_build_and_run_lap,
        test_circuits,
        test_lap_with_export,
        test_downforce_sweep,
        test_cli_run,
        test_cli_rejects_bad_time_step,
        test_cli_sweep,
    ]

    passed = 0
    failed = 0

    for test_func in tests:
        try:
            test_func()
            passed += 1
        except Exception as e:
            print(f"\n✗ TEST FAILED: {test_func.__name__}")
            print(f"  Error: {e}")
            import traceback
            traceback.print_exc()
            failed += 1

    print("\n" + "="*70)
    print(f"TEST RESULTS: {passed} passed, {failed} failed")
    print("="*70 + "\n")

    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
