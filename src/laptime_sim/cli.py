#!/usr/bin/env python3
"""
Command line interface for the lap time simulator.

Usage:
    laptime-sim run --scenario scenario.yaml --dt 0.01 --telemetry lap.csv
    laptime-sim sweep --param downforce_coeff --values 2.5 3.0 3.5 4.0 --workers 4
"""

import argparse
import logging
import sys
from typing import List, Optional

from laptime_sim.physics.vehicle import PARAM_LIMITS, VehicleParams
from laptime_sim.scenario import Scenario
from laptime_sim.simulation.lap import LapResult
from laptime_sim.simulation.simulator import LapTimeSimulator
from laptime_sim.simulation.sweep import SweepResult, SweepRunner
from laptime_sim.telemetry.analysis import analyze_telemetry
from laptime_sim.telemetry.sinks import CsvTelemetrySink
from laptime_sim.tracks import CIRCUITS


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Longitudinal lap time simulator")

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Shared scenario options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--scenario",
        type=str,
        default=None,
        help="Path to scenario YAML (vehicle, simulation, track)"
    )
    common.add_argument(
        "--circuit",
        type=str,
        default=None,
        choices=sorted(CIRCUITS),
        help="Preset circuit (overrides the scenario track)"
    )
    common.add_argument(
        "--dt",
        type=float,
        default=0.01,
        help="Integration time step in seconds"
    )

    run_parser = subparsers.add_parser("run", parents=[common], help="Simulate one lap")
    run_parser.add_argument(
        "--telemetry",
        type=str,
        default=None,
        help="Path to save telemetry CSV"
    )
    run_parser.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Path to save telemetry plot (PNG)"
    )

    sweep_parser = subparsers.add_parser("sweep", parents=[common], help="Sweep one vehicle parameter")
    sweep_parser.add_argument(
        "--param",
        type=str,
        required=True,
        choices=sorted(PARAM_LIMITS),
        help="Vehicle parameter to vary"
    )
    sweep_parser.add_argument(
        "--values",
        type=float,
        nargs="+",
        required=True,
        help="Parameter values to simulate"
    )
    sweep_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of parallel workers (default: CPU count)"
    )
    sweep_parser.add_argument(
        "--processes",
        action="store_true",
        help="Use worker processes instead of threads"
    )

    return parser.parse_args(argv)


def configure_logging(verbosity: int):
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_scenario(args) -> Scenario:
    scenario = Scenario.from_yaml(args.scenario) if args.scenario else Scenario()
    if args.circuit:
        scenario.circuit = CIRCUITS[args.circuit]()
    return scenario


def print_vehicle_setup(params: VehicleParams):
    """Print vehicle setup."""
    print("=== Vehicle Setup ===")
    print(f"Mass: {params.mass:g} kg")
    print(f"Max Power: {params.max_power / 1000:g} kW")
    print(f"Drag Coefficient: {params.drag_coeff:g}")
    print(f"Downforce Coefficient: {params.downforce_coeff:g}")
    print(f"Tire Grip: {params.tire_grip_coeff:g}")
    print("=" * 20 + "\n")


def print_lap_results(result: LapResult, gravity: float):
    """Print per-segment table and lap time."""
    print("\n" + "=" * 60)
    print("Lap Results")
    print("=" * 60)

    for summary in result.segments:
        print(f"Segment {summary.index + 1} ({summary.segment.describe()}): "
              f"exit {summary.exit_speed * 3.6:6.1f} km/h, "
              f"{summary.duration:6.3f}s")

    if result.completed:
        print(f"\nTotal Lap Time: {result.lap_time:.3f} seconds")
    else:
        print(f"\nLap did not complete: {result.failure}")
    print(f"Telemetry points recorded: {result.num_samples}")

    if result.num_samples:
        summary = analyze_telemetry(result.telemetry, gravity=gravity)
        print("\n=== Telemetry Analysis ===")
        print(f"Max Speed: {summary.max_speed_kmh:.1f} km/h")
        print(f"Max Acceleration: {summary.max_acceleration_g:.2f} G")
        print(f"Max Braking: {summary.max_braking_g:.2f} G")
        print(f"Tire Temp: {summary.min_tire_temp:.1f} - {summary.max_tire_temp:.1f} °C")

    print("=" * 60 + "\n")


def print_sweep_results(result: SweepResult):
    print("\n" + "=" * 60)
    print(f"Sweep Results: {result.param}")
    print("=" * 60)
    print(f"{'Value':>12}  {'Lap Time (s)':>12}")

    for point in result.points:
        lap_time = f"{point.lap_time:12.3f}" if point.completed else f"{'diverged':>12}"
        print(f"{point.value:12.4g}  {lap_time}")

    best = result.best()
    if best is not None:
        print(f"\nBest: {result.param}={best.value:g} ({best.lap_time:.3f}s)")
    print("=" * 60 + "\n")


def cmd_run(args) -> int:
    scenario = load_scenario(args)

    simulator = LapTimeSimulator(scenario.params, scenario.config, scenario.circuit)
    if args.telemetry:
        simulator.add_sink(CsvTelemetrySink(args.telemetry))

    print_vehicle_setup(simulator.params)
    print(f"Circuit: {scenario.circuit.name} "
          f"({scenario.circuit.length:.0f}m, {len(scenario.circuit)} segments)")

    completed = simulator.run(args.dt)
    if simulator.last_result is None:
        print(f"Invalid run request (dt={args.dt})")
        return 2

    print_lap_results(simulator.last_result, simulator.config.gravity)

    if args.telemetry:
        print(f"Telemetry saved to: {args.telemetry}")

    if args.plot and simulator.telemetry():
        from laptime_sim.telemetry.plots import plot_telemetry
        plot_telemetry(simulator.telemetry(), args.plot, title=scenario.circuit.name)
        print(f"Saved: {args.plot}")

    return 0 if completed else 1


def cmd_sweep(args) -> int:
    scenario = load_scenario(args)

    runner = SweepRunner(
        scenario.params,
        scenario.circuit,
        scenario.config,
        max_workers=args.workers,
        use_processes=args.processes,
    )

    try:
        result = runner.run(args.param, args.values, dt=args.dt, progress=True)
    except ValueError as e:
        print(f"Invalid sweep: {e}")
        return 2

    print_sweep_results(result)
    return 0 if all(p.completed for p in result.points) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "run":
        return cmd_run(args)
    return cmd_sweep(args)


if __name__ == "__main__":
    sys.exit(main())
