#!/usr/bin/env python3
"""
Predator-Prey Field Simulation

A grid-based foxes-and-rabbits population simulator with traps and ponds.

Usage:
    predprey-field [--config configs/default.yaml] [options]

Examples:
    predprey-field --config configs/default.yaml
    predprey-field --config configs/default.yaml --gif --out-dir results/
    predprey-field --steps 100 --no-log --no-snapshot --quiet
    predprey-field --seed 42
    predprey-field --analyse --out-dir results/
"""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from predprey_field.config import default_config, load_config
from predprey_field.model.engine import Simulator
from predprey_field.export.population_log import PopulationLog
from predprey_field.export.analyser import LogAnalyser
from predprey_field.export.visualizer import Visualizer
from predprey_field.export.reporter import Reporter


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Predator-Prey Field Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    predprey-field --config configs/default.yaml
    predprey-field --config configs/default.yaml --gif --out-dir results/
    predprey-field --steps 100 --no-log --no-snapshot --quiet
    predprey-field --analyse --out-dir results/
        """
    )

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file '
                             '(default: built-in settings)')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation steps')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--log', dest='log', action='store_true', default=None,
                        help='Enable population log (default)')
    parser.add_argument('--no-log', dest='log', action='store_false',
                        help='Disable population log')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    parser.add_argument('--analyse', action='store_true', default=False,
                        help='Summarise the population log instead of simulating')

    return parser.parse_args(argv)


def analyse(log_path: Path) -> int:
    """Print run counts from an existing population log."""
    analyser = LogAnalyser()
    try:
        analyser.load(log_path)
    except FileNotFoundError:
        print(f"Error: Population log not found: {log_path}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error reading population log: {e}", file=sys.stderr)
        return 1

    print(f"Runs logged:           {analyser.log_count}")
    print(f"Runs over 300 records: {analyser.worthy_log_count()}")
    for i, survivors in enumerate(analyser.final_records(), start=1):
        details = ", ".join(f"{kind}={count}" for kind, count in survivors.items())
        print(f"  Run {i}: {details}")
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Load configuration
    try:
        config = load_config(args.config) if args.config else default_config()
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (ValueError, KeyError, yaml.YAMLError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.log is not None:
        config.log_enabled = args.log
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    if args.analyse:
        return analyse(config.log_path)

    # Initialize engine
    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Field: {config.grid.depth}x{config.grid.width}")
        print(f"  Max steps: {config.max_steps}")

    simulator = Simulator(config)

    if not config.quiet:
        print(f"  Population: {simulator.last_state.population_details()}")

    # Initialize exporters
    population_log = None
    if config.log_enabled:
        population_log = PopulationLog(config.log_path, simulator.last_state)
        simulator.add_observer(population_log)

    visualizer = Visualizer(simulator.field.depth, simulator.field.width)

    reporter = Reporter(str(args.config) if args.config else None, config.seed)
    simulator.add_observer(reporter)

    # Main simulation loop
    if not config.quiet:
        print(f"\nRunning simulation...")

    final_state = simulator.last_state
    try:
        for state in simulator.iter_steps(config.max_steps):
            final_state = state

            # Buffer GIF frame (every N steps to reduce memory)
            if config.gif_enabled:
                if state.step % 5 == 0 or not state.viable:
                    visualizer.buffer_frame(state)

            # Progress indicator
            if not config.quiet and state.step % 100 == 0:
                print(f"  Step {state.step}: {state.population_details()}")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    # A run that used its whole budget still closes its log block
    if population_log:
        population_log.finish(final_state)
        if not config.quiet:
            print(f"\nPopulation log saved: {config.log_path}")

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        visualizer.clear_frames()
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.log_enabled,
            config.snapshot_enabled,
            config.gif_enabled,
            config.log_name
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
