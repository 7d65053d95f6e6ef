"""
Command-line interface for the moral spectrum simulator.

Provides commands for running the example community and for growing
a family from a single person.
"""

import argparse
import logging
import os
import sys
import json

from .agents.person import BeliefType
from .analysis.metrics import MetricsCollector
from .simulation.engine import CommunitySimulation, SimulationConfig
from .simulation.examples import build_example_community
from .visualization.plots import SpectrumPlotter

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _int_at_least(minimum: int):
    """argparse type for integers no smaller than ``minimum``."""
    def parse(value: str) -> int:
        number = int(value)
        if number < minimum:
            raise argparse.ArgumentTypeError(f"must be >= {minimum}, got {number}")
        return number
    return parse


def run_and_report(sim: CommunitySimulation, args) -> int:
    """Run a simulation, print the results and save outputs if requested."""
    collector = MetricsCollector()
    sim.on_event(collector.record_event)

    state = sim.run()
    logger.info("Simulation finished with %d events", state.total_events)

    spectrum = sim.spectrum()
    gradient = sim.gradient_css()
    metrics = collector.finalize(sim.stories)

    if args.json:
        payload = {
            "state": sim.export_state(),
            "spectrum": [s.to_dict() for s in spectrum],
            "gradient_css": gradient,
            "stories": [story.to_dict() for story in sim.stories],
            "metrics": metrics.to_dict(),
        }
        print(json.dumps(payload, indent=2))
    else:
        plotter = SpectrumPlotter(args.output_dir or ".")
        print(plotter.create_summary_report(metrics.to_dict(), spectrum, gradient))
        for story in sim.stories:
            print()
            print(f"Story of {story.person.name}:")
            for line in story.summarize():
                print(f"  {line}")

    # Save outputs if requested
    if args.output_dir:
        os.makedirs(args.output_dir, exist_ok=True)
        plotter = SpectrumPlotter(args.output_dir)

        report_path = os.path.join(args.output_dir, "simulation_report.txt")
        plotter.create_summary_report(metrics.to_dict(), spectrum, gradient, save_path=report_path)

        metrics_path = os.path.join(args.output_dir, "metrics.json")
        with open(metrics_path, 'w') as f:
            f.write(metrics.to_json())

        stories_path = plotter.export_plot_data(
            {"stories": [story.to_dict() for story in sim.stories]},
            "stories.json",
        )

        if args.plots:
            plotter.plot_spectrum(spectrum, os.path.join(args.output_dir, "spectrum.png"))
            plotter.plot_trajectories(sim.stories, os.path.join(args.output_dir, "trajectories.png"))

        print(f"\nOutputs saved to: {args.output_dir}", file=sys.stderr)
        logger.info("Wrote %s, %s and %s", report_path, metrics_path, stories_path)

    return 0


def run_demo(args) -> int:
    """Run the example community."""
    config = SimulationConfig(years=args.years, seed=args.seed)
    return run_and_report(build_example_community(config), args)


def run_family(args) -> int:
    """Grow a family from one person and run everyone's story."""
    config = SimulationConfig(years=args.years, seed=args.seed)
    sim = CommunitySimulation(config)

    founder = sim.create_person(
        name=args.name,
        belief_type=BeliefType(args.belief),
        moral_score=args.score,
    )
    for _ in range(args.children):
        sim.spawn_child(founder)

    return run_and_report(sim, args)


def _add_run_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-y", "--years",
        type=_int_at_least(1),
        default=15,
        help="Years to simulate per person (default: 15)",
    )
    parser.add_argument(
        "-s", "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=str,
        default=None,
        help="Directory for output files",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of a text report",
    )
    parser.add_argument(
        "--plots",
        action="store_true",
        help="Also save spectrum and trajectory plots (needs --output-dir)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moral-sim",
        description="""
Moral Spectrum Simulator

Simulates people meeting prosperity, poverty, temptation and trials over
their lives, and lines a community up on a red-to-green moral spectrum.
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Demo command
    demo_parser = subparsers.add_parser(
        "demo",
        help="Run the example community",
    )
    _add_run_arguments(demo_parser)

    # Family command
    family_parser = subparsers.add_parser(
        "spawn",
        help="Grow a family from one person",
    )
    family_parser.add_argument("name", help="Name of the founding person")
    family_parser.add_argument(
        "--score",
        type=int,
        default=50,
        help="Founder's starting moral score, 0-100 (default: 50)",
    )
    family_parser.add_argument(
        "--belief",
        choices=[b.value for b in BeliefType],
        default=BeliefType.MIXED.value,
        help="Founder's belief type (default: MIXED)",
    )
    family_parser.add_argument(
        "-c", "--children",
        type=_int_at_least(0),
        default=3,
        help="Number of children to spawn (default: 3)",
    )
    _add_run_arguments(family_parser)

    parser.add_argument(
        "-v", "--version",
        action="store_true",
        help="Show version information",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser


def main(argv=None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "plots", False) and not args.output_dir:
        parser.error("--plots needs --output-dir")

    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    if args.version:
        from . import __version__
        print(f"Moral Spectrum Simulator v{__version__}")
        return 0

    if args.command == "demo":
        return run_demo(args)
    elif args.command == "spawn":
        return run_family(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
