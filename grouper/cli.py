"""
Command-line interface for the grouper.

Reads a roster CSV (header: name,gender,discipline,seniority,client,team)
from a file or stdin, evolves a balanced grouping and prints it.

Usage:
    python -m grouper roster.csv --groups 9
    cat roster.csv | python -m grouper --groups 4 --seed 42
    python -m grouper roster.csv --report out/report --run-log out/run.jsonl
    python -m grouper roster.csv --preset accurate

Defaults come from environment settings (GROUPER_* variables or .env).
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import Config, TRAIT_NAMES
from .data_loader import load_individuals
from .errors import GrouperError
from .genetic.config import GeneticConfig, PRESETS
from .genetic.strategy import EvolutionDriver
from .logger import JSONLogger, configure_logging
from .models.catalogue import build_catalogue, describe_catalogue
from .report import generate_final_report, render_groups

logger = logging.getLogger(__name__)


def build_parser(settings: Config) -> argparse.ArgumentParser:
    """Create the argument parser.

    Search options default to None, meaning "use the settings (or preset)
    value"; the settings value is shown in the help text.
    """
    parser = argparse.ArgumentParser(
        prog="grouper",
        description="Partition a roster into balanced, representative groups",
    )
    parser.add_argument(
        "roster", nargs="?", default=None,
        help="Roster CSV file (reads stdin when omitted)",
    )
    parser.add_argument("--preset", choices=sorted(PRESETS), default=None,
                        help="Search budget preset (generation size, generations, "
                             "stagnation cutoff, workers)")
    parser.add_argument("--groups", type=int,
                        help=f"Number of groups (default: {settings.GROUP_COUNT})")
    parser.add_argument("--generation-size", type=int,
                        help=f"Candidate groupings per generation (default: {settings.GENERATION_SIZE})")
    parser.add_argument("--generations", type=int,
                        help=f"Maximum generations (default: {settings.MAX_GENERATIONS})")
    parser.add_argument("--selection-rate", type=float,
                        help=f"Share of each generation kept for breeding (default: {settings.SELECTION_RATE})")
    parser.add_argument("--crossover-rate", type=float,
                        help=f"Crossover probability (default: {settings.CROSSOVER_RATE})")
    parser.add_argument("--mutation-rate", type=float,
                        help=f"Mutation probability per child (default: {settings.MUTATION_RATE})")
    parser.add_argument("--stagnation", type=int,
                        help="Stop after N generations without improvement")
    parser.add_argument("--no-elitism", action="store_true",
                        help="Do not carry the best grouping into the next generation")
    parser.add_argument("--workers", type=int,
                        help=f"Threads used for fitness evaluation (default: {settings.EVALUATION_WORKERS})")
    parser.add_argument("--seed", type=int,
                        help="Random seed for reproducible runs")
    parser.add_argument("--traits", default=",".join(TRAIT_NAMES),
                        help="Comma-separated trait columns (default: %(default)s)")
    parser.add_argument("--delimiter", default=settings.CSV_DELIMITER,
                        help="CSV field separator (default: %(default)r)")
    parser.add_argument("--report", default=None,
                        help="Write PATH.json and PATH.txt reports")
    parser.add_argument("--run-log", default=None,
                        help="Append per-generation statistics to a JSON-lines file")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL,
                        help="Log level (default: %(default)s)")
    parser.add_argument("--log-file", default=settings.LOG_FILE,
                        help="Also log to a rotating file")
    parser.add_argument("--log-every", type=int,
                        help=f"Log progress every N generations (default: {settings.LOG_EVERY})")
    return parser


def build_config(args: argparse.Namespace, settings: Config) -> GeneticConfig:
    """
    Resolve the search configuration: settings, then preset, then flags.

    Raises:
        ConfigError: If the resulting parameters are invalid
    """
    ga_config = GeneticConfig.from_settings(settings)
    if args.preset:
        ga_config = ga_config.with_preset(args.preset)

    flags = {
        "group_count": args.groups,
        "generation_size": args.generation_size,
        "selection_rate": args.selection_rate,
        "crossover_rate": args.crossover_rate,
        "mutation_rate": args.mutation_rate,
        "max_generations": args.generations,
        "stagnation_limit": args.stagnation,
        "evaluation_workers": args.workers,
        "random_seed": args.seed,
        "log_every": args.log_every,
    }
    overrides = {field: value for field, value in flags.items() if value is not None}
    if args.no_elitism:
        overrides["elitism"] = False

    return ga_config.with_overrides(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the grouper CLI."""
    settings = Config()
    args = build_parser(settings).parse_args(argv)

    configure_logging(args.log_level, args.log_file)

    trait_names = [name.strip() for name in args.traits.split(",") if name.strip()]

    try:
        ga_config = build_config(args, settings)

        source = args.roster if args.roster else sys.stdin.buffer
        individuals = load_individuals(source, trait_names, args.delimiter)
        catalogue = build_catalogue(individuals, trait_names)

        for line in describe_catalogue(catalogue):
            logger.info(f"Population {line}")

        driver = EvolutionDriver(individuals, catalogue, ga_config)

        if args.run_log:
            with JSONLogger(args.run_log) as run_log:
                result = driver.run(on_generation=run_log.log_generation)
                run_log.log_result(result.score, result.generations, result.stop_reason)
        else:
            result = driver.run()
    except FileNotFoundError as e:
        print(f"Could not read roster: {e}", file=sys.stderr)
        return 1
    except GrouperError as e:
        print(f"Could not group roster: {e}", file=sys.stderr)
        return 1

    print(render_groups(result.assignment, individuals, ga_config.group_count))

    if args.report:
        generate_final_report(
            result, individuals, catalogue, ga_config.group_count, args.report
        )

    return 0


if __name__ == "__main__":
    sys.exit(main())
