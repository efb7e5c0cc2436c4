"""Main CLI entry point for the alchemy solver."""

import sys
import argparse
import logging
from typing import List, Optional

from alchemy_solver.search.finder import ALIASES, ENGINES

from . import commands
from .utils import setup_logging


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='alchemy-solver',
        description='Alchemy solver - tier-constrained recipe paths from basic elements',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  alchemy-solver solve Brick                     # Shortest path with the configured engine
  alchemy-solver solve Brick -a dfs -n 3         # Up to three distinct DFS paths
  alchemy-solver catalog --sample 10             # Summarize the catalog
  alchemy-solver benchmark --max-targets 50      # Compare the engines
  alchemy-solver -c search.algorithm=dfs config show
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        action='append',
        help='Configuration override, may be repeated (e.g., search.multipath.max_workers=2)'
    )

    parser.add_argument(
        '--catalog',
        type=str,
        help='Catalog JSON file (default: catalog.path from configuration)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        'solve',
        help='Find recipe paths to an element',
        description='Find the shortest path, or several distinct paths, to a target element'
    )

    solve_parser.add_argument(
        'target',
        type=str,
        help='Name of the element to reach'
    )

    solve_parser.add_argument(
        '--algorithm', '-a',
        choices=sorted(list(ENGINES) + list(ALIASES)),
        default=None,
        help='Search engine (default: search.algorithm from configuration)'
    )

    solve_parser.add_argument(
        '--count', '-n',
        type=int,
        default=1,
        help='Number of distinct paths to find (default: 1)'
    )

    # Catalog command
    catalog_parser = subparsers.add_parser(
        'catalog',
        help='Summarize the element catalog',
        description='Print element, recipe and tier statistics for a catalog'
    )

    catalog_parser.add_argument(
        '--sample',
        type=int,
        default=0,
        help='List the first N elements (default: 0)'
    )

    # Benchmark command
    benchmark_parser = subparsers.add_parser(
        'benchmark',
        help='Compare the search engines',
        description='Run every engine over a set of targets and report path lengths and timings'
    )

    benchmark_parser.add_argument(
        '--targets',
        nargs='*',
        help='Targets to benchmark (default: every non-basic element)'
    )

    benchmark_parser.add_argument(
        '--max-targets',
        type=int,
        help='Maximum number of targets to run'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Manage solver configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    config_set_parser = config_subparsers.add_parser(
        'set',
        help='Set configuration parameter'
    )
    config_set_parser.add_argument('key', help='Parameter key (e.g., search.dfs.depth_multiplier)')
    config_set_parser.add_argument('value', help='Parameter value')

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'solve':
            return commands.solve_command(parsed_args)
        if parsed_args.command == 'catalog':
            return commands.catalog_command(parsed_args)
        if parsed_args.command == 'benchmark':
            return commands.benchmark_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        return 1


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
