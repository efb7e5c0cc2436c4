"""CLI command implementations."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np

from alchemy_solver.catalog.index import CatalogIndex
from alchemy_solver.config import ConfigManager, ConfigValidationError, load_config, validate_config
from alchemy_solver.core.exceptions import CatalogError, SearchError
from alchemy_solver.integration.io import load_catalog
from alchemy_solver.search.base import SearchConfig
from alchemy_solver.search.finder import ENGINES, PathFinder, create_engine, resolve_algorithm

from .utils import (
    save_results, print_search_result, create_timing_summary,
    print_benchmark_table, setup_logging
)

logger = logging.getLogger(__name__)


class AlchemySolver:
    """Ties configuration, catalog and engines together for the CLI."""

    def __init__(self,
                 config_overrides: Optional[List[str]] = None,
                 catalog_path: Optional[str] = None):
        """Initialize the solver.

        Args:
            config_overrides: List of configuration overrides
            catalog_path: Catalog file; defaults to ``catalog.path`` from config
        """
        try:
            self.config = load_config(overrides=config_overrides or [])
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        search_cfg = self.config.get('search', {})
        self.search_config = SearchConfig.from_dict(search_cfg)
        self.default_algorithm = resolve_algorithm(str(search_cfg.get('algorithm', 'bfs')))

        path = catalog_path or self.config.get('catalog', {}).get('path')
        if not path:
            raise CatalogError("No catalog path given and catalog.path is not configured")
        self.catalog_path = Path(path)
        self.catalog: CatalogIndex = load_catalog(self.catalog_path)

        logger.info("Alchemy solver initialized successfully")

    def solve(self, target: str, algorithm: Optional[str] = None, count: int = 1) -> Dict[str, Any]:
        """Answer one path query.

        Args:
            target: Element to reach
            algorithm: Engine name; defaults to the configured one
            count: Number of distinct paths requested

        Returns:
            Dictionary with results and statistics
        """
        finder = PathFinder(self.catalog, algorithm or self.default_algorithm, self.search_config)
        start_time = time.perf_counter()

        if count == 1:
            results = [finder.find_shortest_path(target)]
            report = None
        else:
            report = finder.collect_paths(target, count)
            results = report.results

        return {
            'success': True,
            'target': target,
            'algorithm': finder.algorithm,
            'requested': count,
            'found': len(results),
            'shortfall': report.shortfall if report is not None else 0,
            'variants_attempted': report.variants_attempted if report is not None else 1,
            'results': results,
            'computation_time': time.perf_counter() - start_time,
        }


def parse_value(raw: str) -> Any:
    """Interpret a command-line value as bool, int, float or string."""
    lowered = raw.lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


def apply_logging_level(config, args) -> None:
    """Use ``logging.level`` from configuration unless -v or -q was given."""
    if getattr(args, 'verbose', 0) or getattr(args, 'quiet', False):
        return
    level = str(config.get('logging', {}).get('level', 'WARNING')).upper()
    setup_logging(getattr(logging, level, logging.WARNING))


def _error_result(target: str, error: Exception) -> Dict[str, Any]:
    return {'success': False, 'target': target, 'error': str(error), 'error_type': type(error).__name__}


def solve_command(args) -> int:
    """Handle the solve command."""
    try:
        solver = AlchemySolver(args.config, args.catalog)
    except (FileNotFoundError, CatalogError, ConfigValidationError) as e:
        logger.error(f"Failed to initialize solver: {e}")
        return 1
    apply_logging_level(solver.config, args)

    try:
        outcome = solver.solve(args.target, args.algorithm, args.count)
    except SearchError as e:
        logger.error(f"Search failed: {e}")
        if args.output:
            save_results(_error_result(args.target, e), args.output)
        return 1

    if not args.quiet:
        for result in outcome['results']:
            print_search_result(result, solver.catalog)
            print()
        if outcome['shortfall']:
            print(f"Found {outcome['found']} of {outcome['requested']} requested paths "
                  f"({outcome['variants_attempted']} variants tried)")

    if args.output:
        save_results(outcome, args.output)
        logger.info(f"Results saved to {args.output}")

    return 0


def catalog_command(args) -> int:
    """Handle the catalog command: print a catalog summary."""
    try:
        catalog = load_catalog(args.catalog) if args.catalog else AlchemySolver(args.config).catalog
    except (FileNotFoundError, CatalogError, ConfigValidationError) as e:
        logger.error(f"Failed to load catalog: {e}")
        return 1

    summary = catalog.summary()
    print(f"Elements:           {summary['elements']}")
    print(f"Recipes:            {summary['recipes']}")
    print(f"Tier-valid recipes: {summary['tier_valid_recipes']}")
    print(f"Highest tier:       {summary['max_tier']}")
    print(f"Basic elements:     {', '.join(summary['basic_elements']) or '(none)'}")
    print("Elements per tier:")
    for tier, count in summary['tiers'].items():
        print(f"  Tier {tier}: {count}")

    if args.sample:
        print("\nSome available elements:")
        for element in catalog.elements[:args.sample]:
            print(f"- {element.name} (Tier {element.tier})")
        remaining = len(catalog) - args.sample
        if remaining > 0:
            print(f"... and {remaining} more elements")

    if args.output:
        save_results(summary, args.output)
    return 0


def benchmark_command(args) -> int:
    """Run every engine over a set of targets and compare them."""
    try:
        solver = AlchemySolver(args.config, args.catalog)
    except (FileNotFoundError, CatalogError, ConfigValidationError) as e:
        logger.error(f"Failed to initialize solver: {e}")
        return 1
    apply_logging_level(solver.config, args)

    catalog = solver.catalog
    if args.targets:
        targets = list(args.targets)
    else:
        targets = [element.name for element in catalog.elements if element.tier > 0]
    if args.max_targets:
        targets = targets[:args.max_targets]

    if not targets:
        logger.error("No targets to benchmark")
        return 1

    print(f"Benchmarking {len(ENGINES)} engines on {len(targets)} targets...")

    rows = []
    for algorithm in ENGINES:
        engine = create_engine(algorithm, catalog, solver.search_config)
        times, steps, visited = [], {}, []
        failed = 0
        for target in targets:
            try:
                result = engine.find_shortest_path(target)
            except SearchError as e:
                logger.debug(f"{algorithm} failed on {target}: {e}")
                failed += 1
                continue
            times.append(result.execution_time)
            steps[target] = result.steps
            visited.append(result.visited_nodes)

        rows.append({
            'algorithm': algorithm,
            'solved': len(steps),
            'failed': failed,
            'average_steps': float(np.mean(list(steps.values()))) if steps else 0.0,
            'average_visited': float(np.mean(visited)) if visited else 0.0,
            'timing': create_timing_summary(times),
        })

    print_benchmark_table(rows)

    if args.output:
        save_results({'targets': targets, 'engines': rows}, args.output)
    return 0


def config_command(args) -> int:
    """Handle the config command."""
    try:
        manager = ConfigManager()
        manager.load_config(overrides=args.config or [], validate=False)
    except Exception as e:
        logger.error(f"Failed to load configuration: {e}")
        return 1

    if args.config_action == 'show':
        print(manager.to_yaml())
        return 0

    if args.config_action == 'validate':
        try:
            validate_config(manager.config)
        except ConfigValidationError as e:
            print(f"❌ Configuration is invalid: {e}")
            return 1
        print("✅ Configuration is valid")
        return 0

    if args.config_action == 'set':
        value = parse_value(args.value)
        previous = manager.get_parameter(args.key)
        manager.set_parameter(args.key, value)
        try:
            validate_config(manager.config)
        except ConfigValidationError as e:
            print(f"❌ Rejected: {e}")
            return 1
        config_file = manager.config_dir / "config.yaml"
        manager.save_config(config_file)
        print(f"Set {args.key} = {value} (was {previous}) in {config_file}")
        return 0

    logger.error("No config action given (use show, validate or set)")
    return 1
