"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import numpy as np

from alchemy_solver.catalog.index import CatalogIndex
from alchemy_solver.core.data_models import Recipe, SearchResult


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True
    )

    # Reduce noise from configuration libraries
    logging.getLogger('hydra').setLevel(logging.WARNING)


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    def convert(obj):
        if isinstance(obj, (SearchResult, Recipe)):
            return obj.to_dict()
        if isinstance(obj, np.generic):
            return obj.item()
        if isinstance(obj, dict):
            return {k: convert(v) for k, v in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [convert(item) for item in obj]
        return obj

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(convert(results), f, indent=2, sort_keys=True)
        else:
            json.dump(convert(results), f)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format."""
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def format_recipe_step(index: int, recipe: Recipe, catalog: CatalogIndex) -> str:
    """Render one path step as ``i: X (T1) + Y (T0) → Z (T2)``."""
    first, second = recipe.ingredients
    return (f"{index}: {first} (T{catalog.tier_of(first)}) + "
            f"{second} (T{catalog.tier_of(second)}) → "
            f"{recipe.result} (T{catalog.tier_of(recipe.result)})")


def print_search_result(result: SearchResult, catalog: CatalogIndex) -> None:
    """Print the recipe path and statistics of one search result."""
    header = f"{result.algorithm.upper()} path to {result.target}"
    if result.variation_index is not None:
        header += f" (variant {result.variation_index})"
    print(header)

    if not result.path:
        print(f"  {result.target} is a basic element; nothing to combine")
    for i, recipe in enumerate(result.path, start=1):
        print("  " + format_recipe_step(i, recipe, catalog))

    print(f"  Steps: {result.steps} | Visited: {result.visited_nodes} | "
          f"Time: {format_duration(result.execution_time)}")
    if result.meeting_point is not None:
        print(f"  Meeting point: {result.meeting_point}")


def create_timing_summary(times: Iterable[float]) -> Dict[str, float]:
    """Summary statistics for a list of durations in seconds."""
    values = np.asarray(list(times), dtype=float)
    if values.size == 0:
        return {'count': 0, 'total_time': 0.0, 'average_time': 0.0,
                'median_time': 0.0, 'p95_time': 0.0, 'max_time': 0.0}
    return {
        'count': int(values.size),
        'total_time': float(values.sum()),
        'average_time': float(values.mean()),
        'median_time': float(np.median(values)),
        'p95_time': float(np.percentile(values, 95)),
        'max_time': float(values.max()),
    }


def print_benchmark_table(rows: List[Dict[str, Any]]) -> None:
    """Print one line of benchmark statistics per engine."""
    print("\n" + "=" * 78)
    print("BENCHMARK SUMMARY")
    print("=" * 78)
    print(f"{'Engine':<15}{'Solved':>8}{'Failed':>8}{'Avg steps':>11}"
          f"{'Avg visited':>13}{'Median':>11}{'P95':>11}")
    for row in rows:
        timing = row['timing']
        print(f"{row['algorithm']:<15}{row['solved']:>8}{row['failed']:>8}"
              f"{row['average_steps']:>11.2f}{row['average_visited']:>13.1f}"
              f"{format_duration(timing['median_time']):>11}"
              f"{format_duration(timing['p95_time']):>11}")
