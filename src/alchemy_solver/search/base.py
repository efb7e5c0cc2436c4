"""Shared machinery for the tier-constrained search engines."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Container, Dict, List, Optional, Tuple

from alchemy_solver.catalog.index import CatalogIndex
from alchemy_solver.core.data_models import Recipe, SearchResult
from alchemy_solver.core.exceptions import ElementNotFound, NoBasicElements
from alchemy_solver.search.multipath import MultiPathOrchestrator, MultiPathReport
from alchemy_solver.search.reconstruct import build_tree
from alchemy_solver.search.variants import DEFAULT_VARIANT, SearchVariant

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Tunable parameters shared by the engines and the orchestrator."""
    depth_multiplier: int = 2  # depth ceiling = depth_multiplier * tier(target)
    max_workers: int = 4
    variant_factor: int = 2  # variants attempted per requested path
    stop_when_satisfied: bool = True

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> 'SearchConfig':
        """Create a config from a (possibly nested) ``search`` config section."""
        if not values:
            return cls()
        flat: Dict[str, Any] = {}
        for section in ('dfs', 'multipath'):
            nested = values.get(section) or {}
            flat.update({k: nested[k] for k in nested})
        flat.update({k: values[k] for k in values if k not in ('dfs', 'multipath')})
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in flat.items() if k in known})


class SearchEngine(ABC):
    """Base class of the breadth-first, depth-bounded and bidirectional engines.

    Engines hold only the shared read-only catalog and their config; every call
    builds its own frontier, visited set and backpointer map, so one engine
    instance can serve concurrent searches.
    """

    name = "base"

    def __init__(self, catalog: CatalogIndex, config: Optional[SearchConfig] = None):
        self.catalog = catalog
        self.config = config or SearchConfig()

    def find_shortest_path(self, target: str) -> SearchResult:
        """Find a single path to ``target`` with the engine's default ordering."""
        return self.search(target, DEFAULT_VARIANT)

    def find_multiple_paths(self, target: str, count: int) -> List[SearchResult]:
        """Find up to ``count`` distinct paths to ``target`` using search variants."""
        return self.collect_paths(target, count).results

    def collect_paths(self, target: str, count: int) -> MultiPathReport:
        """Like ``find_multiple_paths`` but return the full report, shortfall included."""
        orchestrator = MultiPathOrchestrator(
            self,
            max_workers=self.config.max_workers,
            variant_factor=self.config.variant_factor,
            stop_when_satisfied=self.config.stop_when_satisfied,
        )
        return orchestrator.run(target, count)

    def validate_target(self, target: str) -> None:
        """Raise the fatal errors that make any search for ``target`` pointless."""
        if target not in self.catalog:
            raise ElementNotFound(target)
        if not self.catalog.basic_names():
            raise NoBasicElements(target)

    def search(self, target: str, variant: SearchVariant = DEFAULT_VARIANT) -> SearchResult:
        """Run one search variant.

        Raises:
            ElementNotFound: If the target is not in the catalog
            NoBasicElements: If the catalog has no tier-0 elements
            NoPathFound: If the search space is exhausted
        """
        self.validate_target(target)

        start_time = time.perf_counter()
        path, visited, meeting_point = self._search(target, variant)
        execution_time = time.perf_counter() - start_time

        result = SearchResult(
            target=target,
            path=path,
            visited_nodes=visited,
            execution_time=execution_time,
            tree=build_tree(target, path, self.catalog),
            algorithm=self.name,
            variation_index=None if variant.is_default else variant.index,
            meeting_point=meeting_point,
        )
        logger.debug(
            f"{self.name} search for {target} (variant {variant.index}): "
            f"{result.steps} steps, {visited} visited, {execution_time*1000:.2f}ms"
        )
        return result

    @abstractmethod
    def _search(self, target: str, variant: SearchVariant) -> Tuple[List[Recipe], int, Optional[str]]:
        """Return ``(path, visited_count, meeting_point)`` or raise ``NoPathFound``."""

    def climbing_recipes(self, current: str, target_tier: int) -> List[Recipe]:
        """Recipes using ``current`` that pass the progress, validity and pruning filters.

        A recipe qualifies when its result is on a higher tier than ``current``
        (progress), every ingredient is on a lower tier than the result
        (validity), and the result does not exceed the target's tier (pruning).
        Catalog order is kept.
        """
        current_tier = self.catalog.tier_of(current)
        recipes = []
        for recipe in self.catalog.recipes_with_ingredient(current):
            result_tier = self.catalog.tier_of(recipe.result)
            if result_tier <= current_tier or result_tier > target_tier:
                continue
            if not self.catalog.is_tier_valid(recipe):
                continue
            recipes.append(recipe)
        return recipes

    def forward_candidates(self,
                           current: str,
                           target_tier: int,
                           obtained: Container[str],
                           variant: SearchVariant = DEFAULT_VARIANT) -> List[Recipe]:
        """Climbing recipes from ``current`` whose ingredients are all obtained.

        An ingredient is obtained when it is basic or in ``obtained``.
        """
        candidates = [
            recipe for recipe in self.climbing_recipes(current, target_tier)
            if all(self._is_obtained(i, obtained) for i in recipe.ingredients)
        ]
        return variant.order_candidates(candidates)

    def _is_obtained(self, name: str, obtained: Container[str]) -> bool:
        return name in obtained or self.catalog.is_basic(name)
