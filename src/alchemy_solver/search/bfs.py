"""Breadth-first engine.

Expands the catalog level by level from the basic elements, where an
element's level is the number of combinations needed to make it together
with everything it is made from. A recipe becomes usable once all of its
ingredients have been settled, and its result is placed one level above the
union of those ingredients' own derivations. Elements are settled in level
order, so the path returned for the target is the fewest-combination path
among the recipes the engine settles on.
"""

import heapq
import itertools
import logging
from typing import Dict, FrozenSet, List, Optional, Tuple

from alchemy_solver.core.data_models import Recipe, SearchStep
from alchemy_solver.core.exceptions import NoPathFound
from alchemy_solver.search.base import SearchEngine
from alchemy_solver.search.reconstruct import reconstruct_path
from alchemy_solver.search.variants import SearchVariant

logger = logging.getLogger(__name__)

EMPTY: FrozenSet[str] = frozenset()


class BreadthFirstEngine(SearchEngine):
    """Level-synchronous forward search from the basic elements.

    Within a level, elements are expanded in discovery order. The target is
    returned as soon as it is discovered on the level right above the one
    being expanded, since nothing left to expand can reach it more cheaply.
    """

    name = "bfs"

    def _search(self, target: str, variant: SearchVariant) -> Tuple[List[Recipe], int, Optional[str]]:
        target_tier = self.catalog.tier_of(target)
        order = itertools.count()

        # name -> elements made on the way to it, itself included
        settled: Dict[str, FrozenSet[str]] = {}
        visited: Dict[str, None] = {}
        parent: Dict[str, SearchStep] = {}
        pending: Dict[str, Tuple[FrozenSet[str], SearchStep]] = {}
        frontier: List[Tuple[int, int, str]] = []

        for name in variant.order_seeds(self.catalog.basic_names()):
            visited[name] = None
            heapq.heappush(frontier, (0, next(order), name))

        found = False
        while frontier and not found:
            level, _, current = heapq.heappop(frontier)
            if current in settled:
                continue
            made, step = pending.pop(current, (EMPTY, None))
            settled[current] = made
            if step is not None:
                parent[current] = step
            if current == target:
                found = True
                break

            for recipe in self.forward_candidates(current, target_tier, settled, variant):
                result = recipe.result
                if result in settled:
                    continue
                visited[result] = None

                derivation = frozenset([result]).union(
                    *(settled.get(i, EMPTY) for i in recipe.ingredients)
                )
                known = pending.get(result)
                if known is not None and len(known[0]) <= len(derivation):
                    continue
                pending[result] = (derivation, SearchStep(parent=current, recipe=recipe))

                # Early exit on discovery rather than on dequeue
                if result == target and len(derivation) == level + 1:
                    parent[result] = pending.pop(result)[1]
                    found = True
                    break
                heapq.heappush(frontier, (len(derivation), next(order), result))

        if not found:
            logger.debug(f"BFS exhausted {len(visited)} elements without reaching {target}")
            raise NoPathFound(target)

        return reconstruct_path(target, parent), len(visited), None
