"""Depth-bounded engine.

Backtracking search from each basic element in turn. The descent follows one
ingredient at a time, climbing through recipes whose other ingredients can be
made at all. When the target is reached, every other ingredient met along the
descent is given a derivation of its own, and the completed path must still
fit under the depth ceiling.

The descent runs on an explicit stack of frames so deep catalogs cannot hit
the interpreter's recursion limit, and partially explored states stay
inspectable.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple

from alchemy_solver.core.data_models import Recipe, SearchStep
from alchemy_solver.core.exceptions import NoPathFound
from alchemy_solver.search.base import SearchEngine
from alchemy_solver.search.reconstruct import reconstruct_path
from alchemy_solver.search.variants import SearchVariant

logger = logging.getLogger(__name__)


@dataclass
class DepthFrame:
    """One level of the descent: the element, its candidates and the next one to try."""
    name: str
    candidates: List[Recipe]
    depth: int
    next_index: int = 0

    @property
    def exhausted(self) -> bool:
        return self.next_index >= len(self.candidates)


class DepthBoundedEngine(SearchEngine):
    """Depth-first search with a ceiling of ``depth_multiplier * tier(target)``.

    The ceiling is a heuristic bound, not a completeness proof. The first
    solution along the expansion order is returned, which need not be the
    shortest.
    """

    name = "dfs"

    def depth_ceiling(self, target: str, variant: SearchVariant) -> int:
        ceiling = self.config.depth_multiplier * self.catalog.tier_of(target)
        return ceiling + variant.depth_offset

    def _search(self, target: str, variant: SearchVariant) -> Tuple[List[Recipe], int, Optional[str]]:
        target_tier = self.catalog.tier_of(target)
        max_depth = self.depth_ceiling(target, variant)
        seen: Set[str] = set()
        makeable: Dict[str, bool] = {}

        for start in variant.order_seeds(self.catalog.basic_names()):
            # Fresh state for every top-level attempt
            visited: Set[str] = {start}
            parent: Dict[str, SearchStep] = {}
            seen.add(start)

            if start == target:
                return [], len(seen), None

            if self._descend(start, target, target_tier, max_depth, visited, parent, seen, variant, makeable):
                return reconstruct_path(target, parent), len(seen), None

        logger.debug(f"DFS found no path to {target} within depth {max_depth}")
        raise NoPathFound(target)

    def _descend(self,
                 start: str,
                 target: str,
                 target_tier: int,
                 max_depth: int,
                 visited: Set[str],
                 parent: Dict[str, SearchStep],
                 seen: Set[str],
                 variant: SearchVariant,
                 makeable: Optional[Dict[str, bool]] = None) -> bool:
        """Explore from ``start``; return True once ``target`` has a backpointer.

        On failure every element discovered below ``start`` is un-marked again.
        """
        if max_depth <= 0:
            return False
        if makeable is None:
            makeable = {}

        stack = [DepthFrame(start, self._candidates(start, target_tier, variant, makeable), 0)]
        while stack:
            frame = stack[-1]
            if frame.exhausted:
                stack.pop()
                if stack:
                    # Backtrack
                    visited.discard(frame.name)
                    parent.pop(frame.name, None)
                continue

            recipe = frame.candidates[frame.next_index]
            frame.next_index += 1

            result = recipe.result
            if result in visited:
                continue

            visited.add(result)
            seen.add(result)
            parent[result] = SearchStep(parent=frame.name, recipe=recipe)

            if result == target:
                added = self._complete(parent, seen, variant, makeable)
                if len(parent) <= max_depth:
                    return True
                # Completed path too long; local failure only
                for name in added:
                    del parent[name]
                visited.discard(result)
                del parent[result]
                continue

            depth = frame.depth + 1
            if depth >= max_depth:
                # Ceiling reached; local failure only
                visited.discard(result)
                del parent[result]
                continue

            stack.append(DepthFrame(
                result, self._candidates(result, target_tier, variant, makeable), depth
            ))

        return False

    def _candidates(self,
                    current: str,
                    target_tier: int,
                    variant: SearchVariant,
                    makeable: Dict[str, bool]) -> List[Recipe]:
        candidates = [
            recipe for recipe in self.climbing_recipes(current, target_tier)
            if all(self.can_make(i, makeable) for i in recipe.ingredients)
        ]
        return variant.order_candidates(candidates)

    def can_make(self, name: str, makeable: Dict[str, bool]) -> bool:
        """Whether ``name`` is basic or has a tier-valid recipe made of makeable ingredients."""
        if self.catalog.is_basic(name):
            return True
        if name not in makeable:
            # Ingredients sit on lower tiers, so the recursion bottoms out
            makeable[name] = any(
                all(self.can_make(i, makeable) for i in recipe.ingredients)
                for recipe in self.catalog.recipes_for_result(name)
                if self.catalog.is_tier_valid(recipe)
            )
        return makeable[name]

    def _complete(self,
                  parent: Dict[str, SearchStep],
                  seen: Set[str],
                  variant: SearchVariant,
                  makeable: Dict[str, bool]) -> List[str]:
        """Derive every ingredient of the descent that is neither basic nor on it.

        Returns the names given a backpointer, in the order they were added.
        """
        added: List[str] = []
        for step in list(parent.values()):
            for ingredient in step.recipe.ingredients:
                self._derive(ingredient, parent, added, seen, variant, makeable)
        return added

    def _derive(self,
                name: str,
                parent: Dict[str, SearchStep],
                added: List[str],
                seen: Set[str],
                variant: SearchVariant,
                makeable: Dict[str, bool]) -> None:
        if self.catalog.is_basic(name) or name in parent:
            return
        recipes = [
            recipe for recipe in self.catalog.recipes_for_result(name)
            if self.catalog.is_tier_valid(recipe)
            and all(self.can_make(i, makeable) for i in recipe.ingredients)
        ]
        recipe = variant.order_candidates(recipes)[0]
        for ingredient in recipe.ingredients:
            self._derive(ingredient, parent, added, seen, variant, makeable)
        parent[name] = SearchStep(parent=recipe.ingredients[0], recipe=recipe)
        added.append(name)
        seen.add(name)
