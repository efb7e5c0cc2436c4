"""Bidirectional meet-in-the-middle engine.

A forward frontier grows from the basic elements under the same recipe filters
as breadth-first search, and a backward frontier grows from the target
through the recipes that produce it. Both advance one full level per round;
after every half-round the two visited sets are intersected and the search
stops at the first meeting point. A shared element only counts as a meeting
point once every other ingredient on its backward chain has been reached by
the forward side, so the joined path never uses an element it does not
produce.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from alchemy_solver.core.data_models import Recipe, SearchStep
from alchemy_solver.core.exceptions import NoPathFound
from alchemy_solver.search.base import SearchEngine
from alchemy_solver.search.reconstruct import reconstruct_path, replay_backward
from alchemy_solver.search.variants import DEFAULT_VARIANT, SearchVariant

logger = logging.getLogger(__name__)


@dataclass
class BidirectionalTrace:
    """State of both frontiers when a bidirectional search ends."""
    target: str
    forward_visited: Dict[str, None] = field(default_factory=dict)
    backward_visited: Dict[str, None] = field(default_factory=dict)
    forward_steps: Dict[str, SearchStep] = field(default_factory=dict)
    backward_steps: Dict[str, SearchStep] = field(default_factory=dict)  # ingredient -> (result, recipe)
    meeting_point: Optional[str] = None
    rounds: int = 0

    @property
    def visited_count(self) -> int:
        return len(self.forward_visited.keys() | self.backward_visited.keys())


class BidirectionalEngine(SearchEngine):
    """Forward and backward level-synchronous frontiers searching until they meet.

    A complete tier-respecting path is produced; global minimality is not claimed
    when the two halves reach the meeting point through sub-paths of
    different length.
    """

    name = "bidirectional"

    def _search(self, target: str, variant: SearchVariant) -> Tuple[List[Recipe], int, Optional[str]]:
        trace = self.trace(target, variant)
        if trace.meeting_point is None:
            raise NoPathFound(target)

        emitted = set()
        path = reconstruct_path(trace.meeting_point, trace.forward_steps, emitted)
        path.extend(replay_backward(trace.meeting_point, trace.backward_steps, trace.forward_steps, emitted))
        return path, trace.visited_count, trace.meeting_point

    def trace(self, target: str, variant: SearchVariant = DEFAULT_VARIANT) -> BidirectionalTrace:
        """Run both frontiers until they meet or both are exhausted."""
        self.validate_target(target)
        target_tier = self.catalog.tier_of(target)
        trace = BidirectionalTrace(target=target)

        forward_queue = deque()
        for name in variant.order_seeds(self.catalog.basic_names()):
            forward_queue.append(name)
            trace.forward_visited[name] = None

        backward_queue = deque([target])
        trace.backward_visited[target] = None

        trace.meeting_point = self._meeting_point(trace)

        def forward_round() -> None:
            for _ in range(len(forward_queue)):
                current = forward_queue.popleft()
                for recipe in self.forward_candidates(current, target_tier, trace.forward_visited, variant):
                    result = recipe.result
                    if result in trace.forward_visited:
                        continue
                    trace.forward_visited[result] = None
                    trace.forward_steps[result] = SearchStep(parent=current, recipe=recipe)
                    forward_queue.append(result)

        def backward_round() -> None:
            for _ in range(len(backward_queue)):
                current = backward_queue.popleft()
                for recipe in self.backward_candidates(current, variant):
                    ingredients = recipe.ingredients
                    if variant.reverse_ingredients:
                        ingredients = tuple(reversed(ingredients))
                    for ingredient in ingredients:
                        if ingredient in trace.backward_visited:
                            continue
                        trace.backward_visited[ingredient] = None
                        trace.backward_steps[ingredient] = SearchStep(parent=current, recipe=recipe)
                        backward_queue.append(ingredient)

        half_rounds = [forward_round, backward_round]
        if variant.backward_first:
            half_rounds.reverse()

        # Keep going while either side can grow: a drained backward frontier
        # can still be met by the forward one.
        while trace.meeting_point is None and (forward_queue or backward_queue):
            trace.rounds += 1
            for half_round in half_rounds:
                half_round()
                trace.meeting_point = self._meeting_point(trace)
                if trace.meeting_point is not None:
                    break

        if trace.meeting_point is None:
            logger.debug(f"Bidirectional search for {target} exhausted after {trace.rounds} rounds")
        else:
            logger.debug(f"Frontiers for {target} met at {trace.meeting_point} in round {trace.rounds}")
        return trace

    def backward_candidates(self, current: str, variant: SearchVariant = DEFAULT_VARIANT) -> List[Recipe]:
        """Recipes producing ``current`` whose ingredients all sit on lower tiers."""
        candidates = [
            recipe for recipe in self.catalog.recipes_for_result(current)
            if self.catalog.is_tier_valid(recipe)
        ]
        return variant.order_candidates(candidates)

    def _meeting_point(self, trace: BidirectionalTrace) -> Optional[str]:
        """Highest-tier joinable element known to both sides, earliest forward discovery first."""
        shared = [
            name for name in trace.forward_visited
            if name in trace.backward_visited and self._joinable(name, trace)
        ]
        if not shared:
            return None
        return max(shared, key=self.catalog.tier_of)

    @staticmethod
    def _joinable(name: str, trace: BidirectionalTrace) -> bool:
        """Whether every co-ingredient on the backward chain from ``name`` is forward-visited."""
        current = name
        while current in trace.backward_steps:
            step = trace.backward_steps[current]
            for ingredient in step.recipe.ingredients:
                if ingredient != current and ingredient not in trace.forward_visited:
                    return False
            current = step.parent
        return True
