"""Tests for the breadth-first engine."""

import pytest

from alchemy_solver.core.data_models import Recipe
from alchemy_solver.core.exceptions import ElementNotFound, NoBasicElements, NoPathFound
from alchemy_solver.integration.io import build_catalog
from alchemy_solver.search.bfs import BreadthFirstEngine
from alchemy_solver.search.variants import SearchVariant


class TestBreadthFirstEngine:
    """Test BreadthFirstEngine functionality."""

    def test_chain_scenario(self, chain_catalog):
        """D needs C, which needs A and B: two steps, four elements visited."""
        engine = BreadthFirstEngine(chain_catalog)
        result = engine.find_shortest_path("D")

        assert result.path == [
            Recipe(ingredients=("A", "B"), result="C"),
            Recipe(ingredients=("A", "C"), result="D"),
        ]
        assert result.visited_nodes == 4
        assert result.steps == 2
        assert result.algorithm == "bfs"
        assert result.variation_index is None
        assert result.meeting_point is None
        assert result.execution_time >= 0
        assert result.tree.target == "D"
        assert result.tree.node("B").node_type == "basic"

    def test_basic_target(self, chain_catalog):
        result = BreadthFirstEngine(chain_catalog).find_shortest_path("B")

        assert result.path == []
        assert result.visited_nodes == 2
        assert [n.id for n in result.tree.nodes] == ["B"]

    def test_stops_at_first_discovery(self, branching_catalog):
        """D is found while expanding C, before E and F are expanded."""
        result = BreadthFirstEngine(branching_catalog).find_shortest_path("D")

        assert result.signature == "C:A+B|D:A+C"
        assert result.visited_nodes == 6

    def test_waits_for_both_made_ingredients(self, two_branch_catalog):
        result = BreadthFirstEngine(two_branch_catalog).find_shortest_path("T")

        assert [str(r) for r in result.path] == ["A + B -> X", "A + A -> Y", "X + Y -> T"]
        assert result.visited_nodes == 5

    def test_prefers_fewer_combinations(self, shortcut_catalog):
        """X + Y is usable first, but A + Y reaches T with one combination less."""
        result = BreadthFirstEngine(shortcut_catalog).find_shortest_path("T")

        assert [str(r) for r in result.path] == ["A + A -> Y", "A + Y -> T"]
        assert result.signature == "Y:A+A|T:A+Y"
        assert result.visited_nodes == 5

    @pytest.mark.parametrize("target,steps", [
        ("Storm", 4), ("Tool", 4), ("Beach", 7), ("House", 4),
    ])
    def test_sample_catalog_lengths(self, sample_catalog, target, steps):
        result = BreadthFirstEngine(sample_catalog).find_shortest_path(target)

        assert result.steps == steps

    def test_recipes_wait_for_ingredients(self, dead_end_catalog):
        """T = C + A is not usable from A until C has been made."""
        result = BreadthFirstEngine(dead_end_catalog).find_shortest_path("T")

        assert result.signature == "C:A+B|T:A+C"
        assert result.visited_nodes == 6

    def test_unknown_target(self, chain_catalog):
        with pytest.raises(ElementNotFound) as exc_info:
            BreadthFirstEngine(chain_catalog).find_shortest_path("Unobtainium")

        assert exc_info.value.target == "Unobtainium"
        assert "Unobtainium" in str(exc_info.value)

    def test_no_basic_elements(self):
        catalog = build_catalog([
            {"tierNum": 1, "elements": [{"name": "Mud", "recipes": [["Water", "Earth"]]}]},
        ])

        with pytest.raises(NoBasicElements):
            BreadthFirstEngine(catalog).find_shortest_path("Mud")

    @pytest.mark.parametrize("target", ["D", "G", "Orphan"])
    def test_unreachable_targets(self, unreachable_catalog, target):
        with pytest.raises(NoPathFound) as exc_info:
            BreadthFirstEngine(unreachable_catalog).find_shortest_path(target)

        assert exc_info.value.target == target

    def test_idempotent(self, sample_catalog):
        engine = BreadthFirstEngine(sample_catalog)
        first = engine.find_shortest_path("Glass")
        second = engine.find_shortest_path("Glass")

        assert first.path == second.path
        assert first.visited_nodes == second.visited_nodes

    def test_variant_index_recorded(self, chain_catalog):
        result = BreadthFirstEngine(chain_catalog).search("D", SearchVariant(3))

        assert result.variation_index == 3
        assert result.signature == "C:A+B|D:A+C"

    def test_never_exceeds_target_tier(self, sample_catalog):
        target = "Stone"
        result = BreadthFirstEngine(sample_catalog).find_shortest_path(target)
        target_tier = sample_catalog.tier_of(target)

        for recipe in result.path:
            assert sample_catalog.tier_of(recipe.result) <= target_tier
