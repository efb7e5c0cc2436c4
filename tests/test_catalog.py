"""Tests for the catalog index."""

import logging

import pytest

from alchemy_solver.catalog.index import CatalogIndex
from alchemy_solver.core.data_models import UNKNOWN_TIER, Element, Recipe


class TestCatalogIndex:
    """Test CatalogIndex lookups."""

    @pytest.fixture
    def elements(self):
        return [
            Element(name="Air", tier=0),
            Element(name="Water", tier=0),
            Element(name="Rain", tier=1, recipes=(("Water", "Air"),)),
            Element(name="Pressure", tier=1, recipes=(("Air", "Air"),)),
            Element(name="Cloud", tier=2, recipes=(("Rain", "Pressure"), ("Air", "Cloud"))),
        ]

    def test_basic_elements_keep_insertion_order(self, elements):
        catalog = CatalogIndex(elements)

        assert catalog.basic_names() == ["Air", "Water"]
        assert [e.name for e in catalog.basic_elements()] == ["Air", "Water"]
        assert [e.name for e in catalog.elements] == ["Air", "Water", "Rain", "Pressure", "Cloud"]

    def test_membership_and_tiers(self, elements):
        catalog = CatalogIndex(elements)

        assert len(catalog) == 5
        assert "Rain" in catalog
        assert "Fire" not in catalog
        assert catalog.tier_of("Cloud") == 2
        assert catalog.tier_of("Fire") == UNKNOWN_TIER
        assert catalog.is_basic("Air")
        assert not catalog.is_basic("Rain")
        assert not catalog.is_basic("Fire")
        assert catalog.get("Fire") is None
        assert catalog.max_tier == 2

    def test_recipe_lookups(self, elements):
        catalog = CatalogIndex(elements)

        rain = Recipe(ingredients=("Water", "Air"), result="Rain")
        pressure = Recipe(ingredients=("Air", "Air"), result="Pressure")

        assert catalog.recipes_for_result("Rain") == [rain]
        assert catalog.recipes_for_result("Air") == []
        assert len(catalog.recipes) == 4

        # Air + Air is listed once for Air
        with_air = catalog.recipes_with_ingredient("Air")
        assert with_air.count(pressure) == 1
        assert [r.result for r in with_air] == ["Rain", "Pressure", "Cloud"]
        assert catalog.recipes_with_ingredient("Unknown") == []

    def test_tier_validity(self, elements):
        catalog = CatalogIndex(elements)

        assert catalog.is_tier_valid(Recipe(ingredients=("Rain", "Pressure"), result="Cloud"))
        # Self-referencing recipe
        assert not catalog.is_tier_valid(Recipe(ingredients=("Air", "Cloud"), result="Cloud"))
        # Same-tier ingredient
        assert not catalog.is_tier_valid(Recipe(ingredients=("Rain", "Pressure"), result="Rain"))
        # Unknown names
        assert not catalog.is_tier_valid(Recipe(ingredients=("Air", "Fire"), result="Cloud"))
        assert not catalog.is_tier_valid(Recipe(ingredients=("Air", "Water"), result="Steam"))

    def test_duplicate_elements_keep_first(self, caplog):
        with caplog.at_level(logging.WARNING):
            catalog = CatalogIndex([
                Element(name="Air", tier=0),
                Element(name="Air", tier=3),
            ])

        assert len(catalog) == 1
        assert catalog.tier_of("Air") == 0
        assert "Duplicate element 'Air'" in caplog.text

    def test_malformed_recipes_skipped(self):
        catalog = CatalogIndex([
            Element(name="Air", tier=0),
            Element(name="Odd", tier=1, recipes=(("Air",), ("Air", "Air", "Air"), ("Air", "Air"))),
        ])

        assert catalog.recipes_for_result("Odd") == [Recipe(ingredients=("Air", "Air"), result="Odd")]

    def test_summary(self, elements):
        summary = CatalogIndex(elements).summary()

        assert summary['elements'] == 5
        assert summary['recipes'] == 4
        assert summary['tier_valid_recipes'] == 3
        assert summary['basic_elements'] == ["Air", "Water"]
        assert summary['max_tier'] == 2
        assert summary['tiers'] == {0: 2, 1: 2, 2: 1}

    def test_empty_catalog(self):
        catalog = CatalogIndex([])

        assert len(catalog) == 0
        assert catalog.basic_names() == []
        assert catalog.max_tier == UNKNOWN_TIER
        assert catalog.tier_counts() == {}
