"""Read-only catalog index over elements, recipes and tiers.

The index is built once and then shared by every search without locking.
Nothing in this module mutates the index after ``__init__`` returns.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Optional

from alchemy_solver.core.data_models import UNKNOWN_TIER, Element, Recipe

logger = logging.getLogger(__name__)


class CatalogIndex:
    """Lookup structure for elements, recipes and the basic-element set.

    Elements keep the order in which they were supplied: tier groups in file
    order, then elements in group order. ``basic_elements()`` follows the same
    order, and search variants rotate over it, so the order is part of the
    contract.
    """

    def __init__(self, elements: Iterable[Element]):
        self._elements: Dict[str, Element] = {}
        self._tiers: Dict[str, int] = {}
        self._basics: List[str] = []
        self._recipes: List[Recipe] = []
        self._by_ingredient: Dict[str, List[Recipe]] = {}
        self._by_result: Dict[str, List[Recipe]] = {}

        skipped = 0
        for element in elements:
            if element.name in self._elements:
                logger.warning(f"Duplicate element '{element.name}' ignored")
                continue

            self._elements[element.name] = element
            self._tiers[element.name] = element.tier
            if element.tier == 0:
                self._basics.append(element.name)

            for ingredients in element.recipes:
                if len(ingredients) != 2:
                    skipped += 1
                    continue
                recipe = Recipe(ingredients=(ingredients[0], ingredients[1]), result=element.name)
                self._recipes.append(recipe)
                self._by_result.setdefault(element.name, []).append(recipe)
                # (A, A) recipes are indexed once
                for ingredient in dict.fromkeys(recipe.ingredients):
                    self._by_ingredient.setdefault(ingredient, []).append(recipe)

        if skipped:
            logger.debug(f"Skipped {skipped} recipes without exactly two ingredients")

        logger.info(f"Loaded {len(self._elements)} elements with {len(self._recipes)} recipes")
        logger.debug(f"Basic elements (tier 0): {self._basics}")

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, name: str) -> bool:
        return name in self._elements

    def get(self, name: str) -> Optional[Element]:
        return self._elements.get(name)

    @property
    def elements(self) -> List[Element]:
        return list(self._elements.values())

    @property
    def recipes(self) -> List[Recipe]:
        return list(self._recipes)

    def tier_of(self, name: str) -> int:
        """Return the tier of ``name``, or ``UNKNOWN_TIER`` if it is not in the catalog."""
        return self._tiers.get(name, UNKNOWN_TIER)

    def is_basic(self, name: str) -> bool:
        return self._tiers.get(name) == 0

    def basic_elements(self) -> List[Element]:
        """Basic (tier-0) elements in catalog insertion order."""
        return [self._elements[name] for name in self._basics]

    def basic_names(self) -> List[str]:
        return list(self._basics)

    def recipes_with_ingredient(self, name: str) -> List[Recipe]:
        """Recipes that use ``name`` as an ingredient, in catalog order."""
        return self._by_ingredient.get(name, [])

    def recipes_for_result(self, name: str) -> List[Recipe]:
        """Recipes that produce ``name``, in catalog order."""
        return self._by_result.get(name, [])

    def is_tier_valid(self, recipe: Recipe) -> bool:
        """Check that every ingredient sits on a strictly lower, known tier than the result."""
        result_tier = self.tier_of(recipe.result)
        if result_tier == UNKNOWN_TIER:
            return False
        for ingredient in recipe.ingredients:
            tier = self.tier_of(ingredient)
            if tier == UNKNOWN_TIER or tier >= result_tier:
                return False
        return True

    @property
    def max_tier(self) -> int:
        return max(self._tiers.values(), default=UNKNOWN_TIER)

    def tier_counts(self) -> Dict[int, int]:
        """Number of elements per tier, ascending by tier."""
        counts = Counter(self._tiers.values())
        return dict(sorted(counts.items()))

    def summary(self) -> Dict[str, object]:
        valid = sum(1 for recipe in self._recipes if self.is_tier_valid(recipe))
        return {
            'elements': len(self._elements),
            'recipes': len(self._recipes),
            'tier_valid_recipes': valid,
            'basic_elements': list(self._basics),
            'max_tier': self.max_tier,
            'tiers': self.tier_counts(),
        }
