"""Loading of element catalogs produced by the scraper."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from alchemy_solver.catalog.index import CatalogIndex
from alchemy_solver.core.data_models import Element
from alchemy_solver.core.exceptions import CatalogError

logger = logging.getLogger(__name__)


class CatalogLoader:
    """Loader for tier-grouped element catalogs.

    Two layouts are understood:

    * tier groups, as written by the scraper::

        [{"tierNum": 0, "elements": [{"name": "Air", "recipes": [], "imageUrl": "..."}]}]

    * a flat element list where every element carries its own ``tier``::

        [{"name": "Air", "tier": 0, "recipes": []}]
    """

    def __init__(self, catalog_path: Union[str, Path]):
        """Initialize the loader.

        Args:
            catalog_path: Path to the catalog JSON file
        """
        self.catalog_path = Path(catalog_path)

    def load(self) -> CatalogIndex:
        """Read and index the catalog file.

        Returns:
            CatalogIndex built from the file

        Raises:
            FileNotFoundError: If the file doesn't exist
            CatalogError: If the file is not a valid catalog
        """
        if not self.catalog_path.exists():
            raise FileNotFoundError(f"Catalog file not found: {self.catalog_path}")

        try:
            with open(self.catalog_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Invalid JSON in {self.catalog_path}: {e}") from e

        catalog = build_catalog(data)
        logger.info(f"Catalog loaded from {self.catalog_path}")
        return catalog


def parse_elements(data: Any) -> List[Element]:
    """Convert decoded catalog JSON into elements, keeping file order."""
    if not isinstance(data, list):
        raise CatalogError(f"Catalog must be a JSON list, got {type(data).__name__}")

    elements: List[Element] = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise CatalogError(f"Catalog entry {position} is not an object")
        if 'elements' in entry:
            tier = entry.get('tierNum', entry.get('tier'))
            if not isinstance(tier, int):
                raise CatalogError(f"Tier group {position} has no integer 'tierNum'")
            for raw in entry['elements']:
                elements.append(_parse_element(raw, tier))
        else:
            tier = entry.get('tier')
            if not isinstance(tier, int):
                raise CatalogError(f"Element entry {position} has no integer 'tier'")
            elements.append(_parse_element(entry, tier))
    return elements


def _parse_element(raw: Dict[str, Any], tier: int) -> Element:
    name = raw.get('name')
    if not isinstance(name, str) or not name:
        raise CatalogError(f"Element without a name in tier {tier}")
    if tier < 0:
        raise CatalogError(f"Element '{name}' has negative tier {tier}")

    recipes = []
    for recipe in raw.get('recipes') or []:
        if not isinstance(recipe, (list, tuple)):
            raise CatalogError(f"Recipe of '{name}' is not a list: {recipe!r}")
        recipes.append(tuple(str(ingredient) for ingredient in recipe))

    return Element(
        name=name,
        tier=tier,
        recipes=tuple(recipes),
        image_url=str(raw.get('imageUrl') or raw.get('image') or ''),
    )


def build_catalog(groups: Iterable[Dict[str, Any]]) -> CatalogIndex:
    """Build a catalog index from in-memory tier groups or element entries."""
    return CatalogIndex(parse_elements(list(groups)))


def load_catalog(catalog_path: Union[str, Path]) -> CatalogIndex:
    """Load a catalog index from a JSON file."""
    return CatalogLoader(catalog_path).load()
