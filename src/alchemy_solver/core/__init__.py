"""Core data models and error types."""

from .data_models import (
    UNKNOWN_TIER, Element, Recipe, SearchStep, TreeNode, RecipeTree,
    SearchResult, path_signature
)
from .exceptions import (
    CatalogError, SearchError, ElementNotFound, NoBasicElements, NoPathFound
)

__all__ = [
    'UNKNOWN_TIER',
    'Element',
    'Recipe',
    'SearchStep',
    'TreeNode',
    'RecipeTree',
    'SearchResult',
    'path_signature',
    'CatalogError',
    'SearchError',
    'ElementNotFound',
    'NoBasicElements',
    'NoPathFound'
]
