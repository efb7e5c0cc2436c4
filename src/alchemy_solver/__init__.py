"""Alchemy solver.

Finds tier-respecting recipe paths from the basic elements to any element of
a Little Alchemy style catalog, with breadth-first, depth-bounded and
bidirectional engines and concurrent discovery of distinct paths.
"""

__version__ = "0.1.0"

from .catalog import CatalogIndex
from .core import Recipe, SearchResult, ElementNotFound, NoBasicElements, NoPathFound
from .integration import load_catalog, build_catalog
from .search import PathFinder, SearchConfig, create_engine

__all__ = [
    'CatalogIndex',
    'Recipe',
    'SearchResult',
    'ElementNotFound',
    'NoBasicElements',
    'NoPathFound',
    'load_catalog',
    'build_catalog',
    'PathFinder',
    'SearchConfig',
    'create_engine'
]
