"""Catalog file loading."""

from .io import CatalogLoader, build_catalog, load_catalog, parse_elements

__all__ = [
    'CatalogLoader',
    'build_catalog',
    'load_catalog',
    'parse_elements'
]
