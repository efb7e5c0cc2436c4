"""Catalog index shared read-only by all searches."""

from .index import CatalogIndex

__all__ = [
    'CatalogIndex'
]
