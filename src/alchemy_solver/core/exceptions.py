"""Error taxonomy for catalog loading and path searches."""

from typing import Optional


class CatalogError(Exception):
    """Raised when a catalog file cannot be parsed into a catalog index."""
    pass


class SearchError(Exception):
    """Base class for errors that terminate a single search attempt."""

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.target = target


class ElementNotFound(SearchError):
    """Target element is absent from the catalog."""

    def __init__(self, target: str):
        super().__init__(f"element not found: {target}", target)


class NoBasicElements(SearchError):
    """Catalog has no tier-0 elements to start from."""

    def __init__(self, target: Optional[str] = None):
        super().__init__("no basic elements found", target)


class NoPathFound(SearchError):
    """Search space exhausted without reaching the target."""

    def __init__(self, target: str):
        super().__init__(f"no path found to {target}", target)
