"""Engine selection and the path-finder facade."""

import logging
from typing import Any, Dict, List, Optional, Type

from alchemy_solver.catalog.index import CatalogIndex
from alchemy_solver.core.data_models import SearchResult
from alchemy_solver.search.base import SearchConfig, SearchEngine
from alchemy_solver.search.bfs import BreadthFirstEngine
from alchemy_solver.search.bidirectional import BidirectionalEngine
from alchemy_solver.search.dfs import DepthBoundedEngine
from alchemy_solver.search.multipath import MultiPathReport

logger = logging.getLogger(__name__)

ENGINES: Dict[str, Type[SearchEngine]] = {
    'bfs': BreadthFirstEngine,
    'dfs': DepthBoundedEngine,
    'bidirectional': BidirectionalEngine,
}

ALIASES = {
    'breadth-first': 'bfs',
    'depth-first': 'dfs',
    'bid': 'bidirectional',
    'bidi': 'bidirectional',
}


def resolve_algorithm(name: str) -> str:
    """Normalize an algorithm name such as ``BFS`` or ``BID``."""
    key = name.strip().lower()
    key = ALIASES.get(key, key)
    if key not in ENGINES:
        raise ValueError(f"Unknown algorithm '{name}'. Choose from: {', '.join(ENGINES)}")
    return key


def create_engine(algorithm: str,
                  catalog: CatalogIndex,
                  config: Optional[SearchConfig] = None,
                  **options: Any) -> SearchEngine:
    """Factory function to create a search engine.

    Args:
        algorithm: Engine name (``bfs``, ``dfs``, ``bidirectional`` or an alias)
        catalog: Shared catalog index
        config: Base search configuration
        **options: Overrides of individual ``SearchConfig`` fields

    Returns:
        Configured engine
    """
    config = config or SearchConfig()
    if options:
        values = dict(vars(config))
        values.update(options)
        config = SearchConfig(**values)
    return ENGINES[resolve_algorithm(algorithm)](catalog, config)


class PathFinder:
    """Facade that answers path queries with a chosen engine."""

    def __init__(self,
                 catalog: CatalogIndex,
                 algorithm: str = 'bfs',
                 config: Optional[SearchConfig] = None):
        self.catalog = catalog
        self.engine = create_engine(algorithm, catalog, config)
        logger.debug(f"PathFinder using {self.engine.name} engine")

    @property
    def algorithm(self) -> str:
        return self.engine.name

    def find_shortest_path(self, target: str) -> SearchResult:
        return self.engine.find_shortest_path(target)

    def find_multiple_paths(self, target: str, count: int) -> List[SearchResult]:
        return self.engine.find_multiple_paths(target, count)

    def collect_paths(self, target: str, count: int) -> MultiPathReport:
        return self.engine.collect_paths(target, count)

    def find(self, target: str, count: int = 1) -> List[SearchResult]:
        """Single-path query for ``count == 1``, multi-path query otherwise."""
        if count == 1:
            return [self.find_shortest_path(target)]
        return self.find_multiple_paths(target, count)
