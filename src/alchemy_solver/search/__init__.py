"""Search engines for recipe paths.

This module implements breadth-first, depth-bounded and bidirectional search
over the tier-constrained recipe graph, plus concurrent multi-path discovery.
"""

from .base import SearchConfig, SearchEngine
from .bfs import BreadthFirstEngine
from .dfs import DepthBoundedEngine
from .bidirectional import BidirectionalEngine, BidirectionalTrace
from .multipath import MultiPathOrchestrator, MultiPathReport
from .variants import SearchVariant
from .finder import PathFinder, create_engine, resolve_algorithm

__all__ = [
    'SearchConfig',
    'SearchEngine',
    'BreadthFirstEngine',
    'DepthBoundedEngine',
    'BidirectionalEngine',
    'BidirectionalTrace',
    'MultiPathOrchestrator',
    'MultiPathReport',
    'SearchVariant',
    'PathFinder',
    'create_engine',
    'resolve_algorithm'
]
