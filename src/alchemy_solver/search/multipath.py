"""Concurrent multi-path discovery.

Runs index-parameterized variants of one engine on a bounded thread pool and
keeps every result whose path signature has not been seen yet. The catalog is
shared read-only; each variant run owns its own frontier and backpointers, so
the only shared mutable state is the accepted-result list and the signature
set, both guarded by one lock.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List

from alchemy_solver.core.data_models import SearchResult
from alchemy_solver.core.exceptions import NoPathFound
from alchemy_solver.search.reconstruct import is_tier_valid_path
from alchemy_solver.search.variants import SearchVariant

logger = logging.getLogger(__name__)

MAX_CONCURRENT_SEARCHES = 4

# Worker outcomes
ACCEPTED = 'accepted'
DUPLICATE = 'duplicate'
NOT_FOUND = 'not_found'
INVALID = 'invalid'
EXCESS = 'excess'
SKIPPED = 'skipped'


@dataclass
class MultiPathReport:
    """Accepted results of a multi-path query plus per-outcome counts."""
    target: str
    requested: int
    results: List[SearchResult] = field(default_factory=list)
    variants_attempted: int = 0
    outcomes: Dict[str, int] = field(default_factory=dict)
    computation_time: float = 0.0

    @property
    def shortfall(self) -> int:
        """How many of the requested paths could not be produced."""
        return max(0, self.requested - len(self.results))

    @property
    def complete(self) -> bool:
        return self.shortfall == 0


class MultiPathOrchestrator:
    """Bounded-concurrency driver producing up to ``k`` distinct paths.

    Worker ``i`` runs ``engine.search(target, SearchVariant(i))``. At most
    ``min(max_workers, MAX_CONCURRENT_SEARCHES, k)`` searches run at once,
    whatever ``max_workers`` asks for. Once ``k`` results are accepted, workers
    that have not started yet return without searching; searches already
    running finish and their results are dropped.
    """

    def __init__(self,
                 engine,  # SearchEngine
                 max_workers: int = MAX_CONCURRENT_SEARCHES,
                 variant_factor: int = 2,
                 stop_when_satisfied: bool = True):
        if max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        if variant_factor < 1:
            raise ValueError(f"variant_factor must be positive, got {variant_factor}")
        self.engine = engine
        self.max_workers = max_workers
        self.variant_factor = variant_factor
        self.stop_when_satisfied = stop_when_satisfied

    def run(self, target: str, count: int) -> MultiPathReport:
        """Collect up to ``count`` distinct paths to ``target``.

        Raises:
            ValueError: If ``count`` is not positive
            ElementNotFound: If the target is not in the catalog
            NoBasicElements: If the catalog has no tier-0 elements
            NoPathFound: If no variant produced a path
        """
        if count < 1:
            raise ValueError(f"Requested path count must be positive, got {count}")

        # Fatal for every variant, so fail before fanning out
        self.engine.validate_target(target)

        start_time = time.perf_counter()
        workers = min(self.max_workers, MAX_CONCURRENT_SEARCHES, count)
        attempts = count * self.variant_factor

        lock = threading.Lock()
        stop = threading.Event()
        signatures = set()
        results: List[SearchResult] = []

        def worker(index: int) -> str:
            if stop.is_set():
                return SKIPPED
            try:
                result = self.engine.search(target, SearchVariant(index))
            except NoPathFound:
                return NOT_FOUND

            if not is_tier_valid_path(result.path, self.engine.catalog):
                logger.warning(f"Variant {index} for {target} produced a tier-invalid path; dropped")
                return INVALID

            signature = result.signature
            with lock:
                if len(results) >= count:
                    return EXCESS
                if signature in signatures:
                    return DUPLICATE
                signatures.add(signature)
                results.append(result)
                if len(results) >= count and self.stop_when_satisfied:
                    stop.set()
            return ACCEPTED

        outcomes = Counter()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="multipath") as executor:
            futures = [executor.submit(worker, index) for index in range(attempts)]
            for future in as_completed(futures):
                outcomes[future.result()] += 1

        report = MultiPathReport(
            target=target,
            requested=count,
            results=results,
            variants_attempted=attempts - outcomes[SKIPPED],
            outcomes=dict(outcomes),
            computation_time=time.perf_counter() - start_time,
        )

        if not results:
            raise NoPathFound(target)

        if report.shortfall:
            logger.warning(
                f"Found {len(results)} of {count} requested paths to {target} "
                f"after {report.variants_attempted} variants"
            )
        else:
            logger.info(f"Found {count} distinct paths to {target}")
        return report
