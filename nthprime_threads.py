"""
Process-pool backend for nthprime.nth_prime.

Each retry of nth_prime's doubling loop calls parallel_sieve once. The parent
sieves the base primes up to sqrt(limit), the odd numbers 3..limit are cut
into segments, and a ProcessPoolExecutor clears each segment. Results come
back in segment order, so the merged array can be indexed directly.
"""

import logging
import math
from concurrent.futures import ProcessPoolExecutor
from itertools import repeat

import numpy as np

import nthprime
from nthprime_numpy import odd_strikes, simple_sieve

log = logging.getLogger(__name__)

SEGMENT_ODD_COUNT = 20_000_000


def sieve_segment_worker(low: int, high_exclusive: int, base_primes: np.ndarray) -> np.ndarray:
    """Primes among the odd numbers of [low, high_exclusive)."""
    candidates = np.ones((high_exclusive - low + 1) // 2, dtype=bool)
    for offset, p in odd_strikes(low, high_exclusive, base_primes):
        candidates[offset::p] = False
    return low + 2 * np.flatnonzero(candidates).astype(np.int64)


def plan_segments(limit: int, segment_odd_count: int) -> list[tuple[int, int]]:
    """(low, high_exclusive) runs of segment_odd_count odds over 3..limit.

    The last run is cut at limit + 1; a limit below 3 needs no segments.
    """
    width = 2 * segment_odd_count
    return [(low, min(low + width, limit + 1)) for low in range(3, limit + 1, width)]


def parallel_sieve(limit: int, *, segment_odd_count: int = SEGMENT_ODD_COUNT, workers: int | None = None) -> np.ndarray:
    """All primes <= limit as an ascending int64 array."""
    if segment_odd_count < 1:
        raise ValueError(f"segment_odd_count must be positive, got {segment_odd_count}")
    if workers is not None and workers < 1:
        raise ValueError(f"workers must be positive, got {workers}")
    if limit < 2:
        return np.empty(0, dtype=np.int64)

    segments = plan_segments(limit, segment_odd_count)
    if not segments:
        return np.array([2], dtype=np.int64)

    base_primes = simple_sieve(math.isqrt(limit))
    log.debug("limit=%d: %d segments, %d base primes", limit, len(segments), base_primes.size)

    lows, highs = zip(*segments)
    with ProcessPoolExecutor(max_workers=workers) as ex:
        parts = list(ex.map(sieve_segment_worker, lows, highs, repeat(base_primes)))
    return np.concatenate([np.array([2], dtype=np.int64), *parts])


def nth_prime(n, *, segment_odd_count: int = SEGMENT_ODD_COUNT, workers: int | None = None) -> int:
    def sieve(limit):
        return parallel_sieve(limit, segment_odd_count=segment_odd_count, workers=workers)

    return nthprime.nth_prime(n, sieve=sieve)
