import math

import numpy as np

import nthprime


def simple_sieve(limit: int) -> np.ndarray:
    """NumPy counterpart of nthprime.sieve_of_eratosthenes.

    Same primes, same order, as an int64 array. Only candidates up to
    isqrt(limit) strike their multiples; whatever stays unmarked is read
    back in one pass.
    """
    if limit < 2:
        return np.empty(0, dtype=np.int64)
    composite = np.zeros(limit + 1, dtype=bool)
    composite[:2] = True
    for i in range(2, math.isqrt(limit) + 1):
        if not composite[i]:
            composite[i * i :: i] = True
    return np.flatnonzero(~composite).astype(np.int64)


def odd_strikes(low: int, high: int, base_primes):
    """Yield (offset, p) for each odd base prime with a multiple in [low, high).

    Segment masks hold odd numbers only: slot k stands for low + 2k, with
    'low' odd. Clearing mask[offset::p] removes every odd multiple of p
    from the segment.
    """
    for p in base_primes:
        p = int(p)
        if p == 2:
            continue
        if p * p >= high:
            break
        first = max(p * p, -(-low // p) * p)
        if first % 2 == 0:
            first += p
        if first < high:
            yield (first - low) // 2, p


def nth_prime(n) -> int:
    return nthprime.nth_prime(n, sieve=simple_sieve)
