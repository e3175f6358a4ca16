"""
n-th prime via an estimated Sieve of Eratosthenes.

Index 0 is 2. Small indices come straight from a lookup table; larger ones
sieve up to n(ln n + ln ln n) and double the bound until the sieve holds
enough primes.
"""

import logging
import math
import operator

log = logging.getLogger(__name__)

# The asymptotic estimate is too far off below this point (ln ln n is not
# even defined for n = 1), so the first primes are served from the table.
SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31)

INT64_MAX = 2**63 - 1


class PrimeIndexError(ValueError):
    """Base class for rejected prime indices."""


class InvalidIndexError(PrimeIndexError):
    def __init__(self, argument: str, value: int):
        self.argument = argument
        self.value = value
        super().__init__(f"{argument}: index cannot be negative (got {value})")


class IndexOutOfRangeError(PrimeIndexError):
    """Index or sieve bound does not fit a signed 64-bit integer."""


def estimate_upper_bound(n: int) -> int:
    """Prime number theorem approximation ceil(n * (ln n + ln ln n)).

    Not a guaranteed bound: it undershoots for some n.
    """
    if n < 2:
        raise ValueError(f"estimate needs n >= 2, got {n}")
    nf = float(n)
    estimate = math.ceil(nf * (math.log(nf) + math.log(math.log(nf))))
    if estimate > INT64_MAX:
        raise IndexOutOfRangeError(f"upper bound for n={n} exceeds 64-bit range")
    return int(estimate)


def sieve_of_eratosthenes(limit: int) -> list[int]:
    """Use the Sieve of Eratosthenes algorithm to find all prime numbers up to 'limit'."""
    primes = []
    if limit < 2:
        return primes
    is_composite = bytearray(limit + 1)

    for i in range(2, limit + 1):
        if not is_composite[i]:
            primes.append(i)
            # smaller multiples were struck by smaller primes
            start = i * i
            if start <= limit:
                is_composite[start::i] = b"\x01" * ((limit - start) // i + 1)
    return primes


def nth_prime(n, *, sieve=sieve_of_eratosthenes, estimator=estimate_upper_bound) -> int:
    """Return the prime at 0-based position n.

    'sieve' maps a limit to the ascending primes up to it and 'estimator'
    maps n to a first guess for that limit. A low guess only costs extra
    passes: the limit doubles until the sieve reaches index n.
    """
    if isinstance(n, bool):
        raise TypeError("n must be an integer index, not bool")
    n = operator.index(n)
    if n < 0:
        raise InvalidIndexError("n", n)
    if n > INT64_MAX:
        raise IndexOutOfRangeError(f"n={n} exceeds 64-bit range")

    if n < len(SMALL_PRIMES):
        return SMALL_PRIMES[n]

    upper_bound = max(estimator(n), 2)
    log.debug("n=%d: sieving up to estimated bound %d", n, upper_bound)
    primes = sieve(upper_bound)

    while len(primes) <= n:
        upper_bound *= 2
        if upper_bound > INT64_MAX:
            raise IndexOutOfRangeError(f"sieve bound for n={n} exceeds 64-bit range")
        log.debug("n=%d: found %d primes, retrying with bound %d", n, len(primes), upper_bound)
        primes = sieve(upper_bound)

    return int(primes[n])
