"""
PyTorch backend for nthprime.nth_prime (CUDA, Apple Silicon MPS or CPU).

Segments of odd numbers live in boolean tensors on the chosen device. Base
primes stay on the host; their odd multiples are cleared with strided
stores, and each segment's survivors are copied back before the next one
is allocated.
"""

import logging
import math

import torch

import nthprime
from nthprime_numpy import odd_strikes, simple_sieve

log = logging.getLogger(__name__)

SEGMENT_ODD_COUNT = 10_000_000  # ~10MB mask per segment


def pick_device(prefer_gpu: bool = True) -> torch.device:
    if prefer_gpu:
        if torch.cuda.is_available():
            return torch.device("cuda")
        if torch.backends.mps.is_available():
            return torch.device("mps")
    return torch.device("cpu")


def segmented_sieve(
    limit: int,
    *,
    segment_odd_count: int = SEGMENT_ODD_COUNT,
    prefer_gpu: bool = True,
) -> list[int]:
    if segment_odd_count < 1:
        raise ValueError(f"segment_odd_count must be positive, got {segment_odd_count}")
    if limit < 2:
        return []

    device = pick_device(prefer_gpu)
    log.debug("limit=%d: sieving on %s", limit, device)

    base_primes = simple_sieve(math.isqrt(limit)).tolist()
    width = 2 * segment_odd_count
    primes = [2]

    for low in range(3, limit + 1, width):
        high = min(low + width, limit + 1)
        candidates = torch.ones((high - low + 1) // 2, dtype=torch.bool, device=device)
        for offset, p in odd_strikes(low, high, base_primes):
            candidates[offset::p] = False

        slots = torch.nonzero(candidates, as_tuple=False).squeeze(1)
        primes.extend((low + 2 * slots).cpu().tolist())

    return primes


def nth_prime(n, *, segment_odd_count: int = SEGMENT_ODD_COUNT, prefer_gpu: bool = True) -> int:
    def sieve(limit):
        return segmented_sieve(limit, segment_odd_count=segment_odd_count, prefer_gpu=prefer_gpu)

    return nthprime.nth_prime(n, sieve=sieve)
