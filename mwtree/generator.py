"""
mwtree/generator.py
Random tree generation for demos and stress tests.
"""

from __future__ import annotations
import logging
import random

from mwtree.policy import Variant
from mwtree.tree import MultiwayTree, construct

logger = logging.getLogger(__name__)

KEY_LOW = 0
KEY_HIGH = 100_000_000   # exclusive


def random_keys(count: int, seed: int | None = None, low: int = KEY_LOW, high: int = KEY_HIGH) -> list[int]:
    """Return count random integers in [low, high)."""
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    rng = random.Random(seed)
    return [rng.randrange(low, high) for _ in range(count)]


def generate(
    variant: Variant | str,
    count: int,
    degree: int = 3,
    seed: int | None = None,
) -> MultiwayTree:
    """Build a fresh tree of the given variant filled with count random keys."""
    tree = construct(degree, variant)
    for key in random_keys(count, seed):
        tree.insert(key)
    logger.info(
        "generated %s tree: degree=%d keys=%d height=%d",
        tree.variant.value, degree, count, tree.height(),
    )
    return tree
