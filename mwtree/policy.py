"""
mwtree/policy.py
Split policies: the per-tree switches that turn one node shape into a
classic B-tree, a B+-tree or a B*-tree.

  preemptive     split full children on the way down (classic only)
  chain_leaves   keys live in leaves, leaves are linked through `next`
  binary_descent choose the child with bisect instead of a linear scan
  donate_first   try moving keys to a sibling before splitting
  three_way      split an overflowing leaf into left / pivot / right
  occupancy      minimum keys per non-root node = ceil(degree * occupancy)
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from mwtree.errors import InvalidConfiguration


class Variant(Enum):
    BTREE = "btree"
    BPLUS = "bplus"
    BSTAR = "bstar"

    @classmethod
    def parse(cls, value: "Variant | str") -> "Variant":
        if isinstance(value, Variant):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            names = ", ".join(v.value for v in cls)
            raise InvalidConfiguration(f"Unknown tree variant {value!r} (expected one of: {names})") from None


@dataclass(frozen=True)
class SplitPolicy:
    variant: Variant
    preemptive: bool = False
    chain_leaves: bool = False
    binary_descent: bool = False
    donate_first: bool = False
    three_way: bool = False
    occupancy: Fraction = Fraction(1, 2)

    def min_keys(self, degree: int) -> int:
        return math.ceil(degree * self.occupancy)


CLASSIC = SplitPolicy(Variant.BTREE, preemptive=True)

PLUS = SplitPolicy(Variant.BPLUS, chain_leaves=True)

STAR = SplitPolicy(
    Variant.BSTAR,
    chain_leaves=True,
    binary_descent=True,
    donate_first=True,
    three_way=True,
    occupancy=Fraction(2, 3),
)

POLICIES: dict[Variant, SplitPolicy] = {
    Variant.BTREE: CLASSIC,
    Variant.BPLUS: PLUS,
    Variant.BSTAR: STAR,
}


def policy_for(variant: Variant | str) -> SplitPolicy:
    return POLICIES[Variant.parse(variant)]
