"""
algstruct/algebra/gaussian.py

Mergeable one-dimensional Gaussian summaries.

A Gaussian is summarized by (n, mean, M2) where M2 is the sum of squared
deviations from the mean. Two summaries of disjoint samples merge into the
summary of their union (Chan et al. pairwise update), and the empty
summary is the identity, so per-chunk summaries can be reduced in any
grouping and give the same moments as a single pass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterable

import numpy as np
from scipy.special import erf


@dataclass(frozen=True, eq=False)
class Gaussian:
    """
    Moment summary of a sample.

    Attributes:
        m1: Mean of the sample
        m2: Sum of squared deviations from the mean
        n: Sample count, kept as a float
    """
    m1: float = 0.0
    m2: float = 0.0
    n: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gaussian):
            return NotImplemented
        # moments drift with grouping; counts do not
        return (
            self.n == other.n
            and bool(np.isclose(self.m1, other.m1))
            and bool(np.isclose(self.m2, other.m2))
        )

    def __hash__(self) -> int:
        # equal summaries share n, not necessarily exact moments
        return hash(self.n)

    @staticmethod
    def of(x: float) -> "Gaussian":
        """Summary of a single data point."""
        return Gaussian(m1=float(x), m2=0.0, n=1.0)

    @staticmethod
    def from_values(xs: Iterable[float]) -> "Gaussian":
        """Accumulate points one at a time (Welford)."""
        g = Gaussian()
        for x in xs:
            g = g.push(x)
        return g

    def push(self, x: float) -> "Gaussian":
        """Summary with one more data point."""
        x = float(x)
        n = self.n + 1.0
        m1 = self.m1 + (x - self.m1) / n
        m2 = self.m2 + (x - self.m1) * (x - m1)
        return Gaussian(m1=m1, m2=m2, n=n)

    def merge(self, other: "Gaussian") -> "Gaussian":
        """Summary of the union of both samples."""
        n = self.n + other.n
        if n == 0.0:
            return Gaussian()
        m1 = self.m1 * (self.n / n) + other.m1 * (other.n / n)
        m2 = self.m2 + other.m2 + (self.m1 - other.m1) ** 2 * (self.n * other.n) / n
        return Gaussian(m1=m1, m2=m2, n=n)

    def mean(self) -> float:
        return self.m1

    def variance(self) -> float:
        """Sample variance. Requires more than one point."""
        if self.n <= 1.0:
            raise ValueError(f"variance requires more than 1 sample, got n={self.n:g}")
        return self.m2 / (self.n - 1.0)

    def pdf(self, x: float) -> float:
        m = self.mean()
        v = self.variance()
        return 1.0 / math.sqrt(2.0 * math.pi * v) * math.exp(-0.5 * (x - m) ** 2 / v)

    def cdf(self, x: float) -> float:
        m = self.mean()
        v = self.variance()
        return float(0.5 * (1.0 + erf((x - m) / math.sqrt(2.0 * v))))


@dataclass(frozen=True)
class GaussianMonoid:
    """Merge of Gaussian summaries, identity the empty summary."""
    commutative: ClassVar[bool] = True
    idempotent: ClassVar[bool] = False

    def combine(self, a: Gaussian, b: Gaussian) -> Gaussian:
        return a.merge(b)

    def identity(self) -> Gaussian:
        return Gaussian()
