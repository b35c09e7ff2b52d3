"""
Style Vector Aggregation

Numeric helpers over plain float sequences. A user's style vector is
the element-wise mean of every chunk embedding stored for that user.
"""

from dataclasses import dataclass, field
from typing import Sequence
import math

from ..errors import DimensionMismatch


def check_dimensions(a: Sequence[float], b: Sequence[float]) -> None:
    """Raise DimensionMismatch if the two vectors differ in length."""
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    check_dimensions(a, b)
    return math.fsum(x * y for x, y in zip(a, b))


def magnitude(v: Sequence[float]) -> float:
    return math.sqrt(math.fsum(x * x for x in v))


def average_vectors(vectors: Sequence[Sequence[float]]) -> list[float]:
    """
    Element-wise arithmetic mean of the given vectors.

    Recomputes from scratch on every call. An empty input returns an
    empty list, which callers must treat as "no style vector yet".
    No normalization is applied.

    Raises:
        DimensionMismatch: if the vectors do not share a dimensionality
    """
    if not vectors:
        return []

    dimensions = len(vectors[0])
    totals = [0.0] * dimensions

    for vector in vectors:
        if len(vector) != dimensions:
            raise DimensionMismatch(dimensions, len(vector))
        for i, value in enumerate(vector):
            totals[i] += value

    count = len(vectors)
    return [total / count for total in totals]


@dataclass
class RunningCentroid:
    """
    Incremental alternative to average_vectors.

    Keeps a running sum and count so each new embedding costs O(d)
    instead of re-reading the whole history. Results match
    average_vectors up to floating-point summation order.
    """
    total: list[float] = field(default_factory=list)
    count: int = 0

    @classmethod
    def from_vectors(cls, vectors: Sequence[Sequence[float]]) -> "RunningCentroid":
        centroid = cls()
        for vector in vectors:
            centroid.add(vector)
        return centroid

    @property
    def dimensions(self) -> int:
        return len(self.total)

    def add(self, vector: Sequence[float]) -> None:
        if self.count == 0:
            self.total = [float(x) for x in vector]
            self.count = 1
            return
        check_dimensions(self.total, vector)
        for i, value in enumerate(vector):
            self.total[i] += value
        self.count += 1

    def mean(self) -> list[float]:
        if self.count == 0:
            return []
        return [value / self.count for value in self.total]
