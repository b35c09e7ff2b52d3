"""
Style Drift Detection

Scores a candidate embedding against a stored style vector with cosine
similarity and buckets the score into a drift tier.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .vectors import check_dimensions, dot, magnitude
from .metrics import clamp, round_half_up


# Inclusive lower bounds on similarity
LOW_DRIFT_THRESHOLD = 0.85
MEDIUM_DRIFT_THRESHOLD = 0.75


class DriftLevel(str, Enum):
    """How far generated text has wandered from the user's style."""
    LOW = "low"        # good match
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class DriftResult:
    """Outcome of a drift check. Not persisted as an entity."""
    score: float
    level: DriftLevel
    similarity_percentage: int

    def to_dict(self) -> dict:
        return {
            "drift_score": self.score,
            "drift_level": self.level.value,
            "similarity_percentage": self.similarity_percentage,
        }


def _scaled(v: Sequence[float]) -> list[float]:
    # Dividing by the largest component keeps squares finite and nonzero
    largest = max((abs(x) for x in v), default=0.0)
    if largest == 0:
        return []
    return [x / largest for x in v]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity in [-1, 1].

    Zero-magnitude vectors have undefined direction; their similarity is 0.
    Both vectors are rescaled first, so very large or very small finite
    components neither overflow nor underflow.

    Raises:
        DimensionMismatch: if the vectors differ in length
    """
    check_dimensions(a, b)

    scaled_a = _scaled(a)
    scaled_b = _scaled(b)
    if not scaled_a or not scaled_b:
        return 0.0

    ratio = dot(scaled_a, scaled_b) / (magnitude(scaled_a) * magnitude(scaled_b))
    return clamp(ratio, -1.0, 1.0)


def classify_drift(score: float) -> DriftLevel:
    if score >= LOW_DRIFT_THRESHOLD:
        return DriftLevel.LOW
    if score >= MEDIUM_DRIFT_THRESHOLD:
        return DriftLevel.MEDIUM
    return DriftLevel.HIGH


def display_percentage(score: float) -> int:
    """Similarity as a 0-100 percentage. For display only, never for classification."""
    return int(clamp(round_half_up(score * 100), 0, 100))


class DriftDetector:
    """
    Compares candidate embeddings to a reference style vector.

    Usage:
        detector = DriftDetector()
        result = detector.detect(candidate_embedding, profile.style_vector)
        if result.level is DriftLevel.HIGH:
            ...
    """

    def score(self, candidate: Sequence[float], reference: Sequence[float]) -> float:
        return cosine_similarity(candidate, reference)

    def classify(self, score: float) -> DriftLevel:
        return classify_drift(score)

    def detect(self, candidate: Sequence[float], reference: Sequence[float]) -> DriftResult:
        score = self.score(candidate, reference)
        return DriftResult(
            score=score,
            level=self.classify(score),
            similarity_percentage=display_percentage(score),
        )
