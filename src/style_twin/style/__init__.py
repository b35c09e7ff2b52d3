"""
Style Profile Engine

Lexical metrics, style vector aggregation and drift scoring for a
user's writing samples.
"""

from .lexicon import LexicalCategory, StyleLexicon, DEFAULT_LEXICON
from .metrics import (
    StyleMetrics,
    StyleMetricsAnalyzer,
    analyze_text_metrics,
    find_signature_phrases,
)
from .vectors import RunningCentroid, average_vectors
from .drift import (
    DriftDetector,
    DriftLevel,
    DriftResult,
    classify_drift,
    cosine_similarity,
)

__all__ = [
    # Lexicon
    "LexicalCategory",
    "StyleLexicon",
    "DEFAULT_LEXICON",
    # Metrics
    "StyleMetrics",
    "StyleMetricsAnalyzer",
    "analyze_text_metrics",
    "find_signature_phrases",
    # Aggregation
    "RunningCentroid",
    "average_vectors",
    # Drift
    "DriftDetector",
    "DriftLevel",
    "DriftResult",
    "classify_drift",
    "cosine_similarity",
]
