"""
Stylometric Metrics

Lexical statistics derived from a single writing sample: formality,
sentence length, lexical diversity, tone and signature phrases. These
are independent of embeddings and deterministic for a given text.
"""

from dataclasses import dataclass, field, asdict
from collections import Counter
import math
import re

from .lexicon import DEFAULT_LEXICON, LexicalCategory, StyleLexicon


SENTENCE_TERMINATORS = re.compile(r"[.!?]+")
SENTENCE_PATTERN = re.compile(r"[^.!?]+[.!?]+")
WORD_PATTERN = re.compile(r"\b\w+\b")

NEUTRAL_FORMALITY = 5.0
MAX_FORMALITY = 10.0
MAX_SIGNATURE_PHRASES = 5


@dataclass
class ToneCounts:
    """Raw marker counts behind the tone percentage."""
    positive: int = 0
    negative: int = 0


@dataclass
class StyleMetrics:
    """Lexical style summary of one writing sample."""
    formality_level: float = 0.0
    avg_sentence_length: int = 0
    unique_words_count: int = 0
    positive_tone_percentage: float = 0.0
    signature_phrases: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "StyleMetrics":
        return cls(
            formality_level=float(d.get("formality_level", 0.0)),
            avg_sentence_length=int(d.get("avg_sentence_length", 0)),
            unique_words_count=int(d.get("unique_words_count", 0)),
            positive_tone_percentage=float(d.get("positive_tone_percentage", 0.0)),
            signature_phrases=list(d.get("signature_phrases") or []),
        )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def count_sentences(text: str) -> int:
    """Number of terminator runs (`.`, `!`, `?`) in the text."""
    return len(SENTENCE_TERMINATORS.findall(text))


def count_words(text: str) -> int:
    """Number of whitespace-delimited, non-empty tokens."""
    return len(text.split())


def tokenize(text: str) -> list[str]:
    """Case-folded alphanumeric word tokens."""
    return WORD_PATTERN.findall(text.lower())


def count_tone(words: list[str], lexicon: StyleLexicon = DEFAULT_LEXICON) -> ToneCounts:
    tone = ToneCounts()
    for word in words:
        if lexicon.contains(LexicalCategory.POSITIVE, word):
            tone.positive += 1
        if lexicon.contains(LexicalCategory.NEGATIVE, word):
            tone.negative += 1
    return tone


def calculate_formality(
    words: list[str],
    word_count: int,
    lexicon: StyleLexicon = DEFAULT_LEXICON,
) -> float:
    """
    Formality on a 0-10 scale, 5 being neutral.

    Each formal marker adds one point and each informal marker removes one;
    the score is normalized per hundred words.
    """
    score = 0
    for word in words:
        if lexicon.contains(LexicalCategory.FORMAL, word):
            score += 1
        if lexicon.contains(LexicalCategory.INFORMAL, word):
            score -= 1

    divisor = max(1.0, word_count / 100)
    return clamp(NEUTRAL_FORMALITY + score / divisor, 0.0, MAX_FORMALITY)


def find_signature_phrases(text: str, limit: int = MAX_SIGNATURE_PHRASES) -> list[str]:
    """
    Find recurring 2- and 3-word phrases.

    Phrases are counted within sentences across the whole text. Only
    phrases seen more than once survive. Ordering is by count descending,
    ties in first-seen order (Counter preserves insertion order and
    sorted() is stable).
    """
    sentences = SENTENCE_PATTERN.findall(text) or [text]
    phrase_counts: Counter[str] = Counter()

    for sentence in sentences:
        words = tokenize(sentence)
        for i in range(len(words) - 1):
            phrase_counts[" ".join(words[i:i + 2])] += 1
            if i < len(words) - 2:
                phrase_counts[" ".join(words[i:i + 3])] += 1

    recurring = [(phrase, count) for phrase, count in phrase_counts.items() if count > 1]
    recurring = sorted(recurring, key=lambda item: -item[1])

    return [phrase[0].upper() + phrase[1:] for phrase, _ in recurring[:limit]]


class StyleMetricsAnalyzer:
    """
    Computes StyleMetrics for a text.

    Usage:
        analyzer = StyleMetricsAnalyzer()
        metrics = analyzer.analyze("I love this. I love this a lot.")

        # Synthetic or non-English vocabularies
        analyzer = StyleMetricsAnalyzer(lexicon=StyleLexicon.from_lists({...}))
    """

    def __init__(self, lexicon: StyleLexicon = DEFAULT_LEXICON):
        self.lexicon = lexicon

    def analyze(self, text: str) -> StyleMetrics:
        """
        Analyze raw sample text.

        Never raises; empty or degenerate text yields all-zero metrics.
        """
        if not text or not text.strip():
            return StyleMetrics()

        sentence_count = count_sentences(text)
        word_count = count_words(text)
        avg_sentence_length = (
            round_half_up(word_count / sentence_count) if sentence_count > 0 else 0
        )

        words = tokenize(text)
        unique_words_count = len(set(words))

        tone = count_tone(words, self.lexicon)
        positive_tone = round_half_up(tone.positive / word_count * 100) if word_count > 0 else 0

        return StyleMetrics(
            formality_level=calculate_formality(words, word_count, self.lexicon),
            avg_sentence_length=avg_sentence_length,
            unique_words_count=unique_words_count,
            positive_tone_percentage=clamp(float(positive_tone), 0.0, 100.0),
            signature_phrases=find_signature_phrases(text),
        )


def analyze_text_metrics(text: str, lexicon: StyleLexicon = DEFAULT_LEXICON) -> StyleMetrics:
    """Convenience wrapper around StyleMetricsAnalyzer."""
    return StyleMetricsAnalyzer(lexicon).analyze(text)
