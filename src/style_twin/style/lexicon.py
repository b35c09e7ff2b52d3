"""
Lexical Vocabularies

Word lists that drive tone and formality scoring. The engine reads them
through a StyleLexicon so tests and other languages can supply their own.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping


class LexicalCategory(str, Enum):
    """Categories of marker words the metrics analyzer looks for."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    FORMAL = "formal"
    INFORMAL = "informal"


POSITIVE_WORDS = [
    "good", "great", "excellent", "amazing", "wonderful", "fantastic",
    "love", "like", "enjoy", "happy", "pleased", "satisfied",
]

NEGATIVE_WORDS = [
    "bad", "terrible", "awful", "horrible", "hate", "dislike",
    "sad", "angry", "frustrated", "disappointed",
]

FORMAL_MARKERS = [
    "regarding", "concerning", "pursuant", "herewith", "whereas",
    "therefore", "moreover", "furthermore", "nevertheless",
]

# Tokens are \w+ runs, so "y'all" is counted as "y" and "all" and never matches.
INFORMAL_MARKERS = [
    "gonna", "wanna", "kinda", "sorta", "y'all", "dude",
    "cool", "awesome", "totally", "basically",
]


@dataclass(frozen=True)
class StyleLexicon:
    """Mapping from lexical category to a set of lowercase words."""
    words: Mapping[LexicalCategory, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_lists(cls, categories: Mapping[LexicalCategory | str, Iterable[str]]) -> "StyleLexicon":
        """Build a lexicon from plain word lists. Missing categories are empty."""
        words = {
            LexicalCategory(category): frozenset(w.lower() for w in values)
            for category, values in categories.items()
        }
        return cls(words=words)

    def get(self, category: LexicalCategory) -> frozenset[str]:
        return self.words.get(category, frozenset())

    def contains(self, category: LexicalCategory, word: str) -> bool:
        return word in self.get(category)


DEFAULT_LEXICON = StyleLexicon.from_lists({
    LexicalCategory.POSITIVE: POSITIVE_WORDS,
    LexicalCategory.NEGATIVE: NEGATIVE_WORDS,
    LexicalCategory.FORMAL: FORMAL_MARKERS,
    LexicalCategory.INFORMAL: INFORMAL_MARKERS,
})
