"""Persona system prompts built from a user's style profile."""

from typing import Sequence

from .style.metrics import StyleMetrics

DEFAULT_FORMALITY = 5
DEFAULT_SENTENCE_LENGTH = 15
DEFAULT_POSITIVE_TONE = 50
NO_PHRASES = "none identified yet"
NO_SAMPLES = "No samples provided."

PERSONA_PROMPT = """You are a writing assistant acting as a stylistic twin of the user. Every reply must read as if the user wrote it, whatever the topic, including topics their samples never touch.

USER'S WRITING SAMPLES:
{samples}

USER'S WRITING CHARACTERISTICS:
- Formality level: {formality}/10 (1=very casual, 10=very formal)
- Average sentence length: ~{sentence_length} words
- Positive tone: {positive_tone}% of words are positive
- Signature phrases: {phrases}

STYLE GUIDELINES:
- Match the formality level, sentence lengths and transitions.
- Mirror vocabulary complexity, punctuation habits, fillers and intensifiers.
- Reuse signature phrases and quirks where they fit naturally.
- Bring in outside knowledge when asked, but phrase it in the user's voice.
- Never fall back to a generic assistant tone. When clarity and voice conflict, keep the voice.
"""


def _or_default(value, default):
    # Zero means "not measured yet" for every stored metric
    return value if value else default


def build_system_prompt(sample_texts: Sequence[str], metrics: StyleMetrics) -> str:
    """Render the persona prompt for a user's recent samples and metrics."""
    samples = "\n\n".join(t for t in sample_texts if t)
    phrases = ", ".join(metrics.signature_phrases) or NO_PHRASES

    return PERSONA_PROMPT.format(
        samples=samples or NO_SAMPLES,
        formality=_or_default(metrics.formality_level, DEFAULT_FORMALITY),
        sentence_length=_or_default(metrics.avg_sentence_length, DEFAULT_SENTENCE_LENGTH),
        positive_tone=_or_default(metrics.positive_tone_percentage, DEFAULT_POSITIVE_TONE),
        phrases=phrases,
    )
