"""
Style Twin Orchestrator

Drives the style engine against a provider and a store: turning samples
into profiles, scoring drift, and generating text in the user's voice.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import structlog

from .config import Settings, get_settings
from .errors import ProfileNotFoundError, ValidationError
from .ingest.chunker import chunk_text
from .llm import LLMClient
from .models import GenerationRecord, WritingSample
from .persona import build_system_prompt
from .store import StyleProfileStore
from .style.drift import DriftDetector, DriftResult
from .style.metrics import StyleMetrics, StyleMetricsAnalyzer
from .style.vectors import average_vectors

logger = structlog.get_logger(__name__)

GENERATION_TEMPERATURE = 0.7
GENERATION_MAX_TOKENS = 500
CHAT_TEMPERATURE = 0.8
CHAT_MAX_TOKENS = 300


@dataclass
class SampleResult:
    """Outcome of adding one writing sample."""
    count: int
    metrics: StyleMetrics
    style_vector_dimensions: int = 0


@dataclass
class GenerationResult:
    """Text generated in the user's style."""
    generated_text: str
    style_vector: Optional[list[float]] = None
    drift: Optional[DriftResult] = None


@dataclass
class ChatTurn:
    role: str
    content: str

    def to_message(self) -> dict:
        return {"role": self.role, "content": self.content}


class StyleTwin:
    """
    Orchestrates the style engine.

    Usage:
        twin = StyleTwin(provider=LLMClient(), store=JsonProfileStore("data/profiles"))
        twin.process_sample("user-1", open("essay.txt").read())
        result = twin.detect_drift("user-1", "Some generated text.")
    """

    def __init__(
        self,
        provider: LLMClient,
        store: StyleProfileStore,
        settings: Optional[Settings] = None,
        analyzer: Optional[StyleMetricsAnalyzer] = None,
        detector: Optional[DriftDetector] = None,
    ):
        self.provider = provider
        self.store = store
        self.settings = settings or get_settings()
        self.analyzer = analyzer or StyleMetricsAnalyzer()
        self.detector = detector or DriftDetector()

    def _embed(self, text: str) -> list[float]:
        return self.provider.embed(text, model=self.settings.embedding_model)

    def process_sample(self, user_id: str, raw_text: str) -> SampleResult:
        """
        Add a writing sample to the user's profile.

        Chunks and embeds the text, stores one sample row per chunk,
        recomputes the style vector from every stored embedding and
        replaces the metrics with those of this sample.

        Raises:
            ValidationError: missing user id or text
            DimensionMismatch: new embeddings disagree with stored ones
            ProviderError: embedding failed (nothing is stored)
        """
        if not user_id or not raw_text or not raw_text.strip():
            raise ValidationError("Missing user_id or raw_text")

        chunks = chunk_text(raw_text, self.settings.chunk_max_length)
        samples = [
            WritingSample.from_chunk(user_id, chunk, self._embed(chunk))
            for chunk in chunks
        ]
        metrics = self.analyzer.analyze(raw_text)

        with self.store.user_lock(user_id):
            profile = self.store.ensure_profile(user_id)

            # Validate dimensions before anything is written
            embeddings = self.store.list_sample_embeddings(user_id)
            embeddings.extend(list(s.embedding) for s in samples)
            style_vector = average_vectors(embeddings)

            # A failed write leaves the profile vector as it was; rows from
            # a partial batch are averaged in by the next recompute.
            self.store.append_samples(samples)

            profile.style_vector = style_vector or None
            profile.metrics = metrics
            profile.updated_at = datetime.now(timezone.utc)
            self.store.put_profile(profile)

        logger.info(
            "sample_processed",
            user_id=user_id,
            chunks=len(samples),
            total_embeddings=len(embeddings),
        )
        return SampleResult(
            count=len(samples),
            metrics=metrics,
            style_vector_dimensions=len(style_vector),
        )

    def detect_drift(self, user_id: str, generated_text: str) -> DriftResult:
        """
        Score generated text against the user's stored style vector.

        Raises:
            ValidationError: missing user id or text
            ProfileNotFoundError: no profile or no style vector yet
        """
        if not user_id or not generated_text:
            raise ValidationError("Missing user_id or generated_text")

        profile = self.store.get_profile(user_id)
        if profile is None or not profile.has_style_vector:
            raise ProfileNotFoundError(user_id, "User profile or style vector not found")

        result = self.detector.detect(self._embed(generated_text), profile.style_vector)
        logger.info(
            "drift_detected",
            user_id=user_id,
            score=round(result.score, 4),
            level=result.level.value,
        )
        return result

    def _system_prompt(self, user_id: str) -> tuple[str, list[float] | None]:
        profile = self.store.get_profile(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)

        samples = self.store.list_samples(user_id, limit=self.settings.sample_context_limit)
        prompt = build_system_prompt([s.raw_text for s in samples], profile.metrics)
        return prompt, profile.style_vector

    def generate(self, user_id: str, prompt: str, check_drift: bool = False) -> GenerationResult:
        """
        Generate text for a prompt in the user's style and log it.

        Args:
            user_id: Profile owner
            prompt: What to write about
            check_drift: Also embed the output and score it against the profile
        """
        if not user_id or not prompt:
            raise ValidationError("Missing user_id or prompt")

        system_prompt, style_vector = self._system_prompt(user_id)
        generated = self.provider.complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            model=self.settings.generation_model,
            temperature=GENERATION_TEMPERATURE,
            max_tokens=GENERATION_MAX_TOKENS,
        )

        drift = None
        if check_drift and style_vector and generated:
            drift = self.detector.detect(self._embed(generated), style_vector)

        record = GenerationRecord(user_id=user_id, input_prompt=prompt, generated_output=generated)
        if drift is not None:
            record = record.with_drift(drift)
        self.store.append_generation(record)

        logger.info("text_generated", user_id=user_id, chars=len(generated))
        return GenerationResult(generated_text=generated, style_vector=style_vector, drift=drift)

    def chat(
        self,
        user_id: str,
        message: str,
        history: Optional[list[ChatTurn | dict]] = None,
    ) -> str:
        """Reply to a chat message as the user's style twin."""
        if not user_id or not message:
            raise ValidationError("Missing user_id or message")

        system_prompt, _ = self._system_prompt(user_id)
        messages = [{"role": "system", "content": system_prompt}]
        for turn in history or []:
            messages.append(turn.to_message() if isinstance(turn, ChatTurn) else dict(turn))
        messages.append({"role": "user", "content": message})

        return self.provider.complete(
            messages,
            model=self.settings.chat_model,
            temperature=CHAT_TEMPERATURE,
            max_tokens=CHAT_MAX_TOKENS,
        )

    def compare_profiles(self, user_a: str, user_b: str) -> DriftResult:
        """Similarity between two users' style vectors."""
        vectors = []
        for user_id in (user_a, user_b):
            profile = self.store.get_profile(user_id)
            if profile is None or not profile.has_style_vector:
                raise ProfileNotFoundError(user_id, "User profile or style vector not found")
            vectors.append(profile.style_vector)
        return self.detector.detect(vectors[0], vectors[1])
