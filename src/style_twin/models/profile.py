"""Profile, sample and generation models."""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from style_twin.style.drift import DriftResult
from style_twin.style.metrics import StyleMetrics


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class WritingSample(BaseModel):
    """One embedded chunk of a submitted writing sample."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=_new_id)
    user_id: str
    raw_text: str
    chunks: list[str] = Field(default_factory=list)
    embedding: list[float]
    metadata: dict = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_chunk(cls, user_id: str, chunk: str, embedding: list[float]) -> "WritingSample":
        """Build a sample row for a single embedded chunk."""
        created_at = _utcnow()
        return cls(
            user_id=user_id,
            raw_text=chunk,
            chunks=[chunk],
            embedding=embedding,
            metadata={"length": len(chunk), "timestamp": created_at.isoformat()},
            created_at=created_at,
        )


class StyleProfile(BaseModel):
    """A user's aggregate writing style. One per user."""

    user_id: str
    style_vector: list[float] | None = None
    metrics: StyleMetrics = Field(default_factory=StyleMetrics)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def has_style_vector(self) -> bool:
        return bool(self.style_vector)

    def to_record(self) -> dict:
        """Flat record shape consumed by the API/UI layer."""
        return {
            "id": self.user_id,
            "style_vector": self.style_vector,
            "formality_level": self.metrics.formality_level,
            "avg_sentence_length": self.metrics.avg_sentence_length,
            "unique_words_count": self.metrics.unique_words_count,
            "positive_tone_percentage": self.metrics.positive_tone_percentage,
            "signature_phrases": list(self.metrics.signature_phrases),
        }

    @classmethod
    def from_record(cls, record: dict) -> "StyleProfile":
        return cls(
            user_id=record["id"],
            style_vector=record.get("style_vector") or None,
            metrics=StyleMetrics.from_dict(record),
            updated_at=record.get("updated_at") or _utcnow(),
        )


class GenerationRecord(BaseModel):
    """Audit log entry for one generation."""

    id: str = Field(default_factory=_new_id)
    user_id: str
    input_prompt: str
    generated_output: str
    timestamp: datetime = Field(default_factory=_utcnow)
    drift_score: float | None = None
    drift_level: str | None = None

    def with_drift(self, drift: DriftResult) -> "GenerationRecord":
        return self.model_copy(
            update={"drift_score": drift.score, "drift_level": drift.level.value}
        )
