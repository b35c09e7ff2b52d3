"""In-process store, used by tests and short-lived sessions."""

from collections import defaultdict
from typing import Optional

from ..models import GenerationRecord, StyleProfile, WritingSample
from .base import StyleProfileStore


class MemoryProfileStore(StyleProfileStore):
    """Keeps everything in dictionaries. Nothing survives the process."""

    def __init__(self):
        super().__init__()
        self._profiles: dict[str, StyleProfile] = {}
        self._samples: dict[str, list[WritingSample]] = defaultdict(list)
        self._generations: dict[str, list[GenerationRecord]] = defaultdict(list)

    def get_profile(self, user_id: str) -> Optional[StyleProfile]:
        profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile else None

    def put_profile(self, profile: StyleProfile) -> None:
        self._profiles[profile.user_id] = profile.model_copy(deep=True)

    def append_sample(self, sample: WritingSample) -> None:
        self._samples[sample.user_id].append(sample)

    def list_samples(self, user_id: str, limit: Optional[int] = None) -> list[WritingSample]:
        samples = list(reversed(self._samples.get(user_id, [])))
        return samples[:limit] if limit is not None else samples

    def append_generation(self, record: GenerationRecord) -> None:
        self._generations[record.user_id].append(record)

    def list_generations(self, user_id: str) -> list[GenerationRecord]:
        return list(self._generations.get(user_id, []))
