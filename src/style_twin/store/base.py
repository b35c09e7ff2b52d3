"""Store contract shared by every backend."""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from ..models import GenerationRecord, StyleProfile, WritingSample


class StyleProfileStore(ABC):
    """
    Get/put/list access to profiles and their samples.

    Writers that read the sample history, recompute and write the profile
    back must hold `user_lock(user_id)` for the whole cycle. Different
    users never contend for the same lock.
    """

    def __init__(self):
        self._locks: dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def user_lock(self, user_id: str) -> Iterator[None]:
        """Serialize read-modify-write cycles for one user. Reentrant per thread."""
        with self._locks_guard:
            lock = self._locks.setdefault(user_id, threading.RLock())
        with lock:
            yield

    @abstractmethod
    def get_profile(self, user_id: str) -> Optional[StyleProfile]:
        ...

    @abstractmethod
    def put_profile(self, profile: StyleProfile) -> None:
        ...

    @abstractmethod
    def append_sample(self, sample: WritingSample) -> None:
        ...

    def append_samples(self, samples: Sequence[WritingSample]) -> None:
        """Store several samples. Backends that can write them at once override this."""
        for sample in samples:
            self.append_sample(sample)

    @abstractmethod
    def list_samples(self, user_id: str, limit: Optional[int] = None) -> list[WritingSample]:
        """Samples for a user, most recent first."""
        ...

    @abstractmethod
    def append_generation(self, record: GenerationRecord) -> None:
        ...

    @abstractmethod
    def list_generations(self, user_id: str) -> list[GenerationRecord]:
        ...

    def list_sample_embeddings(self, user_id: str) -> list[list[float]]:
        """Every embedding stored for the user, oldest first."""
        samples = self.list_samples(user_id)
        return [list(s.embedding) for s in reversed(samples)]

    def ensure_profile(self, user_id: str) -> StyleProfile:
        """Return the user's profile, creating an empty one on first use."""
        profile = self.get_profile(user_id)
        if profile is None:
            profile = StyleProfile(user_id=user_id)
            self.put_profile(profile)
        return profile
