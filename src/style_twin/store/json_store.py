"""
JSON File Store

One JSON document per user under the profiles directory, holding the
profile record, the sample rows and the generation history.
"""

import hashlib
import json
import os
import re
from pathlib import Path
from typing import Optional, Sequence

import structlog

from ..errors import ValidationError
from ..models import GenerationRecord, StyleProfile, WritingSample
from .base import StyleProfileStore

logger = structlog.get_logger(__name__)


class JsonProfileStore(StyleProfileStore):
    """
    File-backed store.

    Usage:
        store = JsonProfileStore("data/profiles")
        profile = store.ensure_profile("user-123")
    """

    def __init__(self, profiles_dir: str | Path):
        """
        Initialize the store.

        Args:
            profiles_dir: Directory for per-user JSON documents (created if missing)
        """
        super().__init__()
        self.profiles_dir = Path(profiles_dir)
        self.profiles_dir.mkdir(parents=True, exist_ok=True)

    def _user_file(self, user_id: str) -> Path:
        slug = re.sub(r"[^a-zA-Z0-9_-]+", "_", user_id).strip("_") or "user"
        digest = hashlib.sha1(user_id.encode("utf-8")).hexdigest()[:8]
        return self.profiles_dir / f"{slug}_{digest}.json"

    def _load(self, user_id: str) -> dict:
        path = self._user_file(user_id)
        if not path.exists():
            return {"profile": None, "samples": [], "generations": []}
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, user_id: str, document: dict) -> None:
        path = self._user_file(user_id)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(document, f, indent=2)
        os.replace(tmp_path, path)

    def get_profile(self, user_id: str) -> Optional[StyleProfile]:
        record = self._load(user_id).get("profile")
        return StyleProfile.from_record(record) if record else None

    def put_profile(self, profile: StyleProfile) -> None:
        record = profile.to_record()
        record["updated_at"] = profile.updated_at.isoformat()
        with self.user_lock(profile.user_id):
            document = self._load(profile.user_id)
            document["profile"] = record
            self._save(profile.user_id, document)
        logger.debug("profile_saved", user_id=profile.user_id)

    def append_sample(self, sample: WritingSample) -> None:
        with self.user_lock(sample.user_id):
            document = self._load(sample.user_id)
            document.setdefault("samples", []).append(sample.model_dump(mode="json"))
            self._save(sample.user_id, document)

    def append_samples(self, samples: Sequence[WritingSample]) -> None:
        """Append every sample for one user in a single file write."""
        user_ids = {s.user_id for s in samples}
        if len(user_ids) > 1:
            raise ValidationError("append_samples takes samples for a single user")
        if not user_ids:
            return

        user_id = user_ids.pop()
        with self.user_lock(user_id):
            document = self._load(user_id)
            rows = document.setdefault("samples", [])
            rows.extend(s.model_dump(mode="json") for s in samples)
            self._save(user_id, document)

    def list_samples(self, user_id: str, limit: Optional[int] = None) -> list[WritingSample]:
        rows = self._load(user_id).get("samples", [])
        samples = [WritingSample.model_validate(row) for row in reversed(rows)]
        return samples[:limit] if limit is not None else samples

    def append_generation(self, record: GenerationRecord) -> None:
        with self.user_lock(record.user_id):
            document = self._load(record.user_id)
            document.setdefault("generations", []).append(record.model_dump(mode="json"))
            self._save(record.user_id, document)

    def list_generations(self, user_id: str) -> list[GenerationRecord]:
        rows = self._load(user_id).get("generations", [])
        return [GenerationRecord.model_validate(row) for row in rows]

    def list_users(self) -> list[str]:
        """User ids with a stored profile."""
        users = []
        for path in sorted(self.profiles_dir.glob("*.json")):
            with open(path, "r", encoding="utf-8") as f:
                profile = json.load(f).get("profile")
            if profile:
                users.append(profile["id"])
        return users
