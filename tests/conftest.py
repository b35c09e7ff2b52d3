"""Shared fixtures."""

import pytest

from style_twin.config import Settings
from style_twin.errors import ProviderError
from style_twin.store import MemoryProfileStore


class FakeProvider:
    """Stands in for the embedding/completion provider."""

    def __init__(self, vectors=None, default=None, reply="Generated reply."):
        self.vectors = vectors or {}
        self.default = default or [1.0, 0.0, 0.0]
        self.reply = reply
        self.fail_embed = False
        self.embed_calls = []
        self.complete_calls = []

    def embed(self, text, model=None):
        self.embed_calls.append((text, model))
        if self.fail_embed:
            raise ProviderError("embedding backend down", status_code=503)
        return list(self.vectors.get(text, self.default))

    def complete(self, messages, model=None, temperature=0.7, max_tokens=500):
        self.complete_calls.append(
            {"messages": messages, "model": model, "temperature": temperature, "max_tokens": max_tokens}
        )
        return self.reply


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def store():
    return MemoryProfileStore()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_dir=tmp_path,
        chunk_max_length=512,
        embedding_model="test-embed",
        generation_model="test-gen",
        chat_model="test-chat",
    )
