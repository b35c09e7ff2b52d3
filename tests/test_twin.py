"""Tests for the style twin orchestrator."""

import threading

import pytest

from style_twin.errors import DimensionMismatch, ProfileNotFoundError, ProviderError, ValidationError
from style_twin.ingest.chunker import chunk_text
from style_twin.style.drift import DriftLevel
from style_twin.style.metrics import analyze_text_metrics
from style_twin.twin import ChatTurn, StyleTwin


SCENARIO = "I love this. I love this a lot. This is great."


@pytest.fixture
def twin(provider, store, settings):
    return StyleTwin(provider=provider, store=store, settings=settings)


class TestProcessSample:
    """Adding samples to a profile."""

    def test_first_sample_creates_profile(self, twin, provider, store):
        provider.vectors = {SCENARIO: [0.2, 0.4, 0.6]}

        result = twin.process_sample("user-1", SCENARIO)

        assert result.count == 1
        assert result.style_vector_dimensions == 3
        assert result.metrics == analyze_text_metrics(SCENARIO)

        profile = store.get_profile("user-1")
        assert profile.style_vector == [0.2, 0.4, 0.6]
        assert profile.metrics.signature_phrases == ["I love", "I love this", "Love this"]
        assert provider.embed_calls == [(SCENARIO, "test-embed")]

    def test_style_vector_averages_all_samples(self, twin, provider, store):
        provider.vectors = {"First sample.": [1.0, 0.0], "Second sample.": [0.0, 1.0]}

        twin.process_sample("user-1", "First sample.")
        twin.process_sample("user-1", "Second sample.")

        assert store.get_profile("user-1").style_vector == [0.5, 0.5]
        assert len(store.list_samples("user-1")) == 2

    def test_metrics_come_from_latest_sample_only(self, twin, store):
        twin.process_sample("user-1", "Therefore we proceed. Moreover we continue.")
        twin.process_sample("user-1", "Dude this is totally cool.")

        metrics = store.get_profile("user-1").metrics
        assert metrics == analyze_text_metrics("Dude this is totally cool.")
        assert metrics.formality_level == 2.0

    def test_long_text_is_chunked(self, provider, store, settings):
        settings.chunk_max_length = 20
        twin = StyleTwin(provider=provider, store=store, settings=settings)
        text = "One short sentence. Another short one. And a third one here."

        result = twin.process_sample("user-1", text)

        expected_chunks = chunk_text(text, 20)
        assert result.count == len(expected_chunks) > 1
        assert [call[0] for call in provider.embed_calls] == expected_chunks
        assert sorted(s.raw_text for s in store.list_samples("user-1")) == sorted(expected_chunks)

    @pytest.mark.parametrize("user_id, text", [("", "Text."), ("user-1", ""), ("user-1", "   ")])
    def test_missing_input(self, twin, user_id, text):
        with pytest.raises(ValidationError):
            twin.process_sample(user_id, text)

    def test_provider_failure_stores_nothing(self, twin, provider, store):
        provider.fail_embed = True

        with pytest.raises(ProviderError):
            twin.process_sample("user-1", SCENARIO)

        assert store.get_profile("user-1") is None
        assert store.list_samples("user-1") == []

    def test_dimension_change_is_rejected(self, twin, provider, store):
        provider.vectors = {"First.": [1.0, 0.0], "Second.": [1.0, 0.0, 0.0]}
        twin.process_sample("user-1", "First.")

        with pytest.raises(DimensionMismatch):
            twin.process_sample("user-1", "Second.")

        assert len(store.list_samples("user-1")) == 1
        assert store.get_profile("user-1").style_vector == [1.0, 0.0]

    def test_failed_sample_write_leaves_profile_unchanged(self, twin, provider, store, monkeypatch):
        provider.vectors = {"First.": [1.0, 0.0], "Second.": [0.0, 1.0]}
        twin.process_sample("user-1", "First.")

        def fail(samples):
            raise OSError("disk full")

        monkeypatch.setattr(store, "append_samples", fail)
        with pytest.raises(OSError):
            twin.process_sample("user-1", "Second.")

        profile = store.get_profile("user-1")
        assert profile.style_vector == [1.0, 0.0]
        assert profile.metrics == analyze_text_metrics("First.")
        assert len(store.list_samples("user-1")) == 1

    def test_concurrent_samples_are_not_lost(self, twin, provider, store):
        texts = [f"Sample number {i}." for i in range(8)]
        provider.vectors = {t: [float(i), 1.0] for i, t in enumerate(texts)}

        threads = [threading.Thread(target=twin.process_sample, args=("user-1", t)) for t in texts]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.list_samples("user-1")) == 8
        assert store.get_profile("user-1").style_vector == pytest.approx([3.5, 1.0])


class TestDetectDrift:
    """Scoring generated text against the profile."""

    def test_no_profile(self, twin):
        with pytest.raises(ProfileNotFoundError):
            twin.detect_drift("user-1", "Anything.")

    def test_profile_without_vector(self, twin, store):
        store.ensure_profile("user-1")
        with pytest.raises(ProfileNotFoundError):
            twin.detect_drift("user-1", "Anything.")

    def test_low_drift(self, twin, provider):
        provider.vectors = {SCENARIO: [1.0, 0.0], "Generated.": [1.0, 0.0]}
        twin.process_sample("user-1", SCENARIO)

        result = twin.detect_drift("user-1", "Generated.")
        assert result.score == 1.0
        assert result.level is DriftLevel.LOW

    def test_high_drift(self, twin, provider):
        provider.vectors = {SCENARIO: [1.0, 0.0], "Off style.": [0.0, 1.0]}
        twin.process_sample("user-1", SCENARIO)

        result = twin.detect_drift("user-1", "Off style.")
        assert result.level is DriftLevel.HIGH
        assert result.similarity_percentage == 0

    def test_missing_text(self, twin):
        with pytest.raises(ValidationError):
            twin.detect_drift("user-1", "")


class TestGenerate:
    """Generation in the user's style."""

    def test_uses_persona_prompt(self, twin, provider, store):
        twin.process_sample("user-1", SCENARIO)

        result = twin.generate("user-1", "Write about coffee")

        assert result.generated_text == "Generated reply."
        call = provider.complete_calls[0]
        assert call["model"] == "test-gen"
        assert call["temperature"] == 0.7
        assert call["max_tokens"] == 500
        system, user = call["messages"]
        assert system["role"] == "system"
        assert SCENARIO in system["content"]
        assert "I love, I love this, Love this" in system["content"]
        assert user == {"role": "user", "content": "Write about coffee"}

    def test_logs_generation(self, twin, store):
        twin.process_sample("user-1", SCENARIO)
        twin.generate("user-1", "Write about coffee")

        records = store.list_generations("user-1")
        assert len(records) == 1
        assert records[0].input_prompt == "Write about coffee"
        assert records[0].generated_output == "Generated reply."

    def test_optional_drift_check(self, twin, provider, store):
        twin.process_sample("user-1", SCENARIO)

        result = twin.generate("user-1", "Write", check_drift=True)

        assert result.drift is not None
        assert result.drift.level is DriftLevel.LOW
        assert store.list_generations("user-1")[0].drift_level == "low"

    def test_no_profile(self, twin):
        with pytest.raises(ProfileNotFoundError):
            twin.generate("user-1", "Write")


class TestChat:
    """Chatting with the style twin."""

    def test_history_between_system_and_message(self, twin, provider):
        twin.process_sample("user-1", SCENARIO)
        history = [
            ChatTurn(role="user", content="Hi"),
            {"role": "assistant", "content": "Hey there"},
        ]

        reply = twin.chat("user-1", "How are you?", history)

        assert reply == "Generated reply."
        call = provider.complete_calls[0]
        assert call["model"] == "test-chat"
        assert call["temperature"] == 0.8
        assert call["max_tokens"] == 300
        roles = [m["role"] for m in call["messages"]]
        assert roles == ["system", "user", "assistant", "user"]
        assert call["messages"][-1]["content"] == "How are you?"


class TestCompareProfiles:
    """Comparing two users."""

    def test_compare(self, twin, provider):
        provider.vectors = {"Mine.": [1.0, 0.0], "Yours.": [1.0, 1.0]}
        twin.process_sample("me", "Mine.")
        twin.process_sample("you", "Yours.")

        result = twin.compare_profiles("me", "you")
        assert result.score == pytest.approx(0.7071, abs=1e-4)
        assert result.level is DriftLevel.HIGH

    def test_missing_user(self, twin):
        with pytest.raises(ProfileNotFoundError):
            twin.compare_profiles("me", "ghost")
