"""Data models for profiles, samples and generation history."""

from .profile import GenerationRecord, StyleProfile, WritingSample

__all__ = ["GenerationRecord", "StyleProfile", "WritingSample"]
