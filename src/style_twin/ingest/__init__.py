"""Text ingestion: cleaning and chunking raw samples for embedding."""

from .chunker import chunk_text, clean_text, split_by_length, split_into_units

__all__ = [
    "chunk_text",
    "clean_text",
    "split_by_length",
    "split_into_units",
]
