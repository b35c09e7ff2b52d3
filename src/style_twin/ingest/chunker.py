"""Split raw sample text into bounded chunks on sentence boundaries."""

import re

# A run of non-terminators closed by one or more terminators, or the
# unterminated tail of the text.
_UNIT_PATTERN = re.compile(r"[^.!?]+[.!?]+|[.!?]+|[^.!?]+$")


def clean_text(text: str) -> str:
    """Collapse whitespace runs (including newlines) to single spaces and trim."""
    return " ".join(text.split())


def split_into_units(text: str) -> list[str]:
    """
    Split text into sentence-like units.

    A unit ends at a run of `.`, `!` or `?`. Whitespace is kept attached
    to the unit so that joining the units reproduces the input exactly.
    Text without any terminator is a single unit.
    """
    if not text:
        return []
    units = _UNIT_PATTERN.findall(text)
    return units or [text]


def split_by_length(text: str, max_length: int) -> list[str]:
    """Hard-split text into slices of at most `max_length` characters."""
    if len(text) <= max_length:
        return [text]
    return [text[i : i + max_length] for i in range(0, len(text), max_length)]


def chunk_text(text: str, max_length: int) -> list[str]:
    """
    Pack sentence units greedily into chunks of at most `max_length` characters.

    Oversized sentences are sliced with no semantic awareness. Empty or
    whitespace-only input yields no chunks. Never raises for any text.
    """
    if max_length < 1:
        raise ValueError(f"max_length must be >= 1, got {max_length}")

    cleaned = clean_text(text)
    chunks: list[str] = []
    current = ""

    for unit in split_into_units(cleaned):
        if len(current) + len(unit) <= max_length:
            current += unit
            continue

        if current.strip():
            chunks.append(current.strip())
        current = ""

        unit = unit.strip()
        if len(unit) > max_length:
            pieces = (piece.strip() for piece in split_by_length(unit, max_length))
            chunks.extend(piece for piece in pieces if piece)
        else:
            current = unit

    if current.strip():
        chunks.append(current.strip())

    return chunks
