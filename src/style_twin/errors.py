"""Exception hierarchy for Style Twin."""


class StyleTwinError(Exception):
    """Base class for all Style Twin errors."""


class ValidationError(StyleTwinError, ValueError):
    """Malformed input. Always surfaced to the caller."""


class DimensionMismatch(ValidationError):
    """Two vectors that must share a dimensionality do not."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Vector dimension mismatch: expected {expected}, got {actual}")


class ProviderError(StyleTwinError):
    """The embedding or completion provider failed.

    Opaque to the style engine; no retries are attempted.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class ProfileNotFoundError(StyleTwinError):
    """No style profile (or no style vector) exists for the user."""

    def __init__(self, user_id: str, reason: str = "User profile not found"):
        self.user_id = user_id
        super().__init__(f"{reason}: {user_id}")
