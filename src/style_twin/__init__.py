"""Style Twin - per-user writing style profiles and drift detection."""

__version__ = "0.1.0"
