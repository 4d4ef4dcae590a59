"""Sampling error types."""


class SampleError(Exception):
    """Base error for a failed metric sample. Never leaves the engine."""


class SourceUnreadable(SampleError):
    """Raised when a counter source is missing or cannot be read."""


class MalformedData(SampleError):
    """Raised when a counter source has missing, non-numeric or too few fields."""


class DegenerateInterval(SampleError):
    """Raised when zero or negative time elapsed between two snapshots."""
